"""Console command handling."""

from __future__ import annotations

import pytest

from searchbox.config import WidgetConfig
from searchbox.main import handle_command
from searchbox.widget import SearchWidget


@pytest.mark.asyncio
async def test_console_session_types_and_submits(settings, history, capsys):
    async def source(query: str) -> list[str]:
        return [f"{query} sale"]

    config = WidgetConfig(
        label_text="Search",
        route_map={"books": "/books/search"},
        fetch_suggestions=source,
    )
    async with SearchWidget(config, history, settings=settings) as widget:
        assert await handle_command(widget, history, "dune")
        assert widget.suggestions == ["dune sale"]

        assert await handle_command(widget, history, ":cat books")
        assert await handle_command(widget, history, ":enter")
        assert history.current_location().url == "/books/search?q=dune&p=1"

        assert await handle_command(widget, history, ":go /books/search?q=dune")
        assert history.current_location().url == "/"

        assert await handle_command(widget, history, ":back")
        assert not await handle_command(widget, history, ":quit")

    output = capsys.readouterr().out
    assert "suggestions=['dune sale']" in output
