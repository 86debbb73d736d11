"""Console entrypoint driving a search widget against in-memory history."""

from __future__ import annotations

import asyncio
import logging
import sys

from searchbox.config import MenuItem, WidgetConfig, get_settings
from searchbox.logging import configure_logging, logger
from searchbox.navigation import MemoryHistory
from searchbox.widget import SearchWidget

HELP = (
    "Type text to update the input. Commands: :cat <value>, :enter, "
    ":go <url>, :back, :forward, :show, :quit"
)


async def handle_command(widget: SearchWidget, history: MemoryHistory, line: str) -> bool:
    """Apply one console line to the widget. Returns False when the session should end."""

    command, _, argument = line[1:].partition(" ") if line.startswith(":") else ("", "", line)
    if command == "quit":
        return False
    if not command:
        widget.on_input_change(argument)
    elif command == "cat":
        widget.on_category_change(argument.strip())
    elif command == "enter":
        widget.on_key_down("Enter")
    elif command == "go":
        history.push_url(argument.strip() or "/")
    elif command == "back":
        history.back()
    elif command == "forward":
        history.forward()
    elif command != "show":
        print(HELP)
        return True

    # Let the debounce timer fire before reading the pipeline.
    await asyncio.sleep(widget.settings.debounce_ms / 1000 + 0.05)
    await widget.pipeline.wait_idle()
    print(
        f"location={history.current_location().url} input={widget.input_value!r} "
        f"category={widget.selected_category!r} suggestions={widget.suggestions}"
    )
    return True


async def main() -> None:
    settings = get_settings()
    configure_logging(
        logging.DEBUG if settings.environment == "dev" else logging.INFO,
        json_logs=settings.json_logs,
    )
    source = sys.argv[1] if len(sys.argv) > 1 else None
    config = WidgetConfig(
        label_text="Search",
        menu_items=[
            MenuItem(label="All content", value="all"),
            MenuItem(label="Electronics", value="electronics"),
            MenuItem(label="Books", value="books"),
        ],
        route_map={"electronics": "/electronics/search", "books": "/books/search"},
        fetch_suggestions=source,
    )
    history = MemoryHistory()

    logger.info("searchbox_console_starting", source=source, environment=settings.environment)
    print(HELP)
    async with SearchWidget(
        config,
        history,
        settings=settings,
        on_validation_error=lambda error: print(error),
    ) as widget:
        while True:
            try:
                line = await asyncio.to_thread(input, "> ")
            except EOFError:
                break
            if not await handle_command(widget, history, line):
                break


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
