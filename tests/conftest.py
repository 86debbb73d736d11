"""Shared pytest fixtures for the search core tests."""

from __future__ import annotations

import asyncio

import pytest

from searchbox.config import SearchSettings
from searchbox.navigation import MemoryHistory


class GatedSource:
    """Async suggestion source whose calls block until released per query."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.cancelled: list[str] = []
        self._gates: dict[str, asyncio.Event] = {}
        self._results: dict[str, list[str]] = {}

    def gate(self, query: str) -> asyncio.Event:
        return self._gates.setdefault(query, asyncio.Event())

    def release(self, query: str, results: list[str]) -> None:
        self._results[query] = results
        self.gate(query).set()

    async def __call__(self, query: str) -> list[str]:
        self.calls.append(query)
        try:
            await self.gate(query).wait()
        except asyncio.CancelledError:
            self.cancelled.append(query)
            raise
        return self._results.get(query, [])


@pytest.fixture
def history() -> MemoryHistory:
    return MemoryHistory("/")


@pytest.fixture
def settings() -> SearchSettings:
    return SearchSettings(debounce_ms=10, request_timeout_seconds=5)


@pytest.fixture
def gated_source() -> GatedSource:
    return GatedSource()
