"""Navigation capability consumed by the search coordinator."""

from __future__ import annotations

from typing import Callable, Mapping, Protocol

from searchbox.domain.models import Location
from searchbox.logging import logger

LocationListener = Callable[[Location], None]


class Navigator(Protocol):
    def navigate(self, path: str, query: Mapping[str, str] | None = None) -> None: ...

    def current_location(self) -> Location: ...

    def subscribe(self, listener: LocationListener) -> Callable[[], None]: ...


class MemoryHistory:
    """In-memory browser history with back/forward and change notifications."""

    def __init__(self, initial_url: str = "/") -> None:
        self._entries: list[Location] = [Location.parse(initial_url)]
        self._index = 0
        self._listeners: list[LocationListener] = []

    @property
    def entries(self) -> list[Location]:
        return list(self._entries)

    def current_location(self) -> Location:
        return self._entries[self._index]

    def subscribe(self, listener: LocationListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def navigate(self, path: str, query: Mapping[str, str] | None = None) -> None:
        location = Location(path=path, query_params=dict(query or {}))
        del self._entries[self._index + 1 :]
        self._entries.append(location)
        self._index += 1
        logger.debug("history_push", url=location.url)
        self._emit()

    def push_url(self, url: str) -> None:
        """Simulate direct URL entry in the address bar."""

        location = Location.parse(url)
        self.navigate(location.path, location.query_params)

    def back(self) -> bool:
        if self._index == 0:
            return False
        self._index -= 1
        self._emit()
        return True

    def forward(self) -> bool:
        if self._index >= len(self._entries) - 1:
            return False
        self._index += 1
        self._emit()
        return True

    def _emit(self) -> None:
        location = self.current_location()
        for listener in list(self._listeners):
            listener(location)


__all__ = ["LocationListener", "MemoryHistory", "Navigator"]
