"""Category to search-route resolution."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from searchbox.domain.models import RouteMatch

DEFAULT_SEARCH_PATH = "/all/search"


class RouteMap:
    """Read-only category → base path table with a guaranteed fallback route.

    Safe to share between widgets; nothing mutates it after construction.
    """

    def __init__(
        self,
        routes: Mapping[str, str] | None = None,
        *,
        fallback_path: str = DEFAULT_SEARCH_PATH,
    ) -> None:
        self._routes = MappingProxyType(dict(routes or {}))
        self.fallback_path = fallback_path

    @property
    def routes(self) -> Mapping[str, str]:
        return self._routes

    def resolve(self, category: str | None) -> RouteMatch:
        base_path = self._routes.get(category) if category else None
        if base_path:
            return RouteMatch(kind="found", base_path=base_path, category=category)
        return RouteMatch(kind="fallback", base_path=self.fallback_path, category=category or None)

    def search_paths(self) -> tuple[str, ...]:
        paths = [path for path in self._routes.values() if path]
        paths.append(self.fallback_path)
        return tuple(dict.fromkeys(paths))

    def is_search_path(self, path: str) -> bool:
        return path in self.search_paths()

    def __len__(self) -> int:
        return len(self._routes)


__all__ = ["DEFAULT_SEARCH_PATH", "RouteMap"]
