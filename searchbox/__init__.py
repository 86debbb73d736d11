"""Search input core: debounced suggestions, category routing and URL sync."""

from searchbox.coordinator import SearchCoordinator
from searchbox.navigation import MemoryHistory, Navigator
from searchbox.services.routes import RouteMap
from searchbox.services.suggestions import (
    SuggestionFetcher,
    SuggestionPipeline,
    create_fetch_suggestions,
)
from searchbox.widget import SearchWidget

__all__ = [
    "MemoryHistory",
    "Navigator",
    "RouteMap",
    "SearchCoordinator",
    "SearchWidget",
    "SuggestionFetcher",
    "SuggestionPipeline",
    "create_fetch_suggestions",
]
