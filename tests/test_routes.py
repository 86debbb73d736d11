"""Route map lookups and recognised search paths."""

from __future__ import annotations

import pytest

from searchbox.services.routes import DEFAULT_SEARCH_PATH, RouteMap


def test_resolve_returns_found_route():
    routes = RouteMap({"electronics": "/electronics/search"})

    match = routes.resolve("electronics")

    assert match.kind == "found"
    assert match.base_path == "/electronics/search"
    assert match.category == "electronics"
    assert not match.is_fallback


@pytest.mark.parametrize("category", ["", None, "garden"])
def test_resolve_falls_back_for_unknown_or_unset_category(category):
    match = RouteMap({"electronics": "/electronics/search"}).resolve(category)

    assert match.is_fallback
    assert match.base_path == DEFAULT_SEARCH_PATH


def test_empty_route_value_is_treated_as_missing():
    match = RouteMap({"books": ""}).resolve("books")
    assert match.is_fallback


def test_search_paths_include_fallback_once():
    routes = RouteMap(
        {
            "all": "/all/search",
            "electronics": "/electronics/search",
            "tv": "/electronics/search",
        }
    )

    assert routes.search_paths() == ("/all/search", "/electronics/search")


def test_search_paths_without_map_is_only_fallback():
    routes = RouteMap()

    assert routes.search_paths() == ("/all/search",)
    assert routes.is_search_path("/all/search")
    assert not routes.is_search_path("/")
    assert len(routes) == 0


def test_custom_fallback_path():
    routes = RouteMap({"books": "/books/search"}, fallback_path="/search")

    assert routes.resolve("music").base_path == "/search"
    assert routes.search_paths() == ("/books/search", "/search")


def test_routes_are_read_only():
    source = {"books": "/books/search"}
    routes = RouteMap(source)
    source["books"] = "/changed"

    assert routes.resolve("books").base_path == "/books/search"
    with pytest.raises(TypeError):
        routes.routes["books"] = "/other"  # type: ignore[index]
