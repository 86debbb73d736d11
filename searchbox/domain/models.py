"""Pydantic models shared by the coordinator, pipeline and navigation layers."""

from __future__ import annotations

from typing import Literal, Mapping

import httpx
from pydantic import BaseModel, ConfigDict, Field

TERM_PARAM = "q"
PAGE_PARAM = "p"
FIRST_PAGE = "1"


class SearchState(BaseModel):
    input_value: str = ""
    selected_category: str = ""


class SuggestionQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    term: str
    category: str


class RouteMatch(BaseModel):
    """Outcome of a category lookup: either a configured route or the fallback."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["found", "fallback"]
    base_path: str
    category: str | None = None

    @property
    def is_fallback(self) -> bool:
        return self.kind == "fallback"


class Location(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str = "/"
    query_params: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def parse(cls, url: str) -> "Location":
        parsed = httpx.URL(url)
        # Repeated keys keep their first value, as URLSearchParams.get does.
        params = {key: parsed.params[key] for key in parsed.params.keys()}
        return cls(path=parsed.path or "/", query_params=params)

    @property
    def term(self) -> str | None:
        return self.query_params.get(TERM_PARAM)

    @property
    def page(self) -> str | None:
        return self.query_params.get(PAGE_PARAM)

    @property
    def url(self) -> str:
        return render_url(self.path, self.query_params)


class NavigationIntent(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_path: str
    query_params: dict[str, str]

    @property
    def url(self) -> str:
        return render_url(self.base_path, self.query_params)


def render_url(path: str, params: Mapping[str, str]) -> str:
    if not params:
        return path
    return f"{path}?{httpx.QueryParams(params)}"


__all__ = [
    "FIRST_PAGE",
    "Location",
    "NavigationIntent",
    "PAGE_PARAM",
    "RouteMatch",
    "SearchState",
    "SuggestionQuery",
    "TERM_PARAM",
    "render_url",
]
