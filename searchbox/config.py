"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Awaitable, Callable, Literal, Sequence

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SuggestionCallable = Callable[[str], Awaitable[Sequence[str]]]


class RouteSettings(BaseModel):
    fallback_path: str = Field(
        default="/all/search",
        description="Base path used when the selected category has no route.",
    )
    home_path: str = Field(default="/", description="Redirect target for incomplete search URLs.")

    @field_validator("fallback_path", "home_path")
    @classmethod
    def _require_leading_slash(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("route paths must start with '/'")
        return value


class SearchSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SEARCHBOX_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    debounce_ms: int = Field(default=300, ge=0, le=10_000)
    min_query_length: int = Field(default=3, ge=0)
    no_result_message: str = "No results"
    default_category: str = Field(default="all", min_length=1)
    request_timeout_seconds: float = Field(default=10, gt=0, le=120)
    default_locale: str = "en"
    json_logs: bool = True

    routes: RouteSettings = Field(default_factory=RouteSettings)


class MenuItem(BaseModel):
    label: str
    value: str


class WidgetConfig(BaseModel):
    """Per-widget options handed over by the rendering layer."""

    label_text: str
    no_result_message: str | None = None
    menu_items: list[MenuItem] = Field(default_factory=list)
    route_map: dict[str, str] | None = None
    fetch_suggestions: str | SuggestionCallable | None = None
    locale: str | None = None

    @property
    def show_category_selector(self) -> bool:
        return len(self.menu_items) >= 2


@lru_cache
def get_settings() -> SearchSettings:
    """Return cached settings instance."""

    return SearchSettings()


__all__ = [
    "MenuItem",
    "RouteSettings",
    "SearchSettings",
    "SuggestionCallable",
    "WidgetConfig",
    "get_settings",
]
