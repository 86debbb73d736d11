"""Widget facade: wires configuration into a coordinator and suggestion pipeline."""

from __future__ import annotations

import httpx

from searchbox.config import MenuItem, SearchSettings, WidgetConfig, get_settings
from searchbox.coordinator import SearchCoordinator, ValidationHandler
from searchbox.domain.models import NavigationIntent
from searchbox.i18n import I18nService
from searchbox.logging import logger
from searchbox.navigation import Navigator
from searchbox.services.routes import RouteMap
from searchbox.services.suggestions import SuggestionFetcher, SuggestionPipeline


class SearchWidget:
    """View-model for the search input consumed by a rendering layer.

    Use as an async context manager: entering mounts the coordinator,
    leaving unmounts it and closes the HTTP client if the widget opened it.
    """

    def __init__(
        self,
        config: WidgetConfig,
        navigator: Navigator,
        *,
        http_client: httpx.AsyncClient | None = None,
        settings: SearchSettings | None = None,
        i18n: I18nService | None = None,
        on_validation_error: ValidationHandler | None = None,
    ) -> None:
        self.config = config
        self.settings = settings or get_settings()
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient()
        self.fetcher = SuggestionFetcher(
            self._client,
            no_result_message=config.no_result_message or self.settings.no_result_message,
            min_query_length=self.settings.min_query_length,
            default_category=self.settings.default_category,
            timeout=self.settings.request_timeout_seconds,
        )
        self.pipeline = SuggestionPipeline(
            self.fetcher,
            source=config.fetch_suggestions,
            debounce_ms=self.settings.debounce_ms,
        )
        self.coordinator = SearchCoordinator(
            navigator,
            route_map=RouteMap(
                config.route_map,
                fallback_path=self.settings.routes.fallback_path,
            ),
            pipeline=self.pipeline,
            home_path=self.settings.routes.home_path,
            i18n=i18n or I18nService(default_locale=self.settings.default_locale),
            locale=config.locale,
            on_validation_error=on_validation_error,
        )

    async def __aenter__(self) -> "SearchWidget":
        self.mount()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def mount(self) -> None:
        self.coordinator.mount()
        logger.debug("search_widget_mounted", label=self.config.label_text)

    async def aclose(self) -> None:
        self.coordinator.unmount()
        if self._owns_client:
            await self._client.aclose()

    @property
    def input_value(self) -> str:
        return self.coordinator.input_value

    @property
    def selected_category(self) -> str:
        return self.coordinator.selected_category

    @property
    def suggestions(self) -> list[str]:
        return self.pipeline.suggestions

    @property
    def loading(self) -> bool:
        return self.pipeline.loading

    @property
    def menu_items(self) -> list[MenuItem]:
        return self.config.menu_items

    @property
    def show_category_selector(self) -> bool:
        return self.config.show_category_selector

    @property
    def label(self) -> str:
        # The label is hidden while the field has text.
        return "" if self.input_value else self.config.label_text

    def on_input_change(self, text: str) -> None:
        self.coordinator.set_input_value(text)

    def on_category_change(self, value: str) -> None:
        self.coordinator.select_category(value)

    def on_key_down(self, key: str) -> NavigationIntent | None:
        return self.coordinator.handle_key(key)

    def on_search_click(self) -> NavigationIntent | None:
        return self.coordinator.submit()


__all__ = ["SearchWidget"]
