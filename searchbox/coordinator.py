"""Search state machine: input/category state, submit routing and URL reconciliation."""

from __future__ import annotations

from typing import Callable

from searchbox.domain.models import (
    FIRST_PAGE,
    PAGE_PARAM,
    TERM_PARAM,
    Location,
    NavigationIntent,
    SearchState,
)
from searchbox.i18n import I18nService
from searchbox.logging import logger
from searchbox.navigation import Navigator
from searchbox.services.exceptions import SearchValidationError
from searchbox.services.routes import RouteMap
from searchbox.services.suggestions import SuggestionPipeline

ValidationHandler = Callable[[SearchValidationError], None]

DEFAULT_HOME_PATH = "/"
SUBMIT_KEYS = frozenset({"Enter"})


class SearchCoordinator:
    """Owns :class:`SearchState` for one mounted widget.

    User events (typing, category selection, submit) mutate the state and
    drive navigation; location changes flow back through :meth:`reconcile`,
    which either normalises an incomplete search URL away or copies its term
    into the input. The category is not restored from the URL.
    """

    def __init__(
        self,
        navigator: Navigator,
        *,
        route_map: RouteMap | None = None,
        pipeline: SuggestionPipeline | None = None,
        home_path: str = DEFAULT_HOME_PATH,
        i18n: I18nService | None = None,
        locale: str | None = None,
        on_validation_error: ValidationHandler | None = None,
    ) -> None:
        self._navigator = navigator
        self.route_map = route_map or RouteMap()
        self._pipeline = pipeline
        self.home_path = home_path
        self._i18n = i18n or I18nService()
        self._locale = locale
        self._on_validation_error = on_validation_error
        self._unsubscribe: Callable[[], None] | None = None
        self.state = SearchState()

    @property
    def input_value(self) -> str:
        return self.state.input_value

    @property
    def selected_category(self) -> str:
        return self.state.selected_category

    @property
    def mounted(self) -> bool:
        return self._unsubscribe is not None

    def mount(self) -> None:
        if self.mounted:
            return
        self._unsubscribe = self._navigator.subscribe(self.reconcile)
        self.reconcile(self._navigator.current_location())

    def unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._pipeline is not None:
            self._pipeline.close()

    def set_input_value(self, text: str) -> None:
        self.state.input_value = text
        if self._pipeline is not None:
            self._pipeline.push_query(text)

    def select_category(self, category: str) -> None:
        self.state.selected_category = category
        if self._pipeline is not None:
            self._pipeline.set_category(category)

    def handle_key(self, key: str) -> NavigationIntent | None:
        if key not in SUBMIT_KEYS:
            return None
        return self.submit()

    def submit(self) -> NavigationIntent | None:
        if not self.state.input_value:
            error = SearchValidationError(
                self._i18n.gettext("search.empty_term", locale=self._locale)
            )
            logger.info("search_submit_blocked", reason="empty_term")
            if self._on_validation_error is not None:
                self._on_validation_error(error)
            return None

        intent = self.build_intent()
        logger.info(
            "search_submit",
            url=intent.url,
            category=self.state.selected_category or None,
        )
        self._navigator.navigate(intent.base_path, intent.query_params)
        return intent

    def build_intent(self) -> NavigationIntent:
        match = self.route_map.resolve(self.state.selected_category)
        params = dict(self._navigator.current_location().query_params)
        params[TERM_PARAM] = self.state.input_value
        params.setdefault(PAGE_PARAM, FIRST_PAGE)
        return NavigationIntent(base_path=match.base_path, query_params=params)

    def reconcile(self, location: Location | None = None) -> None:
        location = location or self._navigator.current_location()
        if not self.route_map.is_search_path(location.path):
            return

        if not location.term or not location.page:
            if location.path == self.home_path:
                # A search route mounted at home cannot be normalised by redirecting.
                logger.warning("search_redirect_skipped", path=location.path)
                return
            logger.info(
                "search_redirect_home",
                path=location.path,
                has_term=bool(location.term),
                has_page=bool(location.page),
            )
            self._navigator.navigate(self.home_path)
            return

        if location.term != self.state.input_value:
            self.set_input_value(location.term)


__all__ = ["SearchCoordinator", "ValidationHandler"]
