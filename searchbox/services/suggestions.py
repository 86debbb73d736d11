"""Autocomplete suggestion fetching and the per-widget fetch cycle."""

from __future__ import annotations

import asyncio
from typing import Any, Callable
from urllib.parse import quote

import httpx

from searchbox.config import SuggestionCallable
from searchbox.domain.models import SuggestionQuery
from searchbox.logging import logger
from searchbox.services.exceptions import SuggestionSourceError
from searchbox.utils.debounce import Debouncer

SuggestionSource = str | SuggestionCallable | None
SuggestionListener = Callable[[list[str]], None]

DEFAULT_NO_RESULT_MESSAGE = "No results"
FACTORY_NO_RESULT_MESSAGE = "No results were found"
DEFAULT_CATEGORY = "all"
MIN_QUERY_LENGTH = 3

# Same unreserved set as encodeURIComponent, so suggestion URLs match browser clients.
_COMPONENT_SAFE = "!~*'()"


def encode_component(value: str) -> str:
    return quote(value, safe=_COMPONENT_SAFE)


def _as_suggestions(payload: Any) -> list[str]:
    if isinstance(payload, (list, tuple)):
        return [str(item) for item in payload if item is not None]
    return []


async def _get_json(client: httpx.AsyncClient, url: str, timeout: float) -> Any:
    try:
        response = await client.get(url, timeout=timeout)
        response.raise_for_status()
        return response.json()
    except httpx.HTTPStatusError as exc:
        status_code = exc.response.status_code if exc.response is not None else "unknown"
        raise SuggestionSourceError(f"Suggestion request failed ({status_code})") from exc
    except httpx.RequestError as exc:
        raise SuggestionSourceError(f"Suggestion request failed: {exc}") from exc
    except httpx.InvalidURL as exc:
        raise SuggestionSourceError(f"Suggestion URL is invalid: {exc}") from exc
    except ValueError as exc:
        raise SuggestionSourceError(f"Suggestion payload is not valid JSON: {exc}") from exc


class SuggestionFetcher:
    """Turn a query into a suggestion list using a URL template or an async callable.

    Failures never escape :meth:`fetch`: they are logged and reported to the
    caller as the single-item fallback list.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        no_result_message: str = DEFAULT_NO_RESULT_MESSAGE,
        min_query_length: int = MIN_QUERY_LENGTH,
        default_category: str = DEFAULT_CATEGORY,
        timeout: float = 10.0,
    ) -> None:
        self._client = http_client
        self.no_result_message = no_result_message
        self.min_query_length = min_query_length
        self.default_category = default_category
        self._timeout = timeout

    def accepts(self, query: str) -> bool:
        return len(query) >= self.min_query_length

    def build_url(self, template: str, query: str, category: str | None) -> str:
        category = category or self.default_category
        return f"{template}{encode_component(query)}&category={encode_component(category)}"

    async def fetch(
        self,
        query: str,
        category: str | None = None,
        source: SuggestionSource = None,
    ) -> list[str]:
        if not self.accepts(query):
            return []
        try:
            results = await self._load(query, category, source)
        except SuggestionSourceError as exc:
            logger.warning(
                "suggestions_fetch_failed",
                query=query,
                category=category,
                error=str(exc),
            )
            return [self.no_result_message]
        return results or [self.no_result_message]

    async def _load(self, query: str, category: str | None, source: SuggestionSource) -> list[str]:
        if source is None:
            return []
        if isinstance(source, str):
            url = self.build_url(source, query, category)
            return _as_suggestions(await _get_json(self._client, url, self._timeout))
        # Callable sources receive only the query; category-aware sources close over it.
        try:
            payload = await source(query)
        except Exception as exc:
            raise SuggestionSourceError(
                f"Suggestion source raised {exc.__class__.__name__}: {exc}"
            ) from exc
        return _as_suggestions(payload)


def create_fetch_suggestions(
    base_url: str,
    *,
    http_client: httpx.AsyncClient | None = None,
    no_result_message: str = FACTORY_NO_RESULT_MESSAGE,
    timeout: float = 10.0,
) -> SuggestionCallable:
    """Build an async ``(query) -> list[str]`` source backed by ``{base_url}{query}``.

    ``base_url`` must already end with the query parameter, e.g.
    ``"https://api.example.com/suggestions?q="``. Without ``http_client`` a
    short-lived client is opened per call.
    """

    async def fetch_suggestions(query: str) -> list[str]:
        url = f"{base_url}{encode_component(query)}"
        try:
            if http_client is not None:
                payload = await _get_json(http_client, url, timeout)
            else:
                async with httpx.AsyncClient() as client:
                    payload = await _get_json(client, url, timeout)
        except SuggestionSourceError as exc:
            logger.warning("suggestions_request_failed", url=url, error=str(exc))
            return [no_result_message]
        return _as_suggestions(payload) or [no_result_message]

    return fetch_suggestions


class SuggestionPipeline:
    """Debounced fetch cycle owning ``suggestions`` and ``loading`` for one widget.

    Each cycle captures a generation number when it starts. Starting a newer
    cycle or closing the pipeline bumps the counter, and a cycle only touches
    shared state while its generation is still the current one. Late results
    from superseded cycles are dropped.
    """

    def __init__(
        self,
        fetcher: SuggestionFetcher,
        *,
        source: SuggestionSource = None,
        debounce_ms: float = 300,
    ) -> None:
        self._fetcher = fetcher
        self._source = source
        self._category = ""
        self._debouncer: Debouncer[str] = Debouncer("", debounce_ms)
        self._debouncer.subscribe(self._on_settled)
        self._generation = 0
        self._current: asyncio.Task[None] | None = None
        self._tasks: set[asyncio.Task[None]] = set()
        self._listeners: list[SuggestionListener] = []
        self._closed = False
        self.suggestions: list[str] = []
        self.loading = False

    @property
    def query(self) -> str:
        return self._debouncer.value

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def debouncer(self) -> Debouncer[str]:
        return self._debouncer

    def subscribe(self, listener: SuggestionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def push_query(self, text: str) -> None:
        self._debouncer.push(text)

    def set_category(self, category: str) -> None:
        if category == self._category:
            return
        self._category = category
        self.refresh()

    def set_source(self, source: SuggestionSource) -> None:
        if source is self._source:
            return
        self._source = source
        self.refresh()

    def set_no_result_message(self, message: str) -> None:
        if message == self._fetcher.no_result_message:
            return
        self._fetcher.no_result_message = message
        self.refresh()

    def refresh(self) -> None:
        """Start a new cycle for the current debounced query, superseding any other."""

        if self._closed:
            return
        self._generation += 1
        generation = self._generation
        self._cancel_current()
        query = SuggestionQuery(term=self._debouncer.value, category=self._category)

        if not self._fetcher.accepts(query.term):
            self.suggestions = []
            self.loading = False
            self._notify()
            return

        self.loading = True
        task = asyncio.get_running_loop().create_task(self._run(generation, query, self._source))
        self._current = task
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def wait_idle(self) -> None:
        """Wait for the most recent cycle to settle."""

        while self._current is not None:
            task = self._current
            # A newer cycle may cancel this one while we wait; follow it.
            await asyncio.wait({task})
            if task is self._current:
                return

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._generation += 1
        self._cancel_current()
        self.loading = False
        self._debouncer.dispose()
        self._listeners.clear()

    def _cancel_current(self) -> None:
        if self._current is not None and not self._current.done():
            self._current.cancel()
        self._current = None

    def _is_current(self, generation: int) -> bool:
        return not self._closed and generation == self._generation

    def _on_settled(self, _value: str) -> None:
        self.refresh()

    async def _run(
        self, generation: int, query: SuggestionQuery, source: SuggestionSource
    ) -> None:
        results: list[str] | None = None
        try:
            results = await self._fetcher.fetch(query.term, query.category, source)
        finally:
            if self._is_current(generation):
                if results is not None:
                    self.suggestions = results
                self.loading = False
                self._notify()
            elif results is not None:
                logger.debug(
                    "suggestions_stale_discarded",
                    query=query.term,
                    category=query.category,
                    generation=generation,
                    current_generation=self._generation,
                )

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.suggestions)


__all__ = [
    "DEFAULT_NO_RESULT_MESSAGE",
    "FACTORY_NO_RESULT_MESSAGE",
    "SuggestionFetcher",
    "SuggestionPipeline",
    "SuggestionSource",
    "create_fetch_suggestions",
    "encode_component",
]
