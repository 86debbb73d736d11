"""Event-loop debouncing for rapidly changing values."""

from __future__ import annotations

import asyncio
from typing import Callable, Generic, TypeVar

T = TypeVar("T")
Listener = Callable[[T], None]


class Debouncer(Generic[T]):
    """Hold back a changing value until it has been stable for ``delay_ms``.

    Every :meth:`push` restarts a single timer on the running event loop, so
    only the last value of a burst is ever published. Subscribers are called
    once per settled change and never see intermediate values. After
    :meth:`dispose` the pending timer is dropped and further pushes are ignored.
    """

    def __init__(self, value: T, delay_ms: float) -> None:
        if delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        self._value = value
        self._pending = value
        self._delay_ms = delay_ms
        self._handle: asyncio.TimerHandle | None = None
        self._listeners: list[Listener[T]] = []
        self._disposed = False

    @property
    def value(self) -> T:
        return self._value

    @property
    def delay_ms(self) -> float:
        return self._delay_ms

    @property
    def is_pending(self) -> bool:
        return self._handle is not None

    def subscribe(self, listener: Listener[T]) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def push(self, value: T) -> None:
        if self._disposed:
            return
        self._pending = value
        self._schedule()

    def set_delay(self, delay_ms: float) -> None:
        if delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        if delay_ms == self._delay_ms:
            return
        self._delay_ms = delay_ms
        if self._handle is not None:
            self._schedule()

    def dispose(self) -> None:
        self._disposed = True
        self._cancel()
        self._listeners.clear()

    def _schedule(self) -> None:
        self._cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self._delay_ms / 1000, self._fire)

    def _cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        if self._disposed or self._pending == self._value:
            return
        self._value = self._pending
        for listener in list(self._listeners):
            listener(self._value)


__all__ = ["Debouncer"]
