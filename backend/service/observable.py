"""
Observable status holder.

A lifecycle-aware value in the spirit of a UI observable:
- set_value() on the event-loop thread, delivered synchronously
- post_value() from any thread, marshalled onto the loop
- New subscribers receive the current value immediately
- Equal consecutive values are still delivered; consumers do edge detection
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable

from dashboard.enums.status import LifecycleStatus

StatusCallback = Callable[[Any], None]


class ObservableStatus:
    """Last-known lifecycle status plus its subscribers."""

    def __init__(
        self,
        initial: LifecycleStatus | None = None,
        *,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._value = initial
        self._loop = loop
        self._subscribers: dict[int, StatusCallback] = {}
        self._next_token = 0

    @property
    def value(self) -> LifecycleStatus | None:
        return self._value

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def bind_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        """Set the loop post_value() marshals onto."""
        self._loop = loop

    def subscribe(self, callback: StatusCallback) -> Callable[[], None]:
        """
        Register `callback` and replay the current value to it.

        Returns an idempotent unsubscribe handle.
        """
        token = self._next_token
        self._next_token += 1
        self._subscribers[token] = callback

        def _unsubscribe() -> None:
            self._subscribers.pop(token, None)

        if self._value is not None:
            callback(self._value)

        return _unsubscribe

    def set_value(self, value: LifecycleStatus) -> None:
        """Store and deliver `value`. Event-loop thread only."""
        self._value = value
        # Snapshot: callbacks may unsubscribe while we iterate
        for callback in list(self._subscribers.values()):
            callback(value)

    def post_value(self, value: LifecycleStatus) -> None:
        """
        Deliver `value` from any thread.

        Raises RuntimeError if no loop is bound.
        """
        if self._loop is None:
            raise RuntimeError("post_value() requires a bound event loop")
        self._loop.call_soon_threadsafe(self.set_value, value)
