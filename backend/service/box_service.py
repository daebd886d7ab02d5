"""
In-process connection service.

Walks the lifecycle with configured delays on the event loop:
    STOPPED -> STARTING -> STARTED
    STARTED -> STOPPING -> STOPPED

Used as the status source and service control for the web dashboard
when no external service process is wired in.
"""

from __future__ import annotations

import asyncio
import time
from typing import Callable

from dashboard.enums.status import LifecycleStatus
from service.observable import ObservableStatus

from observability.logger import log_event

from constants import DEFAULT_START_DELAY_MS, DEFAULT_STOP_DELAY_MS


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class LocalBoxService:
    """
    Status source + service control backed by loop timers.

    Requests made in a transitional state are ignored. Event-loop
    thread only.
    """

    def __init__(
        self,
        *,
        start_delay_ms: int = DEFAULT_START_DELAY_MS,
        stop_delay_ms: int = DEFAULT_STOP_DELAY_MS,
    ) -> None:
        self._status = ObservableStatus(LifecycleStatus.STOPPED)
        self._start_delay_ms = start_delay_ms
        self._stop_delay_ms = stop_delay_ms
        self._pending: asyncio.TimerHandle | None = None

    # ------------------------------------------------------------------
    # Status source
    # ------------------------------------------------------------------

    @property
    def value(self) -> LifecycleStatus | None:
        return self._status.value

    def subscribe(self, callback: Callable[[object], None]) -> Callable[[], None]:
        return self._status.subscribe(callback)

    # ------------------------------------------------------------------
    # Service control
    # ------------------------------------------------------------------

    def start(self) -> None:
        if self._status.value is not LifecycleStatus.STOPPED:
            self._log_ignored("start")
            return
        self._transition(
            LifecycleStatus.STARTING, LifecycleStatus.STARTED, self._start_delay_ms,
        )

    def stop(self) -> None:
        if self._status.value is not LifecycleStatus.STARTED:
            self._log_ignored("stop")
            return
        self._transition(
            LifecycleStatus.STOPPING, LifecycleStatus.STOPPED, self._stop_delay_ms,
        )

    def shutdown(self) -> None:
        """Cancel a pending transition, if any."""
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _transition(
        self,
        via: LifecycleStatus,
        to: LifecycleStatus,
        delay_ms: int,
    ) -> None:
        self._set(via)
        loop = asyncio.get_running_loop()
        self._pending = loop.call_later(delay_ms / 1000.0, self._complete, to)

    def _complete(self, to: LifecycleStatus) -> None:
        self._pending = None
        self._set(to)

    def _set(self, status: LifecycleStatus) -> None:
        log_event({
            "ts_ms": _now_ms(),
            "event_type": "SERVICE_STATUS",
            "from_status": self._status.value.value if self._status.value else None,
            "to_status": status.value,
        })
        self._status.set_value(status)

    def _log_ignored(self, request: str) -> None:
        log_event({
            "ts_ms": _now_ms(),
            "event_type": "SERVICE_REQUEST_IGNORED",
            "request": request,
            "status": self._status.value.value if self._status.value else None,
        })
