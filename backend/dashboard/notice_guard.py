"""
Guarded deprecation notice check.

Responsibilities:
- Run the notice check at most once per activation
- Execute the blocking fetch off the event-loop thread
- Deliver notices / failures back on the event-loop thread
- Drop late results after teardown

Non-responsibilities:
- NO retry or backoff (the check is fire-once, best-effort)
- NO timeout (a hung fetch simply never completes)
- NO notice presentation policy (callbacks decide)
- NO view-state derivation

All public methods must be called from the event-loop thread. The
checked flag is only touched there, so it needs no lock.
"""

from __future__ import annotations

import asyncio
import time
from concurrent.futures import Executor
from typing import Any

from dashboard.context import ErrorCallback, NoticeClientProtocol, NoticesCallback
from dashboard.enums.status import LifecycleStatus, parse_status
from dashboard.errors import NoticeFetchFailure

from observability.logger import log_event
from observability.metrics import timed


class NoticeCheckGuard:
    """
    At-most-once notice check per continuous STARTED period.

    Lifecycle:
    1. STARTED observed, flag clear -> flag set, fetch dispatched
    2. STARTED observed again -> ignored
    3. Fetch completes -> on_notices (non-empty) or nothing (empty)
       Fetch raises  -> on_error(NoticeFetchFailure)
    4. Any non-STARTED status -> flag cleared, next STARTED re-checks

    The flag is set before dispatch, not on completion, so a second
    STARTED arriving while the first fetch is in flight is a no-op.
    """

    def __init__(
        self,
        *,
        client: NoticeClientProtocol,
        on_notices: NoticesCallback,
        on_error: ErrorCallback,
        executor: Executor | None = None,
        dashboard_id: str | None = None,
    ) -> None:
        self._client = client
        self._on_notices = on_notices
        self._on_error = on_error
        self._executor = executor
        self._dashboard_id = dashboard_id

        self._already_checked = False
        self._closed = False
        self._tasks: set[asyncio.Task[None]] = set()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def already_checked(self) -> bool:
        return self._already_checked

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    def on_status_observed(self, status: Any) -> None:
        """
        Feed one observed status into the guard.

        Never blocks and never raises on behalf of the fetch.
        """
        if parse_status(status) is not LifecycleStatus.STARTED:
            self._already_checked = False
            return

        if self._already_checked:
            log_event({
                "ts_ms": _now_ms(),
                "event_type": "notice_check_skipped",
                "dashboard_id": self._dashboard_id,
                "reason": "already_checked",
            })
            return

        if self._closed:
            return

        self._already_checked = True

        task = asyncio.get_running_loop().create_task(self._run_check())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        log_event({
            "ts_ms": _now_ms(),
            "event_type": "notice_check_dispatched",
            "dashboard_id": self._dashboard_id,
        })

    def close(self) -> None:
        """
        Suppress all future callbacks.

        Outstanding fetches are not cancelled; their results are dropped.
        Idempotent.
        """
        self._closed = True

    async def wait_idle(self) -> None:
        """Wait until no fetch is outstanding."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _fetch(self) -> tuple[Any, ...]:
        # Runs on the executor; lazy iteration may block too.
        return tuple(self._client.fetch_deprecated_notices())

    async def _run_check(self) -> None:
        loop = asyncio.get_running_loop()

        try:
            with timed("notice_fetch", dashboard_id=self._dashboard_id):
                notices = await loop.run_in_executor(self._executor, self._fetch)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            failure = NoticeFetchFailure(exc)
            failure.__cause__ = exc

            if self._drop_if_closed("failure"):
                return

            log_event({
                "ts_ms": _now_ms(),
                "event_type": "notice_check_failed",
                "dashboard_id": self._dashboard_id,
                "error": str(failure),
            })
            self._present(self._on_error, failure, "error")
            return

        if self._drop_if_closed("notices"):
            return

        if not notices:
            return

        log_event({
            "ts_ms": _now_ms(),
            "event_type": "notices_delivered",
            "dashboard_id": self._dashboard_id,
            "count": len(notices),
        })
        self._present(self._on_notices, notices, "notices")

    def _present(self, callback: Any, payload: Any, result: str) -> None:
        # Presentation failures end here; the task must not finish with one.
        try:
            callback(payload)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            log_event({
                "ts_ms": _now_ms(),
                "event_type": "notice_presentation_failed",
                "dashboard_id": self._dashboard_id,
                "result": result,
                "exception": type(exc).__name__,
                "message": str(exc),
            })

    def _drop_if_closed(self, result: str) -> bool:
        if not self._closed:
            return False
        log_event({
            "ts_ms": _now_ms(),
            "event_type": "notice_result_dropped",
            "dashboard_id": self._dashboard_id,
            "result": result,
        })
        return True


# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------

def _now_ms() -> int:
    return time.time_ns() // 1_000_000
