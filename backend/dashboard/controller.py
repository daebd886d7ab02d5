"""
Dashboard controller for a single view.

Responsibilities:
- Subscribe to the status source for the lifetime of the view
- Call the pure state machine on every observed status
- Apply view state through the binder
- Execute effects once per entry into STARTED
- Feed the notice guard and own its teardown
- Translate action-button presses into service start / stop requests

Non-responsibilities:
- Rendering (binder)
- Notice presentation policy (callbacks)
- Service lifecycle (service control)
"""

from __future__ import annotations

import time
from concurrent.futures import Executor
from typing import Any
from uuid import uuid4

from dashboard.context import (
    ErrorCallback,
    NoticeClientProtocol,
    NoticesCallback,
    ServiceControlProtocol,
    StatusSourceProtocol,
    Unsubscribe,
    ViewBinderProtocol,
)
from dashboard.effects import Effect
from dashboard.enums.status import LifecycleStatus, parse_status
from dashboard.notice_guard import NoticeCheckGuard
from dashboard.state_machine import derive, is_activation_entry
from dashboard.view_state import ViewStateDescriptor, changed_fields

from observability.logger import log_event


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def _new_dashboard_id() -> str:
    return f"dash_{uuid4().hex[:12]}"


def discard_notices(notices: tuple[Any, ...]) -> None:
    """
    Default notice policy: consume and show nothing.

    Presentation is deliberately muted; pass a different callback to
    surface notices.
    """
    for _ in notices:
        pass


def _log_error(error: Exception) -> None:
    log_event({
        "ts_ms": _now_ms(),
        "event_type": "notice_error_unpresented",
        "error_type": type(error).__name__,
        "message": str(error),
    })


class DashboardController:
    """
    Bridge between the status source and one concrete view.

    Guarantees:
    - Every observed status is derived and applied, in arrival order
    - CHECK_NOTICES / ENABLE_PAGER run only on a transition into STARTED
    - A failed notice check never affects status handling
    - After detach(), no binder or callback is touched again

    All methods must be called on the event-loop thread; status sources
    that publish from other threads must marshal first (see
    ObservableStatus.post_value).
    """

    def __init__(
        self,
        *,
        source: StatusSourceProtocol,
        binder: ViewBinderProtocol,
        notice_client: NoticeClientProtocol,
        service: ServiceControlProtocol,
        on_notices: NoticesCallback = discard_notices,
        on_error: ErrorCallback = _log_error,
        executor: Executor | None = None,
    ) -> None:
        self.dashboard_id = _new_dashboard_id()
        self._source = source
        self._binder = binder
        self._service = service
        self._on_notices = on_notices
        self._on_error = on_error

        self._unsubscribe: Unsubscribe | None = None
        self._last_status: Any = None
        self._detached = False

        self._guard = NoticeCheckGuard(
            client=notice_client,
            on_notices=self._deliver_notices,
            on_error=self._deliver_error,
            executor=executor,
            dashboard_id=self.dashboard_id,
        )

    # ------------------------------------------------------------------
    # View lifecycle
    # ------------------------------------------------------------------

    @property
    def attached(self) -> bool:
        return self._unsubscribe is not None

    @property
    def guard(self) -> NoticeCheckGuard:
        return self._guard

    def attach(self) -> None:
        """
        Start observing the status source.

        The source replays its current value, so the view is brought up
        to date immediately. Idempotent; a detached controller stays
        detached.
        """
        if self._unsubscribe is not None or self._detached:
            return
        self._unsubscribe = self._source.subscribe(self.on_status)

    def detach(self) -> None:
        """
        Stop observing and drop any late notice results.

        Outstanding fetches are not cancelled. Idempotent.
        """
        self._detached = True
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        if unsubscribe is not None:
            unsubscribe()
        self._guard.close()

    async def aclose(self) -> None:
        """detach() and wait for outstanding fetches to settle."""
        self.detach()
        await self._guard.wait_idle()

    # ------------------------------------------------------------------
    # Status handling
    # ------------------------------------------------------------------

    def on_status(self, status: Any) -> None:
        """
        Process a single observed status.

        Processing steps:
        1. Derive the descriptor and effects (pure)
        2. Apply the descriptor (level-triggered)
        3. Re-arm the notice guard when not STARTED
        4. Execute effects, only on entry into STARTED
        """
        if self._detached:
            return

        previous, self._last_status = self._last_status, status
        view_state, effects = derive(status)
        entering = is_activation_entry(previous, status)

        log_event({
            "ts_ms": _now_ms(),
            "event_type": "status_observed",
            "dashboard_id": self.dashboard_id,
            "status": _status_repr(status),
            "previous": _status_repr(previous),
            "view_state": changed_fields(view_state),
            "effects": sorted(e.value for e in effects) if entering else [],
        })

        if not view_state.is_noop:
            self._binder.apply_view_state(view_state)

        if parse_status(status) is not LifecycleStatus.STARTED:
            self._guard.on_status_observed(status)

        if not entering:
            return

        for effect in sorted(effects, key=lambda e: e.value):
            self._execute_effect(effect, status)

    def _execute_effect(self, effect: Effect, status: Any) -> None:
        if effect is Effect.CHECK_NOTICES:
            self._guard.on_status_observed(status)

        elif effect is Effect.ENABLE_PAGER:
            self._binder.set_pager_visible(True)

        elif effect is Effect.DISABLE_PAGER:
            self._binder.set_pager_visible(False)

    # ------------------------------------------------------------------
    # Action button
    # ------------------------------------------------------------------

    def on_action_pressed(self) -> None:
        """
        Handle a press of the connect / disconnect action.

        STOPPED -> disable the action, request start
        STARTED -> request stop
        otherwise -> ignored (transition already in progress)
        """
        if self._detached:
            return

        current = parse_status(self._source.value)

        log_event({
            "ts_ms": _now_ms(),
            "event_type": "action_pressed",
            "dashboard_id": self.dashboard_id,
            "status": _status_repr(current),
        })

        if current is LifecycleStatus.STOPPED:
            self._binder.apply_view_state(ViewStateDescriptor(action_enabled=False))
            self._service.start()
        elif current is LifecycleStatus.STARTED:
            self._service.stop()

    # ------------------------------------------------------------------
    # Guard callbacks (event-loop thread)
    # ------------------------------------------------------------------

    def _deliver_notices(self, notices: tuple[Any, ...]) -> None:
        if self._detached:
            return
        self._on_notices(notices)

    def _deliver_error(self, error: Exception) -> None:
        if self._detached:
            return
        self._on_error(error)


def _status_repr(status: Any) -> str | None:
    if status is None:
        return None
    if isinstance(status, LifecycleStatus):
        return status.value
    if isinstance(status, str):
        return status
    return repr(status)
