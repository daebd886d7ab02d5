"""
Dashboard gateway.

Responsibilities:
- Owns one DashboardController per websocket connection
- Routes inbound JSON control messages -> controller actions
- Exposes the outbound message stream for the route to pump
- Tears the controller down on disconnect

NOT responsible for:
- Status derivation (state machine)
- Notice check policy (guard)
- Socket I/O (routes)
"""

from __future__ import annotations

import json
import time
from concurrent.futures import Executor
from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

from dashboard.context import (
    NoticeClientProtocol,
    ServiceControlProtocol,
    StatusSourceProtocol,
)
from dashboard.controller import DashboardController, discard_notices
from session.remote_view import RemoteViewBinder

from observability.logger import log_event

if TYPE_CHECKING:
    from config import AppConfig

# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _now_ms() -> int:
    return time.time_ns() // 1_000_000


# ------------------------------------------------------------------
# Gateway result
# ------------------------------------------------------------------

@dataclass(frozen=True)
class GatewayResult:
    """
    Return value for gateway boundary methods.

    outbound_json:
        JSON messages to send to the client right away
    """
    outbound_json: tuple[dict[str, Any], ...] = ()


# ------------------------------------------------------------------
# DashboardGateway
# ------------------------------------------------------------------

class DashboardGateway:
    """One gateway == one websocket client == one dashboard view."""

    def __init__(
        self,
        *,
        config: AppConfig,
        source: StatusSourceProtocol,
        service: ServiceControlProtocol,
        notice_client: NoticeClientProtocol,
        executor: Executor | None = None,
    ) -> None:
        self._config = config
        self._source = source
        self._service = service
        self._notice_client = notice_client
        self._executor = executor

        self.binder: RemoteViewBinder | None = None
        self.controller: DashboardController | None = None

    @property
    def dashboard_id(self) -> str | None:
        return self.controller.dashboard_id if self.controller else None

    async def on_ws_connect(self) -> GatewayResult:
        """Create the view and start observing status."""
        binder = RemoteViewBinder()

        controller = DashboardController(
            source=self._source,
            binder=binder,
            notice_client=self._notice_client,
            service=self._service,
            on_notices=(
                binder.show_notices
                if self._config.show_deprecated_notices
                else discard_notices
            ),
            on_error=binder.show_error,
            executor=self._executor,
        )

        self.binder = binder
        self.controller = controller

        log_event({
            "ts_ms": _now_ms(),
            "event_type": "WS_CONNECTED",
            "dashboard_id": controller.dashboard_id,
        })

        init_msg: dict[str, Any] = {
            "type": "DASHBOARD_INIT",
            "dashboard_id": controller.dashboard_id,
        }

        # Subscribing replays the current status into the binder
        controller.attach()

        return GatewayResult(outbound_json=(init_msg,) + binder.drain())

    async def on_json_message(self, payload: str) -> None:
        """Route inbound JSON to the controller."""
        if self.controller is None:
            log_event({
                "ts_ms": _now_ms(),
                "event_type": "MESSAGE_WITHOUT_DASHBOARD",
                "payload_preview": payload[:100],
            })
            return

        try:
            data = json.loads(payload)
        except json.JSONDecodeError as e:
            log_event({
                "ts_ms": _now_ms(),
                "event_type": "JSON_DECODE_ERROR",
                "dashboard_id": self.dashboard_id,
                "error": str(e),
                "payload_preview": payload[:100],
            })
            return

        msg_type = data.get("type") if isinstance(data, dict) else None

        if msg_type == "ACTION":
            self.controller.on_action_pressed()
        else:
            log_event({
                "ts_ms": _now_ms(),
                "event_type": "UNKNOWN_MESSAGE_TYPE",
                "dashboard_id": self.dashboard_id,
                "msg_type": msg_type,
            })

    async def next_outbound(self) -> dict[str, Any]:
        """Wait for the next message to push to the client."""
        assert self.binder is not None, "on_ws_connect() must run first"
        return await self.binder.next_message()

    async def on_ws_disconnect(self, reason: str | None = None) -> None:
        """Tear down the view; late notice results are dropped."""
        if self.controller is None:
            log_event({
                "ts_ms": _now_ms(),
                "event_type": "WS_DISCONNECT_WITHOUT_DASHBOARD",
                "reason": reason,
            })
            return

        self.controller.detach()

        log_event({
            "ts_ms": _now_ms(),
            "event_type": "WS_DISCONNECTED",
            "dashboard_id": self.dashboard_id,
            "reason": reason,
        })
