"""
View binder for a remote (websocket) dashboard.

Translates view-state descriptors and presentation callbacks into JSON
messages on a bounded outbound queue. The route pumps the queue to the
client.

Rules:
- Enqueue never blocks; a full queue drops the message and logs it.
- Only fields a descriptor sets are sent ("None = unchanged" survives
  the wire).
"""

from __future__ import annotations

import asyncio
import time
from typing import Any

from dashboard.view_state import ViewStateDescriptor, changed_fields

from observability.logger import log_event

from constants import WS_OUTBOUND_QUEUE_MAX


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class RemoteViewBinder:
    """ViewBinder + presentation sinks backed by an asyncio queue."""

    def __init__(self, *, max_queued: int = WS_OUTBOUND_QUEUE_MAX) -> None:
        self._outbound: asyncio.Queue[dict[str, Any]] = asyncio.Queue(maxsize=max_queued)
        self.dropped = 0

    # ------------------------------------------------------------------
    # ViewBinder
    # ------------------------------------------------------------------

    def apply_view_state(self, descriptor: ViewStateDescriptor) -> None:
        self.enqueue({"type": "VIEW_STATE", "view_state": changed_fields(descriptor)})

    def set_pager_visible(self, visible: bool) -> None:
        self.enqueue({"type": "PAGER", "visible": visible})

    # ------------------------------------------------------------------
    # Presentation sinks
    # ------------------------------------------------------------------

    def show_notices(self, notices: tuple[Any, ...]) -> None:
        self.enqueue({"type": "NOTICES", "notices": [str(n) for n in notices]})

    def show_error(self, error: Exception) -> None:
        cause = error.__cause__ or error
        self.enqueue({
            "type": "ERROR",
            "error": type(cause).__name__,
            "message": str(cause),
        })

    # ------------------------------------------------------------------
    # Queue access
    # ------------------------------------------------------------------

    def enqueue(self, message: dict[str, Any]) -> None:
        try:
            self._outbound.put_nowait(message)
        except asyncio.QueueFull:
            self.dropped += 1
            log_event({
                "ts_ms": _now_ms(),
                "event_type": "WS_OUTBOUND_DROPPED",
                "message_type": message.get("type"),
                "dropped": self.dropped,
            })

    async def next_message(self) -> dict[str, Any]:
        return await self._outbound.get()

    def drain(self) -> tuple[dict[str, Any], ...]:
        """Pop everything queued right now without waiting."""
        out: list[dict[str, Any]] = []
        while True:
            try:
                out.append(self._outbound.get_nowait())
            except asyncio.QueueEmpty:
                return tuple(out)
