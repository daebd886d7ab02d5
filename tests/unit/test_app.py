# pylint: disable=missing-module-docstring,missing-function-docstring

import asyncio
import threading
from typing import Any

from config import AppConfig
from constants import DEFAULT_NOTICE_FETCH_WORKERS
from dashboard.enums.status import LifecycleStatus
from dashboard.notice_guard import NoticeCheckGuard
from server.app import create_app


def make_config(**overrides: Any) -> AppConfig:
    values: dict[str, Any] = {
        "env": "test",
        "log_level": "INFO",
        "enable_json_logs": True,
        "service_start_delay_ms": 0,
        "service_stop_delay_ms": 0,
        "notice_fetch_workers": DEFAULT_NOTICE_FETCH_WORKERS,
        "deprecated_notices": (),
        "show_deprecated_notices": False,
        "host": "127.0.0.1",
        "port": 0,
    }
    values.update(overrides)
    return AppConfig(**values)


class GatedNoticeClient:
    def __init__(self, gate: threading.Event | None = None) -> None:
        self.gate = gate
        self.calls = 0

    def fetch_deprecated_notices(self):
        self.calls += 1
        if self.gate is not None:
            self.gate.wait(timeout=5)
        return iter(("legacy-dns",))


def test_hung_fetch_does_not_block_other_dashboards():
    app = create_app(make_config())
    executor = app.state.notice_executor
    gate = threading.Event()
    hung = GatedNoticeClient(gate=gate)
    healthy = GatedNoticeClient()
    delivered: list[tuple[Any, ...]] = []

    async def scenario() -> None:
        first = NoticeCheckGuard(
            client=hung,
            on_notices=lambda _: None,
            on_error=lambda _: None,
            executor=executor,
        )
        second = NoticeCheckGuard(
            client=healthy,
            on_notices=delivered.append,
            on_error=lambda _: None,
            executor=executor,
        )
        first.on_status_observed(LifecycleStatus.STARTED)
        second.on_status_observed(LifecycleStatus.STARTED)
        try:
            await asyncio.wait_for(second.wait_idle(), timeout=2)
        finally:
            gate.set()
            await first.wait_idle()

    try:
        asyncio.run(scenario())
    finally:
        executor.shutdown(wait=True)

    assert healthy.calls == 1
    assert delivered == [("legacy-dns",)]


def test_default_pool_has_more_than_one_worker():
    assert DEFAULT_NOTICE_FETCH_WORKERS > 1
