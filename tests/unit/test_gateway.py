# pylint: disable=missing-module-docstring,missing-function-docstring

import asyncio
import json
from typing import Any

import pytest

import session.gateway as gateway_mod
from config import AppConfig
from service.box_service import LocalBoxService
from service.notice_client import StaticNoticeClient
from session.gateway import DashboardGateway


def make_config(**overrides: Any) -> AppConfig:
    values: dict[str, Any] = {
        "env": "test",
        "log_level": "INFO",
        "enable_json_logs": False,
        "service_start_delay_ms": 0,
        "service_stop_delay_ms": 0,
        "notice_fetch_workers": 1,
        "deprecated_notices": (),
        "show_deprecated_notices": False,
        "host": "127.0.0.1",
        "port": 0,
    }
    values.update(overrides)
    return AppConfig(**values)


def make_gateway(
    notices: tuple[str, ...] = (),
    **overrides: Any,
) -> DashboardGateway:
    service = LocalBoxService(start_delay_ms=0, stop_delay_ms=0)
    return DashboardGateway(
        config=make_config(**overrides),
        source=service,
        service=service,
        notice_client=StaticNoticeClient(notices),
    )


def types(messages: tuple[dict[str, Any], ...]) -> list[str]:
    return [m["type"] for m in messages]


@pytest.fixture
def emitted(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, Any]]:
    events: list[dict[str, Any]] = []
    monkeypatch.setattr(gateway_mod, "log_event", events.append)
    return events


def test_connect_sends_init_and_current_view_state(emitted: list[dict[str, Any]]) -> None:
    async def scenario():
        gw = make_gateway()
        result = await gw.on_ws_connect()
        return gw, result

    gw, result = asyncio.run(scenario())

    assert types(result.outbound_json) == ["DASHBOARD_INIT", "VIEW_STATE"]
    assert result.outbound_json[0]["dashboard_id"] == gw.dashboard_id
    assert result.outbound_json[1]["view_state"]["action_label"] == "CONNECT"
    assert any(e["event_type"] == "WS_CONNECTED" for e in emitted)


def test_action_message_connects_and_streams_updates(emitted: list[dict[str, Any]]) -> None:
    async def scenario() -> tuple[dict[str, Any], ...]:
        gw = make_gateway(
            notices=("legacy-dns",), show_deprecated_notices=True,
        )
        await gw.on_ws_connect()
        await gw.on_json_message(json.dumps({"type": "ACTION"}))
        await asyncio.sleep(0.01)
        assert gw.controller is not None
        await gw.controller.guard.wait_idle()
        assert gw.binder is not None
        out = gw.binder.drain()
        await gw.on_ws_disconnect(reason="test")
        return out

    out = asyncio.run(scenario())

    assert types(out) == ["VIEW_STATE", "VIEW_STATE", "VIEW_STATE", "PAGER", "NOTICES"]
    assert out[0]["view_state"] == {"action_enabled": False}
    assert out[1]["view_state"]["action_label"] == "CONNECTING"
    assert out[2]["view_state"]["action_label"] == "DISCONNECT"
    assert out[3]["visible"] is True
    assert out[4]["notices"] == ["legacy-dns"]


def test_notices_hidden_by_default(emitted: list[dict[str, Any]]) -> None:
    async def scenario() -> tuple[dict[str, Any], ...]:
        gw = make_gateway(notices=("legacy-dns",))
        await gw.on_ws_connect()
        await gw.on_json_message(json.dumps({"type": "ACTION"}))
        await asyncio.sleep(0.01)
        assert gw.controller is not None
        await gw.controller.guard.wait_idle()
        assert gw.binder is not None
        return gw.binder.drain()

    out = asyncio.run(scenario())

    assert "NOTICES" not in types(out)


def test_invalid_json_is_logged_and_ignored(emitted: list[dict[str, Any]]) -> None:
    async def scenario() -> None:
        gw = make_gateway()
        await gw.on_ws_connect()
        await gw.on_json_message("{not json")
        await gw.on_json_message(json.dumps({"type": "WHAT"}))

    asyncio.run(scenario())

    kinds = [e["event_type"] for e in emitted]
    assert "JSON_DECODE_ERROR" in kinds
    assert "UNKNOWN_MESSAGE_TYPE" in kinds


def test_message_before_connect_is_dropped(emitted: list[dict[str, Any]]) -> None:
    asyncio.run(make_gateway().on_json_message("{}"))

    assert emitted[-1]["event_type"] == "MESSAGE_WITHOUT_DASHBOARD"


def test_disconnect_detaches_controller(emitted: list[dict[str, Any]]) -> None:
    async def scenario() -> DashboardGateway:
        gw = make_gateway()
        await gw.on_ws_connect()
        await gw.on_ws_disconnect(reason="client_disconnect")
        return gw

    gw = asyncio.run(scenario())

    assert gw.controller is not None
    assert not gw.controller.attached
    assert emitted[-1]["event_type"] == "WS_DISCONNECTED"
