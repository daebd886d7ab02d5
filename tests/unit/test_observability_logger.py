# pylint: disable=missing-module-docstring,missing-function-docstring

import json
from typing import Any

import pytest

from dashboard.enums.status import LifecycleStatus
from observability import logger
from observability.metrics import timed


@pytest.fixture
def captured(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    lines: list[str] = []
    monkeypatch.setattr(logger, "_print", lines.append)
    monkeypatch.setattr(logger, "_enabled", True)
    return lines


def test_log_event_emits_valid_jsonl(captured: list[str]) -> None:
    payload: dict[str, Any] = {
        "event_type": "TEST",
        "value": 123,
    }

    logger.log_event(payload)

    assert len(captured) == 1
    assert json.loads(captured[0]) == payload


def test_enums_serialize_by_value(captured: list[str]) -> None:
    logger.log_event({"event_type": "TEST", "status": LifecycleStatus.STARTED})

    assert json.loads(captured[0])["status"] == "STARTED"


def test_unserializable_payload_falls_back(captured: list[str]) -> None:
    logger.log_event({"ts_ms": 1, "event_type": "TEST", "bad": object()})

    decoded = json.loads(captured[0])
    assert decoded["event_type"] == "LOGGER_SERIALIZATION_ERROR"
    assert decoded["ts_ms"] == 1


def test_disabled_logger_emits_nothing(
    captured: list[str], monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(logger, "_enabled", True)
    logger.configure(enabled=False)
    try:
        logger.log_event({"event_type": "TEST"})
    finally:
        logger.configure(enabled=True)

    assert captured == []


def test_timed_emits_one_metric_even_on_error(captured: list[str]) -> None:
    with pytest.raises(ValueError):
        with timed("notice_fetch", dashboard_id="dash_x"):
            raise ValueError("boom")

    assert len(captured) == 1
    decoded = json.loads(captured[0])
    assert decoded["event_type"] == "METRIC_TIMER"
    assert decoded["metric"] == "notice_fetch"
    assert decoded["dashboard_id"] == "dash_x"
