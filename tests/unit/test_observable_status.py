# pylint: disable=missing-module-docstring,missing-function-docstring

import asyncio
import threading

import pytest

from dashboard.enums.status import LifecycleStatus
from service.observable import ObservableStatus


def test_subscribe_replays_current_value():
    source = ObservableStatus(LifecycleStatus.STARTING)
    seen: list[object] = []

    source.subscribe(seen.append)

    assert seen == [LifecycleStatus.STARTING]


def test_no_replay_before_first_value():
    source = ObservableStatus()
    seen: list[object] = []

    source.subscribe(seen.append)

    assert seen == []
    assert source.value is None


def test_every_set_is_delivered_including_repeats():
    source = ObservableStatus()
    seen: list[object] = []
    source.subscribe(seen.append)

    source.set_value(LifecycleStatus.STARTED)
    source.set_value(LifecycleStatus.STARTED)

    assert seen == [LifecycleStatus.STARTED, LifecycleStatus.STARTED]
    assert source.value is LifecycleStatus.STARTED


def test_unsubscribe_is_idempotent():
    source = ObservableStatus()
    seen: list[object] = []
    unsubscribe = source.subscribe(seen.append)

    unsubscribe()
    unsubscribe()
    source.set_value(LifecycleStatus.STOPPED)

    assert seen == []
    assert source.subscriber_count == 0


def test_callback_may_unsubscribe_during_delivery():
    source = ObservableStatus()
    seen: list[object] = []
    handles = {}

    def once(value: object) -> None:
        seen.append(value)
        handles["u"]()

    handles["u"] = source.subscribe(once)
    source.subscribe(seen.append)

    source.set_value(LifecycleStatus.STOPPED)
    source.set_value(LifecycleStatus.STARTING)

    assert seen == [
        LifecycleStatus.STOPPED,
        LifecycleStatus.STOPPED,
        LifecycleStatus.STARTING,
    ]


def test_post_value_marshals_onto_loop_thread():
    delivered_on: list[int] = []

    async def scenario() -> None:
        source = ObservableStatus(loop=asyncio.get_running_loop())
        done = asyncio.Event()

        def on_status(_: object) -> None:
            delivered_on.append(threading.get_ident())
            done.set()

        source.subscribe(on_status)
        worker = threading.Thread(
            target=source.post_value, args=(LifecycleStatus.STARTED,),
        )
        worker.start()
        worker.join()
        await asyncio.wait_for(done.wait(), timeout=5)

    asyncio.run(scenario())

    assert delivered_on == [threading.get_ident()]


def test_post_value_without_loop_raises():
    source = ObservableStatus()

    with pytest.raises(RuntimeError):
        source.post_value(LifecycleStatus.STARTED)
