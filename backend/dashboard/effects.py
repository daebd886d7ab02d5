"""
Side-effect intents emitted by the status state machine.

Rules:
- Effects are declarative requests, executed by the controller.
- No behavior, no async, no I/O.
"""

from __future__ import annotations

from enum import Enum


class Effect(str, Enum):
    """
    Canonical effect discriminants.

    CHECK_NOTICES and ENABLE_PAGER are requested on entry into STARTED.
    DISABLE_PAGER exists for view composition policy; the state table
    never emits it.
    """

    CHECK_NOTICES = "CHECK_NOTICES"
    ENABLE_PAGER = "ENABLE_PAGER"
    DISABLE_PAGER = "DISABLE_PAGER"
