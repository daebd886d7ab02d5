"""
Pure connection status state machine.

status -> (view_state, effects)

Rules:
- Pure: no side effects, no IO, no clocks, no memory.
- Total: every input maps to a result; unknown statuses are a no-op.
- Level-triggered: the descriptor depends only on the latest status.

Effects are requested on every STARTED input. Firing them once per
activation is the caller's job (edge detection in the controller,
deduplication in NoticeCheckGuard).
"""

from __future__ import annotations

from typing import Any

from dashboard.effects import Effect
from dashboard.enums.status import LifecycleStatus, parse_status
from dashboard.enums.view import ActionIcon, ActionLabel, ActionTint
from dashboard.view_state import NO_CHANGE, ViewStateDescriptor


# =============================================================================
# Status table
# =============================================================================

_STOPPED_VIEW = ViewStateDescriptor(
    action_icon=ActionIcon.PLAY,
    action_tint=ActionTint.PRIMARY,
    action_label=ActionLabel.CONNECT,
    spinner_visible=False,
    action_enabled=True,
)

_STARTING_VIEW = ViewStateDescriptor(
    action_icon=ActionIcon.PLAY,
    action_tint=ActionTint.TERTIARY,
    action_label=ActionLabel.CONNECTING,
    spinner_visible=True,
    action_enabled=False,
)

_STARTED_VIEW = ViewStateDescriptor(
    action_icon=ActionIcon.STOP,
    action_tint=ActionTint.ERROR,
    action_label=ActionLabel.DISCONNECT,
    spinner_visible=False,
    action_enabled=True,
    pager_enabled=True,
)

# Icon and tint keep whatever STARTED left behind.
_STOPPING_VIEW = ViewStateDescriptor(
    action_label=ActionLabel.DISCONNECTING,
    spinner_visible=True,
    action_enabled=False,
)

_NO_EFFECTS: frozenset[Effect] = frozenset()
_ACTIVATION_EFFECTS: frozenset[Effect] = frozenset(
    {Effect.CHECK_NOTICES, Effect.ENABLE_PAGER}
)

_TABLE: dict[LifecycleStatus, tuple[ViewStateDescriptor, frozenset[Effect]]] = {
    LifecycleStatus.STOPPED: (_STOPPED_VIEW, _NO_EFFECTS),
    LifecycleStatus.STARTING: (_STARTING_VIEW, _NO_EFFECTS),
    LifecycleStatus.STARTED: (_STARTED_VIEW, _ACTIVATION_EFFECTS),
    LifecycleStatus.STOPPING: (_STOPPING_VIEW, _NO_EFFECTS),
}


# =============================================================================
# Public API
# =============================================================================

def derive(status: Any) -> tuple[ViewStateDescriptor, frozenset[Effect]]:
    """
    Map a lifecycle status to its view-state descriptor and effect set.

    Accepts LifecycleStatus members, their string values, or anything
    else. Unrecognized values return (NO_CHANGE, frozenset()).
    """
    parsed = parse_status(status)
    if parsed is None:
        return NO_CHANGE, _NO_EFFECTS
    return _TABLE[parsed]


def is_activation_entry(previous: Any, current: Any) -> bool:
    """True iff `current` is STARTED and `previous` was not."""
    return (
        parse_status(current) is LifecycleStatus.STARTED
        and parse_status(previous) is not LifecycleStatus.STARTED
    )
