"""
View-state descriptor for the dashboard.

Rules:
- Pure data model, recomputed on every status change, never persisted.
- A field set to None means "leave the widget as it is".
- The all-None descriptor (NO_CHANGE) means "do nothing at all".
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any

from dashboard.enums.view import ActionIcon, ActionLabel, ActionTint


@dataclass(frozen=True)
class ViewStateDescriptor:
    """Immutable snapshot of the affordances a status maps to."""

    # ------------------------------------------------------------------
    # Action button
    # ------------------------------------------------------------------
    action_icon: ActionIcon | None = None
    action_tint: ActionTint | None = None
    action_label: ActionLabel | None = None
    action_enabled: bool | None = None

    # ------------------------------------------------------------------
    # Progress / paging
    # ------------------------------------------------------------------
    spinner_visible: bool | None = None
    pager_enabled: bool | None = None

    @property
    def is_noop(self) -> bool:
        return not changed_fields(self)


NO_CHANGE = ViewStateDescriptor()


def changed_fields(descriptor: ViewStateDescriptor) -> dict[str, Any]:
    """
    Return only the fields the descriptor sets, with enums as plain values.

    Suitable for JSON transport to a remote view.
    """
    out: dict[str, Any] = {}
    for f in fields(descriptor):
        value = getattr(descriptor, f.name)
        if value is None:
            continue
        out[f.name] = value.value if isinstance(value, Enum) else value
    return out
