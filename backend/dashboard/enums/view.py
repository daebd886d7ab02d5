"""
Visual affordance enumerations for the dashboard action button.

These name roles, not concrete resources. The view binder maps them to
drawables, theme colors and strings.
"""

from __future__ import annotations

from enum import Enum


class ActionIcon(str, Enum):
    PLAY = "PLAY"
    STOP = "STOP"


class ActionTint(str, Enum):
    """Theme color role used for the action button background."""

    PRIMARY = "PRIMARY"
    TERTIARY = "TERTIARY"
    ERROR = "ERROR"


class ActionLabel(str, Enum):
    CONNECT = "CONNECT"
    CONNECTING = "CONNECTING"
    DISCONNECT = "DISCONNECT"
    DISCONNECTING = "DISCONNECTING"
