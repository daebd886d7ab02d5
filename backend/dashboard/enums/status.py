"""
Lifecycle status enumeration for the connection service.

Rules:
- Values are produced exclusively by the status source.
- No behavior, no helper methods beyond parsing.
- Unknown values are tolerated by consumers, never rejected here.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class LifecycleStatus(str, Enum):
    """
    Coarse-grained phase of the external connection service.

    STOPPED and STARTED are resting phases; STARTING and STOPPING are
    transitional. A single continuous STARTED interval is one activation.
    """

    STOPPED = "STOPPED"
    STARTING = "STARTING"
    STARTED = "STARTED"
    STOPPING = "STOPPING"


def parse_status(value: Any) -> LifecycleStatus | None:
    """
    Map a raw status value onto LifecycleStatus.

    Returns None for anything unrecognized (the "other" catch-all).
    """
    if isinstance(value, LifecycleStatus):
        return value
    if isinstance(value, str):
        try:
            return LifecycleStatus(value.upper())
        except ValueError:
            return None
    return None
