"""
Behavioral constants.

Rules:
- If changing a value changes runtime behavior, it belongs here.
- No magic numbers elsewhere in the codebase.
- config.py reads overrides from the environment; these are the defaults.
"""

from __future__ import annotations

from typing import Final

# =============================================================================
# Local service transitions
# =============================================================================

DEFAULT_START_DELAY_MS: Final[int] = 500
DEFAULT_STOP_DELAY_MS: Final[int] = 300

# =============================================================================
# Notice check
# =============================================================================

# Shared by every dashboard; a hung fetch holds its worker for good
DEFAULT_NOTICE_FETCH_WORKERS: Final[int] = 8
NOTICE_SEPARATOR: Final[str] = ","

# =============================================================================
# Web surface
# =============================================================================

DEFAULT_HOST: Final[str] = "0.0.0.0"
DEFAULT_PORT: Final[int] = 8000

# Outbound messages buffered per websocket client
WS_OUTBOUND_QUEUE_MAX: Final[int] = 256
