"""
Application configuration.

Responsibilities:
- Read environment variables
- Provide a typed, immutable config object

Non-responsibilities:
- No state machine logic
- No behavioral constants (see constants.py)
- No runtime mutation
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from constants import (
    DEFAULT_HOST,
    DEFAULT_NOTICE_FETCH_WORKERS,
    DEFAULT_PORT,
    DEFAULT_START_DELAY_MS,
    DEFAULT_STOP_DELAY_MS,
    NOTICE_SEPARATOR,
)


def _parse_notices(raw: str) -> tuple[str, ...]:
    return tuple(n.strip() for n in raw.split(NOTICE_SEPARATOR) if n.strip())


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable application configuration.

    Constructed once at process startup and passed downward to the
    app factory and gateways.
    """

    # ------------------------------------------------------------------
    # Environment
    # ------------------------------------------------------------------

    env: str
    log_level: str

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    enable_json_logs: bool

    # ------------------------------------------------------------------
    # Local service
    # ------------------------------------------------------------------

    service_start_delay_ms: int
    service_stop_delay_ms: int

    # ------------------------------------------------------------------
    # Deprecation notices
    # ------------------------------------------------------------------

    notice_fetch_workers: int
    deprecated_notices: tuple[str, ...]
    show_deprecated_notices: bool

    # ------------------------------------------------------------------
    # Server
    # ------------------------------------------------------------------

    host: str
    port: int

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @staticmethod
    def load_from_env() -> AppConfig:
        """
        Load configuration from environment variables.

        Raises:
            ValueError if a numeric variable is malformed or out of range.
        """
        config = AppConfig(
            env=os.environ.get("ENV", "dev"),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),

            enable_json_logs=os.environ.get("ENABLE_JSON_LOGS", "1") == "1",

            service_start_delay_ms=int(
                os.environ.get("SERVICE_START_DELAY_MS", DEFAULT_START_DELAY_MS)
            ),
            service_stop_delay_ms=int(
                os.environ.get("SERVICE_STOP_DELAY_MS", DEFAULT_STOP_DELAY_MS)
            ),

            notice_fetch_workers=int(
                os.environ.get("NOTICE_FETCH_WORKERS", DEFAULT_NOTICE_FETCH_WORKERS)
            ),
            deprecated_notices=_parse_notices(os.environ.get("DEPRECATED_NOTICES", "")),
            show_deprecated_notices=os.environ.get("SHOW_DEPRECATED_NOTICES", "0") == "1",

            host=os.environ.get("HOST", DEFAULT_HOST),
            port=int(os.environ.get("PORT", DEFAULT_PORT)),
        )

        if config.notice_fetch_workers < 1:
            raise ValueError("NOTICE_FETCH_WORKERS must be >= 1")
        if config.service_start_delay_ms < 0 or config.service_stop_delay_ms < 0:
            raise ValueError("SERVICE_*_DELAY_MS must be >= 0")

        return config
