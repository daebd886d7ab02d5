"""
Static deprecation notice client.

Serves a fixed, configured set of notices. Stands in for the service
control plane's command client in local deployments.
"""

from __future__ import annotations

from typing import Iterator


class StaticNoticeClient:
    """NoticeClient returning configured notices, lazily."""

    def __init__(self, notices: tuple[str, ...] = ()) -> None:
        self._notices = notices

    def fetch_deprecated_notices(self) -> Iterator[str]:
        yield from self._notices
