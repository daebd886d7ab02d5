"""
Collaborator protocols for the dashboard controller.

Provides narrow capabilities the core depends on:
- Status source (observe + current value)
- Notice client (blocking fetch)
- Service control (start / stop requests)
- View binder (apply view state, toggle pager)

This module contains:
- Protocols only (capabilities, not implementations)
- Zero state machine logic
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Protocol, runtime_checkable

from dashboard.enums.status import LifecycleStatus
from dashboard.view_state import ViewStateDescriptor


StatusCallback = Callable[[Any], None]
Unsubscribe = Callable[[], None]
NoticesCallback = Callable[[tuple[Any, ...]], None]
ErrorCallback = Callable[[Exception], None]


# ---------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------

@runtime_checkable
class StatusSourceProtocol(Protocol):
    @property
    def value(self) -> LifecycleStatus | None: ...

    def subscribe(self, callback: StatusCallback) -> Unsubscribe:
        """
        Register a callback invoked with every new status.

        Returns a handle that removes the registration when called.
        """


@runtime_checkable
class NoticeClientProtocol(Protocol):
    def fetch_deprecated_notices(self) -> Iterable[Any]:
        """
        Return deprecation notices from the service control plane.

        Blocking. The result may be lazy; iterating it may block or
        raise as well.
        """


@runtime_checkable
class ServiceControlProtocol(Protocol):
    def start(self) -> None: ...
    def stop(self) -> None: ...


# ---------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------

@runtime_checkable
class ViewBinderProtocol(Protocol):
    def apply_view_state(self, descriptor: ViewStateDescriptor) -> None: ...
    def set_pager_visible(self, visible: bool) -> None: ...
