"""
Defines the optional lifecycle capabilities a view-model can implement.

Conductors never require a base class: they check membership in each
capability at runtime and fall back to a no-op when it is missing. Screen
implements all of them.
"""

import logging
from concurrent.futures import Future
from typing import Any, Optional, Protocol, runtime_checkable

from .screen_state import ScreenState

logger = logging.getLogger(__name__)


@runtime_checkable
class ScreenStateAware(Protocol):
    """Has a lifecycle state which can be driven by a conductor."""

    @property
    def screen_state(self) -> ScreenState: ...

    def activate(self) -> None: ...

    def deactivate(self) -> None: ...

    def close(self) -> None: ...


@runtime_checkable
class GuardClose(Protocol):
    """Can veto a close request."""

    def can_close_async(self) -> "Future[bool]": ...


@runtime_checkable
class ChildDelegate(Protocol):
    """A conductor able to close one of its children."""

    def close_item(self, item: Any) -> None: ...


@runtime_checkable
class Child(Protocol):
    """Knows the conductor which owns it."""

    parent: Optional[Any]


@runtime_checkable
class RequestClose(Protocol):
    """Can ask its conductor to close it."""

    def request_close(self) -> None: ...


@runtime_checkable
class ViewAware(Protocol):
    """Holds on to the view it is displayed in."""

    @property
    def view(self) -> Any: ...

    def attach_view(self, view: Any) -> None: ...


@runtime_checkable
class HaveDisplayName(Protocol):
    """Has a name suitable for a window title or tab header."""

    display_name: str


@runtime_checkable
class Disposable(Protocol):
    def dispose(self) -> None: ...


def try_activate(obj: Any) -> None:
    """Activate *obj* if it tracks screen state."""
    if isinstance(obj, ScreenStateAware):
        obj.activate()


def try_deactivate(obj: Any) -> None:
    """Deactivate *obj* if it tracks screen state."""
    if isinstance(obj, ScreenStateAware):
        obj.deactivate()


def try_close(obj: Any) -> None:
    """Close *obj* if it tracks screen state."""
    if isinstance(obj, ScreenStateAware):
        obj.close()


def try_dispose(obj: Any) -> None:
    if isinstance(obj, Disposable):
        logger.debug("Disposing %r", obj)
        obj.dispose()
