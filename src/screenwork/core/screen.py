"""
Screen: the base view-model with a managed activation lifecycle.

A Screen moves between DEACTIVATED, ACTIVE and CLOSED. Conductors drive it
through ``activate()``, ``deactivate()`` and ``close()``; subclasses react by
overriding the ``on_*`` hooks. Transitions into or out of CLOSED are always
routed through the intermediate state so the activate/deactivate hooks bracket
every close.
"""

import logging
from concurrent.futures import Future
from typing import Any, Callable, Optional

from .errors import DoubleAttachmentError, MissingParentError
from .execute import Execute
from .guard import completed
from .lifecycle import ChildDelegate
from .observable import EventHook, ObservableObject
from .screen_state import (
    ActivationEventArgs,
    CloseEventArgs,
    DeactivationEventArgs,
    ScreenState,
    ScreenStateChangedEventArgs,
)


class Screen(ObservableObject):
    """
    Base view-model implementing every lifecycle capability.

    Events (handlers receive ``(sender, args)``):
    - state_changed: any transition, ScreenStateChangedEventArgs
    - activated: ActivationEventArgs
    - deactivated: DeactivationEventArgs
    - closed: CloseEventArgs
    """

    def __init__(self):
        super().__init__()
        cls = type(self)
        self.logger = logging.getLogger(f"{cls.__module__}.{cls.__qualname__}")

        self._display_name = f"{cls.__module__}.{cls.__qualname__}"
        self._screen_state = ScreenState.DEACTIVATED
        self._have_activated = False
        self._parent: Optional[Any] = None
        self._view: Optional[Any] = None

        self.state_changed = EventHook("state_changed")
        self.activated = EventHook("activated")
        self.deactivated = EventHook("deactivated")
        self.closed = EventHook("closed")

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._display_name!r} {self._screen_state}>"

    # --- Display name ---
    @property
    def display_name(self) -> str:
        """Name shown e.g. in a window's title bar."""
        return self._display_name

    @display_name.setter
    def display_name(self, value: str) -> None:
        self.set_property("_display_name", value)

    # --- State ---
    @property
    def screen_state(self) -> ScreenState:
        return self._screen_state

    @property
    def is_active(self) -> bool:
        return self._screen_state is ScreenState.ACTIVE

    # --- Lifecycle hooks (no-op defaults) ---
    def on_initial_activate(self) -> None:
        """Called the very first time this Screen is activated (re-armed by close)."""

    def on_activate(self) -> None:
        """Called every time this Screen is activated."""

    def on_deactivate(self) -> None:
        """Called every time this Screen is deactivated."""

    def on_close(self) -> None:
        """Called when this Screen is closed."""

    def on_state_changed(self, previous_state: ScreenState, new_state: ScreenState) -> None:
        """Called on any state transition."""

    def on_view_loaded(self) -> None:
        """Called once a view has been attached."""

    def _set_state(
        self,
        new_state: ScreenState,
        changed_handler: Callable[[ScreenState, ScreenState], None],
    ) -> None:
        if new_state is self._screen_state:
            return

        previous_state = self._screen_state
        self._screen_state = new_state
        self.notify_property_changed("screen_state")
        self.notify_property_changed("is_active")

        self.logger.info("Setting state from %s to %s", previous_state, new_state)

        self.on_state_changed(previous_state, new_state)
        args = ScreenStateChangedEventArgs(new_state, previous_state)
        Execute.on_ui_thread(lambda: self.state_changed.emit(self, args))

        changed_handler(previous_state, new_state)

    def activate(self) -> None:
        def changed(previous_state: ScreenState, new_state: ScreenState) -> None:
            is_initial_activate = not self._have_activated
            if is_initial_activate:
                self.on_initial_activate()
                self._have_activated = True

            self.on_activate()

            args = ActivationEventArgs(previous_state, is_initial_activate)
            Execute.on_ui_thread(lambda: self.activated.emit(self, args))

        self._set_state(ScreenState.ACTIVE, changed)

    def deactivate(self) -> None:
        # Closed -> Deactivated must pass through Active
        if self._screen_state is ScreenState.CLOSED:
            self.activate()

        def changed(previous_state: ScreenState, new_state: ScreenState) -> None:
            self.on_deactivate()

            args = DeactivationEventArgs(previous_state)
            Execute.on_ui_thread(lambda: self.deactivated.emit(self, args))

        self._set_state(ScreenState.DEACTIVATED, changed)

    def close(self) -> None:
        # Active -> Closed must pass through Deactivated
        if self._screen_state is not ScreenState.CLOSED:
            self.deactivate()

        self._view = None
        # Allow on_initial_activate to fire again on the next activation
        self._have_activated = False

        def changed(previous_state: ScreenState, new_state: ScreenState) -> None:
            self.on_close()

            args = CloseEventArgs(previous_state)
            Execute.on_ui_thread(lambda: self.closed.emit(self, args))

        self._set_state(ScreenState.CLOSED, changed)

    # --- View ---
    @property
    def view(self) -> Optional[Any]:
        """The view attached to this view-model, if any. Use as a last resort."""
        return self._view

    def attach_view(self, view: Any) -> None:
        if self._view is not None:
            error = DoubleAttachmentError(view, self)
            self.logger.error(str(error))
            raise error

        self._view = view
        self.logger.info("Attaching view %r", view)
        self.on_view_loaded()

    # --- Parent ---
    @property
    def parent(self) -> Optional[Any]:
        """Conductor owning this Screen; used by request_close()."""
        return self._parent

    @parent.setter
    def parent(self, value: Optional[Any]) -> None:
        if self._parent is value:
            return
        self._parent = value
        self.notify_property_changed("parent")

    # --- Close guard ---
    def can_close_async(self) -> "Future[bool]":
        """Called when a conductor wants to know whether this Screen may close."""
        return completed(True)

    def request_close(self) -> None:
        """Ask the conductor responsible for this Screen to close it."""
        conductor = self._parent
        if isinstance(conductor, ChildDelegate):
            self.logger.info("request_close called. Conductor: %r", conductor)
            conductor.close_item(self)
            return

        error = MissingParentError(self)
        self.logger.error(str(error))
        raise error

    def dispose(self) -> None:
        """Release resources held by this Screen. Called on application exit."""
