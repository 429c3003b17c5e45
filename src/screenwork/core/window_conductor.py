"""
WindowConductor: binds one window to one view-model.

The conductor activates the view-model on construction and from then on
translates window events into lifecycle transitions:

- minimise / restore        -> deactivate / activate
- closing (cancellable)     -> close guard evaluation, possibly deferred
- closed                    -> teardown and close of the view-model

It is also the view-model's parent, so ``Screen.request_close()`` lands in
``close_item()``, which runs the same guard and then closes the window.

Windows are consumed through the small WindowHandle protocol below; the Qt
implementation lives in ``screenwork.gui.window``.
"""

import logging
from concurrent.futures import Future
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Protocol, Tuple

from .errors import StaleCloseRequest
from .execute import Execute
from .guard import evaluate_can_close, guard_allows
from .lifecycle import Child, ScreenStateAware, try_activate, try_close, try_deactivate

logger = logging.getLogger(__name__)


class WindowState(Enum):
    NORMAL = "normal"
    MINIMIZED = "minimized"
    MAXIMIZED = "maximized"


@dataclass
class CancelEventArgs:
    """Payload of a window's closing event. Set ``cancel`` to keep the window open."""
    cancel: bool = False


class Signal(Protocol):
    def connect(self, slot: Callable[..., Any]) -> Any: ...

    def disconnect(self, slot: Callable[..., Any]) -> Any: ...


class WindowHandle(Protocol):
    """What a conductor needs from a window.

    closing(CancelEventArgs), closed() and state_changed(WindowState) are
    signal-like objects; close() asks the window to close, which fires closing
    and, when not cancelled, closed.
    """

    closing: Signal
    closed: Signal
    state_changed: Signal
    conductor: Optional[Any]

    def close(self) -> Any: ...


class ConductorState(Enum):
    BOUND = "bound"
    CLOSING = "closing"
    TORN_DOWN = "torn_down"


class WindowConductor:
    """Lifecycle bridge between a window and the view-model shown in it."""

    def __init__(self, window: WindowHandle, view_model: Any):
        self.window = window
        self.view_model = view_model
        self.state = ConductorState.BOUND
        self._subscriptions: List[Tuple[Signal, Callable[..., Any]]] = []

        # The window keeps us alive for as long as it is bound
        self.window.conductor = self

        # They won't be able to request a close unless they are a Child anyway
        if isinstance(self.view_model, Child):
            self.view_model.parent = self

        try_activate(self.view_model)

        if isinstance(self.view_model, ScreenStateAware):
            self._subscribe(self.window.state_changed, self._on_window_state_changed)
        self._subscribe(self.window.closing, self._on_window_closing)
        self._subscribe(self.window.closed, self._on_window_closed)

    def __repr__(self) -> str:
        return f"<WindowConductor {self.view_model!r} {self.state.value}>"

    # --- Subscription bookkeeping ---
    def _subscribe(self, signal: Signal, slot: Callable[..., Any]) -> None:
        signal.connect(slot)
        self._subscriptions.append((signal, slot))

    def _unsubscribe(self, signal: Signal) -> None:
        for entry in list(self._subscriptions):
            if entry[0] is signal:
                signal.disconnect(entry[1])
                self._subscriptions.remove(entry)

    def _tear_down(self) -> None:
        """Single path releasing every subscription. Unsubscribes before changing state."""
        for signal, slot in self._subscriptions:
            signal.disconnect(slot)
        self._subscriptions.clear()
        self.state = ConductorState.TORN_DOWN
        if self.window.conductor is self:
            self.window.conductor = None

    # --- Window events ---
    def _on_window_state_changed(self, window_state: WindowState) -> None:
        if self.state is ConductorState.TORN_DOWN:
            return
        if window_state is WindowState.MINIMIZED:
            logger.info("Window %r minimized: deactivating", self.window)
            try_deactivate(self.view_model)
        else:
            logger.info("Window %r maximized/restored: activating", self.window)
            try_activate(self.view_model)

    def _on_window_closing(self, event: CancelEventArgs) -> None:
        if event.cancel or self.state is ConductorState.TORN_DOWN:
            return

        if self.state is ConductorState.CLOSING:
            # Coalesce onto the evaluation already in flight
            logger.info(
                "Close of ViewModel %r already pending on can_close_async; holding this close attempt",
                self.view_model,
            )
            event.cancel = True
            return

        logger.info("ViewModel %r close requested because its View was closed", self.view_model)

        future = evaluate_can_close(self.view_model)
        if future.done():
            # If we don't cancel, the closed handler takes it from here
            allowed = guard_allows(future, self.view_model)
            if not allowed:
                logger.info("Close of ViewModel %r cancelled because can_close_async returned false", self.view_model)
            event.cancel = not allowed
            return

        event.cancel = True
        self.state = ConductorState.CLOSING
        logger.info(
            "Delaying closing of ViewModel %r because can_close_async is completing asynchronously",
            self.view_model,
        )
        self._when_resolved(future, self._finish_window_close)

    def _finish_window_close(self, future: "Future[bool]") -> None:
        if self.state is ConductorState.TORN_DOWN:
            return
        self.state = ConductorState.BOUND

        if not guard_allows(future, self.view_model):
            logger.info("Close of ViewModel %r cancelled because can_close_async returned false", self.view_model)
            return

        # Stop listening for closing so the real close below doesn't re-enter the guard.
        # The closed handler unregisters the rest and closes the ViewModel.
        self._unsubscribe(self.window.closing)
        self.window.close()

    def _on_window_closed(self, *args: Any) -> None:
        if self.state is ConductorState.TORN_DOWN:
            return
        # Logging was done in the closing handler
        self._tear_down()
        try_close(self.view_model)

    # --- Child delegation ---
    def close_item(self, item: Any) -> None:
        """Close was requested by the child."""
        if item is not self.view_model:
            logger.warning(str(StaleCloseRequest(item, self.view_model)))
            return

        if self.state is ConductorState.TORN_DOWN:
            logger.info("Ignoring close request for ViewModel %r: its window has already closed", item)
            return
        if self.state is ConductorState.CLOSING:
            logger.info("Ignoring close request for ViewModel %r: a close is already pending", item)
            return

        future = evaluate_can_close(self.view_model)
        if future.done():
            self._finish_requested_close(future)
            return

        self.state = ConductorState.CLOSING
        self._when_resolved(future, self._finish_requested_close)

    def _finish_requested_close(self, future: "Future[bool]") -> None:
        if self.state is ConductorState.TORN_DOWN:
            return
        self.state = ConductorState.BOUND

        if not guard_allows(future, self.view_model):
            logger.warning("Close of ViewModel %r cancelled because can_close_async returned false", self.view_model)
            return

        self._tear_down()
        try_close(self.view_model)
        self.window.close()

    @staticmethod
    def _when_resolved(future: "Future[bool]", callback: Callable[["Future[bool]"], None]) -> None:
        # Always a fresh UI-loop turn: the future may already be resolved, and the
        # continuation must not run inside the closing handler that is cancelling this close
        future.add_done_callback(lambda f: Execute.post_to_ui_thread(lambda: callback(f)))
