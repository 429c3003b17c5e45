"""
WindowManager: takes a view-model, resolves its window and shows it as a
window or a dialog. Every window it creates gets exactly one WindowConductor.
"""

import logging
from concurrent.futures import Future
from typing import Any, Optional, Protocol

from ..core.errors import InvalidViewTypeError
from ..core.lifecycle import HaveDisplayName, ViewAware
from ..core.window_conductor import WindowConductor
from .view_manager import ViewResolver
from .window import QtWindow, is_window_capable

logger = logging.getLogger(__name__)


class WindowManagerConfig(Protocol):
    """Configuration passed to WindowManager (normally implemented by the bootstrapper)."""

    def get_active_window(self) -> Optional[QtWindow]:
        """Return the currently-displayed window, or None if it can't be determined."""
        ...


class WindowManager:
    """Manager capable of showing a view-model's view as a window or dialog."""

    def __init__(self, view_manager: ViewResolver, config: WindowManagerConfig):
        self.view_manager = view_manager
        self._get_active_window = config.get_active_window

    def get_root_window(self, root_view_model: Any) -> QtWindow:
        """Create (without showing) the window for the root view-model."""
        return self.create_window(root_view_model, False)

    def show_window(self, view_model: Any, owner_view_model: Any = None) -> QtWindow:
        """Show *view_model*'s window non-modally.

        Args:
            view_model: ViewModel to show the View for
            owner_view_model: ViewModel whose window should own this one; when it
                has no window the active window is used instead
        """
        window = self.create_window(view_model, False)
        owner = self._window_of(owner_view_model)
        if owner is None:
            owner = self._get_active_window()
        window.show(owner if owner is not window else None)
        return window

    def show_dialog(self, view_model: Any) -> "Future[Any]":
        """Show *view_model*'s window modally; resolves with the dialog result."""
        window = self.create_window(view_model, True)
        return window.show_dialog()

    def create_window(self, view_model: Any, is_dialog: bool) -> QtWindow:
        """Given a view-model, create its view, ensure that it's a window, and set it up."""
        view = self.view_manager.resolve_view(view_model)
        if not is_window_capable(view):
            error = InvalidViewTypeError(view)
            logger.error(str(error))
            raise error

        window = QtWindow.for_widget(view)

        # Only bind if the title hasn't been set / bound already
        if isinstance(view_model, HaveDisplayName) and window.has_default_title:
            window.bind_title(view_model)

        if is_dialog:
            owner = self.infer_owner_of(window)
            if owner is not None:
                window.set_owner(owner)
            logger.info("Displaying ViewModel %r with View %r as a Dialog", view_model, window)
        else:
            logger.info("Displaying ViewModel %r with View %r as a Window", view_model, window)

        if window.conductor is not None:
            # Already bound: a Screen never holds more than one conductor
            logger.info("View %r is already conducted by %r; reusing it", window, window.conductor)
        else:
            # Retained by the window through window.conductor
            WindowConductor(window, view_model)

        return window

    def infer_owner_of(self, window: QtWindow) -> Optional[QtWindow]:
        active = self._get_active_window()
        return None if active is window else active

    @staticmethod
    def _window_of(view_model: Any) -> Optional[QtWindow]:
        if isinstance(view_model, ViewAware) and is_window_capable(view_model.view):
            return QtWindow.for_widget(view_model.view)
        return None
