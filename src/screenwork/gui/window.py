"""
Qt window adapter.

QtWindow wraps a QMainWindow or QDialog and exposes the window events a
WindowConductor consumes:

- closing(CancelEventArgs): from the widget's Close event (Escape on a dialog
  included), before the widget sees it; a handler setting ``cancel`` swallows
  the event
- closed(): once the window is actually gone (hidden after an accepted close,
  or a dialog finishing through accept()/reject())
- state_changed(WindowState): minimise / maximise / restore

One adapter exists per widget; use ``QtWindow.for_widget``.
"""

import logging
from concurrent.futures import Future
from typing import Any, Optional

from ..core.errors import InvalidViewTypeError
from ..core.window_conductor import CancelEventArgs, WindowState
from .qt import QDialog, QEvent, QMainWindow, QObject, Qt, QTimer, Signal

logger = logging.getLogger(__name__)


def is_window_capable(view: Any) -> bool:
    """True if *view* can be shown as a top-level window."""
    return isinstance(view, (QMainWindow, QDialog))


class QtWindow(QObject):
    """Adapter exposing a Qt top-level widget as a conductor-friendly window."""

    closing = Signal(object)
    closed = Signal()
    state_changed = Signal(object)
    title_changed = Signal(str)

    _WIDGET_ATTR = "_screenwork_window"

    @classmethod
    def for_widget(cls, widget: Any) -> "QtWindow":
        """Return the adapter for *widget*, creating it on first use."""
        if not is_window_capable(widget):
            raise InvalidViewTypeError(widget)
        existing = getattr(widget, cls._WIDGET_ATTR, None)
        if existing is not None:
            return existing
        window = cls(widget)
        setattr(widget, cls._WIDGET_ATTR, window)
        return window

    def __init__(self, widget):
        # Parented to the widget so the adapter lives exactly as long as it does
        super().__init__(widget)
        self.widget = widget
        self.conductor = None
        self.title_bound = False
        self._title_binding = None
        self._is_open = widget.isVisible()
        self._close_allowed = False
        self._keep_dialog_result = False
        self._dialog_future: Optional[Future] = None

        widget.installEventFilter(self)
        widget.windowTitleChanged.connect(self.title_changed.emit)
        if isinstance(widget, QDialog):
            widget.finished.connect(self._on_dialog_finished)

    def __repr__(self) -> str:
        return f"<QtWindow {type(self.widget).__name__} {self.title!r}>"

    # --- Properties ---
    @property
    def title(self) -> str:
        return self.widget.windowTitle()

    @title.setter
    def title(self, value: str) -> None:
        self.widget.setWindowTitle(value or "")

    @property
    def has_default_title(self) -> bool:
        """True if nobody has set a title yet (empty, or Qt's class-name placeholder)."""
        title = self.title
        return not self.title_bound and (not title or title == type(self.widget).__name__)

    @property
    def window_state(self) -> WindowState:
        state = self.widget.windowState()
        if state & Qt.WindowState.WindowMinimized:
            return WindowState.MINIMIZED
        if state & (Qt.WindowState.WindowMaximized | Qt.WindowState.WindowFullScreen):
            return WindowState.MAXIMIZED
        return WindowState.NORMAL

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def is_active(self) -> bool:
        return self.widget.isActiveWindow()

    # --- Commands ---
    def close(self) -> bool:
        """Ask the window to close; ``closing`` handlers may still cancel.

        A dialog closed this way keeps its current result instead of being
        rejected, so a view-model can close its dialog as accepted.
        """
        self._keep_dialog_result = True
        try:
            return self.widget.close()
        finally:
            self._keep_dialog_result = False

    def set_owner(self, owner: Optional["QtWindow"]) -> None:
        if owner is None or owner.widget is self.widget:
            return
        try:
            self.widget.setParent(owner.widget, self.widget.windowFlags() | Qt.WindowType.Window)
        except RuntimeError:
            # The owner's C++ object is already gone
            logger.exception("Unable to set owner of %r; this can occur when the application is closing down", self)

    def show(self, owner: Optional["QtWindow"] = None) -> None:
        self.set_owner(owner)
        self.widget.show()

    def show_dialog(self, owner: Optional["QtWindow"] = None) -> "Future[Any]":
        """Show modally; the future resolves with the dialog result once closed."""
        self.set_owner(owner)
        future: "Future[Any]" = Future()
        self._dialog_future = future
        if isinstance(self.widget, QDialog):
            self.widget.open()
        else:
            self.widget.setWindowModality(Qt.WindowModality.ApplicationModal)
            self.widget.show()
        return future

    def bind_title(self, source: Any) -> None:
        """Two-way bind the window title to ``source.display_name``.

        Released when the window closes.
        """
        self.release_title_binding()
        self.title = source.display_name

        def push(sender: Any, property_name: str) -> None:
            if property_name == "display_name" and self.title != source.display_name:
                self.title = source.display_name

        def pull(title: str) -> None:
            if source.display_name != title:
                source.display_name = title

        source.property_changed.connect(push)
        self.title_changed.connect(pull)
        self._title_binding = (source, push, pull)
        self.title_bound = True

    def release_title_binding(self) -> None:
        if self._title_binding is None:
            return
        source, push, pull = self._title_binding
        source.property_changed.disconnect(push)
        self.title_changed.disconnect(pull)
        self._title_binding = None
        self.title_bound = False

    # --- Qt plumbing ---
    def eventFilter(self, watched, event) -> bool:
        if watched is not self.widget:
            return False

        etype = event.type()
        if etype == QEvent.Type.Close:
            return self._on_close_event(event)
        if etype == QEvent.Type.KeyPress and self._is_dialog_cancel_key(event):
            # QDialog.reject() on Escape sends no Close event; route it through close() so closing runs
            self.widget.close()
            return True
        if etype == QEvent.Type.Show:
            self._is_open = True
        elif etype == QEvent.Type.Hide:
            # Minimising can hide spontaneously; only a hide following an accepted close counts
            if self._close_allowed and not event.spontaneous():
                self._close_allowed = False
                self._emit_closed()
        elif etype == QEvent.Type.WindowStateChange:
            self.state_changed.emit(self.window_state)
        return False

    def _on_close_event(self, event) -> bool:
        args = CancelEventArgs(cancel=not event.isAccepted())
        self.closing.emit(args)
        if args.cancel:
            event.ignore()
            return True

        # The widget's own closeEvent may still refuse; the flag only lives for this round
        self._close_allowed = True
        QTimer.singleShot(0, self._clear_close_allowed)

        if self._keep_dialog_result and isinstance(self.widget, QDialog):
            # QDialog.closeEvent would reject(); finish with the result already set instead
            self.widget.done(self.widget.result())
            return True
        return False

    def _is_dialog_cancel_key(self, event) -> bool:
        return (
            isinstance(self.widget, QDialog)
            and event.key() == Qt.Key.Key_Escape
            and event.modifiers() == Qt.KeyboardModifier.NoModifier
        )

    def _clear_close_allowed(self) -> None:
        self._close_allowed = False

    def _on_dialog_finished(self, result: int) -> None:
        self._emit_closed()
        self._resolve_dialog(result)

    def _emit_closed(self) -> None:
        if not self._is_open:
            return
        self._is_open = False
        self.release_title_binding()
        self.closed.emit()
        if not isinstance(self.widget, QDialog):
            self._resolve_dialog(None)

    def _resolve_dialog(self, result: Any) -> None:
        future, self._dialog_future = self._dialog_future, None
        if future is not None and not future.done():
            future.set_result(result)
