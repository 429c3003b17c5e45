"""
Exception taxonomy for screenwork.

Structural and configuration problems (wrong view type, missing parent,
double attachment) are programmer errors: they are logged and raised
immediately. A close guard saying "no" is never an error.
"""

from typing import Any, Optional


class ScreenworkError(Exception):
    """Base class for all errors raised by screenwork."""


class InvalidViewTypeError(ScreenworkError):
    """The view resolved for a view-model cannot be shown as a window."""

    def __init__(self, view: Any):
        self.view = view
        view_name = "(None)" if view is None else type(view).__name__
        super().__init__(
            f"WindowManager.show_window or .show_dialog tried to show a View of type '{view_name}', "
            "but that View is not a window. Make sure any Views you display using "
            "WindowManager.show_window or .show_dialog derive from QMainWindow or QDialog"
        )


class DoubleAttachmentError(ScreenworkError):
    """A view was attached to a view-model which already has one."""

    def __init__(self, view: Any, view_model: Any):
        self.view = view
        self.view_model = view_model
        super().__init__(
            f"Tried to attach View {type(view).__name__} to ViewModel {type(view_model).__name__}, "
            "but it already has a view attached"
        )


class MissingParentError(ScreenworkError):
    """request_close() was called on a view-model without a conductor."""

    def __init__(self, view_model: Any):
        self.view_model = view_model
        super().__init__(
            f"Unable to close ViewModel {type(view_model).__name__} as it must have a conductor as a parent "
            "(note that windows and dialogs automatically have such a parent)"
        )


class StaleCloseRequest(ScreenworkError):
    """A close request reached a conductor that does not own the item.

    Only ever logged as a warning; the request is ignored.
    """

    def __init__(self, item: Any, owned: Any):
        self.item = item
        self.owned = owned
        super().__init__(
            f"close_item called with item {item!r} which is not our ViewModel {owned!r}"
        )


class ViewNotFoundError(ScreenworkError):
    """No view type could be located for a view-model type."""

    def __init__(self, view_model_type: type, searched: Optional[list] = None):
        self.view_model_type = view_model_type
        self.searched = list(searched or [])
        where = f" (searched: {', '.join(self.searched)})" if self.searched else ""
        super().__init__(f"Unable to locate a View for ViewModel {view_model_type.__qualname__}{where}")


class ConfigError(ScreenworkError):
    """Configuration could not be loaded or failed validation."""
