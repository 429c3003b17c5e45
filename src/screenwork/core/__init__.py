"""
Toolkit-agnostic core of screenwork: the Screen state machine, close guards,
capability protocols and the window/view-model lifecycle bridge.
"""

from .errors import (
    ScreenworkError,
    InvalidViewTypeError,
    DoubleAttachmentError,
    MissingParentError,
    StaleCloseRequest,
    ViewNotFoundError,
    ConfigError,
)
from .screen_state import (
    ScreenState,
    ScreenStateChangedEventArgs,
    ActivationEventArgs,
    DeactivationEventArgs,
    CloseEventArgs,
)
from .observable import EventHook, ObservableObject
from .execute import Execute, Dispatcher, SynchronousDispatcher
from .lifecycle import (
    ScreenStateAware,
    GuardClose,
    Child,
    ChildDelegate,
    RequestClose,
    ViewAware,
    HaveDisplayName,
    Disposable,
    try_activate,
    try_deactivate,
    try_close,
    try_dispose,
)
from .guard import completed, evaluate_can_close, guard_allows
from .screen import Screen
from .window_conductor import (
    WindowConductor,
    WindowHandle,
    WindowState,
    CancelEventArgs,
    ConductorState,
)
from .config import ScreenworkConfig, load_config
from .logging_bus import LoggingEventBus

__all__ = [
    # Errors
    "ScreenworkError", "InvalidViewTypeError", "DoubleAttachmentError", "MissingParentError",
    "StaleCloseRequest", "ViewNotFoundError", "ConfigError",
    # State
    "ScreenState", "ScreenStateChangedEventArgs", "ActivationEventArgs", "DeactivationEventArgs", "CloseEventArgs",
    # Notification / threading
    "EventHook", "ObservableObject", "Execute", "Dispatcher", "SynchronousDispatcher",
    # Capabilities
    "ScreenStateAware", "GuardClose", "Child", "ChildDelegate", "RequestClose", "ViewAware",
    "HaveDisplayName", "Disposable", "try_activate", "try_deactivate", "try_close", "try_dispose",
    # Close guard
    "completed", "evaluate_can_close", "guard_allows",
    # Screen and bridge
    "Screen", "WindowConductor", "WindowHandle", "WindowState", "CancelEventArgs", "ConductorState",
    # Ambient
    "ScreenworkConfig", "load_config", "LoggingEventBus",
]
