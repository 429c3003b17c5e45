"""
Qt layer of screenwork: window adapter, view and window managers, bootstrapper.

Importing this package requires PySide6 or PyQt6 (see ``qt.py``).
"""

from .qt import QT_BACKEND
from .dispatcher import QtDispatcher
from .window import QtWindow, is_window_capable
from .view_manager import ViewManager, ViewResolver, ViewModelBindable
from .window_manager import WindowManager, WindowManagerConfig
from .bootstrapper import BootstrapperBase, Bootstrapper

__all__ = [
    "QT_BACKEND",
    "QtDispatcher",
    "QtWindow", "is_window_capable",
    "ViewManager", "ViewResolver", "ViewModelBindable",
    "WindowManager", "WindowManagerConfig",
    "BootstrapperBase", "Bootstrapper",
]
