"""
screenwork - MVVM screen lifecycle for Qt windows.

The core package is importable without a Qt binding; ``screenwork.gui``
needs PySide6 (or PyQt6).
"""

import logging

__version__ = "0.3.0"

# Library logging stays silent until an application configures it
logging.getLogger("screenwork").addHandler(logging.NullHandler())

from .core import (  # noqa: E402
    Screen,
    ScreenState,
    WindowConductor,
    Execute,
    completed,
    ScreenworkError,
    InvalidViewTypeError,
    DoubleAttachmentError,
    MissingParentError,
    ViewNotFoundError,
    ConfigError,
)

__all__ = [
    "__version__",
    "Screen", "ScreenState", "WindowConductor", "Execute", "completed",
    "ScreenworkError", "InvalidViewTypeError", "DoubleAttachmentError", "MissingParentError",
    "ViewNotFoundError", "ConfigError",
]
