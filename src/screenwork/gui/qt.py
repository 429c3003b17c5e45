"""
Platform-agnostic Qt facade for screenwork.

Automatically detects and uses the best available Qt backend (PySide6 or PyQt6).
All GUI modules should import Qt classes from this module to ensure a single
binding is used across the application. This prevents mixed-binding issues
and maximizes cross-platform compatibility.
"""

# Platform-agnostic Qt backend detection and import
QT_BACKEND = None
QtCore = None
QtGui = None
QtWidgets = None

# Try PySide6 first (better macOS compatibility)
try:
    from PySide6 import QtCore, QtGui, QtWidgets
    QT_BACKEND = "PySide6"
except ImportError:
    # Fall back to PyQt6
    try:
        from PyQt6 import QtCore, QtGui, QtWidgets
        QT_BACKEND = "PyQt6"
    except ImportError:
        raise ImportError(
            "Neither PySide6 nor PyQt6 is available. "
            "Please install a Qt Python binding: pip install PySide6 or pip install PyQt6"
        )

# Commonly used classes and namespaces re-exported for convenience
if QT_BACKEND == "PySide6":
    from PySide6.QtCore import (
        Qt,
        QEvent,
        QTimer,
        QThread,
        QObject,
        Signal,
    )
    from PySide6.QtGui import QKeyEvent
    from PySide6.QtWidgets import (
        QApplication,
        QMainWindow,
        QDialog,
        QWidget,
        QVBoxLayout,
        QHBoxLayout,
        QLabel,
        QPushButton,
        QCheckBox,
        QLineEdit,
        QPlainTextEdit,
        QDialogButtonBox,
    )
elif QT_BACKEND == "PyQt6":
    from PyQt6.QtCore import (
        Qt,
        QEvent,
        QTimer,
        QThread,
        QObject,
        pyqtSignal as Signal,
    )
    from PyQt6.QtGui import QKeyEvent
    from PyQt6.QtWidgets import (
        QApplication,
        QMainWindow,
        QDialog,
        QWidget,
        QVBoxLayout,
        QHBoxLayout,
        QLabel,
        QPushButton,
        QCheckBox,
        QLineEdit,
        QPlainTextEdit,
        QDialogButtonBox,
    )


__all__ = [
    # Modules
    "QtCore", "QtGui", "QtWidgets",
    # Aliases / constants
    "Signal", "Qt", "QT_BACKEND",
    # Core types/utilities
    "QEvent", "QTimer", "QThread", "QObject", "QKeyEvent",
    # Windows
    "QApplication", "QMainWindow", "QDialog", "QWidget",
    # Widgets/layouts used by the demo shell
    "QVBoxLayout", "QHBoxLayout", "QLabel", "QPushButton", "QCheckBox", "QLineEdit", "QPlainTextEdit",
    "QDialogButtonBox",
]
