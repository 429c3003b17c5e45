"""Qt views of the demo application, located by name from the view-models."""

from datetime import datetime

from ..core.execute import Execute
from ..core.lifecycle import RequestClose
from ..core.logging_bus import LoggingEventBus
from ..gui.qt import (
    QCheckBox,
    QDialog,
    QDialogButtonBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)


class LogPane(QPlainTextEdit):
    """Read-only pane showing lifecycle log events from the LoggingEventBus."""

    MAX_LINES = 500

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setReadOnly(True)
        self.setMaximumBlockCount(self.MAX_LINES)

    def on_log_event(self, message: str, level: str, source: str, timestamp: datetime) -> None:
        line = f"{timestamp:%H:%M:%S} {level.upper():<7} {source.rsplit('.', 1)[-1]}: {message}"
        # Records can come from worker threads
        Execute.begin_on_ui_thread(lambda: self.appendPlainText(line))


class ShellView(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setObjectName("shellWindow")
        self.resize(640, 420)
        self._view_model = None

        central = QWidget(self)
        layout = QVBoxLayout(central)

        self.status_label = QLabel("", central)
        layout.addWidget(self.status_label)

        self.allow_close_check = QCheckBox("Allow the window to close", central)
        self.slow_guard_check = QCheckBox("Answer the close guard from a worker thread", central)
        layout.addWidget(self.allow_close_check)
        layout.addWidget(self.slow_guard_check)

        row = QHBoxLayout()
        self.edit_title_button = QPushButton("Edit title...", central)
        self.request_close_button = QPushButton("Request close", central)
        row.addWidget(self.edit_title_button)
        row.addWidget(self.request_close_button)
        row.addStretch(1)
        layout.addLayout(row)

        self.log_pane = LogPane(central)
        layout.addWidget(self.log_pane, 1)

        self.setCentralWidget(central)

    def bind_view_model(self, view_model) -> None:
        self._view_model = view_model

        self.allow_close_check.setChecked(view_model.allow_close)
        self.slow_guard_check.setChecked(view_model.slow_guard)
        self.status_label.setText(view_model.status)

        self.allow_close_check.toggled.connect(lambda checked: setattr(view_model, "allow_close", checked))
        self.slow_guard_check.toggled.connect(lambda checked: setattr(view_model, "slow_guard", checked))
        self.edit_title_button.clicked.connect(lambda: view_model.edit_title())
        self.request_close_button.setEnabled(isinstance(view_model, RequestClose))
        self.request_close_button.clicked.connect(lambda: view_model.request_close())
        view_model.property_changed.connect(self._on_view_model_changed)

        log_bus = LoggingEventBus.get_instance()
        log_bus.add_observer(self.log_pane)
        view_model.closed.connect(lambda sender, args: log_bus.remove_observer(self.log_pane))

    def _on_view_model_changed(self, sender, property_name: str) -> None:
        if property_name == "status":
            self.status_label.setText(sender.status)


class EditorDialogView(QDialog):
    def __init__(self):
        super().__init__()
        self.resize(360, 120)
        layout = QVBoxLayout(self)

        self.text_edit = QLineEdit(self)
        layout.addWidget(QLabel("Window title:", self))
        layout.addWidget(self.text_edit)

        self.buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel,
            self,
        )
        layout.addWidget(self.buttons)

    def bind_view_model(self, view_model) -> None:
        self.text_edit.setText(view_model.text)
        self.text_edit.textChanged.connect(lambda text: setattr(view_model, "text", text))
        # Route the buttons through the view-model so its close guard applies
        self.buttons.accepted.connect(view_model.confirm)
        self.buttons.rejected.connect(view_model.cancel)
