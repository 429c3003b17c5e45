import os
import threading
from concurrent.futures import Future

import pytest

# Qt tests run headless
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from screenwork.core.execute import Execute
from screenwork.core.guard import completed
from screenwork.core.logging_bus import LoggingEventBus
from screenwork.core.observable import EventHook
from screenwork.core.screen import Screen
from screenwork.core.window_conductor import CancelEventArgs, WindowState


class FakeWindow:
    """In-memory window firing closing/closed the way a native window does."""

    def __init__(self):
        self.closing = EventHook("closing")
        self.closed = EventHook("closed")
        self.state_changed = EventHook("state_changed")
        self.conductor = None
        self.is_open = True
        self.close_calls = 0

    def close(self) -> bool:
        self.close_calls += 1
        if not self.is_open:
            return False
        args = CancelEventArgs()
        self.closing.emit(args)
        if args.cancel:
            return False
        self.is_open = False
        self.closed.emit()
        return True

    def minimize(self) -> None:
        self.state_changed.emit(WindowState.MINIMIZED)

    def maximize(self) -> None:
        self.state_changed.emit(WindowState.MAXIMIZED)

    def restore(self) -> None:
        self.state_changed.emit(WindowState.NORMAL)


class RecordingScreen(Screen):
    """Screen recording its hooks and events into ``calls``."""

    def __init__(self):
        super().__init__()
        self.calls = []
        self.guard_result = None
        self.state_changed.connect(lambda s, e: self.calls.append(("state_changed", e.previous_state, e.new_state)))
        self.activated.connect(lambda s, e: self.calls.append(("activated", e.previous_state, e.is_initial_activate)))
        self.deactivated.connect(lambda s, e: self.calls.append(("deactivated", e.previous_state)))
        self.closed.connect(lambda s, e: self.calls.append(("closed", e.previous_state)))

    def on_initial_activate(self):
        self.calls.append("on_initial_activate")

    def on_activate(self):
        self.calls.append("on_activate")

    def on_deactivate(self):
        self.calls.append("on_deactivate")

    def on_close(self):
        self.calls.append("on_close")

    def can_close_async(self):
        self.calls.append("can_close_async")
        if self.guard_result is None:
            return completed(True)
        if isinstance(self.guard_result, Future):
            return self.guard_result
        return completed(self.guard_result)

    def hooks(self):
        return [c for c in self.calls if isinstance(c, str)]

    def events(self, name):
        return [c for c in self.calls if isinstance(c, tuple) and c[0] == name]


class QueueDispatcher:
    """Dispatcher whose UI thread is the creating thread; posts wait in a queue."""

    def __init__(self):
        self.ui_thread = threading.get_ident()
        self.queue = []

    def is_current(self):
        return threading.get_ident() == self.ui_thread

    def post(self, action):
        self.queue.append(action)

    def send(self, action):
        raise AssertionError("send should not be needed in these tests")

    def drain(self):
        while self.queue:
            self.queue.pop(0)()


@pytest.fixture(autouse=True)
def _reset_execute():
    Execute.reset()
    yield
    Execute.reset()


@pytest.fixture
def log_bus():
    LoggingEventBus.reset_instance()
    bus = LoggingEventBus.get_instance()
    yield bus
    LoggingEventBus.reset_instance()


@pytest.fixture
def fake_window():
    return FakeWindow()


@pytest.fixture
def screen():
    return RecordingScreen()


@pytest.fixture
def queue_dispatcher():
    dispatcher = QueueDispatcher()
    Execute.set_dispatcher(dispatcher)
    return dispatcher


@pytest.fixture(scope="session")
def qapp():
    qt = pytest.importorskip("screenwork.gui.qt")
    app = qt.QApplication.instance() or qt.QApplication([])
    yield app
