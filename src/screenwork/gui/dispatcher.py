"""Qt implementation of the UI-thread dispatcher used by Execute."""

import logging
import threading
from typing import Any, Callable, List

from .qt import QApplication, QObject, QThread, Qt, Signal

logger = logging.getLogger(__name__)


class QtDispatcher(QObject):
    """Runs callables on the GUI thread through a queued signal."""

    _invoke = Signal(object)

    def __init__(self):
        super().__init__()
        app = QApplication.instance()
        if app is not None and self.thread() != app.thread():
            self.moveToThread(app.thread())
        self._invoke.connect(self._run, Qt.ConnectionType.QueuedConnection)

    def _run(self, action: Callable[[], Any]) -> None:
        try:
            action()
        except Exception:
            # Nobody is waiting for a posted action; the event loop must keep running
            logger.exception("Unhandled exception in action posted to the UI thread")

    def is_current(self) -> bool:
        return QThread.currentThread() == self.thread()

    def post(self, action: Callable[[], Any]) -> None:
        self._invoke.emit(action)

    def send(self, action: Callable[[], Any]) -> None:
        if self.is_current():
            action()
            return

        done = threading.Event()
        errors: List[BaseException] = []

        def run() -> None:
            try:
                action()
            except BaseException as e:
                errors.append(e)
            finally:
                done.set()

        self._invoke.emit(run)
        done.wait()
        if errors:
            raise errors[0]
