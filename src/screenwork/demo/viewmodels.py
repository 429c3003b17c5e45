"""View-models of the demo application. Nothing here imports Qt."""

import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Optional

from ..core.execute import Execute
from ..core.guard import completed
from ..core.screen import Screen


class EditorDialogViewModel(Screen):
    """Edits a single line of text; shown as a dialog."""

    def __init__(self, text: str = ""):
        super().__init__()
        self.display_name = "Edit title"
        self._text = text
        self.confirmed = False

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str) -> None:
        self.set_property("_text", value)

    def can_close_async(self) -> "Future[bool]":
        # An empty title is not a valid answer
        return completed(not self.confirmed or bool(self._text.strip()))

    def confirm(self) -> None:
        self.confirmed = True
        self.request_close()
        # Vetoed: let the user try again
        if self.view is not None:
            self.confirmed = False

    def cancel(self) -> None:
        self.confirmed = False
        self.request_close()


class ShellViewModel(Screen):
    """Root screen. Its close guard can refuse, or answer from a worker thread."""

    def __init__(self, window_manager: Any = None):
        super().__init__()
        self.window_manager = window_manager
        self.display_name = "screenwork demo"
        self.allow_close = True
        self.slow_guard = False
        self.guard_delay = 1.5
        self._status = "Ready"
        self._executor: Optional[ThreadPoolExecutor] = None

    @property
    def status(self) -> str:
        return self._status

    @status.setter
    def status(self, value: str) -> None:
        self.set_property("_status", value)

    def on_initial_activate(self) -> None:
        self.status = "Activated for the first time"

    def on_activate(self) -> None:
        self.status = "Active"

    def on_deactivate(self) -> None:
        self.status = "Deactivated (minimized)"

    def can_close_async(self) -> "Future[bool]":
        if not self.slow_guard:
            if not self.allow_close:
                self.status = "Close refused"
            return completed(self.allow_close)

        self.status = f"Deciding whether to close in {self.guard_delay:.1f}s..."
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="close-guard")
        future = self._executor.submit(self._answer_slowly)
        future.add_done_callback(
            lambda f: Execute.begin_on_ui_thread(lambda: self._report_slow_answer(f))
        )
        return future

    def _answer_slowly(self) -> bool:
        time.sleep(self.guard_delay)
        return self.allow_close

    def _report_slow_answer(self, future: "Future[bool]") -> None:
        if not future.cancelled() and future.exception() is None and not future.result():
            self.status = "Close refused"

    def edit_title(self) -> "Future[Any]":
        """Open the editor dialog; the title changes when the dialog is confirmed."""
        editor = EditorDialogViewModel(self.display_name)
        future = self.window_manager.show_dialog(editor)
        future.add_done_callback(
            lambda f: Execute.begin_on_ui_thread(lambda: self._on_editor_closed(editor))
        )
        return future

    def _on_editor_closed(self, editor: EditorDialogViewModel) -> None:
        if editor.confirmed:
            self.display_name = editor.text.strip()
            self.status = "Title changed"
        else:
            self.status = "Edit cancelled"

    def dispose(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None
