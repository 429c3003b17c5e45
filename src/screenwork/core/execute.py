"""
UI-thread marshalling.

All Screen state mutation and notification happens on a single UI-affine
context. ``Execute`` routes callables onto that context through whatever
dispatcher is installed: the synchronous default runs everything inline
(headless use and tests), and the bootstrapper swaps in the Qt dispatcher.
"""

import logging
from concurrent.futures import Future
from typing import Any, Callable, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class Dispatcher(Protocol):
    """Something able to run callables on the UI thread."""

    def is_current(self) -> bool:
        """True when called from the UI thread."""
        ...

    def post(self, action: Callable[[], Any]) -> None:
        """Queue *action* on the UI thread and return immediately."""
        ...

    def send(self, action: Callable[[], Any]) -> None:
        """Run *action* on the UI thread and wait for it to finish."""
        ...


class SynchronousDispatcher:
    """Dispatcher that treats the calling thread as the UI thread."""

    def is_current(self) -> bool:
        return True

    def post(self, action: Callable[[], Any]) -> None:
        action()

    def send(self, action: Callable[[], Any]) -> None:
        action()


class Execute:
    """Static helpers for running code on the UI thread."""

    dispatcher: Dispatcher = SynchronousDispatcher()

    @classmethod
    def set_dispatcher(cls, dispatcher: Dispatcher) -> None:
        logger.debug("Execute dispatcher set to %s", type(dispatcher).__name__)
        cls.dispatcher = dispatcher

    @classmethod
    def reset(cls) -> None:
        cls.dispatcher = SynchronousDispatcher()

    @classmethod
    def on_ui_thread(cls, action: Callable[[], Any]) -> None:
        """Run *action* inline on the UI thread, otherwise block until the UI thread ran it."""
        if cls.dispatcher.is_current():
            action()
        else:
            cls.dispatcher.send(action)

    @classmethod
    def begin_on_ui_thread(cls, action: Callable[[], Any]) -> None:
        """Run *action* inline on the UI thread, otherwise post it without waiting."""
        if cls.dispatcher.is_current():
            action()
        else:
            cls.dispatcher.post(action)

    @classmethod
    def post_to_ui_thread(cls, action: Callable[[], Any]) -> None:
        """Always queue *action*, even from the UI thread."""
        cls.dispatcher.post(action)

    @classmethod
    def on_ui_thread_async(cls, action: Callable[[], Any]) -> "Future[Any]":
        """Post *action* and return a future completing with its result."""
        future: "Future[Any]" = Future()

        def run() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                future.set_result(action())
            except Exception as exc:
                future.set_exception(exc)

        if cls.dispatcher.is_current():
            run()
        else:
            cls.dispatcher.post(run)
        return future
