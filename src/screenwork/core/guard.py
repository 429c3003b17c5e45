"""
Close guard evaluation.

A view-model may implement ``can_close_async()`` returning a
``concurrent.futures.Future[bool]``. Callers check ``future.done()`` to tell a
synchronous answer from a pending one and must never evaluate twice for the
same close attempt.
"""

import logging
from concurrent.futures import Future
from typing import Any, TypeVar

from .lifecycle import GuardClose

logger = logging.getLogger(__name__)

T = TypeVar("T")


def completed(value: T) -> "Future[T]":
    """Return a future already resolved with *value*."""
    future: "Future[T]" = Future()
    future.set_result(value)
    return future


def evaluate_can_close(view_model: Any) -> "Future[bool]":
    """Ask *view_model* whether it may close.

    View-models without the capability are always allowed to close. A guard
    returning a plain bool is treated as a synchronous answer.
    """
    if not isinstance(view_model, GuardClose):
        return completed(True)

    result = view_model.can_close_async()
    if isinstance(result, Future):
        return result
    return completed(bool(result))


def guard_allows(future: "Future[bool]", view_model: Any = None) -> bool:
    """Read the outcome of a resolved guard future.

    Cancellation and exceptions count as a veto and are logged.
    """
    if future.cancelled():
        logger.error("can_close_async of ViewModel %r was cancelled; treating as a veto", view_model)
        return False
    exc = future.exception()
    if exc is not None:
        logger.error(
            "can_close_async of ViewModel %r failed; treating as a veto",
            view_model,
            exc_info=(type(exc), exc, exc.__traceback__),
        )
        return False
    return bool(future.result())
