import threading

import pytest

from screenwork.core.execute import Dispatcher, Execute, SynchronousDispatcher


def test_default_dispatcher_runs_inline():
    ran = []

    Execute.on_ui_thread(lambda: ran.append("send"))
    Execute.begin_on_ui_thread(lambda: ran.append("begin"))
    Execute.post_to_ui_thread(lambda: ran.append("post"))

    assert isinstance(Execute.dispatcher, SynchronousDispatcher)
    assert ran == ["send", "begin", "post"]


def test_queue_dispatcher_satisfies_protocol(queue_dispatcher):
    assert isinstance(queue_dispatcher, Dispatcher)
    assert Execute.dispatcher is queue_dispatcher


def test_begin_on_ui_thread_runs_inline_on_ui_thread(queue_dispatcher):
    ran = []

    Execute.begin_on_ui_thread(lambda: ran.append(1))

    assert ran == [1]
    assert queue_dispatcher.queue == []


def test_post_to_ui_thread_always_queues(queue_dispatcher):
    ran = []

    Execute.post_to_ui_thread(lambda: ran.append(1))
    assert ran == []

    queue_dispatcher.drain()
    assert ran == [1]


def test_begin_on_ui_thread_from_worker_posts(queue_dispatcher):
    ran = []

    worker = threading.Thread(target=Execute.begin_on_ui_thread, args=(lambda: ran.append(1),))
    worker.start()
    worker.join()

    assert ran == []
    queue_dispatcher.drain()
    assert ran == [1]


def test_on_ui_thread_async_resolves_with_result(queue_dispatcher):
    future = Execute.on_ui_thread_async(lambda: 42)

    assert future.result(timeout=0) == 42


def test_on_ui_thread_async_captures_exceptions():
    def boom():
        raise KeyError("x")

    future = Execute.on_ui_thread_async(boom)

    with pytest.raises(KeyError):
        future.result(timeout=0)


def test_reset_restores_synchronous_dispatcher(queue_dispatcher):
    Execute.reset()

    assert isinstance(Execute.dispatcher, SynchronousDispatcher)
