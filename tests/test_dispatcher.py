import threading

import pytest

pytest.importorskip("screenwork.gui")

from screenwork.core.execute import Execute
from screenwork.gui.dispatcher import QtDispatcher


@pytest.fixture
def dispatcher(qapp):
    dispatcher = QtDispatcher()
    Execute.set_dispatcher(dispatcher)
    return dispatcher


def test_gui_thread_is_current(dispatcher):
    results = []
    worker = threading.Thread(target=lambda: results.append(dispatcher.is_current()))
    worker.start()
    worker.join()

    assert dispatcher.is_current()
    assert results == [False]


def test_posted_actions_wait_for_the_event_loop(qapp, dispatcher):
    ran = []

    Execute.post_to_ui_thread(lambda: ran.append("posted"))
    Execute.begin_on_ui_thread(lambda: ran.append("inline"))
    assert ran == ["inline"]

    qapp.processEvents()
    assert ran == ["inline", "posted"]


def test_worker_posts_run_on_gui_thread(qapp, dispatcher):
    threads = []

    def post():
        Execute.begin_on_ui_thread(lambda: threads.append(threading.current_thread()))

    worker = threading.Thread(target=post)
    worker.start()
    worker.join()
    qapp.processEvents()

    assert threads == [threading.main_thread()]


def test_failing_posted_action_is_logged(qapp, dispatcher, caplog):
    def boom():
        raise RuntimeError("bad action")

    dispatcher.post(boom)
    qapp.processEvents()

    assert any("bad action" in (r.exc_text or str(r.exc_info)) for r in caplog.records)
