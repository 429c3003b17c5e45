import pytest

pytest.importorskip("screenwork.gui")

from screenwork.core.config import ScreenworkConfig
from screenwork.core.errors import InvalidViewTypeError
from screenwork.core.screen import Screen
from screenwork.core.screen_state import ScreenState
from screenwork.core.window_conductor import ConductorState
from screenwork.gui.bootstrapper import Bootstrapper
from screenwork.gui.qt import QDialog, QMainWindow, QWidget
from screenwork.gui.view_manager import ViewManager
from screenwork.gui.window import QtWindow
from screenwork.gui.window_manager import WindowManager


class DocumentViewModel(Screen):
    pass


class DocumentView(QMainWindow):
    pass


class PromptViewModel(Screen):
    pass


class PromptView(QDialog):
    pass


class PanelViewModel(Screen):
    pass


class PanelView(QWidget):
    pass


class StaticConfig:
    def __init__(self, active=None):
        self.active = active

    def get_active_window(self):
        return self.active


@pytest.fixture
def config():
    return StaticConfig()


@pytest.fixture
def manager(qapp, config):
    return WindowManager(ViewManager(), config)


def test_non_window_view_is_rejected(manager):
    with pytest.raises(InvalidViewTypeError):
        manager.create_window(PanelViewModel(), False)


def test_show_window_activates_and_binds_title(manager):
    view_model = DocumentViewModel()
    view_model.display_name = "Document"

    window = manager.show_window(view_model)

    assert isinstance(window.widget, DocumentView)
    assert window.widget.isVisible()
    assert window.title == "Document"
    assert view_model.screen_state is ScreenState.ACTIVE
    assert view_model.parent is window.conductor
    window.close()
    assert view_model.screen_state is ScreenState.CLOSED


def test_preset_title_is_not_overwritten(manager):
    view_model = DocumentViewModel()
    view = DocumentView()
    view.setWindowTitle("Fixed")
    view_model.attach_view(view)

    window = manager.create_window(view_model, False)

    assert window.title == "Fixed"
    assert not window.title_bound
    window.close()


def test_creating_twice_keeps_one_conductor(manager):
    view_model = DocumentViewModel()

    first = manager.create_window(view_model, False)
    conductor = first.conductor
    second = manager.create_window(view_model, False)

    assert first is second
    assert second.conductor is conductor
    assert view_model.parent is conductor
    first.close()


def test_request_close_closes_the_window(manager):
    view_model = DocumentViewModel()
    window = manager.show_window(view_model)
    conductor = window.conductor

    view_model.request_close()

    assert not window.widget.isVisible()
    assert conductor.state is ConductorState.TORN_DOWN
    assert view_model.screen_state is ScreenState.CLOSED


def test_show_dialog_is_owned_by_active_window(manager, config):
    owner_view_model = DocumentViewModel()
    owner = manager.show_window(owner_view_model)
    config.active = owner
    view_model = PromptViewModel()

    future = manager.show_dialog(view_model)
    dialog = view_model.view

    assert isinstance(dialog, PromptView)
    assert dialog.parent() is owner.widget
    assert not future.done()

    view_model.request_close()

    assert future.done()
    assert view_model.screen_state is ScreenState.CLOSED
    owner.close()


def test_show_window_prefers_owner_view_model(manager, config):
    first = manager.show_window(DocumentViewModel())
    owner_view_model = DocumentViewModel()
    owner = manager.show_window(owner_view_model)
    config.active = first

    child = manager.show_window(PromptViewModel(), owner_view_model)

    assert child.widget.parent() is owner.widget
    child.close()
    owner.close()
    first.close()


def test_window_is_never_its_own_owner(manager, config):
    view_model = DocumentViewModel()
    window = manager.create_window(view_model, False)
    config.active = window

    assert manager.infer_owner_of(window) is None
    window.close()


class DocumentBootstrapper(Bootstrapper):
    def __init__(self):
        super().__init__(DocumentViewModel, ScreenworkConfig(log_level="DEBUG"))
        self.events = []

    def on_start(self):
        self.events.append(("start", self.args))

    def configure(self):
        self.events.append("configure")
        self.view_manager.register(DocumentViewModel, DocumentView)

    def on_launch(self):
        self.events.append("launch")


def test_bootstrapper_launches_root_window(qapp, log_bus):
    bootstrapper = DocumentBootstrapper()

    bootstrapper.setup(qapp)
    bootstrapper.start(["--flag"])

    root = bootstrapper.root_window
    assert bootstrapper.events == [("start", ["--flag"]), "configure", "launch"]
    assert isinstance(root, QtWindow)
    assert root.widget.isVisible()
    assert bootstrapper.root_view_model.is_active
    assert bootstrapper.get_active_window() is not None
    root.close()
    assert bootstrapper.root_view_model.screen_state is ScreenState.CLOSED


def test_bootstrapper_requires_application():
    with pytest.raises(ValueError):
        DocumentBootstrapper().setup(None)


def test_view_model_can_close_its_dialog_as_accepted(manager):
    view_model = PromptViewModel()
    future = manager.show_dialog(view_model)

    view_model.view.setResult(1)
    view_model.request_close()

    assert future.result(timeout=0) == 1
    assert view_model.screen_state is ScreenState.CLOSED
