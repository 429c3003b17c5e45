"""
Application bootstrapping.

Typical use::

    app = QApplication(sys.argv)
    bootstrapper = Bootstrapper(ShellViewModel)
    bootstrapper.setup(app)
    bootstrapper.start(sys.argv[1:])
    sys.exit(app.exec())
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..core.config import ScreenworkConfig, load_config
from ..core.execute import Execute
from ..core.lifecycle import try_dispose
from ..core.logging_bus import LoggingEventBus
from .dispatcher import QtDispatcher
from .view_manager import ViewManager
from .window import QtWindow, is_window_capable
from .window_manager import WindowManager

logger = logging.getLogger(__name__)


class BootstrapperBase:
    """Wires the dispatcher, view manager and window manager around a QApplication."""

    def __init__(self, config: Optional[ScreenworkConfig] = None):
        self.config = config
        self.application = None
        self.args: List[str] = []
        self.root_window: Optional[QtWindow] = None
        self.view_manager: Optional[ViewManager] = None
        self.window_manager: Optional[WindowManager] = None

    def setup(self, application) -> None:
        """Attach to *application*; call before start()."""
        if application is None:
            raise ValueError("application must not be None")

        self.application = application
        # Use the application's GUI thread for Execute
        Execute.set_dispatcher(QtDispatcher())
        application.aboutToQuit.connect(self._on_about_to_quit)

    def start(self, args: Sequence[str] = ()) -> None:
        """Do everything necessary to start the application."""
        # Set this before anything else, so everything can use it
        self.args = list(args)
        self.on_start()

        self.configure_bootstrapper()
        self.configure()

        self.launch()
        self.on_launch()

    def configure_bootstrapper(self) -> None:
        """Load configuration, configure logging and build the managers."""
        if self.config is None:
            self.config = load_config()
        LoggingEventBus.get_instance().apply_config(self.config)

        self.view_manager = ViewManager(view_factory=self.get_instance, view_modules=self.config.view_modules)
        self.window_manager = WindowManager(self.view_manager, self)

    def configure(self) -> None:
        """Hook called once the managers exist."""

    def launch(self) -> None:
        """Display the root view (see get_root_view)."""
        raise NotImplementedError

    def get_instance(self, service_type: type) -> Any:
        raise NotImplementedError

    def get_root_view(self, root_view_model: Any) -> QtWindow:
        return self.window_manager.get_root_window(root_view_model)

    def get_active_window(self) -> Optional[QtWindow]:
        """Return the currently-displayed window, or None if it can't be determined."""
        active = self.application.activeWindow() if self.application is not None else None
        if is_window_capable(active):
            return QtWindow.for_widget(active)
        return self.root_window

    # --- Hooks (no-op defaults) ---
    def on_start(self) -> None:
        """Called after self.args is set, before the managers are configured."""

    def on_launch(self) -> None:
        """Called just after the root view has been displayed."""

    def on_exit(self) -> None:
        """Called when the application is about to quit."""

    def dispose(self) -> None:
        """Release resources; called after on_exit()."""

    def _on_about_to_quit(self) -> None:
        logger.info("Application exiting")
        self.on_exit()
        self.dispose()


class Bootstrapper(BootstrapperBase):
    """Bootstrapper which builds instances from registered factories, or by calling the type."""

    def __init__(self, root_view_model_type: type, config: Optional[ScreenworkConfig] = None):
        super().__init__(config)
        self.root_view_model_type = root_view_model_type
        self._factories: Dict[type, Callable[[], Any]] = {}
        self._root_view_model = None

    def register(self, service_type: type, factory: Callable[[], Any]) -> None:
        self._factories[service_type] = factory

    @property
    def root_view_model(self) -> Any:
        if self._root_view_model is None:
            self._root_view_model = self.get_instance(self.root_view_model_type)
        return self._root_view_model

    def get_instance(self, service_type: type) -> Any:
        factory = self._factories.get(service_type, service_type)
        return factory()

    def launch(self) -> None:
        self.root_window = self.get_root_view(self.root_view_model)
        self.root_window.show()

    def dispose(self) -> None:
        try_dispose(self._root_view_model)
        super().dispose()
