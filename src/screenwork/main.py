import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

# Core components
from .core.config import ScreenworkConfig, load_config
from .core.logging_bus import LoggingEventBus
from .demo.viewmodels import ShellViewModel
from .gui.bootstrapper import Bootstrapper

# Qt imports - unified facade
from .gui.qt import QApplication, QT_BACKEND

logger = logging.getLogger(__name__)


class DemoBootstrapper(Bootstrapper):
    """Bootstrapper for the demo shell."""

    def __init__(self, config: Optional[ScreenworkConfig] = None):
        super().__init__(ShellViewModel, config)

    def configure(self) -> None:
        # The shell needs the window manager to open its dialog
        self.register(ShellViewModel, lambda: ShellViewModel(self.window_manager))

    def on_launch(self) -> None:
        logger.info("screenwork demo started successfully")


def main(argv: Optional[Sequence[str]] = None, config_path: Optional[Path] = None, overrides: Optional[dict] = None) -> int:
    """screenwork demo GUI entry point"""
    argv = list(sys.argv if argv is None else argv)

    # Initialize logging before QApplication so startup problems are recorded
    config = load_config(config_path, overrides)
    log_bus = LoggingEventBus.get_instance()
    log_bus.apply_config(config)

    app = QApplication.instance() or QApplication(argv)
    logger.info("Launching screenwork demo (Qt backend: %s)...", QT_BACKEND)

    bootstrapper = DemoBootstrapper(config)
    bootstrapper.setup(app)
    bootstrapper.start(argv[1:])

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
