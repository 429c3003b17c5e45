from datetime import datetime
import logging
from pathlib import Path
from typing import List, Protocol, Optional
from logging.handlers import RotatingFileHandler

LOGGER_NAME = "screenwork"


class LogObserver(Protocol):
    """Protocol defining what a log observer must implement."""
    def on_log_event(self, message: str, level: str, source: str, timestamp: datetime) -> None:
        """Handle a log event."""
        pass


class _ObserverHandler(logging.Handler):
    """Forwards every record of the screenwork logger tree to the bus observers."""

    def __init__(self, bus: "LoggingEventBus"):
        super().__init__(logging.DEBUG)
        self._bus = bus

    def emit(self, record: logging.LogRecord) -> None:
        if getattr(record, "from_bus", False):
            return
        try:
            message = record.getMessage()
        except Exception:
            self.handleError(record)
            return
        self._bus.notify(message, record.levelname.lower(), record.name, datetime.fromtimestamp(record.created))


class LoggingEventBus:
    """Central event bus for distributing lifecycle log messages.

    Owns the ``screenwork`` logger. Every module logs with
    ``logging.getLogger(__name__)``; records propagate here and are handed to
    the registered observers (e.g. a log pane in the shell window) as well as
    the standard handlers configured below.
    Implemented as a singleton for easy access from anywhere in the application.
    """
    _instance = None

    @classmethod
    def get_instance(cls):
        """Get or create the singleton instance."""
        if cls._instance is None:
            cls._instance = LoggingEventBus()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Detach the singleton's handlers and forget it."""
        if cls._instance is not None:
            cls._instance.close()
        cls._instance = None

    def __init__(self):
        # Only allow initialization if no instance exists
        if LoggingEventBus._instance is not None:
            raise RuntimeError("LoggingEventBus is a singleton! Use LoggingEventBus.get_instance() instead.")

        self._observers: List[LogObserver] = []
        self.logger = logging.getLogger(LOGGER_NAME)
        self._observer_handler = _ObserverHandler(self)
        self.logger.addHandler(self._observer_handler)
        self._console_handler: Optional[logging.Handler] = None
        self.log_file: Optional[str] = None

    def configure_console_handler(self, level: int = logging.INFO) -> None:
        """Attach (once) a console handler for quick dev output."""
        if self._console_handler is None:
            self._console_handler = logging.StreamHandler()
            self._console_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
            self.logger.addHandler(self._console_handler)
        self._console_handler.setLevel(level)

    def configure_file_handler(self, log_path: Path, *, max_size: int = 1 * 1024 * 1024, backups: int = 3) -> None:
        """Attach/replace a RotatingFileHandler writing to *log_path*.

        When the file size exceeds *max_size* it rotates, keeping *backups*
        older logs.
        """
        log_path = Path(log_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        for h in list(self.logger.handlers):
            if isinstance(h, RotatingFileHandler):
                self.logger.removeHandler(h)
                h.close()
        rf_handler = RotatingFileHandler(
            log_path,
            maxBytes=max_size,
            backupCount=backups,
            encoding="utf-8",
        )
        rf_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
        self.logger.addHandler(rf_handler)
        self.log_file = str(log_path)
        self.logger.info("Rotating file handler configured at %s", log_path)

    def apply_config(self, config) -> None:
        """Apply a ScreenworkConfig: level, enable switch, console and file output."""
        level = logging.getLevelName(config.log_level)
        self.logger.setLevel(level)
        self.logger.disabled = not config.logging_enabled
        self.configure_console_handler(level)
        if config.log_file is not None:
            self.configure_file_handler(
                config.log_file,
                max_size=config.log_max_bytes,
                backups=config.log_backups,
            )

    def close(self) -> None:
        """Remove the handlers this bus installed."""
        for h in list(self.logger.handlers):
            if h is self._observer_handler or h is self._console_handler or isinstance(h, RotatingFileHandler):
                self.logger.removeHandler(h)
                h.close()
        self._console_handler = None
        self._observers.clear()

    def add_observer(self, observer: LogObserver) -> None:
        """Add an observer to receive log events."""
        if observer not in self._observers:
            self._observers.append(observer)

    def remove_observer(self, observer: LogObserver) -> None:
        """Remove an observer from receiving log events."""
        if observer in self._observers:
            self._observers.remove(observer)

    def notify(self, message: str, level: str, source: str, timestamp: datetime) -> None:
        # Notify all observers synchronously
        for observer in list(self._observers):
            observer.on_log_event(message, level, source, timestamp)

    def log(self, message: str, level: str = 'info', source: str = '') -> None:
        """
        Log a message to all observers and the standard logging system.

        Args:
            message: The log message
            level: Log level ('info', 'success', 'warning', 'error')
            source: Source component generating the log
        """
        # Map UI log levels to standard logging levels
        log_level_map = {
            'debug': logging.DEBUG,
            'info': logging.INFO,
            'success': logging.INFO,  # Success is a UI concept, map to INFO
            'warning': logging.WARNING,
            'error': logging.ERROR
        }
        std_level = log_level_map.get(level.lower(), logging.INFO)
        log_message = f"[{source}] {message}" if source else message
        # Observers get the unprefixed message and the UI level
        self.logger.log(std_level, log_message, extra={"from_bus": True})
        if self.logger.isEnabledFor(std_level) and not self.logger.disabled:
            self.notify(message, level, source, datetime.now())
