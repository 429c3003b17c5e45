"""
Toolkit-agnostic notification primitives.

EventHook mirrors the connect/disconnect/emit surface of a Qt signal so that
view-models stay importable without a Qt binding, while window adapters can
hand real Qt signals to the same consumers.
"""

from typing import Any, Callable, List


class EventHook:
    """A list of handlers invoked in subscription order."""

    def __init__(self, name: str = ""):
        self.name = name
        self._handlers: List[Callable[..., Any]] = []

    def connect(self, handler: Callable[..., Any]) -> None:
        """Subscribe *handler*; subscribing the same handler twice is a no-op."""
        if handler not in self._handlers:
            self._handlers.append(handler)

    def disconnect(self, handler: Callable[..., Any]) -> None:
        """Unsubscribe *handler*. Unknown handlers are ignored."""
        if handler in self._handlers:
            self._handlers.remove(handler)

    def emit(self, *args: Any) -> None:
        # Snapshot: handlers may disconnect themselves while running
        for handler in list(self._handlers):
            handler(*args)

    def has_handlers(self) -> bool:
        return bool(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"<EventHook {self.name or '?'} handlers={len(self._handlers)}>"


class ObservableObject:
    """Base class providing property change notification.

    Handlers connected to ``property_changed`` receive ``(sender, property_name)``.
    """

    def __init__(self) -> None:
        self.property_changed = EventHook("property_changed")

    def notify_property_changed(self, property_name: str) -> None:
        self.property_changed.emit(self, property_name)

    def set_property(self, attribute: str, value: Any, property_name: str = "") -> bool:
        """Assign *value* to *attribute* and notify if it changed.

        Args:
            attribute: Name of the backing attribute (e.g. ``"_display_name"``)
            value: New value
            property_name: Public name to report; defaults to *attribute* without leading underscores

        Returns:
            True if the value changed and a notification was raised
        """
        if getattr(self, attribute, None) == value:
            return False
        setattr(self, attribute, value)
        self.notify_property_changed(property_name or attribute.lstrip("_"))
        return True
