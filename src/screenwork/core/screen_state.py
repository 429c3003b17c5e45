"""Screen lifecycle states and the payloads carried by lifecycle events."""

from dataclasses import dataclass
from enum import Enum


class ScreenState(Enum):
    """State of a Screen. DEACTIVATED is initial; CLOSED is terminal until reactivated."""

    DEACTIVATED = "deactivated"
    ACTIVE = "active"
    CLOSED = "closed"

    def __str__(self) -> str:
        return self.name.capitalize()


@dataclass(frozen=True)
class ScreenStateChangedEventArgs:
    """Raised on every transition."""
    new_state: ScreenState
    previous_state: ScreenState


@dataclass(frozen=True)
class ActivationEventArgs:
    previous_state: ScreenState
    is_initial_activate: bool


@dataclass(frozen=True)
class DeactivationEventArgs:
    previous_state: ScreenState


@dataclass(frozen=True)
class CloseEventArgs:
    previous_state: ScreenState
