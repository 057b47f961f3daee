"""Data models for appliance state profiles."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Minutes in a day; timestamps run 0..1439 within a single day
PERIOD = 1440


class State(str, Enum):
    """Appliance state as reported by a state-change event."""

    ON = "on"
    OFF = "off"  # manual switch off
    AUTO_OFF = "auto-off"  # switched off by the energy-saving device


@dataclass(frozen=True)
class Event:
    """A single state change."""

    state: State
    timestamp: int  # minutes since the start of the day (or month)

    def __post_init__(self):
        object.__setattr__(self, "state", State(self.state))
        if isinstance(self.timestamp, bool) or not isinstance(self.timestamp, int):
            raise ValueError(f"Event timestamp must be an integer, got {self.timestamp!r}")
        if self.timestamp < 0:
            raise ValueError(f"Event timestamp must not be negative, got {self.timestamp}")


@dataclass(frozen=True)
class Profile:
    """Initial state plus the ordered state changes observed afterwards.

    Events are kept in the order given; callers supply them sorted by
    timestamp.
    """

    initial: State
    events: tuple[Event, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "initial", State(self.initial))
        events = tuple(
            e if isinstance(e, Event) else Event(state=e["state"], timestamp=e["timestamp"])
            for e in self.events
        )
        object.__setattr__(self, "events", events)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Profile":
        """Build a profile from ``{"initial": ..., "events": [{"state", "timestamp"}, ...]}``."""
        return cls(initial=data["initial"], events=data.get("events") or ())

    @classmethod
    def coerce(cls, profile: "Profile | dict[str, Any]") -> "Profile":
        """Return ``profile`` unchanged, or parse it if it is a plain mapping."""
        if isinstance(profile, cls):
            return profile
        return cls.from_dict(profile)

    def to_dict(self) -> dict[str, Any]:
        return {
            "initial": self.initial.value,
            "events": [{"state": e.state.value, "timestamp": e.timestamp} for e in self.events],
        }


@dataclass(frozen=True)
class Appliance:
    """Descriptive metadata for the appliance a profile was recorded from."""

    name: str
    power_kw: float | None = None  # rated draw while on, used for kWh estimates
