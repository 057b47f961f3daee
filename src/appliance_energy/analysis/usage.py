"""Energy usage (minutes switched on) from appliance state profiles."""

import logging
import numbers
from typing import Any

from ..models import PERIOD, Event, Profile, State

_LOGGER = logging.getLogger(__name__)

# Uniform calendar: day 1 starts at timestamp 0, the last day is 365
FIRST_DAY = 1
LAST_DAY = 365


class DayError(ValueError):
    """Base exception for an invalid day number."""
    pass


class NonIntegerDay(DayError):
    """Raised when the day is not a whole number."""
    pass


class DayOutOfRange(DayError):
    """Raised when the day is outside FIRST_DAY..LAST_DAY."""
    pass


def all_events_in_state(events: tuple[Event, ...], state: State) -> bool:
    """True if every event (vacuously, for no events) is in ``state``."""
    return all(event.state == state for event in events)


def calculate_energy_usage(
    profile: Profile | dict[str, Any], lower_bound: int, upper_bound: int
) -> int:
    """Calculate minutes switched on between ``lower_bound`` and ``upper_bound``.

    Algorithm:
    1. A profile that never leaves ON is on for the whole window; one that
       never leaves OFF uses nothing.
    2. A lone event splits the window in two and only the span after it is
       billed.
    3. Otherwise each span between neighbouring events (and the window edges)
       is billed to the state active at its start. Only ON spans count, so
       repeated events in the same state are harmless.
    """
    profile = Profile.coerce(profile)
    initial, events = profile.initial, profile.events

    if initial == State.ON and all_events_in_state(events, State.ON):
        return upper_bound - lower_bound
    if initial == State.OFF and all_events_in_state(events, State.OFF):
        return 0

    if len(events) == 1:
        if events[0].state == State.ON:
            return upper_bound - events[0].timestamp
        return 0

    total = 0
    previous = None
    for event in events:
        if previous is None:
            # Lower boundary
            if initial == State.ON:
                total += event.timestamp - lower_bound
        elif previous.state == State.ON:
            total += event.timestamp - previous.timestamp
        previous = event

    # Upper boundary
    if previous is not None and previous.state == State.ON:
        total += upper_bound - previous.timestamp

    return total


def usage(profile: Profile | dict[str, Any]) -> int:
    """Minutes switched on over a single day."""
    return calculate_energy_usage(profile, 0, PERIOD)


def validate_day(day: Any) -> int:
    """Check a 1-based day number and return it as an int."""
    if isinstance(day, bool) or not isinstance(day, numbers.Real):
        raise NonIntegerDay("must be an integer")
    if not isinstance(day, numbers.Integral) and not float(day).is_integer():
        raise NonIntegerDay("must be an integer")

    day = int(day)
    if not FIRST_DAY <= day <= LAST_DAY:
        raise DayOutOfRange("day out of range")
    return day


def day_bounds(day: int) -> tuple[int, int]:
    """Absolute timestamps of the start and end of ``day``."""
    return PERIOD * (day - 1), PERIOD * day


def events_between(month_profile: Profile, lower: int, upper: int) -> Profile:
    """Profile of the events from ``lower`` to ``upper`` inclusive.

    The window starts in the state left by the last event before it, or the
    month's initial state if there is none. This also holds when the window
    has no events of its own: the earlier state carries forward rather than
    resetting to the month's initial state.
    """
    initial = month_profile.initial
    day_events = []
    for event in month_profile.events:
        if event.timestamp < lower:
            initial = event.state
        elif event.timestamp <= upper:
            day_events.append(event)

    return Profile(initial=initial, events=tuple(day_events))


def slice_day(month_profile: Profile | dict[str, Any], day: Any) -> tuple[Profile, int, int]:
    """Cut the events for one day out of a month-long profile.

    Returns the day's profile together with its absolute bounds. Events on
    either boundary belong to the day; see ``events_between`` for the state
    the day starts in.
    """
    month_profile = Profile.coerce(month_profile)
    lower, upper = day_bounds(validate_day(day))
    return events_between(month_profile, lower, upper), lower, upper


def usage_for_day(month_profile: Profile | dict[str, Any], day: Any) -> int:
    """Minutes switched on during ``day`` of a month-long profile."""
    month_profile = Profile.coerce(month_profile)
    day = validate_day(day)
    lower, upper = day_bounds(day)

    events = month_profile.events
    # Data ends before this day and the appliance was left on
    if events and events[-1].timestamp < lower and events[-1].state == State.ON:
        _LOGGER.debug("Day %s is after the last event, appliance left on", day)
        return PERIOD

    day_profile = events_between(month_profile, lower, upper)
    _LOGGER.debug(
        "Day %s: %d event(s) in [%d, %d], starting %s",
        day,
        len(day_profile.events),
        lower,
        upper,
        day_profile.initial.value,
    )
    return calculate_energy_usage(day_profile, lower, upper)


# Aliases for backwards compatibility
calculate_energy_usage_simple = usage
calculate_energy_usage_for_day = usage_for_day
