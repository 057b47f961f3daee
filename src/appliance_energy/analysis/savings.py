"""Energy savings attributable to the automatic cut-off device.

A saving starts when the device switches the appliance off (``auto-off``) and
lasts until the appliance is next switched on. Manual switch-offs in between
are ignored: the device had already cut the power, so the time still counts
as saved. Time off that was started manually never counts.
"""

import logging
from typing import Any

from ..models import PERIOD, Event, Profile, State
from .usage import all_events_in_state, slice_day

_LOGGER = logging.getLogger(__name__)


def calculate_energy_savings(
    profile: Profile | dict[str, Any], lower_bound: int = 0, upper_bound: int = PERIOD
) -> int:
    """Calculate minutes saved by the device between the two bounds."""
    profile = Profile.coerce(profile)
    initial, events = profile.initial, profile.events

    if initial == State.ON and all_events_in_state(events, State.ON):
        return 0
    if initial == State.OFF and all_events_in_state(events, State.OFF):
        return 0
    if initial == State.AUTO_OFF and all_events_in_state(events, State.AUTO_OFF):
        return upper_bound - lower_bound

    relevant = [e for e in events if e.state in (State.ON, State.AUTO_OFF)]
    if not relevant:
        # Only manual switch-offs after the initial state
        return upper_bound - lower_bound if initial == State.AUTO_OFF else 0

    total = 0
    if initial == State.AUTO_OFF:
        total += relevant[0].timestamp - lower_bound

    # Cut-offs not yet closed by a switch-on, nearest last
    open_cutoffs: list[Event] = []
    for event in relevant:
        if event.state == State.AUTO_OFF:
            open_cutoffs.append(event)
        elif open_cutoffs:
            cutoff = open_cutoffs.pop()
            total += event.timestamp - cutoff.timestamp
            # Switching on ends every pending cut-off
            open_cutoffs.clear()

    # Still switched off by the device at the end of the window
    if relevant[-1].state == State.AUTO_OFF:
        total += upper_bound - relevant[-1].timestamp

    _LOGGER.debug(
        "Savings: %d minute(s) from %d relevant event(s), %d cut-off(s) still open",
        total,
        len(relevant),
        len(open_cutoffs),
    )
    return total


def savings(profile: Profile | dict[str, Any]) -> int:
    """Minutes saved by the device over a single day."""
    return calculate_energy_savings(profile, 0, PERIOD)


def savings_for_day(month_profile: Profile | dict[str, Any], day: Any) -> int:
    """Minutes saved by the device during ``day`` of a month-long profile."""
    day_profile, lower, upper = slice_day(month_profile, day)
    return calculate_energy_savings(day_profile, lower, upper)


# Alias for backwards compatibility
calculate_energy_savings_simple = savings
