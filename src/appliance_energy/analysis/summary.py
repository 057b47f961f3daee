"""Generate summaries of appliance usage and savings."""

from typing import Any

from ..models import PERIOD, Appliance, Profile
from .savings import savings, savings_for_day
from .usage import LAST_DAY, usage, usage_for_day, validate_day


def minutes_to_kwh(minutes: int, appliance: Appliance | None) -> float | None:
    """Energy drawn over ``minutes`` at the appliance's rated power."""
    if appliance is None or appliance.power_kw is None:
        return None
    return round(minutes / 60 * appliance.power_kw, 2)


def last_recorded_day(profile: Profile) -> int:
    """Day number holding the last event (day 1 when there are none)."""
    if not profile.events:
        return 1
    return min(profile.events[-1].timestamp // PERIOD + 1, LAST_DAY)


def get_daily_summary(
    profile: Profile | dict[str, Any], appliance: Appliance | None = None
) -> dict:
    """Generate a summary for a single-day profile."""
    profile = Profile.coerce(profile)
    usage_minutes = usage(profile)
    savings_minutes = savings(profile)

    summary = {
        "appliance": appliance.name if appliance else None,
        "initial_state": profile.initial.value,
        "event_count": len(profile.events),
        "usage_minutes": usage_minutes,
        "savings_minutes": savings_minutes,
        "usage_percent": round(usage_minutes / PERIOD * 100, 1),
        "savings_percent": round(savings_minutes / PERIOD * 100, 1),
    }

    if appliance is not None and appliance.power_kw is not None:
        summary["usage_kwh"] = minutes_to_kwh(usage_minutes, appliance)
        summary["savings_kwh"] = minutes_to_kwh(savings_minutes, appliance)

    return summary


def get_month_summary(
    month_profile: Profile | dict[str, Any],
    first_day: int = 1,
    last_day: int | None = None,
    appliance: Appliance | None = None,
) -> dict:
    """Generate a day-by-day summary for a month-long profile."""
    month_profile = Profile.coerce(month_profile)
    first_day = validate_day(first_day)
    if last_day is None:
        last_day = max(first_day, last_recorded_day(month_profile))
    else:
        last_day = validate_day(last_day)

    daily_rows = [
        {
            "day": day,
            "usage_minutes": usage_for_day(month_profile, day),
            "savings_minutes": savings_for_day(month_profile, day),
        }
        for day in range(first_day, last_day + 1)
    ]

    days_count = len(daily_rows)
    total_usage = sum(row["usage_minutes"] for row in daily_rows)
    total_savings = sum(row["savings_minutes"] for row in daily_rows)

    summary = {
        "appliance": appliance.name if appliance else None,
        "period": {
            "first_day": first_day,
            "last_day": last_day,
            "days": days_count,
        },
        "totals": {
            "usage_minutes": total_usage,
            "savings_minutes": total_savings,
        },
        "averages": {
            "daily_usage_minutes": round(total_usage / days_count, 1) if days_count > 0 else 0,
            "daily_savings_minutes": round(total_savings / days_count, 1) if days_count > 0 else 0,
        },
        "daily_breakdown": daily_rows,
    }

    if appliance is not None and appliance.power_kw is not None:
        summary["totals"]["usage_kwh"] = minutes_to_kwh(total_usage, appliance)
        summary["totals"]["savings_kwh"] = minutes_to_kwh(total_savings, appliance)

    return summary


def format_minutes(minutes: int | float) -> str:
    """Format minutes as e.g. ``5h 30m``."""
    hours, mins = divmod(int(round(minutes)), 60)
    if hours:
        return f"{hours}h {mins:02d}m"
    return f"{mins}m"


def format_daily_summary_text(summary: dict) -> str:
    """Format a daily summary as human-readable text."""
    title = f"Daily Summary for {summary['appliance']}" if summary["appliance"] else "Daily Summary"
    lines = [
        title,
        f"- Switched on: {format_minutes(summary['usage_minutes'])} ({summary['usage_percent']}%)",
        f"- Saved by auto-off: {format_minutes(summary['savings_minutes'])} ({summary['savings_percent']}%)",
        f"- State changes: {summary['event_count']}",
    ]

    if "usage_kwh" in summary:
        lines.append(f"- Estimated usage: {summary['usage_kwh']} kWh")
        lines.append(f"- Estimated savings: {summary['savings_kwh']} kWh")

    return "\n".join(lines)


def format_month_summary_text(summary: dict) -> str:
    """Format a month summary as human-readable text."""
    period = summary["period"]
    lines = [
        f"Appliance Summary: day {period['first_day']} to day {period['last_day']}",
        f"({period['days']} days)",
        "",
        "Totals:",
        f"  - Switched on: {format_minutes(summary['totals']['usage_minutes'])}",
        f"  - Saved by auto-off: {format_minutes(summary['totals']['savings_minutes'])}",
    ]

    if "usage_kwh" in summary["totals"]:
        lines.extend([
            f"  - Estimated usage: {summary['totals']['usage_kwh']} kWh",
            f"  - Estimated savings: {summary['totals']['savings_kwh']} kWh",
        ])

    lines.extend([
        "",
        "Daily Averages:",
        f"  - Switched on: {format_minutes(summary['averages']['daily_usage_minutes'])}/day",
        f"  - Saved by auto-off: {format_minutes(summary['averages']['daily_savings_minutes'])}/day",
    ])

    return "\n".join(lines)
