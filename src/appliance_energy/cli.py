"""Command-line interface for appliance energy analysis."""

import json
import logging

import click
from rich.console import Console
from rich.table import Table

from .analysis import summary
from .analysis.savings import savings, savings_for_day
from .analysis.usage import DayError, usage, usage_for_day
from .profiles import ProfileError, load_appliance, load_profile, resolve_profile_path

console = Console()

profile_argument = click.argument("profile_path", required=False, type=click.Path())


def load_or_exit(profile_path):
    """Resolve and load the profile, or print the error and exit."""
    try:
        path = resolve_profile_path(profile_path)
        return load_profile(path), load_appliance(path)
    except ProfileError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)


@click.group()
@click.option("--verbose", is_flag=True, help="Show debug logging")
def cli(verbose):
    """Appliance energy analysis - usage and auto-off savings from state changes.

    PROFILE_PATH defaults to the APPLIANCE_PROFILE environment variable.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s · %(levelname)s · %(message)s")


@cli.command("usage")
@profile_argument
def usage_cmd(profile_path):
    """Minutes switched on over a single day."""
    profile, _ = load_or_exit(profile_path)
    console.print(f"[green]Usage: {usage(profile)} minutes[/green]")


@cli.command("savings")
@profile_argument
def savings_cmd(profile_path):
    """Minutes saved by the auto-off device over a single day."""
    profile, _ = load_or_exit(profile_path)
    console.print(f"[green]Savings: {savings(profile)} minutes[/green]")


@cli.command("day")
@profile_argument
@click.option("--day", "day", type=float, required=True, help="Day number (1-365)")
def day_cmd(profile_path, day):
    """Usage and savings for one day of a month-long profile."""
    profile, _ = load_or_exit(profile_path)
    try:
        day_usage = usage_for_day(profile, day)
        day_savings = savings_for_day(profile, day)
    except DayError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)

    console.print(f"[cyan]Day {int(day)}[/cyan]")
    console.print(f"  Usage: {day_usage} minutes")
    console.print(f"  Savings: {day_savings} minutes")


@cli.command("month")
@profile_argument
@click.option("--from-day", default=1, help="First day (default: 1)")
@click.option("--to-day", type=int, help="Last day (default: day of the last event)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def month_cmd(profile_path, from_day, to_day, as_json):
    """Day-by-day breakdown of a month-long profile."""
    profile, appliance = load_or_exit(profile_path)
    try:
        data = summary.get_month_summary(profile, from_day, to_day, appliance)
    except DayError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)

    if as_json:
        console.print(json.dumps(data, indent=2))
        return

    table = Table(title=f"Daily Usage ({appliance.name})" if appliance else "Daily Usage")
    table.add_column("Day", style="cyan", justify="right")
    table.add_column("On", justify="right")
    table.add_column("Saved", justify="right")

    for row in data["daily_breakdown"]:
        table.add_row(
            str(row["day"]),
            summary.format_minutes(row["usage_minutes"]),
            summary.format_minutes(row["savings_minutes"]),
        )

    console.print(table)
    console.print(summary.format_month_summary_text(data))


@cli.command("summary")
@profile_argument
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def summary_cmd(profile_path, as_json):
    """Usage and savings summary for a single-day profile."""
    profile, appliance = load_or_exit(profile_path)
    data = summary.get_daily_summary(profile, appliance)

    if as_json:
        console.print(json.dumps(data, indent=2))
    else:
        console.print(summary.format_daily_summary_text(data))


if __name__ == "__main__":
    cli()
