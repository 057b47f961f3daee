from appliance_energy.models import Appliance
from appliance_energy.analysis import summary

MONTH = {
    "initial": "off",
    "events": [
        {"state": "on", "timestamp": 1500},
        {"state": "off", "timestamp": 1600},
        {"state": "auto-off", "timestamp": 3000},
        {"state": "on", "timestamp": 3060},
        {"state": "off", "timestamp": 3120},
    ],
}


def test_daily_summary():
    profile = {
        "initial": "off",
        "events": [
            {"state": "on", "timestamp": 30},
            {"state": "auto-off", "timestamp": 90},
            {"state": "on", "timestamp": 150},
            {"state": "off", "timestamp": 180},
        ],
    }

    data = summary.get_daily_summary(profile)
    assert data["usage_minutes"] == 90
    assert data["savings_minutes"] == 60
    assert data["usage_percent"] == 6.2
    assert data["event_count"] == 4
    assert data["appliance"] is None
    assert "usage_kwh" not in data


def test_daily_summary_lone_switch_off():
    """Only billed time is reported; nothing claims the rest of the day was off."""
    data = summary.get_daily_summary({"initial": "on", "events": [{"state": "off", "timestamp": 100}]})
    assert data["usage_minutes"] == 0
    assert "off_minutes" not in data


def test_daily_summary_with_power_rating():
    profile = {"initial": "off", "events": [{"state": "on", "timestamp": 30}, {"state": "off", "timestamp": 60}]}
    data = summary.get_daily_summary(profile, Appliance("Heater", power_kw=2.0))
    assert data["appliance"] == "Heater"
    assert data["usage_kwh"] == 1.0
    assert data["savings_kwh"] == 0.0


def test_month_summary_defaults_to_last_recorded_day():
    data = summary.get_month_summary(MONTH)

    assert data["period"] == {"first_day": 1, "last_day": 3, "days": 3}
    assert [row["usage_minutes"] for row in data["daily_breakdown"]] == [0, 100, 60]
    assert [row["savings_minutes"] for row in data["daily_breakdown"]] == [0, 0, 60]
    assert data["totals"]["usage_minutes"] == 160
    assert data["totals"]["savings_minutes"] == 60
    assert data["averages"]["daily_usage_minutes"] == 53.3


def test_month_summary_explicit_range():
    data = summary.get_month_summary(MONTH, first_day=2, last_day=2, appliance=Appliance("Kettle", 3.0))
    assert data["period"]["days"] == 1
    assert data["totals"]["usage_minutes"] == 100
    assert data["totals"]["usage_kwh"] == 5.0


def test_format_minutes():
    assert summary.format_minutes(0) == "0m"
    assert summary.format_minutes(45) == "45m"
    assert summary.format_minutes(90) == "1h 30m"
    assert summary.format_minutes(1440) == "24h 00m"


def test_format_daily_summary_text():
    data = summary.get_daily_summary(
        {"initial": "auto-off", "events": [{"state": "on", "timestamp": 120}]},
        Appliance("Heater", power_kw=1.5),
    )
    text = summary.format_daily_summary_text(data)
    assert text.startswith("Daily Summary for Heater")
    assert "Saved by auto-off: 2h 00m" in text
    assert "Estimated savings: 3.0 kWh" in text


def test_format_month_summary_text():
    text = summary.format_month_summary_text(summary.get_month_summary(MONTH))
    assert "day 1 to day 3" in text
    assert "Switched on: 2h 40m" in text
