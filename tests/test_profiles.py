"""Tests for profile loading."""

import json

import pytest
from appliance_energy import profiles
from appliance_energy.models import State


def write_yaml(tmp_path, text):
    path = tmp_path / "profile.yaml"
    path.write_text(text)
    return path


def test_load_profile_yaml(tmp_path):
    path = write_yaml(
        tmp_path,
        """
appliance:
  name: Dishwasher
  power_kw: 1.8
initial: "off"
events:
  - {state: "on", timestamp: 30}
  - {state: "auto-off", timestamp: 60}
""",
    )

    profile = profiles.load_profile(path)
    assert profile.initial == State.OFF
    assert [(e.state, e.timestamp) for e in profile.events] == [
        (State.ON, 30),
        (State.AUTO_OFF, 60),
    ]

    appliance = profiles.load_appliance(path)
    assert appliance.name == "Dishwasher"
    assert appliance.power_kw == 1.8


def test_load_profile_unquoted_on_off(tmp_path):
    """YAML reads bare on/off as booleans."""
    path = write_yaml(
        tmp_path,
        """
initial: off
events:
  - {state: on, timestamp: 30}
  - {state: off, timestamp: 60}
""",
    )

    profile = profiles.load_profile(path)
    assert profile.initial == State.OFF
    assert [e.state for e in profile.events] == [State.ON, State.OFF]


def test_load_profile_json(tmp_path):
    path = tmp_path / "profile.json"
    path.write_text(json.dumps({"initial": "on", "events": [{"state": "off", "timestamp": 50}]}))

    profile = profiles.load_profile(path)
    assert profile.initial == State.ON
    assert profile.events[0].timestamp == 50
    assert profiles.load_appliance(path) is None


def test_load_profile_missing_initial(tmp_path):
    path = write_yaml(tmp_path, "events: []\n")
    with pytest.raises(profiles.ProfileError, match="no initial state"):
        profiles.load_profile(path)


def test_load_profile_invalid_state(tmp_path):
    path = write_yaml(tmp_path, 'initial: "standby"\n')
    with pytest.raises(profiles.ProfileError, match="Invalid profile"):
        profiles.load_profile(path)


def test_load_profile_not_a_mapping(tmp_path):
    path = write_yaml(tmp_path, "- on\n- off\n")
    with pytest.raises(profiles.ProfileError, match="must contain a mapping"):
        profiles.load_profile(path)


def test_load_profile_missing_file(tmp_path):
    with pytest.raises(profiles.ProfileError, match="Could not read"):
        profiles.load_profile(tmp_path / "missing.yaml")


def test_resolve_profile_path_explicit(monkeypatch, tmp_path):
    monkeypatch.setenv(profiles.PROFILE_ENV_VAR, "/elsewhere.yaml")
    assert profiles.resolve_profile_path(tmp_path / "p.yaml") == tmp_path / "p.yaml"


def test_resolve_profile_path_from_env(monkeypatch):
    monkeypatch.setenv(profiles.PROFILE_ENV_VAR, "/data/dishwasher.yaml")
    assert str(profiles.resolve_profile_path()) == "/data/dishwasher.yaml"


def test_resolve_profile_path_unset(monkeypatch):
    monkeypatch.delenv(profiles.PROFILE_ENV_VAR, raising=False)
    monkeypatch.setattr(profiles, "load_dotenv", lambda: None)
    with pytest.raises(profiles.ProfileError, match="APPLIANCE_PROFILE"):
        profiles.resolve_profile_path()
