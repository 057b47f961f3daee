"""Loading appliance profiles from YAML or JSON files.

File format (YAML shown, JSON uses the same keys):

    appliance:
      name: Dishwasher
      power_kw: 1.8
    initial: "off"
    events:
      - {state: "on", timestamp: 30}
      - {state: "off", timestamp: 60}
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .models import Appliance, Profile

_LOGGER = logging.getLogger(__name__)

PROFILE_ENV_VAR = "APPLIANCE_PROFILE"


class ProfileError(ValueError):
    """Raised when a profile file is missing or malformed."""
    pass


def read_profile_file(path: Path) -> dict[str, Any]:
    """Read the raw mapping stored in a profile file."""
    try:
        with open(path) as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except OSError as e:
        raise ProfileError(f"Could not read profile {path}: {e}")
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ProfileError(f"Could not parse profile {path}: {e}")

    if not isinstance(data, dict):
        raise ProfileError(f"Profile {path} must contain a mapping")
    return data


def normalise_state(value: Any) -> Any:
    """Map YAML 1.1 booleans back to states (unquoted on/off load as True/False)."""
    if value is True:
        return "on"
    if value is False:
        return "off"
    return value


def load_profile(path: Path) -> Profile:
    """Load the state profile from a YAML or JSON file."""
    data = read_profile_file(path)
    if "initial" not in data:
        raise ProfileError(f"Profile {path} has no initial state")

    try:
        profile = Profile(
            initial=normalise_state(data["initial"]),
            events=tuple(
                {"state": normalise_state(e["state"]), "timestamp": e["timestamp"]}
                for e in data.get("events") or []
            ),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ProfileError(f"Invalid profile {path}: {e}")

    _LOGGER.debug("Loaded %d event(s) from %s", len(profile.events), path)
    return profile


def load_appliance(path: Path) -> Appliance | None:
    """Load the optional appliance block from a profile file."""
    data = read_profile_file(path).get("appliance")
    if not data:
        return None

    try:
        power_kw = data.get("power_kw")
        return Appliance(
            name=str(data.get("name", path.stem)),
            power_kw=float(power_kw) if power_kw is not None else None,
        )
    except (AttributeError, TypeError, ValueError) as e:
        raise ProfileError(f"Invalid appliance in {path}: {e}")


def resolve_profile_path(path: Path | str | None = None) -> Path:
    """Pick the profile to use: explicit path, else APPLIANCE_PROFILE (.env aware)."""
    if path:
        return Path(path)

    load_dotenv()
    env_path = os.environ.get(PROFILE_ENV_VAR)
    if not env_path:
        raise ProfileError(
            f"No profile given. Pass a profile path or set {PROFILE_ENV_VAR} "
            "(environment or .env file)."
        )
    return Path(env_path)
