from __future__ import annotations

"""Defines basic config for boagent"""
import json
from os import environ
from pathlib import Path
from typing import Any

from .common import ConfigurationError

__all__ = [
    "BOAGENT_CONFIG",
    "CONFIG_KEY_LOG_LEVEL",
    "CONFIG_KEY_PROFILE",
    "PROFILES",
    "boagent_config",
    "default_params",
]

LOCAL_BOAGENT_CONFIG_FILENAME = "boagentconf.json"

BOAGENT_DEFAULT_PATH = Path(
    environ.get("BOAGENT_DEFAULT_PATH", Path.home() / "boagent" / "config.json")
)
"""Default path for boagent configurations"""

CONFIG_KEY_PROFILE = "profile"
"""Key name for the parameter profile used by `default_params` when none is given"""

CONFIG_KEY_LOG_LEVEL = "log_level"
"""Key name for the screen log level used by sessions"""

PROFILES: dict[str, dict[str, float]] = {
    "default": {
        "e": 0.2,
        "k": 0.2,
        "alpha": 0.3,
        "T": 1.0,
        "a": 1.0,
        "b": 0.0,
        "l": 0.2,
        "roundToUpdate": 4,
        "numberOfRounds": 3,
        "t": 1.1,
        "w": 0.5,
        "r": 0.1,
    },
}
"""Named parameter sets. Every profile defines all recognized BOA parameters."""

PROFILES["no-reservation"] = dict(PROFILES["default"], r=0.0)

BOAGENT_CONFIG: dict[str, Any] = {
    CONFIG_KEY_PROFILE: "default",
    CONFIG_KEY_LOG_LEVEL: "WARNING",
}

_INT_KEYS = ("roundToUpdate", "numberOfRounds")


def _load(path: Path) -> None:
    if not path.exists():
        return
    try:
        with open(path) as f:
            BOAGENT_CONFIG.update(json.load(f))
    except (OSError, json.JSONDecodeError) as e:
        from .warnings import BoagentIOWarning, warn

        warn(f"Cannot read config file {path}: {e}", BoagentIOWarning)


# loading config file if any
_load(Path(BOAGENT_DEFAULT_PATH).expanduser().absolute())
_load(Path.cwd() / LOCAL_BOAGENT_CONFIG_FILENAME)


def _from_env(key: str, default):
    # BOA parameter names are case sensitive (`t` and `T` differ)
    envkey = "BOAGENT_" + (key if key in PROFILES["default"] else key.upper())
    return environ.get(envkey, default)


def boagent_config(key: str, default):
    """
    Returns the config value associated with the given key.

    Remarks:
        - config values are read from the following sources (in descending order of priority):
            - Environment variable with the name BOAGENT_{key} (uppercased except for BOA parameter names)
            - Local file called boagentconf.json
            - json file stored at the location indicated by environment variable "BOAGENT_DEFAULT_PATH"
            - ~/boagent/config.json
            - A default value hardcoded in the boagent library.
    """
    return _from_env(key, BOAGENT_CONFIG.get(key, default))


def default_params(profile: str | None = None) -> dict[str, float]:
    """
    Returns the full BOA parameter dictionary for a profile.

    Args:
        profile: Name of the profile. If not given, the configured profile is used.

    Remarks:
        - Any parameter can be overridden through the config sources read by `boagent_config`
          (e.g. ``BOAGENT_e=0.5`` or a ``"w": 0.7`` entry in ``boagentconf.json``).
    """
    if profile is None:
        profile = boagent_config(CONFIG_KEY_PROFILE, "default")
    if profile not in PROFILES:
        raise ConfigurationError(
            f"Unknown parameter profile {profile}. Known profiles: {sorted(PROFILES)}"
        )
    params: dict[str, float] = {}
    for key, value in PROFILES[profile].items():
        v = boagent_config(key, value)
        try:
            params[key] = int(float(v)) if key in _INT_KEYS else float(v)
        except (TypeError, ValueError):
            raise ConfigurationError(f"Invalid value {v!r} for parameter {key}")
    return params
