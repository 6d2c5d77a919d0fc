"""
Config file loading for upkeep.

Reads ~/.config/upkeep/config.toml and returns structured config.
Never raises — always returns a valid dict with sensible defaults.
"""

import tomllib
from pathlib import Path

from upkeep.ui.theme import SPINNER_INTERVAL

_CONFIG_PATH = Path.home() / ".config" / "upkeep" / "config.toml"


def default_config() -> dict:
    return {
        "whitelist": set(),
        "assumeyes": False,
        "spinner_interval": SPINNER_INTERVAL,
    }


def load_config(path: Path | None = None) -> dict:
    """
    Load and return upkeep config from TOML file.

    Returns {"whitelist": set[str], "assumeyes": bool, "spinner_interval": float}.
    Missing file or parse errors return all defaults; a single bad value
    falls back to its own default without discarding the others.
    """
    config_path = path or _CONFIG_PATH
    config = default_config()

    if not config_path.is_file():
        return config

    try:
        raw = config_path.read_bytes()
    except OSError:
        return config

    try:
        data = tomllib.loads(raw.decode("utf-8"))
    except (tomllib.TOMLDecodeError, UnicodeDecodeError):
        return config

    whitelist = data.get("whitelist")
    if isinstance(whitelist, list):
        config["whitelist"] = {str(item) for item in whitelist}

    assumeyes = data.get("assumeyes")
    if isinstance(assumeyes, bool):
        config["assumeyes"] = assumeyes

    interval = data.get("spinner_interval")
    # bool is an int subclass; reject it explicitly
    if isinstance(interval, (int, float)) and not isinstance(interval, bool) and interval > 0:
        config["spinner_interval"] = float(interval)

    return config
