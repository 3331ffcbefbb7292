# config_manager.py
import json
from pathlib import Path

from . import error as E

config_json = Path(__file__).resolve().parent.parent / "config.json"


# Used whenever config.json is missing, unreadable or lacks a key
DEFAULT_SETTINGS = {
    "equivalence_trials": 12,
    "equivalence_epsilon": 1e-6,
    "sample_range": 5.0,
    "approx_epsilon": 1e-8,
    "debug": False,
}


def load_setting_value(key_value):
    try:
        with open(config_json, 'r', encoding= 'utf-8') as f:
            settings_dict = json.load(f)

    except (FileNotFoundError, json.JSONDecodeError):
        settings_dict = {}

    merged = dict(DEFAULT_SETTINGS)
    merged.update(settings_dict)

    if key_value == "all":
        return merged

    else:
        return merged.get(key_value, DEFAULT_SETTINGS.get(key_value))


def validate_setting(key_value, raw_value):
    """Coerce a textual value to the type of the setting's default."""
    if key_value not in DEFAULT_SETTINGS:
        raise E.ConfigurationError(f"Unknown setting: {key_value}", fragment=key_value)

    default = DEFAULT_SETTINGS[key_value]
    if not isinstance(raw_value, str):
        raw_value = str(raw_value)

    try:
        if isinstance(default, bool):
            lowered = raw_value.strip().lower()
            if lowered not in ("true", "false"):
                raise ValueError(raw_value)
            value = lowered == "true"
        elif isinstance(default, int):
            value = int(raw_value)
        else:
            value = float(raw_value)
    except ValueError:
        raise E.ConfigurationError(f"Invalid value for {key_value}: {raw_value}", fragment=key_value)

    if key_value == "equivalence_trials" and value < 1:
        raise E.ConfigurationError("At least one trial is needed.", fragment=key_value)
    if key_value in ("equivalence_epsilon", "sample_range", "approx_epsilon") and value <= 0:
        raise E.ConfigurationError(f"{key_value} must be positive.", fragment=key_value)

    return value


def save_setting(settings_dict):
    try:
        with open (config_json, 'w', encoding= 'utf-8') as f:
            json.dump(settings_dict, f, indent=4)
            return settings_dict

    except OSError as e:
        raise E.ConfigurationError(f"Settings could not be saved: {e}", fragment=str(config_json))
