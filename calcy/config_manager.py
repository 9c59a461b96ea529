# config_manager.py
import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

config_json = Path(__file__).resolve().parent.parent / "config.json"

DEFAULT_SETTINGS = {
    "datatype": "f64",
    "benchmark": False,
    "copy_result": False,
    "log_level": "WARNING",
    "history_file": "calcy-history.txt",
}


def settings_path(path=None):
    """Explicit path, else $CALCY_CONFIG, else config.json in the project root."""
    if path:
        return Path(path)
    if os.environ.get("CALCY_CONFIG"):
        return Path(os.environ["CALCY_CONFIG"])
    return config_json


def load_setting_value(key_value, path=None):
    """Return one setting, or the whole settings dict for key_value == "all".

    Missing or broken files fall back to DEFAULT_SETTINGS.
    """
    config_file = settings_path(path)
    settings_dict = dict(DEFAULT_SETTINGS)

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            loaded = json.load(f)

    except FileNotFoundError:
        loaded = {}
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Settings file %s could not be read, using defaults: %s", config_file, e)
        loaded = {}

    if not isinstance(loaded, dict):
        logger.warning("Settings file %s does not hold a JSON object, using defaults", config_file)
        loaded = {}

    settings_dict.update(loaded)

    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, 0)
