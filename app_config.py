"""
Configuration and logging setup for the system monitor.

The config is a small JSON document of UI preferences. Missing or broken
files never stop the app: defaults are used and the problem is logged.
"""
import json
import logging
import os

from constants import CONFIG_ENV_VAR, CONFIG_FILE, DEFAULT_CONFIG, LOG_FORMAT

log = logging.getLogger(__name__)


def config_path():
    """Path of the config file: $SYSMON_CONFIG, else one in the home directory."""
    return os.environ.get(CONFIG_ENV_VAR) or os.path.join(os.path.expanduser("~"), CONFIG_FILE)


VALID_RANGES = {
    "window_width": lambda v: v > 0,
    "window_height": lambda v: v > 0,
    "monitor_index": lambda v: v >= 0,
}


def _coerce(key, value):
    default = DEFAULT_CONFIG[key]
    # bool is a subclass of int, so compare exact types
    if type(value) is type(default) and VALID_RANGES.get(key, lambda v: True)(value):
        return value
    log.warning("Config key '%s' has invalid value %r, using %r", key, value, default)
    return default


def load_config(path=None):
    """Reads the configuration from the JSON file, merged over the defaults."""
    path = path or config_path()
    config = DEFAULT_CONFIG.copy()
    try:
        with open(path, "r", encoding="utf-8") as f:
            loaded = json.load(f)
    except FileNotFoundError:
        log.info("No config at %s, using defaults", path)
        return config
    except (OSError, json.JSONDecodeError) as e:
        log.warning("Could not read config %s: %s", path, e)
        return config

    if not isinstance(loaded, dict):
        log.warning("Config %s is not a JSON object, using defaults", path)
        return config

    for key, value in loaded.items():
        if key in config:
            config[key] = _coerce(key, value)
        else:
            log.debug("Ignoring unknown config key '%s'", key)
    return config


def save_config(config, path=None):
    """Saves the config dictionary to the JSON file. Returns True on success."""
    path = path or config_path()
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
    except OSError as e:
        log.error("Error saving config to %s: %s", path, e)
        return False
    log.debug("Configuration saved to %s", path)
    return True


def get_log_level(level_name, default_level=logging.INFO):
    level = logging.getLevelName(str(level_name).upper())
    if isinstance(level, int):
        return level
    logging.warning("Invalid log level name '%s'. Using default level %s.",
                    level_name, logging.getLevelName(default_level))
    return default_level


def setup_logging(level_name="INFO"):
    logging.basicConfig(level=get_log_level(level_name), format=LOG_FORMAT)
