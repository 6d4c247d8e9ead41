import json
import logging
import os

logger = logging.getLogger(__name__)

CONFIG_DIR = os.path.join(os.path.expanduser("~"), ".config", "system-overlay")
CONFIG_FILE = os.path.join(CONFIG_DIR, "settings.json")

DEFAULTS = {
    'position': 'Top Right',
    'color': '#ff0000',
    'size': 14,
    'alpha': 0.7,
    'refresh_ms': 2000,
    'margin': 10,
}

# key -> predicate a loaded value must satisfy
CHECKS = {
    'refresh_ms': lambda v: isinstance(v, int) and not isinstance(v, bool) and v > 0,
    'alpha': lambda v: isinstance(v, (int, float)) and not isinstance(v, bool) and 0 < v <= 1,
    'size': lambda v: isinstance(v, int) and not isinstance(v, bool) and 8 <= v <= 24,
    'margin': lambda v: isinstance(v, int) and not isinstance(v, bool) and v >= 0,
}


def _validate(settings, path):
    for key, ok in CHECKS.items():
        if not ok(settings[key]):
            logger.warning("Invalid %s %r in %s, using %r", key, settings[key], path, DEFAULTS[key])
            settings[key] = DEFAULTS[key]
    return settings


def load_settings(path=CONFIG_FILE):
    settings = dict(DEFAULTS)
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except FileNotFoundError:
        return settings
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return settings
    if isinstance(data, dict):
        settings.update(data)
    else:
        logger.warning("Ignoring settings file %s: expected a JSON object", path)
    return _validate(settings, path)


def save_settings(settings, path=CONFIG_FILE):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, 'w') as f:
        json.dump(settings, f, indent=4)
