# randpass/config.py
"""
Settings persistence for randpass.
Settings saved as JSON in %APPDATA%/randpass/config.json (Windows) or ~/.randpass/config.json (fallback)
"""

import os
import json
import logging
from typing import Dict, Any, Optional

from .errors import ValidationError
from .generator import GenerationOptions

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "length": 16,
    "lowercase": True,
    "uppercase": True,
    "numbers": True,
    "symbols": True,
    "exclude": "",
    "exclude_similar_characters": False,
    "strict": True,
    "symbols_string": None,
    "copies": 1,
    "max_attempts": None,  # None retries strict mode until satisfied
}

_OPTION_FIELDS = (
    "length", "lowercase", "uppercase", "numbers", "symbols", "exclude",
    "exclude_similar_characters", "strict", "symbols_string",
)
_INT_KEYS = ("length", "copies", "max_attempts")
_STR_KEYS = ("exclude", "symbols_string")
_NULLABLE_KEYS = ("symbols_string", "max_attempts")
_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


def _appdata_dir() -> str:
    appdata = os.getenv("APPDATA")
    if appdata:
        d = os.path.join(appdata, "randpass")
    else:
        d = os.path.join(os.path.expanduser("~"), ".randpass")
    os.makedirs(d, exist_ok=True)
    return d


def config_path() -> str:
    return os.path.join(_appdata_dir(), "config.json")


def _valid_type(key: str, value: Any) -> bool:
    if value is None:
        return key in _NULLABLE_KEYS
    if key in _INT_KEYS:
        return isinstance(value, int) and not isinstance(value, bool)
    if key in _STR_KEYS:
        return isinstance(value, str)
    return isinstance(value, bool)


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    p = path or config_path()
    out = DEFAULTS.copy()
    if not os.path.exists(p):
        return out
    try:
        with open(p, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("ignoring unreadable config %s: %s", p, e)
        return out
    if not isinstance(data, dict):
        logger.warning("ignoring config %s: top level is not an object", p)
        return out
    # merge defaults, dropping keys we don't know and values of the wrong type
    for key, value in data.items():
        if key not in DEFAULTS:
            logger.warning("unknown key %r in config %s", key, p)
        elif not _valid_type(key, value):
            logger.warning("ignoring %s = %r in config %s: wrong type", key, value, p)
        else:
            out[key] = value
    return out


def save_config(cfg: Dict[str, Any], path: Optional[str] = None) -> None:
    p = path or config_path()
    with open(p, "w", encoding="utf-8") as f:
        json.dump(cfg, f, ensure_ascii=False, indent=2)


def options_from_config(cfg: Dict[str, Any]) -> GenerationOptions:
    return GenerationOptions(**{k: cfg.get(k, DEFAULTS[k]) for k in _OPTION_FIELDS})


def coerce_value(key: str, text: str) -> Any:
    """Parse `text` as given on the command line into the type stored under `key`."""
    if key not in DEFAULTS:
        raise ValidationError(f"unknown setting {key!r}")
    if key in _STR_KEYS:
        if key == "symbols_string" and text == "":
            return None
        return text
    if key in _INT_KEYS:
        if key == "max_attempts" and text.lower() in ("", "none"):
            return None
        try:
            value = int(text)
        except ValueError:
            raise ValidationError(f"{key} must be an integer, got {text!r}") from None
        if value < 1:
            raise ValidationError(f"{key} must be > 0")
        return value
    lowered = text.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValidationError(f"{key} must be a boolean, got {text!r}")
