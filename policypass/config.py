# policypass/config.py
"""
Settings persistence for policypass.
Settings saved as JSON in %APPDATA%/PolicyPass/config.json (Windows) or ~/.policypass/config.json (fallback).
The POLICYPASS_CONFIG environment variable points at a different file.
"""

import os
import json
import logging
from typing import Dict, Any, Optional

from .generator import (
    DEFAULT_COUNT,
    DEFAULT_GROUPS,
    DEFAULT_MAX_LENGTH,
    DEFAULT_MIN_LENGTH,
    PasswordConfig,
    make_config,
)
from .storage import atomic_write_bytes, dump_json_bytes

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "POLICYPASS_CONFIG"

DEFAULTS: Dict[str, Any] = {
    "min_length": DEFAULT_MIN_LENGTH,
    "max_length": DEFAULT_MAX_LENGTH,
    "length": None,  # a fixed length overrides min_length/max_length
    "groups": list(DEFAULT_GROUPS),
    "first_char_group": None,
    "count": DEFAULT_COUNT,
}


def _defaults() -> Dict[str, Any]:
    out = DEFAULTS.copy()
    out["groups"] = list(DEFAULT_GROUPS)
    return out


def _appdata_dir() -> str:
    appdata = os.getenv("APPDATA")
    if appdata:
        return os.path.join(appdata, "PolicyPass")
    return os.path.join(os.path.expanduser("~"), ".policypass")


def config_path() -> str:
    override = os.getenv(CONFIG_ENV_VAR)
    if override:
        return override
    return os.path.join(_appdata_dir(), "config.json")


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Return the stored settings merged over DEFAULTS.

    A missing file yields the defaults. An unreadable or malformed file is
    logged and also yields the defaults; keys not in DEFAULTS are dropped.
    """
    p = path or config_path()
    if not os.path.exists(p):
        return _defaults()
    try:
        with open(p, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("ignoring unreadable config file %s: %s", p, e)
        return _defaults()
    if not isinstance(data, dict):
        logger.warning("ignoring config file %s: top level is not an object", p)
        return _defaults()
    out = _defaults()
    for key, value in data.items():
        if key in DEFAULTS:
            out[key] = value
        else:
            logger.debug("unknown config key %r in %s", key, p)
    return out


def save_config(cfg: Dict[str, Any], path: Optional[str] = None) -> str:
    p = path or config_path()
    atomic_write_bytes(p, dump_json_bytes(cfg))
    return p


def config_to_password_config(cfg: Dict[str, Any], **overrides: Any) -> PasswordConfig:
    """
    Turn a settings dict (plus non-None overrides) into a validated PasswordConfig.

    Raises InvalidConfiguration for unusable values.
    """
    merged = dict(cfg)
    merged.update({k: v for k, v in overrides.items() if v is not None})
    return make_config(
        length=merged.get("length"),
        min_length=merged.get("min_length", DEFAULT_MIN_LENGTH),
        max_length=merged.get("max_length", DEFAULT_MAX_LENGTH),
        groups=merged.get("groups"),
        first_char_group=merged.get("first_char_group"),
        count=merged.get("count", DEFAULT_COUNT),
    )
