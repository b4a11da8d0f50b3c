# archpass/config.py
"""
Settings for the ArchPass server and CLI.
Defaults, overlaid by an optional JSON file ($ARCHPASS_CONFIG or ~/.archpass/config.json),
then by environment variables.
"""

import os
import json
import logging
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "host": "0.0.0.0",
    "port": 3000,
    "allowed_origins": "*",
    "rate_limit": "100 per 15 minutes",
    "rate_limit_enabled": True,
    "log_level": "INFO",
    "environment": "development",
    "max_content_length": 10 * 1024 * 1024,
}

# env var -> (config key, converter)
ENV_OVERRIDES = {
    "HOST": ("host", str),
    "PORT": ("port", int),
    "ALLOWED_ORIGINS": ("allowed_origins", str),
    "RATE_LIMIT": ("rate_limit", str),
    "LOG_LEVEL": ("log_level", str),
    "NODE_ENV": ("environment", str),
    "ARCHPASS_ENV": ("environment", str),
}


def config_path() -> str:
    env = os.getenv("ARCHPASS_CONFIG")
    if env:
        return env
    return os.path.join(os.path.expanduser("~"), ".archpass", "config.json")


def _load_file(p: str) -> Dict[str, Any]:
    if not os.path.exists(p):
        return {}
    try:
        with open(p, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config file %s: %s", p, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: top level must be an object", p)
        return {}
    return data


def _apply_env(cfg: Dict[str, Any], environ) -> None:
    for var, (key, convert) in ENV_OVERRIDES.items():
        raw = environ.get(var)
        if raw is None or raw == "":
            continue
        try:
            cfg[key] = convert(raw)
        except ValueError:
            logger.warning("Ignoring %s=%r: expected %s", var, raw, convert.__name__)


def load_config(path: Optional[str] = None, environ=None) -> Dict[str, Any]:
    out = DEFAULTS.copy()
    out.update(_load_file(path or config_path()))
    _apply_env(out, os.environ if environ is None else environ)
    return out


def allowed_origins(cfg: Dict[str, Any]):
    """'*' stays a wildcard; anything else is a comma-separated origin list."""
    raw = cfg.get("allowed_origins") or "*"
    if isinstance(raw, (list, tuple)):
        return list(raw)
    if raw.strip() == "*":
        return "*"
    return [o.strip() for o in raw.split(",") if o.strip()]
