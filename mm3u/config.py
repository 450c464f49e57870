#!/usr/bin/env python3
"""
Centralized configuration for mm3u with env var overrides.
- User config file: ~/.config/mm3u/config.json (MM3U_CONFIG points elsewhere)
- Precedence: command line > environment > user config file > built-in defaults
- Types exposed to the app:
  - PARALLEL: bool
  - ABSOLUTE_OUTPUT: bool
  - WORKERS: int (0 means one worker per CPU)
  - LOG_LEVEL: str
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# Paths
CONFIG_DIR = Path.home() / ".config" / "mm3u"
CONFIG_FILE = CONFIG_DIR / "config.json"

DEFAULTS: Dict[str, Any] = {
    "PARALLEL": False,
    "ABSOLUTE_OUTPUT": False,
    "WORKERS": 0,
    "LOG_LEVEL": "WARNING",
}

# Environment variable mapping
ENV_MAP = {
    "PARALLEL": "MM3U_PARALLEL",
    "ABSOLUTE_OUTPUT": "MM3U_ABSOLUTE",
    "WORKERS": "MM3U_WORKERS",
    "LOG_LEVEL": "MM3U_LOG_LEVEL",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def _to_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    logger.warning("Ignoring invalid boolean setting %r", value)
    return default


def config_file_path() -> Path:
    override = os.getenv("MM3U_CONFIG")
    return Path(override).expanduser() if override else CONFIG_FILE


def _load_user_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: expected a JSON object", path)
        return {}
    return {k: v for k, v in data.items() if k in DEFAULTS}


def _apply_env_overrides(cfg: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(cfg)
    for key, env_name in ENV_MAP.items():
        val = os.getenv(env_name)
        if val is not None:
            out[key] = val
    return out


def _coerce_types(eff: Dict[str, Any]) -> Dict[str, Any]:
    for k in ("PARALLEL", "ABSOLUTE_OUTPUT"):
        eff[k] = _to_bool(eff[k], DEFAULTS[k])
    try:
        eff["WORKERS"] = max(0, int(eff["WORKERS"]))
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid WORKERS setting %r", eff["WORKERS"])
        eff["WORKERS"] = DEFAULTS["WORKERS"]
    level = str(eff["LOG_LEVEL"]).upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("Ignoring invalid LOG_LEVEL setting %r", eff["LOG_LEVEL"])
        level = DEFAULTS["LOG_LEVEL"]
    eff["LOG_LEVEL"] = level
    return eff


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load effective config: env > file > defaults, coerced to expected types."""
    file_cfg = _load_user_file(path or config_file_path())
    merged = DEFAULTS | file_cfg
    merged = _apply_env_overrides(merged)
    return _coerce_types(merged)
