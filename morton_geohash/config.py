#!/usr/bin/env python3
# morton_geohash/config.py
"""
Config loader and defaults for morton_geohash.

Goals:
- Optional JSON file, never written by the library.
- Deep-merge of user config over defaults.
- Basic validation with sane fallbacks.
- No external deps.

Usage:
    from morton_geohash.config import Config
    cfg = Config.load()                 # $MORTON_GEOHASH_CONFIG or defaults
    ranges = h.ranges_within(250.0, earth_radius_m=cfg.earth_radius_m)
"""

from __future__ import annotations

import copy
import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

log = logging.getLogger(__name__)

# ----------------------------
# Defaults
# ----------------------------

DEFAULT_CONFIG: Dict[str, Any] = {
    "proximity": {
        "earth_radius_m": 6378137.0,      # WGS84 equatorial radius
    },
    "logging": {
        "level": "WARNING",
        "file": None,                     # path or None
        "rotate_bytes": 5 * 1024 * 1024,
        "rotate_keep": 3,
    },
}

ENV_CONFIG_PATH = "MORTON_GEOHASH_CONFIG"

# ----------------------------
# Helpers
# ----------------------------

def _default_config_path() -> Optional[str]:
    """Resolve config path from the MORTON_GEOHASH_CONFIG env var, if set."""
    env = os.environ.get(ENV_CONFIG_PATH)
    if env:
        return os.path.expanduser(env)
    return None

def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    """Return deep-merged copy of dicts: values in b override a."""
    out = dict(a)
    for k, v in b.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out

def _coerce_num(v: Any, default: float, minmax: Optional[Tuple[float, float]] = None) -> float:
    try:
        x = float(v)
    except (TypeError, ValueError):
        return float(default)
    if x != x:
        return float(default)
    if minmax:
        lo, hi = minmax
        if x < lo: x = lo
        if x > hi: x = hi
    return x

def _coerce_int(v: Any, default: int, minmax: Optional[Tuple[int, int]] = None) -> int:
    try:
        x = int(v)
    except (TypeError, ValueError):
        return int(default)
    if minmax:
        lo, hi = minmax
        if x < lo: x = lo
        if x > hi: x = hi
    return x

# ----------------------------
# Validation
# ----------------------------

def _validate(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Return validated copy with fallbacks applied."""
    c = _deep_merge(copy.deepcopy(DEFAULT_CONFIG), cfg or {})

    # proximity
    p = c["proximity"]
    p["earth_radius_m"] = _coerce_num(
        p.get("earth_radius_m"), DEFAULT_CONFIG["proximity"]["earth_radius_m"], (1.0e6, 1.0e8)
    )

    # logging
    lg = c["logging"]
    level = lg.get("level")
    level = level.upper() if isinstance(level, str) else level
    if level not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"):
        level = DEFAULT_CONFIG["logging"]["level"]
    lg["level"] = level
    lf = lg.get("file")
    lg["file"] = str(lf) if lf else None
    lg["rotate_bytes"] = _coerce_int(lg.get("rotate_bytes"), DEFAULT_CONFIG["logging"]["rotate_bytes"], (256 * 1024, 50 * 1024 * 1024))
    lg["rotate_keep"]  = _coerce_int(lg.get("rotate_keep"), DEFAULT_CONFIG["logging"]["rotate_keep"], (0, 50))

    return c

# ----------------------------
# Public API
# ----------------------------

@dataclass
class Config:
    """Thin wrapper around a nested dict with load/merge."""
    data: Dict[str, Any] = field(default_factory=lambda: _validate({}))
    path: Optional[str] = None

    # --- Mapping-style access
    def __getitem__(self, k: str) -> Any:
        return self.data[k]

    def get(self, k: str, default: Any = None) -> Any:
        return self.data.get(k, default)

    # --- Ops
    @classmethod
    def load(cls, path: Optional[str] = None) -> "Config":
        cfg_path = os.path.expanduser(path) if path else _default_config_path()
        if not cfg_path or not os.path.exists(cfg_path):
            if cfg_path:
                log.warning("config %s not found, using defaults", cfg_path)
            return cls(_validate({}), cfg_path)

        try:
            with open(cfg_path, "r", encoding="utf-8") as f:
                user_cfg = json.load(f)
        except (OSError, ValueError) as e:
            log.warning("config %s unreadable (%s), using defaults", cfg_path, e)
            user_cfg = {}
        if not isinstance(user_cfg, dict):
            log.warning("config %s is not a JSON object, using defaults", cfg_path)
            user_cfg = {}

        return cls(_validate(user_cfg), cfg_path)

    def update(self, partial: Dict[str, Any]) -> None:
        """Deep-merge a partial config then validate."""
        self.data = _validate(_deep_merge(self.data, partial))

    # Convenience getters
    @property
    def earth_radius_m(self) -> float:
        return self.data["proximity"]["earth_radius_m"]


__all__ = [
    "Config",
    "DEFAULT_CONFIG",
    "ENV_CONFIG_PATH",
]
