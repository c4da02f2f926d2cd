# spot_config.py
import json
import logging
import math
import os
from pathlib import Path
from typing import Any, Callable, Dict
from threading import Lock

from leaderboards import LEADERBOARD_SIZE
from spot_engine import MATCH_DISTANCE_MILES, NEARBY_DISTANCE_LIMIT_MILES

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = "config/spot_admin.json"
_CONFIG_LOCK = Lock()

MAX_MATCH_DISTANCE_MILES = 5.0
MAX_LEADERBOARD_SIZE = 50

# 0.5 mi is the authoritative matching radius. The 0.75 mi seen in an older
# map variant is only used if an admin sets it here explicitly.
_DEFAULT_CONFIG: Dict[str, Any] = {
    "match_distance_miles": MATCH_DISTANCE_MILES,
    "leaderboard_size": LEADERBOARD_SIZE,
    "nearby_limit_miles": NEARBY_DISTANCE_LIMIT_MILES,
}


def _config_path() -> Path:
    return Path(os.getenv("SPOT_CONFIG_PATH", _DEFAULT_CONFIG_PATH))


def _ensure_file_exists(path: Path) -> None:
    if not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    if not path.exists():
        logger.info("Writing default spot config to %s", path)
        with path.open("w", encoding="utf-8") as f:
            json.dump(_DEFAULT_CONFIG, f, indent=2)


def load_config() -> Dict[str, Any]:
    path = _config_path()
    with _CONFIG_LOCK:
        _ensure_file_exists(path)
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)


def save_config(cfg: Dict[str, Any]) -> None:
    path = _config_path()
    with _CONFIG_LOCK:
        _ensure_file_exists(path)
        with path.open("w", encoding="utf-8") as f:
            json.dump(cfg, f, indent=2)


def _finite_float(key: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{key} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{key} must be a number, got {value!r}") from e
    if not math.isfinite(number):
        raise ValueError(f"{key} must be finite, got {value!r}")
    return number


def _check_match_distance(value: Any) -> float:
    miles = _finite_float("match_distance_miles", value)
    if not 0 < miles <= MAX_MATCH_DISTANCE_MILES:
        raise ValueError(
            f"match_distance_miles must be > 0 and <= {MAX_MATCH_DISTANCE_MILES}"
        )
    return miles


def _check_leaderboard_size(value: Any) -> int:
    number = _finite_float("leaderboard_size", value)
    if not number.is_integer():
        raise ValueError(f"leaderboard_size must be a whole number, got {value!r}")
    size = int(number)
    if not 1 <= size <= MAX_LEADERBOARD_SIZE:
        raise ValueError(f"leaderboard_size must be between 1 and {MAX_LEADERBOARD_SIZE}")
    return size


def _check_nearby_limit(value: Any) -> float:
    miles = _finite_float("nearby_limit_miles", value)
    if miles <= 0:
        raise ValueError("nearby_limit_miles must be > 0")
    return miles


_CHECKS: Dict[str, Callable[[Any], Any]] = {
    "match_distance_miles": _check_match_distance,
    "leaderboard_size": _check_leaderboard_size,
    "nearby_limit_miles": _check_nearby_limit,
}


def validate_settings(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """
    Check admin-submitted values. Missing keys take their defaults; any
    present key that is out of range raises ValueError.
    """
    return {
        key: check(cfg.get(key, _DEFAULT_CONFIG[key]))
        for key, check in _CHECKS.items()
    }


def get_aggregation_settings() -> Dict[str, Any]:
    """
    Look up match_distance_miles / leaderboard_size / nearby_limit_miles
    from spot_admin.json.

    Each key falls back to its default on its own, so one bad value doesn't
    throw away the rest. An unreadable file means all defaults.
    """
    try:
        cfg = load_config()
    except (OSError, ValueError) as e:
        logger.warning("Could not read spot config (%s), using defaults", e)
        return dict(_DEFAULT_CONFIG)

    if not isinstance(cfg, dict):
        logger.warning("Spot config is not a JSON object, using defaults")
        return dict(_DEFAULT_CONFIG)

    settings: Dict[str, Any] = {}
    for key, check in _CHECKS.items():
        try:
            settings[key] = check(cfg.get(key, _DEFAULT_CONFIG[key]))
        except ValueError as e:
            logger.warning("Ignoring invalid %s (%s), using default", key, e)
            settings[key] = _DEFAULT_CONFIG[key]
    return settings
