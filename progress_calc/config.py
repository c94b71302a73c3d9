"""Environment-driven configuration with validation and fallback."""

import logging
import os
from pathlib import Path

from .constants import (
    DEFAULT_STATE_DIR,
    DISCOUNT_CREDIT,
    FREE_CREDIT,
    MONTHLY_PRICE,
    NIGHT_END_HOUR,
    NIGHT_START_HOUR,
    THRESHOLD_DISCOUNT,
    THRESHOLD_FREE,
)
from .time_utils import to_int

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int, minimum: int = 0, maximum: int | None = None) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    value = to_int(raw, None)
    if value is None or value < minimum or (maximum is not None and value > maximum):
        logger.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default
    return value


def get_reward_config() -> dict:
    """
    Resolve subscription pricing from env or defaults.

    Thresholds are fixed; only the money amounts are configurable.
    """
    return {
        "monthly_price": _env_int("WALKPET_MONTHLY_PRICE", MONTHLY_PRICE),
        "free_credit": _env_int("WALKPET_FREE_CREDIT", FREE_CREDIT),
        "discount_credit": _env_int("WALKPET_DISCOUNT_CREDIT", DISCOUNT_CREDIT),
        "threshold_free": THRESHOLD_FREE,
        "threshold_discount": THRESHOLD_DISCOUNT,
    }


def get_night_window() -> tuple[int, int]:
    """Return the (start, end) local hours of night mode."""
    start = _env_int("WALKPET_NIGHT_START_HOUR", NIGHT_START_HOUR, maximum=23)
    end = _env_int("WALKPET_NIGHT_END_HOUR", NIGHT_END_HOUR, maximum=23)
    return start, end


def get_state_dir() -> Path:
    """Directory holding state.json and reading.json."""
    return Path(os.environ.get("WALKPET_STATE_DIR") or DEFAULT_STATE_DIR)


def get_log_level() -> int:
    """Map WALKPET_LOG_LEVEL to a logging level, defaulting to INFO."""
    name = os.environ.get("WALKPET_LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO
