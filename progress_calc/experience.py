"""Experience and level calculation. Pure functions, no side effects."""

from .constants import EXP_CURVE_FACTOR, STEPS_PER_EXP
from .errors import InvalidInputError
from .time_utils import to_int


def exp_floor(level: int) -> int:
    """
    Total experience needed to reach a level.

    Level 1 starts at 0 exp; from level 2 on the floor is 50 * L * (L + 1):
    level 2 at 300, level 3 at 600, level 4 at 1000, and so on.
    """
    if level <= 1:
        return 0
    return EXP_CURVE_FACTOR * level * (level + 1)


def level_from_exp(total_exp: int) -> int:
    """Highest level whose floor is <= total_exp. Never returns less than 1."""
    if total_exp < 0:
        raise InvalidInputError(f"total_exp must be non-negative, got {total_exp}")
    level = 1
    while exp_floor(level + 1) <= total_exp:
        level += 1
    return level


def steps_to_exp(steps: int) -> int:
    """100 steps = 1 exp. Remainder steps are dropped."""
    if steps < 0:
        raise InvalidInputError(f"steps must be non-negative, got {steps}")
    return steps // STEPS_PER_EXP


def new_level_info(level: int = 1) -> dict:
    """Fresh level record sitting exactly on the floor of `level`."""
    if level < 0:
        raise InvalidInputError(f"level must be non-negative, got {level}")
    floor = exp_floor(level)
    return {"level": level, "current_exp": 0, "total_exp": floor}


def normalize_level_info(raw: dict | None) -> dict:
    """
    Rebuild a level record from persisted values.

    `total_exp` is treated as the source of truth; `level` and `current_exp`
    are recomputed from it. An egg (level 0) with no exp stays an egg.
    """
    raw = raw if isinstance(raw, dict) else {}
    total_exp = max(0, to_int(raw.get("total_exp"), 0))
    stored_level = max(0, to_int(raw.get("level"), 1))
    if stored_level == 0 and total_exp == 0:
        return {"level": 0, "current_exp": 0, "total_exp": 0}
    level = level_from_exp(total_exp)
    return {"level": level, "current_exp": total_exp - exp_floor(level), "total_exp": total_exp}


def add_exp(level_info: dict, exp: int) -> dict:
    """Return a new level record with `exp` added. Input is not mutated."""
    if exp < 0:
        raise InvalidInputError(f"exp must be non-negative, got {exp}")
    if exp == 0:
        return dict(level_info)

    new_total = level_info["total_exp"] + exp
    new_level = level_from_exp(new_total)
    return {
        "level": new_level,
        "current_exp": new_total - exp_floor(new_level),
        "total_exp": new_total,
    }


def exp_progress(level_info: dict) -> float:
    """Fraction of the way from the current level floor to the next, in [0, 1]."""
    level = level_info["level"]
    floor = exp_floor(level)
    span = exp_floor(level + 1) - floor
    if span <= 0:
        return 0.0
    return max(0.0, min(1.0, (level_info["total_exp"] - floor) / span))


def exp_to_next_level(level_info: dict) -> int:
    """Experience still missing before the next level."""
    return max(0, exp_floor(level_info["level"] + 1) - level_info["total_exp"])


def check_level_up(old: dict, new: dict) -> bool:
    return new["level"] > old["level"]
