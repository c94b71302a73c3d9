"""Pet progression state: creation, step conversion, and derived queries."""

import copy
import logging
from datetime import datetime

from .constants import (
    DEFAULT_HAPPINESS,
    MAX_HAPPINESS,
    MAX_PET_NAME_LENGTH,
    MIN_HAPPINESS,
    PET_TYPES,
)
from .errors import InvalidInputError
from .experience import add_exp, check_level_up, new_level_info, steps_to_exp
from .growth import check_stage_evolution, size_multiplier, stage_from_level
from .pet_rules import select_animation
from .time_utils import get_current_time, to_epoch_millis

logger = logging.getLogger(__name__)


def clamp_happiness(value: int) -> int:
    return max(MIN_HAPPINESS, min(MAX_HAPPINESS, value))


def normalize_pet_name(name: str | None, pet_type: str) -> str:
    """Strip and length-bound a name; blank names fall back to the type's default."""
    cleaned = (name or "").strip()
    if not cleaned:
        return PET_TYPES[pet_type]["display_name"]
    return cleaned[:MAX_PET_NAME_LENGTH].rstrip()


def create_pet(
    pet_type: str,
    name: str | None,
    level: int = 0,
    happiness: int = DEFAULT_HAPPINESS,
    now: datetime | None = None,
) -> dict:
    """
    Create the companion record at onboarding.

    New pets start as an egg (level 0); migration passes an explicit level.
    """
    if pet_type not in PET_TYPES:
        raise InvalidInputError(f"Unknown pet type: {pet_type!r}")
    return {
        "type": pet_type,
        "name": normalize_pet_name(name, pet_type),
        "level": new_level_info(level),
        "happiness": clamp_happiness(happiness),
        "last_interaction_time": to_epoch_millis(now or get_current_time()),
    }


def pet_stage(pet: dict) -> str:
    return stage_from_level(pet["level"]["level"])


def pet_personality(pet: dict) -> str:
    return PET_TYPES[pet["type"]]["personality"]


def apply_steps(pet: dict, steps: int) -> tuple[dict, bool, bool]:
    """
    Convert walked steps to exp and add them to the pet.

    Returns:
        (updated_pet, leveled_up, evolved)

    Happiness and name are left untouched. The caller must make sure each
    step delta is applied exactly once.
    """
    if steps < 0:
        raise InvalidInputError(f"steps must be non-negative, got {steps}")

    old_level = pet["level"]
    new_level = add_exp(old_level, steps_to_exp(steps))
    leveled_up = check_level_up(old_level, new_level)
    evolved = check_stage_evolution(old_level, new_level)

    updated = copy.deepcopy(pet)
    updated["level"] = new_level

    if evolved:
        logger.info(
            "%s evolved: %s -> %s",
            pet["name"],
            stage_from_level(old_level["level"]),
            stage_from_level(new_level["level"]),
        )
    elif leveled_up:
        logger.info("%s leveled up: %d -> %d", pet["name"], old_level["level"], new_level["level"])

    return updated, leveled_up, evolved


def apply_step_total(pet: dict, cumulative_steps: int, converted_steps: int) -> tuple[dict, int, bool, bool]:
    """
    Convert a running step total, using a high-water mark of steps already converted.

    Exp is derived from whole totals so sub-100 remainders are never lost
    between calls, and re-running with the same total converts nothing.

    Returns:
        (updated_pet, new_converted_steps, leveled_up, evolved)
    """
    if cumulative_steps < 0 or converted_steps < 0:
        raise InvalidInputError(
            f"step totals must be non-negative, got {cumulative_steps} and {converted_steps}"
        )
    if cumulative_steps < converted_steps:
        # Sensor reset or restored backup: nothing new to convert.
        logger.warning(
            "Step total %d is below converted mark %d; skipping conversion",
            cumulative_steps,
            converted_steps,
        )
        return copy.deepcopy(pet), converted_steps, False, False

    exp_gain = steps_to_exp(cumulative_steps) - steps_to_exp(converted_steps)
    old_level = pet["level"]
    new_level = add_exp(old_level, exp_gain)

    updated = copy.deepcopy(pet)
    updated["level"] = new_level
    return (
        updated,
        cumulative_steps,
        check_level_up(old_level, new_level),
        check_stage_evolution(old_level, new_level),
    )


def current_animation(pet: dict, is_walking: bool, progress_percent: int, is_night_mode: bool = False) -> str:
    return select_animation(pet_stage(pet), is_walking, progress_percent, is_night_mode)


def size_factor(pet: dict) -> float:
    return size_multiplier(pet_stage(pet))


def pet_size(pet: dict, base_size: int = 96) -> int:
    """Display size in density-independent units."""
    return int(base_size * size_factor(pet))


def set_happiness(pet: dict, happiness: int, now: datetime | None = None) -> dict:
    """Return a copy with clamped happiness and a refreshed interaction time."""
    updated = copy.deepcopy(pet)
    updated["happiness"] = clamp_happiness(happiness)
    updated["last_interaction_time"] = to_epoch_millis(now or get_current_time())
    return updated
