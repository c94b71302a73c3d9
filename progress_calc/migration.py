"""One-shot migration from the legacy flat pet record to the leveled model."""

import logging
from datetime import datetime

from .constants import (
    DEFAULT_PET_TYPE,
    LEGACY_HAPPINESS_SCALE,
    LEGACY_PET_TYPE_MAP,
)
from .errors import InvalidInputError
from .experience import exp_floor, level_from_exp, steps_to_exp
from .progression import clamp_happiness, create_pet
from .time_utils import to_int

logger = logging.getLogger(__name__)


def map_legacy_type(type_name: str | None) -> str:
    """
    Map a legacy archetype name onto the new pet types.

    Several legacy types collapse onto one new type. Unknown names fall back
    to the default type so an app upgrade never blocks on bad data.
    """
    pet_type = LEGACY_PET_TYPE_MAP.get((type_name or "").strip().upper())
    if pet_type is None:
        logger.warning("Unknown legacy pet type %r, falling back to %s", type_name, DEFAULT_PET_TYPE)
        return DEFAULT_PET_TYPE
    return pet_type


def needs_migration(state: dict | None) -> bool:
    """True when a persisted record still carries an unmigrated legacy pet."""
    if not isinstance(state, dict):
        return False
    return isinstance(state.get("legacy_pet"), dict) and not state.get("legacy_migrated", False)


def migrate(legacy: dict, now: datetime | None = None) -> dict:
    """
    Convert a legacy pet record into a leveled pet.

    Walking history becomes exp and a level, floored at 1 so existing users
    skip the egg. Happiness moves from the 1-5 scale to 0-100.
    """
    total_steps = to_int(legacy.get("total_walked_steps"), 0)
    if total_steps < 0:
        raise InvalidInputError(f"total_walked_steps must be non-negative, got {total_steps}")

    pet_type = map_legacy_type(legacy.get("type_name"))
    total_exp = steps_to_exp(total_steps)
    level = max(level_from_exp(total_exp), 1)
    total_exp = max(total_exp, exp_floor(1))
    happiness = clamp_happiness(to_int(legacy.get("happiness"), 0) * LEGACY_HAPPINESS_SCALE)

    pet = create_pet(pet_type, legacy.get("name"), level=level, happiness=happiness, now=now)
    pet["level"] = {
        "level": level,
        "current_exp": total_exp - exp_floor(level),
        "total_exp": total_exp,
    }

    logger.info(
        "Migrated legacy %s pet %r: %d steps -> level %d, happiness %d",
        legacy.get("type_name"),
        pet["name"],
        total_steps,
        level,
        happiness,
    )
    return pet
