"""State object builder for WalkPet."""

import logging
import math
from datetime import datetime

from .constants import DEFAULT_HAPPINESS, DEFAULT_PET_TYPE, PET_TYPES, PROGRESS_MILESTONES
from .errors import InvalidInputError
from .experience import exp_progress, exp_to_next_level, normalize_level_info
from .growth import build_evolution
from .migration import migrate, needs_migration
from .pet_rules import calculate_mood, calculate_progress_percent, is_night_mode, is_walking_signal
from .progression import (
    apply_step_total,
    clamp_happiness,
    current_animation,
    create_pet,
    normalize_pet_name,
    pet_personality,
    pet_stage,
    size_factor,
)
from .rewards import earns_friend_coupon, reward_tier
from .streaks import (
    check_new_milestone,
    check_streak_milestone,
    is_success_day,
    mark_milestone_shown,
    new_streak_state,
    normalize_streak_state,
    roll_over_cycle,
    weekly_achievements,
)
from .time_utils import (
    get_current_time,
    get_timezone_name,
    get_today_date,
    to_epoch_millis,
    to_float,
    to_int,
    to_iso8601,
)

logger = logging.getLogger(__name__)


def parse_reading(reading: dict) -> dict:
    """
    Validate a step reading handed over by the sensor layer.

    `total_steps` is the running lifetime total; `steps_today` and `goal`
    describe the current cycle.
    """
    if not isinstance(reading, dict):
        raise InvalidInputError("reading must be a JSON object")
    if "total_steps" not in reading or "goal" not in reading:
        raise InvalidInputError("reading requires total_steps and goal")

    parsed = {
        "total_steps": to_int(reading.get("total_steps"), -1),
        "steps_today": to_int(reading.get("steps_today", 0), -1),
        "goal": to_int(reading.get("goal"), -1),
    }
    for key, value in parsed.items():
        if value < 0:
            raise InvalidInputError(f"{key} must be a non-negative integer, got {reading.get(key)!r}")

    if "is_walking" in reading:
        parsed["is_walking"] = bool(reading["is_walking"])
    if reading.get("achievement_rate") is not None:
        rate = to_float(reading["achievement_rate"], -1.0)
        if not math.isfinite(rate) or rate < 0:
            raise InvalidInputError(
                f"achievement_rate must be a finite non-negative number, got {reading['achievement_rate']!r}"
            )
        parsed["achievement_rate"] = rate
    parsed["pet_type"] = reading.get("pet_type") or DEFAULT_PET_TYPE
    parsed["pet_name"] = reading.get("pet_name")
    return parsed


def _normalize_pet(raw: dict) -> dict:
    """Fill missing pet fields from older or partial records."""
    pet_type = raw.get("type") if raw.get("type") in PET_TYPES else DEFAULT_PET_TYPE
    return {
        "type": pet_type,
        "name": normalize_pet_name(raw.get("name"), pet_type),
        "level": normalize_level_info(raw.get("level")),
        "happiness": clamp_happiness(to_int(raw.get("happiness"), DEFAULT_HAPPINESS)),
        "last_interaction_time": max(0, to_int(raw.get("last_interaction_time"), 0)),
    }


def calculate_state(previous_state: dict | None, reading: dict, now: datetime | None = None) -> dict:
    """
    Calculate the new progress record from the previous record and a step reading.
    """
    reading = parse_reading(reading)
    now = now or get_current_time()
    today = get_today_date(now)
    timezone_name = get_timezone_name()
    total_steps = reading["total_steps"]

    previous_progress = {}
    legacy_migrated = False
    if needs_migration(previous_state):
        # Legacy walking history is already folded into the migrated level.
        pet = migrate(previous_state["legacy_pet"], now=now)
        streak = normalize_streak_state(previous_state.get("streak"))
        converted_steps = total_steps
        previous_stage = None
        legacy_migrated = True
    elif previous_state:
        pet = _normalize_pet(previous_state.get("pet") or {})
        streak = normalize_streak_state(previous_state.get("streak"))
        previous_progress = previous_state.get("progress") or {}
        converted_steps = max(0, to_int(previous_progress.get("converted_steps"), total_steps))
        previous_stage = pet_stage(pet)
        legacy_migrated = bool(previous_state.get("legacy_migrated", False))
    else:
        # New pet starts as an egg; only steps from now on count toward hatching.
        pet = create_pet(reading["pet_type"], reading["pet_name"], now=now)
        streak = new_streak_state()
        converted_steps = total_steps
        previous_stage = None

    # Close the previous goal cycle at local day rollover.
    streak_before = streak["consecutive_days"]
    prior_percent = to_float(previous_progress.get("progress_percent"), 0.0)
    streak = roll_over_cycle(streak, prior_percent, today)
    streak_changed = streak["cycle_date"] == today and streak["consecutive_days"] != streak_before

    pet, converted_steps, leveled_up, evolved = apply_step_total(pet, total_steps, converted_steps)

    progress_percent = calculate_progress_percent(reading["steps_today"], reading["goal"])
    milestone = check_new_milestone(streak, progress_percent)
    if milestone is not None:
        # Lower rungs are covered by the one being shown.
        for rung in PROGRESS_MILESTONES:
            if rung <= milestone:
                streak = mark_milestone_shown(streak, rung)

    is_walking = reading.get("is_walking", is_walking_signal(reading["steps_today"], reading["goal"]))
    night_mode = is_night_mode(now, timezone_name)
    stage = pet_stage(pet)
    achievement_rate = reading.get("achievement_rate", float(progress_percent))

    evolution = build_evolution(previous_stage if evolved else None, stage)
    if evolution["just_occurred"]:
        logger.info("%s evolved: %s -> %s", pet["name"], previous_stage, stage)
    elif leveled_up:
        logger.info("%s reached level %d", pet["name"], pet["level"]["level"])
    if leveled_up:
        pet["last_interaction_time"] = to_epoch_millis(now)

    return {
        "last_updated": to_iso8601(now),
        "legacy_migrated": legacy_migrated,
        "pet": pet,
        "streak": streak,
        "progress": {
            "day": streak["cycle_date"],
            "converted_steps": converted_steps,
            "steps_today": reading["steps_today"],
            "goal": reading["goal"],
            "progress_percent": progress_percent,
            "achievement_rate": achievement_rate,
        },
        "derived": {
            "stage": stage,
            "personality": pet_personality(pet),
            "animation": current_animation(pet, is_walking, progress_percent, night_mode),
            "mood": calculate_mood(pet, progress_percent, streak["consecutive_days"]),
            "size_factor": size_factor(pet),
            "exp_progress": round(exp_progress(pet["level"]), 4),
            "exp_to_next_level": exp_to_next_level(pet["level"]),
            "is_night_mode": night_mode,
            "is_walking": is_walking,
            "weekly_achievements": weekly_achievements(
                streak, streak["cycle_date"], achieved_today=is_success_day(progress_percent)
            ),
        },
        "reward": dict(reward_tier(achievement_rate), friend_coupon=earns_friend_coupon(achievement_rate)),
        "events": {
            "leveled_up": leveled_up,
            "evolution": evolution,
            "milestone": milestone,
            "streak_milestone": check_streak_milestone(streak["consecutive_days"]) if streak_changed else None,
        },
    }
