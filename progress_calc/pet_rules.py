"""Pet animation, mood, and progress rules."""

from datetime import datetime

from .config import get_night_window
from .constants import (
    ANIMATION_CRACK,
    ANIMATION_IDLE,
    ANIMATION_RUN,
    ANIMATION_SNEAK,
    ANIMATION_WALK,
    ANIMATION_WOBBLE,
    DEFAULT_ANIMATION_CONFIG,
    EGG_ANIMATION_FRAMES,
    EGG_CRACK_PERCENT,
    EGG_WOBBLE_PERCENT,
    PET_ANIMATION_FRAMES,
    PET_TYPES,
    RUN_PERCENT,
)
from .growth import stage_info
from .time_utils import is_hour_in_window, to_local_time


def select_animation(stage: str, is_walking: bool, progress_percent: int, is_night_mode: bool) -> str:
    """
    Pick the animation category for the current signals.

    Stateless: the result depends only on the arguments. Eggs can only
    idle, wobble or crack; hatched pets never wobble or crack.
    """
    if stage == "egg":
        if progress_percent >= EGG_CRACK_PERCENT:
            return ANIMATION_CRACK
        elif progress_percent >= EGG_WOBBLE_PERCENT:
            return ANIMATION_WOBBLE
        else:
            return ANIMATION_IDLE
    elif is_night_mode:
        return ANIMATION_SNEAK
    elif progress_percent >= RUN_PERCENT:
        return ANIMATION_RUN
    elif is_walking:
        return ANIMATION_WALK
    else:
        return ANIMATION_IDLE


def animation_config(stage: str, animation: str) -> dict:
    """Frame count and duration for an animation, with a 4x200ms fallback."""
    frames = EGG_ANIMATION_FRAMES if stage == "egg" else PET_ANIMATION_FRAMES
    return dict(frames.get(animation, DEFAULT_ANIMATION_CONFIG))


def animation_folder(pet_type: str, stage: str, animation: str) -> str:
    """
    Asset folder for a sprite sheet, e.g. pets/shiba/baby/idle/.

    Eggs share one set of assets regardless of pet type.
    """
    if stage == "egg":
        return f"pets/egg/{animation}/"
    type_folder = PET_TYPES[pet_type]["folder"]
    return f"pets/{type_folder}/{stage_info(stage)['folder']}/{animation}/"


def calculate_progress_percent(steps: int, goal: int) -> int:
    """Whole-number percent of the daily goal; may exceed 100."""
    if goal <= 0:
        return 0
    return max(0, int(steps / goal * 100))


def is_walking_signal(steps: int, goal: int) -> bool:
    """Pet walks once the day has any progress, including after the goal is met."""
    return calculate_progress_percent(steps, goal) > 0


def is_night_mode(now: datetime, timezone_name: str | None = None) -> bool:
    """True when the local hour falls in the configured night window."""
    start, end = get_night_window()
    return is_hour_in_window(to_local_time(now, timezone_name).hour, start, end)


def calculate_mood(pet: dict, progress_percent: int, consecutive_days: int) -> str:
    """
    Calculate a coarse mood label for the presentation layer.

    Low happiness wins over goal progress.
    """
    if pet["happiness"] < 20:
        return "sad"
    elif progress_percent >= 100 and consecutive_days >= 3:
        return "ecstatic"
    elif progress_percent >= 100:
        return "proud"
    elif progress_percent >= 50:
        return "happy"
    else:
        return "content"
