"""Growth stage resolution and evolution detection."""

from .constants import GROWTH_STAGES

STAGE_ORDER = [entry["stage"] for entry in GROWTH_STAGES]
_STAGES_BY_NAME = {entry["stage"]: entry for entry in GROWTH_STAGES}


def stage_from_level(level: int) -> str:
    """
    Map a level to its growth stage.

    Stages: egg -> baby -> teen -> adult
    Anything at or below 0 is still an egg.
    """
    if level <= 0:
        return "egg"
    for entry in GROWTH_STAGES:
        low, high = entry["levels"]
        if level >= low and (high is None or level <= high):
            return entry["stage"]
    return STAGE_ORDER[-1]


def stage_info(stage: str) -> dict:
    """Return the stage table entry; unknown names raise KeyError."""
    return _STAGES_BY_NAME[stage]


def stage_rank(stage: str) -> int:
    return STAGE_ORDER.index(stage)


def size_multiplier(stage: str) -> float:
    return stage_info(stage)["size_multiplier"]


def check_stage_evolution(old: dict, new: dict) -> bool:
    """True when two level records fall in different stages."""
    return stage_from_level(new["level"]) != stage_from_level(old["level"])


def build_evolution(previous_stage: str | None, current_stage: str) -> dict:
    """
    Build the one-shot evolution event for the persisted record.

    The flag is only set on the run where the stage actually changed, so the
    presentation layer shows the evolution dialog once.
    """
    if previous_stage is not None and previous_stage != current_stage:
        return {
            "just_occurred": True,
            "previous_stage": previous_stage,
            "new_stage": current_stage,
        }
    return {
        "just_occurred": False,
        "previous_stage": None,
        "new_stage": None,
    }
