"""Consecutive-day streaks and one-shot progress milestones."""

import copy
import logging
from datetime import timedelta

from .constants import PROGRESS_MILESTONES, STREAK_MILESTONES, THRESHOLD_DISCOUNT
from .errors import InvalidInputError
from .time_utils import parse_iso_date, to_int

logger = logging.getLogger(__name__)


def new_streak_state() -> dict:
    return {
        "consecutive_days": 0,
        "longest_streak": 0,
        "cycle_date": None,
        "last_achieved_date": None,
        "milestones_shown": [],
    }


def normalize_streak_state(raw: dict | None) -> dict:
    """Fill missing keys and coerce persisted values."""
    state = new_streak_state()
    if not isinstance(raw, dict):
        return state

    state["consecutive_days"] = max(0, to_int(raw.get("consecutive_days"), 0))
    state["longest_streak"] = max(state["consecutive_days"], to_int(raw.get("longest_streak"), 0))
    if parse_iso_date(raw.get("cycle_date")):
        state["cycle_date"] = raw["cycle_date"]
    if parse_iso_date(raw.get("last_achieved_date")):
        state["last_achieved_date"] = raw["last_achieved_date"]
    shown = raw.get("milestones_shown")
    if isinstance(shown, list):
        state["milestones_shown"] = sorted({to_int(m, -1) for m in shown} & set(PROGRESS_MILESTONES))
    return state


def is_success_day(achievement_percent: float) -> bool:
    """A day counts toward the streak once it reaches the discount threshold."""
    return achievement_percent >= THRESHOLD_DISCOUNT


def roll_over_cycle(state: dict, prior_percent: float, today: str) -> dict:
    """
    Close the previous goal cycle and open `today`.

    The prior cycle's achievement extends or resets the streak. Calendar
    days skipped entirely count as missed. Milestone flags are cleared.
    Rolling over onto the current cycle date, or onto an earlier one (clock
    skew or a timezone change), is a no-op.
    """
    updated = copy.deepcopy(state)
    previous_day = parse_iso_date(state.get("cycle_date"))
    current_day = parse_iso_date(today)
    if current_day is None:
        raise InvalidInputError(f"Invalid cycle date: {today!r}")

    if previous_day == current_day:
        return updated
    if previous_day is not None and current_day < previous_day:
        logger.warning("Cycle date %s is before stored cycle %s; keeping streak", today, state.get("cycle_date"))
        return updated

    if previous_day is not None:
        if is_success_day(prior_percent):
            updated["consecutive_days"] = updated["consecutive_days"] + 1
            updated["last_achieved_date"] = previous_day.isoformat()
            updated["longest_streak"] = max(updated.get("longest_streak", 0), updated["consecutive_days"])
        else:
            updated["consecutive_days"] = 0

        if (current_day - previous_day).days > 1 and updated["consecutive_days"] > 0:
            logger.info("Streak of %d broken by missed days", updated["consecutive_days"])
            updated["consecutive_days"] = 0

    updated["longest_streak"] = max(updated.get("longest_streak", 0), updated["consecutive_days"])
    updated["cycle_date"] = today
    updated["milestones_shown"] = []
    return updated


def check_new_milestone(state: dict, progress_percent: float) -> int | None:
    """
    Return the highest progress milestone reached but not yet shown this cycle.

    Callers must follow up with `mark_milestone_shown` once it is displayed.
    """
    shown = set(state.get("milestones_shown", []))
    reached = [m for m in PROGRESS_MILESTONES if m <= progress_percent and m not in shown]
    if not reached:
        return None
    return max(reached)


def mark_milestone_shown(state: dict, milestone: int) -> dict:
    """Idempotently flag a milestone as shown for the current cycle."""
    updated = copy.deepcopy(state)
    updated["milestones_shown"] = sorted(set(updated.get("milestones_shown", [])) | {milestone})
    return updated


def check_streak_milestone(consecutive_days: int) -> int | None:
    """Streak length milestone hit exactly by `consecutive_days`, if any."""
    if consecutive_days in STREAK_MILESTONES:
        return consecutive_days
    return None


def next_streak_milestone(consecutive_days: int) -> int | None:
    for milestone in STREAK_MILESTONES:
        if milestone > consecutive_days:
            return milestone
    return None


def weekly_achievements(state: dict, today: str, achieved_today: bool) -> list[bool]:
    """
    Sunday-to-Saturday achievement flags for the current week.

    Past days are estimated from the streak length; future days are False.
    """
    current_day = parse_iso_date(today)
    if current_day is None:
        return [False] * 7

    # date.weekday(): Monday=0 .. Sunday=6
    week_start = current_day - timedelta(days=(current_day.weekday() + 1) % 7)
    last_achieved = state.get("last_achieved_date")
    streak = max(0, to_int(state.get("consecutive_days"), 0))

    flags = []
    for offset in range(7):
        day = week_start + timedelta(days=offset)
        if day == current_day:
            flags.append(bool(achieved_today) or day.isoformat() == last_achieved)
        elif day > current_day:
            flags.append(False)
        else:
            flags.append(day.isoformat() == last_achieved or (current_day - day).days <= streak)
    return flags
