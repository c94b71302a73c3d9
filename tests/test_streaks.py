import sys
import unittest
from pathlib import Path


SCRIPT_DIR = Path(__file__).resolve().parents[1]
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from progress_calc import streaks
from progress_calc.errors import InvalidInputError


def streak_state(consecutive_days: int, cycle_date: str | None, milestones_shown=None, **extra) -> dict:
    state = streaks.new_streak_state()
    state.update(
        {
            "consecutive_days": consecutive_days,
            "longest_streak": consecutive_days,
            "cycle_date": cycle_date,
            "milestones_shown": list(milestones_shown or []),
        }
    )
    state.update(extra)
    return state


class CycleRolloverTests(unittest.TestCase):
    def test_first_cycle_only_opens_today(self) -> None:
        state = streaks.roll_over_cycle(streaks.new_streak_state(), prior_percent=100, today="2026-02-13")
        self.assertEqual(state["cycle_date"], "2026-02-13")
        self.assertEqual(state["consecutive_days"], 0)

    def test_discount_level_day_extends_streak_and_clears_milestones(self) -> None:
        state = streak_state(2, "2026-02-12", milestones_shown=[10, 50, 80])
        updated = streaks.roll_over_cycle(state, prior_percent=80.0, today="2026-02-13")

        self.assertEqual(updated["consecutive_days"], 3)
        self.assertEqual(updated["longest_streak"], 3)
        self.assertEqual(updated["last_achieved_date"], "2026-02-12")
        self.assertEqual(updated["milestones_shown"], [])
        self.assertEqual(updated["cycle_date"], "2026-02-13")
        self.assertEqual(state["consecutive_days"], 2)

    def test_missed_day_resets_streak(self) -> None:
        state = streak_state(9, "2026-02-12", longest_streak=12)
        updated = streaks.roll_over_cycle(state, prior_percent=79.9, today="2026-02-13")
        self.assertEqual(updated["consecutive_days"], 0)
        self.assertEqual(updated["longest_streak"], 12)

    def test_skipped_calendar_days_break_streak(self) -> None:
        state = streak_state(4, "2026-02-10")
        updated = streaks.roll_over_cycle(state, prior_percent=100, today="2026-02-13")
        self.assertEqual(updated["consecutive_days"], 0)
        self.assertEqual(updated["longest_streak"], 5)

    def test_same_day_rollover_is_noop(self) -> None:
        state = streak_state(4, "2026-02-13", milestones_shown=[10, 20])
        self.assertEqual(streaks.roll_over_cycle(state, prior_percent=0, today="2026-02-13"), state)

    def test_earlier_cycle_date_keeps_streak_and_flags(self) -> None:
        state = streak_state(4, "2026-02-14", milestones_shown=[10, 90])
        with self.assertLogs("progress_calc.streaks", level="WARNING"):
            updated = streaks.roll_over_cycle(state, prior_percent=100, today="2026-02-13")
        self.assertEqual(updated, state)

        forward = streaks.roll_over_cycle(updated, prior_percent=100, today="2026-02-14")
        self.assertEqual(forward, state)

    def test_invalid_cycle_date_is_rejected(self) -> None:
        with self.assertRaises(InvalidInputError):
            streaks.roll_over_cycle(streaks.new_streak_state(), prior_percent=0, today="13/02/2026")

    def test_success_day_policy_is_lenient(self) -> None:
        self.assertTrue(streaks.is_success_day(80))
        self.assertTrue(streaks.is_success_day(100))
        self.assertFalse(streaks.is_success_day(79.99))


class MilestoneTests(unittest.TestCase):
    def test_returns_highest_unshown_milestone(self) -> None:
        state = streak_state(0, "2026-02-13")
        self.assertIsNone(streaks.check_new_milestone(state, 9))
        self.assertEqual(streaks.check_new_milestone(state, 55), 50)
        self.assertEqual(streaks.check_new_milestone(state, 100), 100)

        shown = streaks.mark_milestone_shown(state, 50)
        self.assertEqual(streaks.check_new_milestone(shown, 55), 40)

    def test_never_repeats_within_a_cycle(self) -> None:
        state = streak_state(0, "2026-02-13")
        returned = []
        for percent in (5, 12, 25, 25, 31, 47, 47, 60, 85, 100, 100, 100, 100):
            milestone = streaks.check_new_milestone(state, percent)
            if milestone is not None:
                returned.append(milestone)
                state = streaks.mark_milestone_shown(state, milestone)

        self.assertEqual(len(returned), len(set(returned)))
        self.assertEqual(returned[:7], [10, 20, 30, 40, 60, 80, 100])

    def test_mark_is_idempotent_and_rollover_rearms(self) -> None:
        state = streak_state(1, "2026-02-12")
        state = streaks.mark_milestone_shown(state, 50)
        state = streaks.mark_milestone_shown(state, 50)
        self.assertEqual(state["milestones_shown"], [50])
        self.assertEqual(streaks.check_new_milestone(state, 50), 40)

        next_day = streaks.roll_over_cycle(state, prior_percent=50, today="2026-02-13")
        self.assertEqual(streaks.check_new_milestone(next_day, 50), 50)

    def test_streak_milestones(self) -> None:
        self.assertEqual(streaks.check_streak_milestone(3), 3)
        self.assertEqual(streaks.check_streak_milestone(100), 100)
        self.assertIsNone(streaks.check_streak_milestone(8))
        self.assertIsNone(streaks.check_streak_milestone(0))
        self.assertEqual(streaks.next_streak_milestone(0), 3)
        self.assertEqual(streaks.next_streak_milestone(7), 14)
        self.assertIsNone(streaks.next_streak_milestone(100))


class WeeklyAchievementTests(unittest.TestCase):
    def test_weekly_achievements_estimates_from_streak(self) -> None:
        # 2026-02-13 is a Friday; the week starts on Sunday 2026-02-08.
        state = streak_state(2, "2026-02-13", last_achieved_date="2026-02-12")
        self.assertEqual(
            streaks.weekly_achievements(state, "2026-02-13", achieved_today=False),
            [False, False, False, True, True, False, False],
        )
        self.assertEqual(
            streaks.weekly_achievements(state, "2026-02-13", achieved_today=True)[5],
            True,
        )
        self.assertEqual(streaks.weekly_achievements(state, "bad", achieved_today=True), [False] * 7)


class NormalizeStreakStateTests(unittest.TestCase):
    def test_fills_defaults_and_filters_bad_values(self) -> None:
        self.assertEqual(streaks.normalize_streak_state(None), streaks.new_streak_state())
        normalized = streaks.normalize_streak_state(
            {
                "consecutive_days": "4",
                "cycle_date": "not-a-date",
                "last_achieved_date": "2026-02-12",
                "milestones_shown": [20, "10", 15, None, 20],
            }
        )
        self.assertEqual(
            normalized,
            {
                "consecutive_days": 4,
                "longest_streak": 4,
                "cycle_date": None,
                "last_achieved_date": "2026-02-12",
                "milestones_shown": [10, 20],
            },
        )


if __name__ == "__main__":
    unittest.main()
