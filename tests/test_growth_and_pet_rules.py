import os
import sys
import unittest
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import patch


SCRIPT_DIR = Path(__file__).resolve().parents[1]
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from progress_calc import growth, pet_rules
from progress_calc.constants import EGG_ANIMATIONS, PET_ANIMATIONS
from progress_calc.experience import new_level_info


class GrowthStageTests(unittest.TestCase):
    def test_stage_from_level_boundaries(self) -> None:
        self.assertEqual(growth.stage_from_level(0), "egg")
        self.assertEqual(growth.stage_from_level(1), "baby")
        self.assertEqual(growth.stage_from_level(10), "baby")
        self.assertEqual(growth.stage_from_level(11), "teen")
        self.assertEqual(growth.stage_from_level(20), "teen")
        self.assertEqual(growth.stage_from_level(21), "adult")
        self.assertEqual(growth.stage_from_level(500), "adult")
        self.assertEqual(growth.stage_from_level(-3), "egg")

    def test_stages_partition_levels_in_order(self) -> None:
        previous_rank = 0
        for level in range(0, 200):
            rank = growth.stage_rank(growth.stage_from_level(level))
            self.assertIn(rank, (previous_rank, previous_rank + 1))
            previous_rank = rank
        self.assertEqual(growth.STAGE_ORDER, ["egg", "baby", "teen", "adult"])

    def test_size_multipliers(self) -> None:
        self.assertEqual(growth.size_multiplier("egg"), 0.8)
        self.assertEqual(growth.size_multiplier("baby"), 1.0)
        self.assertEqual(growth.size_multiplier("teen"), 1.2)
        self.assertEqual(growth.size_multiplier("adult"), 1.5)

    def test_check_stage_evolution_implies_level_up_only(self) -> None:
        self.assertTrue(growth.check_stage_evolution(new_level_info(10), new_level_info(11)))
        self.assertTrue(growth.check_stage_evolution(new_level_info(0), new_level_info(1)))
        self.assertFalse(growth.check_stage_evolution(new_level_info(3), new_level_info(9)))

    def test_build_evolution_only_fires_on_stage_change(self) -> None:
        self.assertEqual(
            growth.build_evolution("baby", "teen"),
            {"just_occurred": True, "previous_stage": "baby", "new_stage": "teen"},
        )
        self.assertFalse(growth.build_evolution("teen", "teen")["just_occurred"])
        self.assertFalse(growth.build_evolution(None, "baby")["just_occurred"])


class AnimationSelectionTests(unittest.TestCase):
    def test_egg_animation_follows_progress_only(self) -> None:
        self.assertEqual(pet_rules.select_animation("egg", False, 0, False), "idle")
        self.assertEqual(pet_rules.select_animation("egg", True, 49, False), "idle")
        self.assertEqual(pet_rules.select_animation("egg", False, 50, True), "wobble")
        self.assertEqual(pet_rules.select_animation("egg", False, 89, False), "wobble")
        self.assertEqual(pet_rules.select_animation("egg", False, 90, True), "crack")
        self.assertEqual(pet_rules.select_animation("egg", False, 150, False), "crack")

    def test_hatched_pet_animation_priority(self) -> None:
        self.assertEqual(pet_rules.select_animation("baby", True, 95, True), "sneak")
        self.assertEqual(pet_rules.select_animation("teen", False, 90, False), "run")
        self.assertEqual(pet_rules.select_animation("adult", True, 89, False), "walk")
        self.assertEqual(pet_rules.select_animation("baby", False, 10, False), "idle")

    def test_reachable_animation_sets_per_stage(self) -> None:
        for stage in growth.STAGE_ORDER:
            allowed = EGG_ANIMATIONS if stage == "egg" else PET_ANIMATIONS
            for is_walking in (False, True):
                for is_night in (False, True):
                    for percent in (0, 25, 50, 75, 90, 100, 130):
                        animation = pet_rules.select_animation(stage, is_walking, percent, is_night)
                        self.assertIn(animation, allowed)

    def test_animation_config_and_folder(self) -> None:
        self.assertEqual(pet_rules.animation_config("baby", "run"), {"frame_count": 6, "frame_duration_ms": 100})
        self.assertEqual(pet_rules.animation_config("egg", "wobble"), {"frame_count": 2, "frame_duration_ms": 300})
        self.assertEqual(pet_rules.animation_config("teen", "hatch"), {"frame_count": 4, "frame_duration_ms": 200})
        self.assertEqual(pet_rules.animation_folder("shiba", "baby", "idle"), "pets/shiba/baby/idle/")
        self.assertEqual(pet_rules.animation_folder("penguin", "egg", "crack"), "pets/egg/crack/")


class ProgressAndMoodTests(unittest.TestCase):
    def test_calculate_progress_percent(self) -> None:
        self.assertEqual(pet_rules.calculate_progress_percent(5000, 10000), 50)
        self.assertEqual(pet_rules.calculate_progress_percent(12345, 10000), 123)
        self.assertEqual(pet_rules.calculate_progress_percent(500, 0), 0)

    def test_is_walking_signal_includes_goal_achieved(self) -> None:
        self.assertFalse(pet_rules.is_walking_signal(0, 8000))
        self.assertTrue(pet_rules.is_walking_signal(4000, 8000))
        self.assertTrue(pet_rules.is_walking_signal(9000, 8000))

    def test_is_night_mode_uses_configured_window(self) -> None:
        late = datetime(2026, 2, 13, 23, 30, tzinfo=timezone.utc)
        noon = datetime(2026, 2, 13, 12, 0, tzinfo=timezone.utc)
        with patch.dict(os.environ, {"WALKPET_NIGHT_START_HOUR": "22", "WALKPET_NIGHT_END_HOUR": "6"}):
            self.assertTrue(pet_rules.is_night_mode(late, "UTC"))
            self.assertFalse(pet_rules.is_night_mode(noon, "UTC"))
        with patch.dict(os.environ, {"WALKPET_NIGHT_START_HOUR": "11", "WALKPET_NIGHT_END_HOUR": "13"}):
            self.assertTrue(pet_rules.is_night_mode(noon, "UTC"))

    def test_calculate_mood_all_branches(self) -> None:
        self.assertEqual(pet_rules.calculate_mood({"happiness": 10}, 120, 5), "sad")
        self.assertEqual(pet_rules.calculate_mood({"happiness": 80}, 100, 3), "ecstatic")
        self.assertEqual(pet_rules.calculate_mood({"happiness": 80}, 100, 2), "proud")
        self.assertEqual(pet_rules.calculate_mood({"happiness": 80}, 60, 0), "happy")
        self.assertEqual(pet_rules.calculate_mood({"happiness": 80}, 10, 9), "content")


if __name__ == "__main__":
    unittest.main()
