#!/usr/bin/env python3
"""
WalkPet Progress Calculator

Folds the latest step reading into the pet's progress record.
Reads reading.json and state.json, writes state.json.

Environment Variables:
    WALKPET_STATE_DIR: Directory holding state.json and reading.json (default: .walkpet)
    WALKPET_TIMEZONE: IANA timezone used for the daily goal cycle (default: UTC)
    WALKPET_LOG_LEVEL: Logging level (default: INFO)
"""

import logging
import sys
from pathlib import Path

SCRIPT_DIR = Path(__file__).resolve().parent
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from progress_calc.config import get_log_level, get_state_dir
from progress_calc.errors import InvalidInputError
from progress_calc.io_utils import load_json_file, load_previous_state, write_json_file
from progress_calc.rewards import format_price
from progress_calc.state_builder import calculate_state
from progress_calc.time_utils import get_current_time


def print_summary(state: dict) -> None:
    pet = state["pet"]
    level = pet["level"]
    derived = state["derived"]
    progress = state["progress"]
    events = state["events"]

    print(f"  Name: {pet['name']} ({pet['type']}, {derived['personality']})")
    print(f"  Level: {level['level']} ({level['total_exp']} exp, {derived['exp_progress'] * 100:.0f}% to next)")
    print(f"  Stage: {derived['stage']}")
    print(f"  Animation: {derived['animation']}")
    print(f"  Mood: {derived['mood']}")
    print(f"  Today: {progress['steps_today']}/{progress['goal']} steps ({progress['progress_percent']}%)")
    print(f"  Streak: {state['streak']['consecutive_days']} days")
    print(f"  Reward tier: {state['reward']['tier']} (next price {format_price(state['reward']['effective_price'])})")

    print("\nEvents:")
    print(f"  leveled_up={str(events['leveled_up']).lower()}")
    print(f"  evolved={str(events['evolution']['just_occurred']).lower()}")
    print(f"  milestone={events['milestone']}")
    print(f"  streak_milestone={events['streak_milestone']}")


def main() -> int:
    """Main entry point."""
    logging.basicConfig(level=get_log_level(), format="%(levelname)s %(name)s: %(message)s")

    print("=" * 50)
    print("WalkPet Progress Calculator")
    print("=" * 50)

    state_dir = get_state_dir()
    reading_file = state_dir / "reading.json"
    state_file = state_dir / "state.json"

    reading = load_json_file(reading_file)
    if reading is None:
        print(f"Error: {reading_file} not found or unreadable")
        return 1

    previous_state = load_previous_state(state_file)
    print(f"\nPrevious state: {'found' if previous_state else 'none (new pet)'}")

    print("\nCalculating progress...")
    try:
        new_state = calculate_state(previous_state, reading, now=get_current_time())
    except InvalidInputError as e:
        print(f"Error: invalid reading: {e}")
        return 1

    print_summary(new_state)

    print(f"\nWriting {state_file}...")
    try:
        write_json_file(state_file, new_state)
    except OSError as e:
        print(f"Error writing state file: {e}")
        return 1

    print("\n" + "=" * 50)
    print("Progress calculation complete!")
    print("=" * 50)

    return 0


if __name__ == "__main__":
    sys.exit(main())
