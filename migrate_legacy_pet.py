#!/usr/bin/env python3
"""
WalkPet Legacy Pet Migration

One-shot upgrade of a legacy flat pet record (legacy_pet.json) into the
leveled progress record (state.json). Skips when state.json is already
marked as migrated.
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
from progress_calc.migration import migrate
from progress_calc.streaks import new_streak_state
from progress_calc.time_utils import get_current_time, to_iso8601


def build_migrated_state(previous_state: dict | None, legacy: dict) -> dict:
    """Merge a migrated pet into the existing record, keeping streak data."""
    now = get_current_time()
    state = dict(previous_state or {})
    state.pop("legacy_pet", None)
    state["pet"] = migrate(legacy, now=now)
    state.setdefault("streak", new_streak_state())
    state["legacy_migrated"] = True
    state["last_updated"] = to_iso8601(now)
    return state


def main() -> int:
    logging.basicConfig(level=get_log_level(), format="%(levelname)s %(name)s: %(message)s")

    state_dir = get_state_dir()
    legacy_file = state_dir / "legacy_pet.json"
    state_file = state_dir / "state.json"

    previous_state = load_previous_state(state_file)
    if previous_state and previous_state.get("legacy_migrated"):
        print("Legacy pet already migrated, nothing to do")
        return 0

    legacy = load_json_file(legacy_file)
    if legacy is None and previous_state:
        legacy = previous_state.get("legacy_pet")
    if not isinstance(legacy, dict):
        print(f"Error: {legacy_file} not found and state.json has no legacy_pet")
        return 1

    try:
        state = build_migrated_state(previous_state, legacy)
    except InvalidInputError as e:
        print(f"Error: invalid legacy record: {e}")
        return 1

    try:
        write_json_file(state_file, state)
    except OSError as e:
        print(f"Error writing state file: {e}")
        return 1

    pet = state["pet"]
    print("Legacy pet migrated:")
    print(f"  type={pet['type']}")
    print(f"  name={pet['name']}")
    print(f"  level={pet['level']['level']}")
    print(f"  total_exp={pet['level']['total_exp']}")
    print(f"  happiness={pet['happiness']}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
