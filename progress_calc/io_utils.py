"""JSON file IO helpers for the persisted progress record."""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def load_json_file(path: Path) -> dict | None:
    """Load a JSON object from disk; missing or unreadable files yield None."""
    if not path.exists():
        return None

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Could not load %s: %s", path, e)
        return None

    if not isinstance(data, dict):
        logger.warning("Ignoring %s: expected a JSON object", path)
        return None
    return data


def load_previous_state(state_file: Path) -> dict | None:
    """Load previous state from state.json if it exists."""
    return load_json_file(state_file)


def write_json_file(path: Path, data: dict) -> None:
    """Write data to JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
