"""Shared constants for the WalkPet progression engine."""

DEFAULT_TIMEZONE = "UTC"
DEFAULT_STATE_DIR = ".walkpet"

# Experience
STEPS_PER_EXP = 100
EXP_CURVE_FACTOR = 50

# Growth stages in evolution order. Ranges are inclusive; None means unbounded.
GROWTH_STAGES = [
    {"stage": "egg", "levels": (0, 0), "size_multiplier": 0.8, "display_name": "Egg", "folder": "egg"},
    {"stage": "baby", "levels": (1, 10), "size_multiplier": 1.0, "display_name": "Baby", "folder": "baby"},
    {"stage": "teen", "levels": (11, 20), "size_multiplier": 1.2, "display_name": "Teen", "folder": "teen"},
    {"stage": "adult", "levels": (21, None), "size_multiplier": 1.5, "display_name": "Adult", "folder": "adult"},
]

# Animation categories
ANIMATION_IDLE = "idle"
ANIMATION_WALK = "walk"
ANIMATION_RUN = "run"
ANIMATION_SNEAK = "sneak"
ANIMATION_WOBBLE = "wobble"
ANIMATION_CRACK = "crack"
ANIMATION_HATCH = "hatch"
ANIMATION_BARK = "bark"

EGG_ANIMATIONS = {ANIMATION_IDLE, ANIMATION_WOBBLE, ANIMATION_CRACK}
PET_ANIMATIONS = {ANIMATION_IDLE, ANIMATION_WALK, ANIMATION_RUN, ANIMATION_SNEAK}

EGG_WOBBLE_PERCENT = 50
EGG_CRACK_PERCENT = 90
RUN_PERCENT = 90

DEFAULT_ANIMATION_CONFIG = {"frame_count": 4, "frame_duration_ms": 200}

PET_ANIMATION_FRAMES = {
    ANIMATION_IDLE: {"frame_count": 8, "frame_duration_ms": 200},
    ANIMATION_WALK: {"frame_count": 4, "frame_duration_ms": 200},
    ANIMATION_RUN: {"frame_count": 6, "frame_duration_ms": 100},
    ANIMATION_BARK: {"frame_count": 6, "frame_duration_ms": 200},
    ANIMATION_SNEAK: {"frame_count": 8, "frame_duration_ms": 200},
}

# Eggs are mostly still frames.
EGG_ANIMATION_FRAMES = {
    ANIMATION_IDLE: {"frame_count": 1, "frame_duration_ms": 200},
    ANIMATION_WOBBLE: {"frame_count": 2, "frame_duration_ms": 300},
    ANIMATION_CRACK: {"frame_count": 1, "frame_duration_ms": 200},
    ANIMATION_HATCH: {"frame_count": 3, "frame_duration_ms": 500},
}

# Companion archetypes
PET_TYPES = {
    "shiba": {"display_name": "Mungi", "personality": "loyal", "folder": "shiba"},
    "cat": {"display_name": "Nyangi", "personality": "tsundere", "folder": "cat"},
    "pig": {"display_name": "Oinky", "personality": "foodie", "folder": "pig"},
    "raccoon": {"display_name": "Rocky", "personality": "playful", "folder": "raccoon"},
    "hamster": {"display_name": "Hammy", "personality": "timid", "folder": "hamster"},
    "penguin": {"display_name": "Pengpeng", "personality": "clumsy", "folder": "penguin"},
}
DEFAULT_PET_TYPE = "shiba"
MAX_PET_NAME_LENGTH = 12
DEFAULT_HAPPINESS = 100
MIN_HAPPINESS = 0
MAX_HAPPINESS = 100

# Legacy (pre-level) pet archetypes collapse onto the new ones.
LEGACY_PET_TYPE_MAP = {
    "DOG1": "shiba",
    "DOG2": "shiba",
    "CAT1": "cat",
    "CAT2": "cat",
    "RAT": "hamster",
    "BIRD": "penguin",
}
LEGACY_HAPPINESS_SCALE = 20

# Subscription rewards. Credits are historical billing constants and are
# independent of the current monthly price.
MONTHLY_PRICE = 4700
FREE_CREDIT = 4900
DISCOUNT_CREDIT = 2400
THRESHOLD_FREE = 95
THRESHOLD_DISCOUNT = 80
THRESHOLD_FRIEND_COUPON = 95

TIER_FREE = "free"
TIER_DISCOUNT = "discount"
TIER_PENALTY = "penalty"

# Streaks and milestones
PROGRESS_MILESTONES = (10, 20, 30, 40, 50, 60, 70, 80, 90, 100)
STREAK_MILESTONES = (3, 7, 14, 21, 30, 60, 90, 100)

# Night mode window [start, end) in local hours.
NIGHT_START_HOUR = 22
NIGHT_END_HOUR = 6
