"""Subscription reward tiers derived from goal achievement."""

from .config import get_reward_config
from .constants import THRESHOLD_FRIEND_COUPON, TIER_DISCOUNT, TIER_FREE, TIER_PENALTY


def tier_for(achievement_percent: float, config: dict | None = None) -> str:
    """
    Map an achievement percentage to a reward tier.

    Thresholds are checked in order and lower bounds are inclusive:
    >= 95 is free, >= 80 is discount, anything else is penalty.
    """
    config = config or get_reward_config()
    if achievement_percent >= config["threshold_free"]:
        return TIER_FREE
    elif achievement_percent >= config["threshold_discount"]:
        return TIER_DISCOUNT
    else:
        return TIER_PENALTY


def credit_for(achievement_percent: float, config: dict | None = None) -> int:
    config = config or get_reward_config()
    tier = tier_for(achievement_percent, config)
    if tier == TIER_FREE:
        return config["free_credit"]
    if tier == TIER_DISCOUNT:
        return config["discount_credit"]
    return 0


def effective_price(achievement_percent: float, config: dict | None = None) -> int:
    """
    Price actually charged next cycle.

    The free credit is larger than the monthly price, so this clamps at 0.
    """
    config = config or get_reward_config()
    return max(0, config["monthly_price"] - credit_for(achievement_percent, config))


def reward_tier(achievement_percent: float, config: dict | None = None) -> dict:
    """Tier, credit, and effective price bundled for persistence."""
    config = config or get_reward_config()
    return {
        "tier": tier_for(achievement_percent, config),
        "credit": credit_for(achievement_percent, config),
        "effective_price": effective_price(achievement_percent, config),
    }


def earns_friend_coupon(achievement_percent: float) -> bool:
    return achievement_percent >= THRESHOLD_FRIEND_COUPON


def calculate_achievement_rate(successful_days: int, total_days: int) -> float:
    """Share of goal days met in a billing cycle, as a percentage."""
    if total_days <= 0:
        return 0.0
    return max(0.0, successful_days / total_days * 100)


def format_price(price: int) -> str:
    if price == 0:
        return "Free"
    return f"{price:,}"
