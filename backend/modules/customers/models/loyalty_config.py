# backend/modules/customers/models/loyalty_config.py

"""Loyalty tier thresholds and the rules that place a customer in a tier."""

from typing import Any, Dict, List, Optional

from .customer_models import CustomerTier


# Ordered lowest to highest
DEFAULT_TIER_CONFIGS: List[Dict[str, Any]] = [
    {
        "tier_name": CustomerTier.BRONZE,
        "tier_order": 1,
        "min_lifetime_points": 0,
        "display_name": "Bronze",
        "description": "Welcome tier for new customers",
        "color_code": "#CD7F32",
    },
    {
        "tier_name": CustomerTier.SILVER,
        "tier_order": 2,
        "min_lifetime_points": 2000,
        "display_name": "Silver",
        "description": "For regular customers",
        "color_code": "#C0C0C0",
    },
    {
        "tier_name": CustomerTier.GOLD,
        "tier_order": 3,
        "min_lifetime_points": 5000,
        "display_name": "Gold",
        "description": "For valued customers",
        "color_code": "#FFD700",
    },
    {
        "tier_name": CustomerTier.PLATINUM,
        "tier_order": 4,
        "min_lifetime_points": 10000,
        "display_name": "Platinum",
        "description": "For our best customers",
        "color_code": "#E5E4E2",
    },
]

TIER_ORDER = {config["tier_name"]: config["tier_order"] for config in DEFAULT_TIER_CONFIGS}


def calculate_tier_for_points(lifetime_points: int) -> CustomerTier:
    """Highest tier whose lifetime-points threshold has been reached"""
    for tier_config in reversed(DEFAULT_TIER_CONFIGS):
        if lifetime_points >= tier_config["min_lifetime_points"]:
            return tier_config["tier_name"]
    return CustomerTier.BRONZE


def next_tier_config(tier: CustomerTier) -> Optional[Dict[str, Any]]:
    order = TIER_ORDER[CustomerTier(tier)]
    for tier_config in DEFAULT_TIER_CONFIGS:
        if tier_config["tier_order"] == order + 1:
            return tier_config
    return None


def calculate_tier_progress(lifetime_points: int) -> int:
    """Percent (0-100) of the way from the current tier to the next one"""
    tier = calculate_tier_for_points(lifetime_points)
    upcoming = next_tier_config(tier)
    if upcoming is None:
        return 100

    floor_points = DEFAULT_TIER_CONFIGS[TIER_ORDER[tier] - 1]["min_lifetime_points"]
    span = upcoming["min_lifetime_points"] - floor_points
    progress = (lifetime_points - floor_points) * 100 // span
    return max(0, min(int(progress), 100))


def tier_rank(tier: str) -> int:
    """Ordering position of a tier name; unknown names rank lowest"""
    try:
        return TIER_ORDER[CustomerTier(tier)]
    except ValueError:
        return 0
