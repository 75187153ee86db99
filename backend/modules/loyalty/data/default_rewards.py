# backend/modules/loyalty/data/default_rewards.py

from typing import Any, Dict, List


# Starter reward catalog seeded for restaurants that have none
DEFAULT_REWARDS: List[Dict[str, Any]] = [
    {
        "name": "Free Coffee",
        "description": "Any hot or iced coffee on the house.",
        "points_required": 100,
        "min_tier": "bronze",
    },
    {
        "name": "Free Dessert",
        "description": "Pick any dessert from the menu.",
        "points_required": 250,
        "min_tier": "bronze",
    },
    {
        "name": "10% Off Your Order",
        "description": "Ten percent off your next order.",
        "points_required": 400,
        "min_tier": "silver",
    },
    {
        "name": "Free Main Course",
        "description": "Any main course, up to one per visit.",
        "points_required": 750,
        "min_tier": "silver",
    },
    {
        "name": "Chef's Table Experience",
        "description": "A tasting menu for two at the chef's table.",
        "points_required": 2500,
        "min_tier": "gold",
    },
    {
        "name": "Private Dining Night",
        "description": "Private room and set menu for up to six guests.",
        "points_required": 6000,
        "min_tier": "platinum",
    },
]
