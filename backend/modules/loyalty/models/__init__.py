# backend/modules/loyalty/models/__init__.py

from .loyalty_models import (
    TransactionType,
    LoyaltyTransaction,
    Reward,
    RewardRedemption,
)

__all__ = [
    "TransactionType",
    "LoyaltyTransaction",
    "Reward",
    "RewardRedemption",
]
