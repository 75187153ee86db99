# backend/tests/factories/loyalty.py

from datetime import datetime
from factory import Faker, LazyFunction, LazyAttribute
from .base import BaseFactory
from .restaurant import RestaurantFactory
from modules.loyalty.models.loyalty_models import (
    LoyaltyTransaction, Reward, TransactionType
)


class RewardFactory(BaseFactory):
    """Factory for reward catalog items."""

    class Meta:
        model = Reward

    restaurant_id = LazyFunction(lambda: RestaurantFactory().id)
    name = Faker("catch_phrase")
    description = Faker("sentence")
    points_required = 100
    min_tier = "bronze"
    is_active = True


class LoyaltyTransactionFactory(BaseFactory):
    """Ledger entries; pass restaurant_id and customer_id explicitly."""

    class Meta:
        model = LoyaltyTransaction

    type = TransactionType.EARNED
    points = 100
    balance_after = LazyAttribute(lambda obj: max(obj.points, 0))
    created_at = LazyFunction(datetime.utcnow)
