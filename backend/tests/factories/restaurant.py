# backend/tests/factories/restaurant.py

import factory
from factory import Faker, Sequence, LazyFunction
from .base import BaseFactory
from modules.restaurants.models.restaurant_models import Restaurant


class RestaurantFactory(BaseFactory):
    """Factory for creating restaurants."""

    class Meta:
        model = Restaurant

    name = Faker("company")
    slug = Sequence(lambda n: f"restaurant-{n}")
    currency = "AED"
    is_active = True
    settings = LazyFunction(dict)

    class Params:
        with_reward_engine = factory.Trait(
            settings=LazyFunction(lambda: {
                "reward_engine": {
                    "mode": "manual",
                    "manual_settings": {"aed_value": 10, "point_value": 1},
                    "max_points_per_order": 1000,
                }
            })
        )
