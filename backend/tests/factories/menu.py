# backend/tests/factories/menu.py

import factory
from factory import Faker, LazyFunction
from .base import BaseFactory
from .restaurant import RestaurantFactory
from modules.menu.models.menu_models import MenuItem, MenuCategory, LoyaltyMode


class MenuItemFactory(BaseFactory):
    """Factory for creating menu items."""

    class Meta:
        model = MenuItem

    restaurant_id = LazyFunction(lambda: RestaurantFactory().id)
    name = Faker("catch_phrase")
    description = Faker("sentence")
    category = factory.Iterator(list(MenuCategory))

    cost_price = 10.0
    selling_price = 30.0

    loyalty_mode = LoyaltyMode.SMART
    loyalty_settings = LazyFunction(lambda: {"profit_allocation_percent": 20.0})
    is_active = True
