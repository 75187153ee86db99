# backend/tests/factories/__init__.py

"""
Shared test factories for the loyalty backend.
"""

from .base import BaseFactory
from .restaurant import RestaurantFactory
from .customer import CustomerFactory
from .loyalty import RewardFactory, LoyaltyTransactionFactory
from .menu import MenuItemFactory

__all__ = [
    'BaseFactory',
    'RestaurantFactory',
    'CustomerFactory',
    'RewardFactory',
    'LoyaltyTransactionFactory',
    'MenuItemFactory',
]
