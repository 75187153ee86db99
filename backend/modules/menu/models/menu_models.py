# backend/modules/menu/models/menu_models.py

from sqlalchemy import (Column, Integer, String, Float, Text,
                        Boolean, JSON, Enum as SQLEnum, Index)
from core.database import Base
from core.mixins import RestaurantScopedMixin, TimestampMixin
from enum import Enum


class MenuCategory(str, Enum):
    MAIN = "main"
    BEVERAGE = "beverage"
    SALAD = "salad"
    DESSERT = "dessert"
    APPETIZER = "appetizer"


class LoyaltyMode(str, Enum):
    """How an item earns points when ordered"""
    SMART = "smart"    # share of the item's profit
    MANUAL = "manual"  # fixed points per unit
    NONE = "none"


class MenuItem(Base, RestaurantScopedMixin, TimestampMixin):
    """Menu item with its own loyalty earning rule.

    ``loyalty_settings`` holds ``profit_allocation_percent`` for smart items
    and ``fixed_points`` for manual items.
    """
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False, index=True)
    description = Column(Text, nullable=True)
    category = Column(SQLEnum(MenuCategory), nullable=False, default=MenuCategory.MAIN)

    # Pricing
    cost_price = Column(Float, nullable=False, default=0.0)
    selling_price = Column(Float, nullable=False)

    # Loyalty
    loyalty_mode = Column(SQLEnum(LoyaltyMode), nullable=False, default=LoyaltyMode.SMART)
    loyalty_settings = Column(JSON, nullable=False, default=dict)

    is_active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        Index("ix_menu_items_restaurant_category", "restaurant_id", "category"),
    )

    @property
    def profit_margin(self) -> float:
        """Margin as a percent of the selling price"""
        if not self.selling_price:
            return 0.0
        return (self.selling_price - (self.cost_price or 0)) / self.selling_price * 100

    def __repr__(self):
        return f"<MenuItem(id={self.id}, name='{self.name}', price={self.selling_price})>"
