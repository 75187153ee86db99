# backend/modules/restaurants/models/restaurant_models.py

from sqlalchemy import Column, Integer, String, Boolean, JSON
from core.database import Base
from core.mixins import TimestampMixin


class Restaurant(Base, TimestampMixin):
    """Restaurant running a loyalty program.

    ``settings`` is a free-form JSON blob. Known keys:
        reward_engine             reward engine configuration record
        points_per_dollar         points a customer receives per currency unit (analytics point value)
        cogs_percentage           cost of goods sold as a share of revenue
        customer_lifetime_months  expected customer lifetime for CLV
        welcome_bonus_points      points credited on signup
    """
    __tablename__ = "restaurants"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    slug = Column(String(100), nullable=False, unique=True, index=True)
    currency = Column(String(3), nullable=False, default="AED")
    is_active = Column(Boolean, default=True)
    settings = Column(JSON, nullable=False, default=dict)

    def get_setting(self, key: str, default=None):
        return (self.settings or {}).get(key, default)

    def __repr__(self):
        return f"<Restaurant(id={self.id}, slug='{self.slug}')>"
