from sqlalchemy import Column, DateTime, ForeignKey, Integer
from sqlalchemy.orm import declared_attr
from sqlalchemy.sql import func


class TimestampMixin:
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(),
                        onupdate=func.now(), nullable=False)


class RestaurantScopedMixin:
    """Rows owned by a single restaurant; every lookup filters on it"""

    @declared_attr
    def restaurant_id(cls):
        return Column(Integer, ForeignKey("restaurants.id"), nullable=False, index=True)
