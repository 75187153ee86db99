# backend/modules/customers/models/customer_models.py

from sqlalchemy import (Column, Integer, String, DateTime,
                        Float, Boolean, Enum as SQLEnum, Index, UniqueConstraint)
from core.database import Base
from core.mixins import RestaurantScopedMixin, TimestampMixin
from enum import Enum


class CustomerTier(str, Enum):
    """Customer loyalty tier levels"""
    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"
    PLATINUM = "platinum"


class Customer(Base, RestaurantScopedMixin, TimestampMixin):
    """Loyalty member of a single restaurant"""
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)

    # Basic Information
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(20), nullable=True)
    date_of_birth = Column(DateTime, nullable=True)
    marketing_opt_in = Column(Boolean, default=True)

    # Wallet
    total_points = Column(Integer, nullable=False, default=0)     # spendable balance
    lifetime_points = Column(Integer, nullable=False, default=0)  # everything ever earned
    current_tier = Column(SQLEnum(CustomerTier), nullable=False, default=CustomerTier.BRONZE, index=True)
    tier_progress = Column(Integer, nullable=False, default=0)    # percent towards next tier
    tier_updated_at = Column(DateTime, nullable=True)

    # Visit tracking
    visit_count = Column(Integer, nullable=False, default=0)
    total_spent = Column(Float, nullable=False, default=0.0)
    last_visit = Column(DateTime, nullable=True)

    __table_args__ = (
        UniqueConstraint("restaurant_id", "email", name="uq_customers_restaurant_email"),
        Index("ix_customers_restaurant_created", "restaurant_id", "created_at"),
    )

    def __repr__(self):
        return f"<Customer(id={self.id}, email='{self.email}', tier='{self.current_tier}')>"
