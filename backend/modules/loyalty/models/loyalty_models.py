# backend/modules/loyalty/models/loyalty_models.py

"""
Points ledger, reward catalog and redemption records.
"""

from sqlalchemy import (
    Column,
    Integer,
    String,
    Boolean,
    ForeignKey,
    DateTime,
    Float,
    Text,
    Enum as SQLEnum,
    Index,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
from datetime import datetime
from enum import Enum

from core.database import Base
from core.mixins import RestaurantScopedMixin, TimestampMixin


class TransactionType(str, Enum):
    """Kinds of points movements"""
    EARNED = "earned"            # points from a purchase
    REDEMPTION = "redemption"    # points spent on a reward
    BONUS = "bonus"              # welcome or goodwill points
    ADJUSTMENT = "adjustment"    # manual correction


class LoyaltyTransaction(Base, RestaurantScopedMixin):
    """Signed points movement on a customer's wallet"""
    __tablename__ = "loyalty_transactions"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)

    type = Column(SQLEnum(TransactionType), nullable=False, index=True)
    points = Column(Integer, nullable=False)  # positive = credit, negative = debit
    amount_spent = Column(Float, nullable=True)
    description = Column(String(500), nullable=True)
    balance_after = Column(Integer, nullable=False)

    reward_id = Column(Integer, ForeignKey("loyalty_rewards.id"), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (
        Index("ix_loyalty_transactions_restaurant_created", "restaurant_id", "created_at"),
        Index("ix_loyalty_transactions_customer_created", "customer_id", "created_at"),
    )

    def __repr__(self):
        return f"<LoyaltyTransaction(id={self.id}, customer_id={self.customer_id}, points={self.points})>"


class Reward(Base, RestaurantScopedMixin, TimestampMixin):
    """Catalog item a customer can buy with points"""
    __tablename__ = "loyalty_rewards"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    points_required = Column(Integer, nullable=False)
    min_tier = Column(String(20), nullable=False, default="bronze")
    is_active = Column(Boolean, default=True, index=True)

    redemptions = relationship("RewardRedemption", back_populates="reward")

    __table_args__ = (
        CheckConstraint("points_required > 0", name="points_required_positive"),
    )

    def __repr__(self):
        return f"<Reward(id={self.id}, name='{self.name}', points={self.points_required})>"


class RewardRedemption(Base, RestaurantScopedMixin):
    """A reward exchanged for points"""
    __tablename__ = "loyalty_reward_redemptions"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    reward_id = Column(Integer, ForeignKey("loyalty_rewards.id"), nullable=False)
    points_used = Column(Integer, nullable=False)
    redeemed_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)

    reward = relationship("Reward", back_populates="redemptions")

    def __repr__(self):
        return f"<RewardRedemption(id={self.id}, reward_id={self.reward_id}, points={self.points_used})>"
