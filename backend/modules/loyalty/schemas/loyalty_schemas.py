# backend/modules/loyalty/schemas/loyalty_schemas.py

"""
Schemas for the customer wallet: points ledger, reward catalog and
redemptions.
"""

from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from modules.customers.models.customer_models import CustomerTier
from modules.customers.schemas.customer_schemas import Customer
from ..models.loyalty_models import TransactionType


# ========== Points Ledger ==========

class PointsTransactionResponse(BaseModel):
    """Points movement"""
    id: int
    customer_id: int
    type: TransactionType
    points: int
    amount_spent: Optional[float] = None
    description: Optional[str] = None
    balance_after: int
    reward_id: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True


# ========== Purchases ==========

class PurchaseCreate(BaseModel):
    """A completed order to credit points for"""
    order_amount: float = Field(..., ge=0, allow_inf_nan=False)
    description: Optional[str] = Field(None, max_length=500)


class PurchaseResponse(BaseModel):
    transaction: PointsTransactionResponse
    points_earned: int
    total_points: int
    lifetime_points: int
    previous_tier: CustomerTier
    current_tier: CustomerTier
    tier_upgraded: bool


# ========== Reward Catalog ==========

class RewardBase(BaseModel):
    name: str = Field(..., max_length=100)
    description: Optional[str] = None
    points_required: int = Field(..., gt=0)
    min_tier: CustomerTier = CustomerTier.BRONZE
    is_active: bool = True

    @field_validator("name")
    def require_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Reward name is required")
        return v


class RewardCreate(RewardBase):
    pass


class RewardUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    points_required: Optional[int] = Field(None, gt=0)
    min_tier: Optional[CustomerTier] = None
    is_active: Optional[bool] = None


class RewardResponse(RewardBase):
    id: int
    restaurant_id: int
    created_at: datetime

    class Config:
        from_attributes = True


class AvailableReward(BaseModel):
    """Catalog item as seen from a customer's wallet"""
    id: int
    name: str
    description: Optional[str] = None
    points_required: int
    min_tier: CustomerTier
    can_redeem: bool
    points_short: int = 0


# ========== Redemption ==========

class RewardRedemptionResponse(BaseModel):
    redemption_id: int
    reward_id: int
    reward_name: str
    points_used: int
    total_points: int
    redeemed_at: datetime
    transaction: PointsTransactionResponse


# ========== Wallet ==========

class WalletResponse(BaseModel):
    customer: Customer
    available_rewards: List[AvailableReward]
    recent_transactions: List[PointsTransactionResponse]
