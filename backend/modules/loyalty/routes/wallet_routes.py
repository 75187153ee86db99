# backend/modules/loyalty/routes/wallet_routes.py

"""
Routes for customer wallets, purchases, reward redemption and the
reward catalog.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List

from core.database import get_db
from core.error_handling import handle_api_errors

from ..services.loyalty_service import LoyaltyService
from ..schemas.loyalty_schemas import (
    AvailableReward,
    PurchaseCreate,
    PurchaseResponse,
    RewardCreate,
    RewardRedemptionResponse,
    RewardResponse,
    RewardUpdate,
    WalletResponse,
)

router = APIRouter(prefix="/api/v1/restaurants/{restaurant_id}", tags=["Loyalty"])


# ========== Customer Wallet ==========


@router.get("/customers/{customer_id}/wallet", response_model=WalletResponse)
@handle_api_errors
async def get_wallet(
    restaurant_id: int,
    customer_id: int,
    transaction_limit: int = Query(20, ge=1, le=200),
    db: Session = Depends(get_db),
):
    """Balance, tier, unlocked rewards and recent points activity."""
    return LoyaltyService(db).get_wallet(restaurant_id, customer_id, transaction_limit)


@router.get(
    "/customers/{customer_id}/rewards", response_model=List[AvailableReward]
)
@handle_api_errors
async def get_available_rewards(
    restaurant_id: int, customer_id: int, db: Session = Depends(get_db)
):
    return LoyaltyService(db).get_available_rewards(restaurant_id, customer_id)


@router.post(
    "/customers/{customer_id}/purchases",
    response_model=PurchaseResponse,
    status_code=status.HTTP_201_CREATED,
)
@handle_api_errors
async def record_purchase(
    restaurant_id: int,
    customer_id: int,
    purchase: PurchaseCreate,
    db: Session = Depends(get_db),
):
    """
    Credit points for a completed order.

    Points are calculated by the restaurant's reward engine at the
    customer's current tier.
    """
    return LoyaltyService(db).record_purchase(restaurant_id, customer_id, purchase)


@router.post(
    "/customers/{customer_id}/rewards/{reward_id}/redeem",
    response_model=RewardRedemptionResponse,
)
@handle_api_errors
async def redeem_reward(
    restaurant_id: int,
    customer_id: int,
    reward_id: int,
    db: Session = Depends(get_db),
):
    """
    Redeem a reward from the catalog.

    Raises:
        404: Customer or reward not found
        422: Reward inactive, tier too low or insufficient points
    """
    return LoyaltyService(db).redeem_reward(restaurant_id, customer_id, reward_id)


# ========== Reward Catalog ==========


@router.get("/rewards", response_model=List[RewardResponse])
@handle_api_errors
async def list_rewards(
    restaurant_id: int,
    include_inactive: bool = Query(False),
    db: Session = Depends(get_db),
):
    return LoyaltyService(db).list_rewards(restaurant_id, include_inactive)


@router.post(
    "/rewards", response_model=RewardResponse, status_code=status.HTTP_201_CREATED
)
@handle_api_errors
async def create_reward(
    restaurant_id: int,
    reward_data: RewardCreate,
    db: Session = Depends(get_db),
):
    return LoyaltyService(db).create_reward(restaurant_id, reward_data)


@router.patch("/rewards/{reward_id}", response_model=RewardResponse)
@handle_api_errors
async def update_reward(
    restaurant_id: int,
    reward_id: int,
    update: RewardUpdate,
    db: Session = Depends(get_db),
):
    return LoyaltyService(db).update_reward(restaurant_id, reward_id, update)


@router.post("/rewards/defaults", response_model=List[RewardResponse])
@handle_api_errors
async def seed_default_rewards(restaurant_id: int, db: Session = Depends(get_db)):
    """Create the starter catalog. No-op when the restaurant already has rewards."""
    return LoyaltyService(db).seed_default_rewards(restaurant_id)
