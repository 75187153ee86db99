# backend/modules/loyalty/routes/reward_engine_routes.py

"""
Routes for configuring a restaurant's reward engine and calculating
points with it.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.database import get_db
from core.error_handling import handle_api_errors
from modules.restaurants.services.restaurant_service import RestaurantService

from ..services.rewards_engine import RewardEngineService, preview_points
from ..schemas.reward_engine_schemas import (
    RewardEngineSettings,
    PointsCalculationRequest,
    PointsCalculationResponse,
    PointsPreviewRequest,
)

router = APIRouter(
    prefix="/api/v1/restaurants/{restaurant_id}/reward-engine",
    tags=["Reward Engine"],
)


@router.get("", response_model=RewardEngineSettings)
@handle_api_errors
async def get_reward_engine_config(restaurant_id: int, db: Session = Depends(get_db)):
    """Current configuration, falling back to defaults when none is saved."""
    return RewardEngineService(db).get_reward_engine_config(restaurant_id)


@router.put("", response_model=RewardEngineSettings)
@handle_api_errors
async def update_reward_engine_config(
    restaurant_id: int,
    config: RewardEngineSettings,
    db: Session = Depends(get_db),
):
    return RewardEngineService(db).update_reward_engine_config(restaurant_id, config)


@router.post("/preview", response_model=PointsCalculationResponse)
@handle_api_errors
async def preview_reward_points(
    restaurant_id: int,
    request: PointsPreviewRequest,
    db: Session = Depends(get_db),
):
    """
    What-if calculation against an unsaved configuration.

    Used by the settings screen to show the effect of a change before it is
    stored. The restaurant must exist but its saved configuration is neither
    read nor changed.
    """
    RestaurantService(db).get_restaurant(restaurant_id)
    return preview_points(request.config, request.order_amount, request.customer_tier)


@router.post("/calculate", response_model=PointsCalculationResponse)
@handle_api_errors
async def calculate_reward_points(
    restaurant_id: int,
    request: PointsCalculationRequest,
    db: Session = Depends(get_db),
):
    return RewardEngineService(db).calculate(
        restaurant_id, request.order_amount, request.customer_tier
    )
