# backend/modules/restaurants/routes/restaurant_routes.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.database import get_db
from core.error_handling import handle_api_errors

from ..services.restaurant_service import RestaurantService
from ..schemas.restaurant_schemas import (
    RestaurantCreate,
    RestaurantResponse,
    RestaurantSettingsUpdate,
)

router = APIRouter(prefix="/api/v1/restaurants", tags=["Restaurants"])


@router.post("", response_model=RestaurantResponse, status_code=status.HTTP_201_CREATED)
@handle_api_errors
async def create_restaurant(data: RestaurantCreate, db: Session = Depends(get_db)):
    """Register a restaurant."""
    return RestaurantService(db).create_restaurant(data)


@router.get("/{restaurant_id}", response_model=RestaurantResponse)
@handle_api_errors
async def get_restaurant(restaurant_id: int, db: Session = Depends(get_db)):
    return RestaurantService(db).get_restaurant(restaurant_id)


@router.patch("/{restaurant_id}/settings", response_model=RestaurantResponse)
@handle_api_errors
async def update_restaurant_settings(
    restaurant_id: int,
    update: RestaurantSettingsUpdate,
    db: Session = Depends(get_db),
):
    """
    Update loyalty-related settings (point value, COGS share, customer
    lifetime, welcome bonus). Unspecified keys are left untouched.
    """
    return RestaurantService(db).update_settings(restaurant_id, update)
