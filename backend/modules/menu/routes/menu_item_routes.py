# backend/modules/menu/routes/menu_item_routes.py

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from math import ceil

from core.database import get_db
from core.error_handling import handle_api_errors
from modules.customers.models.customer_models import CustomerTier

from ..models.menu_models import MenuCategory, LoyaltyMode
from ..services.menu_item_service import MenuItemService
from ..schemas.menu_item_schemas import (
    ItemPointsPreview,
    MenuItemCreate,
    MenuItemListResponse,
    MenuItemResponse,
    MenuItemSearchParams,
    MenuItemUpdate,
)


router = APIRouter(
    prefix="/api/v1/restaurants/{restaurant_id}/menu-items", tags=["Menu Items"]
)


def get_menu_item_service(db: Session = Depends(get_db)) -> MenuItemService:
    """Dependency to get menu item service instance"""
    return MenuItemService(db)


@router.get("", response_model=MenuItemListResponse)
@handle_api_errors
async def get_menu_items(
    restaurant_id: int,
    query: Optional[str] = Query(None, description="Search name and description"),
    category: Optional[MenuCategory] = Query(None),
    loyalty_mode: Optional[LoyaltyMode] = Query(None),
    is_active: Optional[bool] = Query(None),
    page: int = Query(1, ge=1),
    size: int = Query(50, ge=1, le=500),
    menu_service: MenuItemService = Depends(get_menu_item_service),
):
    params = MenuItemSearchParams(
        query=query,
        category=category,
        loyalty_mode=loyalty_mode,
        is_active=is_active,
        limit=size,
        offset=(page - 1) * size,
    )
    items, total = menu_service.get_menu_items(restaurant_id, params)

    return MenuItemListResponse(
        items=items,
        total=total,
        page=page,
        size=size,
        pages=ceil(total / size) if total else 0,
    )


@router.post("", response_model=MenuItemResponse, status_code=status.HTTP_201_CREATED)
@handle_api_errors
async def create_menu_item(
    restaurant_id: int,
    item_data: MenuItemCreate,
    menu_service: MenuItemService = Depends(get_menu_item_service),
):
    return menu_service.create_menu_item(restaurant_id, item_data)


@router.post("/samples", response_model=List[MenuItemResponse])
@handle_api_errors
async def create_sample_menu_items(
    restaurant_id: int,
    menu_service: MenuItemService = Depends(get_menu_item_service),
):
    """Seed a starter menu when the restaurant has no items yet"""
    return menu_service.create_sample_menu_items(restaurant_id)


@router.get("/{item_id}", response_model=MenuItemResponse)
@handle_api_errors
async def get_menu_item(
    restaurant_id: int,
    item_id: int,
    menu_service: MenuItemService = Depends(get_menu_item_service),
):
    return menu_service.get_menu_item(restaurant_id, item_id)


@router.put("/{item_id}", response_model=MenuItemResponse)
@handle_api_errors
async def update_menu_item(
    restaurant_id: int,
    item_id: int,
    item_data: MenuItemUpdate,
    menu_service: MenuItemService = Depends(get_menu_item_service),
):
    return menu_service.update_menu_item(restaurant_id, item_id, item_data)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
@handle_api_errors
async def delete_menu_item(
    restaurant_id: int,
    item_id: int,
    menu_service: MenuItemService = Depends(get_menu_item_service),
):
    menu_service.delete_menu_item(restaurant_id, item_id)


@router.get("/{item_id}/points-preview", response_model=ItemPointsPreview)
@handle_api_errors
async def preview_item_points(
    restaurant_id: int,
    item_id: int,
    quantity: int = Query(1, ge=1, le=1000),
    tier: CustomerTier = Query(CustomerTier.BRONZE),
    menu_service: MenuItemService = Depends(get_menu_item_service),
):
    """Points a customer at ``tier`` would earn for ``quantity`` of this item"""
    return menu_service.preview_item_points(restaurant_id, item_id, quantity, tier.value)
