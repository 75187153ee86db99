# backend/modules/menu/services/menu_item_service.py

from typing import List, Optional, Mapping, Tuple
from sqlalchemy.orm import Session
from sqlalchemy import or_, asc
import logging

from core.error_handling import NotFoundError, APIValidationError
from modules.restaurants.services.restaurant_service import RestaurantService
from modules.loyalty.services.reward_calculator import (
    DEFAULT_TIER,
    resolve_tier_multiplier,
    truncate_points,
)
from modules.loyalty.services.rewards_engine import RewardEngineService

from ..data.sample_menu import SAMPLE_MENU_ITEMS
from ..models.menu_models import MenuItem, MenuCategory, LoyaltyMode
from ..schemas.menu_item_schemas import (
    DEFAULT_FIXED_POINTS,
    DEFAULT_PROFIT_ALLOCATION_PERCENT,
    ItemPointsPreview,
    MenuItemCreate,
    MenuItemSearchParams,
    MenuItemUpdate,
    normalize_loyalty_settings,
)

logger = logging.getLogger(__name__)


def calculate_item_base_points(item: MenuItem, quantity: int = 1) -> int:
    """Points for ``quantity`` units before the tier multiplier"""
    quantity = max(quantity or 0, 0)
    settings = item.loyalty_settings or {}
    mode = LoyaltyMode(item.loyalty_mode)

    if mode == LoyaltyMode.SMART:
        allocation = settings.get("profit_allocation_percent", DEFAULT_PROFIT_ALLOCATION_PERCENT)
        profit = (item.selling_price or 0) - (item.cost_price or 0)
        return truncate_points(profit * quantity * allocation / 100)

    if mode == LoyaltyMode.MANUAL:
        fixed_points = settings.get("fixed_points", DEFAULT_FIXED_POINTS)
        return truncate_points(fixed_points * quantity)

    return 0


def calculate_item_points(
    item: MenuItem,
    quantity: int = 1,
    customer_tier: str = DEFAULT_TIER,
    tier_multipliers: Optional[Mapping[str, float]] = None,
) -> int:
    """Points earned for an order line, never negative.

    Truncated twice like order-level points: once for the base and once
    after the tier multiplier.
    """
    base_points = calculate_item_base_points(item, quantity)
    multiplier = resolve_tier_multiplier(tier_multipliers or {}, customer_tier)
    return max(truncate_points(base_points * multiplier), 0)


class MenuItemService:
    """Service class for menu item management"""

    def __init__(self, db: Session):
        self.db = db
        self.restaurants = RestaurantService(db)

    def create_menu_item(self, restaurant_id: int, item_data: MenuItemCreate) -> MenuItem:
        self.restaurants.get_restaurant(restaurant_id)

        menu_item = MenuItem(restaurant_id=restaurant_id, **item_data.model_dump())
        self.db.add(menu_item)
        self.db.commit()
        self.db.refresh(menu_item)

        logger.info(f"Created menu item {menu_item.id} for restaurant {restaurant_id}")
        return menu_item

    def get_menu_items(
        self, restaurant_id: int, params: MenuItemSearchParams
    ) -> Tuple[List[MenuItem], int]:
        """Menu items with search, filters and pagination"""
        query = self.db.query(MenuItem).filter(MenuItem.restaurant_id == restaurant_id)

        if params.query:
            search_term = f"%{params.query}%"
            query = query.filter(
                or_(
                    MenuItem.name.ilike(search_term),
                    MenuItem.description.ilike(search_term),
                )
            )

        if params.category:
            query = query.filter(MenuItem.category == params.category)

        if params.loyalty_mode:
            query = query.filter(MenuItem.loyalty_mode == params.loyalty_mode)

        if params.is_active is not None:
            query = query.filter(MenuItem.is_active == params.is_active)

        total = query.count()

        items = (
            query.order_by(asc(MenuItem.category), asc(MenuItem.name), asc(MenuItem.id))
            .offset(params.offset)
            .limit(params.limit)
            .all()
        )
        return items, total

    def get_menu_item(self, restaurant_id: int, item_id: int) -> MenuItem:
        menu_item = self.db.query(MenuItem).filter(
            MenuItem.id == item_id,
            MenuItem.restaurant_id == restaurant_id,
        ).first()

        if not menu_item:
            raise NotFoundError("Menu item", item_id)

        return menu_item

    def update_menu_item(
        self, restaurant_id: int, item_id: int, item_data: MenuItemUpdate
    ) -> MenuItem:
        """Partial update; loyalty settings are re-normalized for the resulting mode"""
        menu_item = self.get_menu_item(restaurant_id, item_id)

        update_data = item_data.model_dump(exclude_unset=True, exclude_none=True)
        loyalty_settings = update_data.pop("loyalty_settings", None)

        if "loyalty_mode" in update_data or loyalty_settings is not None:
            mode = update_data.get("loyalty_mode", menu_item.loyalty_mode)
            if loyalty_settings is None:
                loyalty_settings = menu_item.loyalty_settings
            try:
                update_data["loyalty_settings"] = normalize_loyalty_settings(
                    mode, loyalty_settings
                )
            except ValueError as e:
                raise APIValidationError(str(e), {"loyalty_settings": loyalty_settings})

        for key, value in update_data.items():
            setattr(menu_item, key, value)

        self.db.commit()
        self.db.refresh(menu_item)
        return menu_item

    def delete_menu_item(self, restaurant_id: int, item_id: int) -> None:
        menu_item = self.get_menu_item(restaurant_id, item_id)
        self.db.delete(menu_item)
        self.db.commit()
        logger.info(f"Deleted menu item {item_id} for restaurant {restaurant_id}")

    def create_sample_menu_items(self, restaurant_id: int) -> List[MenuItem]:
        """Seed the starter menu. Existing menus are returned untouched."""
        self.restaurants.get_restaurant(restaurant_id)

        existing = self.db.query(MenuItem).filter(
            MenuItem.restaurant_id == restaurant_id
        ).count()
        if existing:
            items, _ = self.get_menu_items(
                restaurant_id, MenuItemSearchParams(limit=500)
            )
            return items

        items = [
            MenuItem(
                restaurant_id=restaurant_id,
                name=data["name"],
                description=data["description"],
                category=MenuCategory(data["category"]),
                cost_price=data["cost_price"],
                selling_price=data["selling_price"],
                loyalty_mode=LoyaltyMode(data["loyalty_mode"]),
                loyalty_settings=normalize_loyalty_settings(
                    data["loyalty_mode"], data["loyalty_settings"]
                ),
            )
            for data in SAMPLE_MENU_ITEMS
        ]
        self.db.add_all(items)
        self.db.commit()

        logger.info(f"Created {len(items)} sample menu items for restaurant {restaurant_id}")
        items, _ = self.get_menu_items(restaurant_id, MenuItemSearchParams(limit=500))
        return items

    def preview_item_points(
        self,
        restaurant_id: int,
        item_id: int,
        quantity: int = 1,
        customer_tier: str = DEFAULT_TIER,
    ) -> ItemPointsPreview:
        """Points for an order line, using the restaurant's tier multipliers"""
        menu_item = self.get_menu_item(restaurant_id, item_id)
        tier_multipliers = RewardEngineService(self.db).get_engine_config(
            restaurant_id
        ).tier_multipliers

        return ItemPointsPreview(
            menu_item_id=menu_item.id,
            quantity=quantity,
            customer_tier=customer_tier,
            loyalty_mode=menu_item.loyalty_mode,
            base_points=calculate_item_base_points(menu_item, quantity),
            tier_multiplier=resolve_tier_multiplier(tier_multipliers, customer_tier),
            points=calculate_item_points(
                menu_item, quantity, customer_tier, tier_multipliers
            ),
        )
