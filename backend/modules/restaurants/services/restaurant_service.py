# backend/modules/restaurants/services/restaurant_service.py

from sqlalchemy.orm import Session
from typing import Any, Dict
import logging

from core.error_handling import NotFoundError, ConflictError
from ..models.restaurant_models import Restaurant
from ..schemas.restaurant_schemas import RestaurantCreate, RestaurantSettingsUpdate


logger = logging.getLogger(__name__)


class RestaurantService:
    """Service for restaurants and their settings blob"""

    def __init__(self, db: Session):
        self.db = db

    def create_restaurant(self, data: RestaurantCreate) -> Restaurant:
        existing = self.db.query(Restaurant).filter(Restaurant.slug == data.slug).first()
        if existing:
            raise ConflictError(
                f"Restaurant with slug '{data.slug}' already exists",
                {"slug": data.slug},
            )

        restaurant = Restaurant(
            name=data.name,
            slug=data.slug,
            currency=data.currency.upper(),
            settings=dict(data.settings),
        )
        self.db.add(restaurant)
        self.db.commit()
        self.db.refresh(restaurant)

        logger.info(f"Created restaurant {restaurant.id} ({restaurant.slug})")
        return restaurant

    def get_restaurant(self, restaurant_id: int) -> Restaurant:
        restaurant = self.db.query(Restaurant).filter(
            Restaurant.id == restaurant_id
        ).first()

        if not restaurant:
            raise NotFoundError("Restaurant", restaurant_id)

        return restaurant

    def get_settings(self, restaurant_id: int) -> Dict[str, Any]:
        return dict(self.get_restaurant(restaurant_id).settings or {})

    def set_setting(self, restaurant_id: int, key: str, value: Any) -> Restaurant:
        """Write a single top-level settings key, keeping the others.

        The JSON column is reassigned rather than mutated so SQLAlchemy
        notices the change.
        """
        restaurant = self.get_restaurant(restaurant_id)
        restaurant.settings = {**(restaurant.settings or {}), key: value}
        self.db.commit()
        self.db.refresh(restaurant)
        return restaurant

    def update_settings(
        self, restaurant_id: int, update: RestaurantSettingsUpdate
    ) -> Restaurant:
        restaurant = self.get_restaurant(restaurant_id)
        changes = update.model_dump(exclude_none=True)
        if changes:
            restaurant.settings = {**(restaurant.settings or {}), **changes}
            self.db.commit()
            self.db.refresh(restaurant)
            logger.info(
                f"Updated settings {sorted(changes)} for restaurant {restaurant_id}"
            )
        return restaurant
