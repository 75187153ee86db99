# backend/modules/loyalty/services/rewards_engine.py

"""
Reward engine service: loads a restaurant's reward engine configuration
and turns order amounts into points with the reward calculator.
"""

from dataclasses import replace
import logging
import sys

from pydantic import ValidationError
from sqlalchemy.orm import Session

from core.config import get_settings
from modules.restaurants.services.restaurant_service import RestaurantService

from .reward_calculator import (
    DEFAULT_TIER,
    RewardEngineConfig,
    compute_points,
    resolve_tier_multiplier,
)
from ..schemas.reward_engine_schemas import (
    PointsCalculationResponse,
    RewardEngineSettings,
)

logger = logging.getLogger(__name__)

REWARD_ENGINE_SETTINGS_KEY = "reward_engine"


def default_config() -> RewardEngineSettings:
    """Configuration used until a restaurant saves its own."""
    return RewardEngineSettings(
        max_points_per_order=get_settings().default_max_points_per_order
    )


def preview_points(
    config: RewardEngineSettings,
    order_amount: float,
    customer_tier: str = DEFAULT_TIER,
) -> PointsCalculationResponse:
    """Synchronous what-if calculation, nothing is read or written."""
    engine_config = config.to_engine_config()
    points = compute_points(engine_config, order_amount, customer_tier)
    uncapped = compute_points(
        replace(engine_config, max_points_per_order=sys.maxsize),
        order_amount,
        customer_tier,
    )

    return PointsCalculationResponse(
        order_amount=order_amount,
        customer_tier=customer_tier,
        points=points,
        mode=config.mode,
        tier_multiplier=resolve_tier_multiplier(
            engine_config.tier_multipliers, customer_tier
        ),
        max_points_per_order=config.max_points_per_order,
        capped=uncapped > points,
    )


class RewardEngineService:
    """Reads, writes and applies a restaurant's reward engine configuration"""

    def __init__(self, db: Session):
        self.db = db
        self.restaurants = RestaurantService(db)

    def get_reward_engine_config(self, restaurant_id: int) -> RewardEngineSettings:
        """Stored configuration, or the default when none is usable.

        Raises:
            NotFoundError: If the restaurant doesn't exist
        """
        restaurant = self.restaurants.get_restaurant(restaurant_id)
        stored = restaurant.get_setting(REWARD_ENGINE_SETTINGS_KEY)

        if not stored:
            return default_config()

        try:
            return RewardEngineSettings.model_validate(stored)
        except ValidationError as e:
            logger.warning(
                f"Invalid reward engine config for restaurant {restaurant_id}, "
                f"using defaults: {e.errors()}"
            )
            return default_config()

    def update_reward_engine_config(
        self, restaurant_id: int, config: RewardEngineSettings
    ) -> RewardEngineSettings:
        """Replace the stored configuration (last write wins)."""
        self.restaurants.set_setting(
            restaurant_id,
            REWARD_ENGINE_SETTINGS_KEY,
            config.model_dump(mode="json"),
        )
        logger.info(
            f"Reward engine config updated for restaurant {restaurant_id} "
            f"(mode={config.mode.value}, max={config.max_points_per_order})"
        )
        return config

    def get_engine_config(self, restaurant_id: int) -> RewardEngineConfig:
        return self.get_reward_engine_config(restaurant_id).to_engine_config()

    def calculate_points_for_order(
        self,
        restaurant_id: int,
        order_amount: float,
        customer_tier: str = DEFAULT_TIER,
    ) -> int:
        """Points a customer at ``customer_tier`` earns for ``order_amount``."""
        engine_config = self.get_engine_config(restaurant_id)
        return compute_points(engine_config, order_amount, customer_tier)

    def calculate(
        self,
        restaurant_id: int,
        order_amount: float,
        customer_tier: str = DEFAULT_TIER,
    ) -> PointsCalculationResponse:
        config = self.get_reward_engine_config(restaurant_id)
        return preview_points(config, order_amount, customer_tier)
