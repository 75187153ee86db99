# backend/modules/loyalty/schemas/reward_engine_schemas.py

"""
Schemas for the reward engine configuration stored in a restaurant's
settings blob, plus the request/response bodies of the engine routes.
"""

from enum import Enum

from pydantic import BaseModel, Field

from ..services.reward_calculator import (
    ManualStrategy,
    RewardEngineConfig,
    SmartStrategy,
)


class RewardMode(str, Enum):
    """How base points are derived from an order amount"""
    SMART = "smart"    # share of estimated profit
    MANUAL = "manual"  # fixed currency-to-points ratio


class SmartSettings(BaseModel):
    cost_price: float = Field(0, ge=0)
    selling_price: float = Field(0, ge=0)
    profit_allocation_percent: float = Field(20, ge=0, le=100)


class ManualSettings(BaseModel):
    aed_value: float = Field(10, gt=0, description="Currency spent per point_value points")
    point_value: float = Field(1, ge=0)


class TierMultipliers(BaseModel):
    bronze: float = Field(1.0, gt=0)
    silver: float = Field(1.25, gt=0)
    gold: float = Field(1.5, gt=0)
    platinum: float = Field(2.0, gt=0)


class RewardEngineSettings(BaseModel):
    """Stored reward engine record.

    Both settings blocks are kept; ``mode`` decides which one is used.
    """
    mode: RewardMode = RewardMode.MANUAL
    smart_settings: SmartSettings = Field(default_factory=SmartSettings)
    manual_settings: ManualSettings = Field(default_factory=ManualSettings)
    tier_multipliers: TierMultipliers = Field(default_factory=TierMultipliers)
    max_points_per_order: int = Field(1000, ge=1)

    def to_engine_config(self) -> RewardEngineConfig:
        if self.mode == RewardMode.SMART:
            strategy = SmartStrategy(**self.smart_settings.model_dump())
        else:
            strategy = ManualStrategy(**self.manual_settings.model_dump())

        return RewardEngineConfig(
            strategy=strategy,
            tier_multipliers=self.tier_multipliers.model_dump(),
            max_points_per_order=self.max_points_per_order,
        )


class PointsCalculationRequest(BaseModel):
    """Points for an amount using the restaurant's stored configuration"""
    order_amount: float
    customer_tier: str = "bronze"


class PointsPreviewRequest(PointsCalculationRequest):
    """What-if calculation against an unsaved configuration"""
    config: RewardEngineSettings


class PointsCalculationResponse(BaseModel):
    order_amount: float
    customer_tier: str
    points: int
    mode: RewardMode
    tier_multiplier: float
    max_points_per_order: int
    capped: bool = False
