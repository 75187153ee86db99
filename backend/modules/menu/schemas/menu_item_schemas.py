# backend/modules/menu/schemas/menu_item_schemas.py

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List, Dict, Any
from datetime import datetime

from ..models.menu_models import MenuCategory, LoyaltyMode

DEFAULT_PROFIT_ALLOCATION_PERCENT = 20.0
DEFAULT_FIXED_POINTS = 1.0


def normalize_loyalty_settings(
    mode: LoyaltyMode, settings: Optional[Dict[str, Any]]
) -> Dict[str, float]:
    """Keep only the key the mode uses, filling in its default."""
    settings = settings or {}
    mode = LoyaltyMode(mode)

    if mode == LoyaltyMode.SMART:
        value = settings.get("profit_allocation_percent")
        if value is None:
            value = DEFAULT_PROFIT_ALLOCATION_PERCENT
        value = float(value)
        if not 0 <= value <= 100:
            raise ValueError("profit_allocation_percent must be between 0 and 100")
        return {"profit_allocation_percent": value}

    if mode == LoyaltyMode.MANUAL:
        value = settings.get("fixed_points")
        if value is None:
            value = DEFAULT_FIXED_POINTS
        value = float(value)
        if value < 0:
            raise ValueError("fixed_points must not be negative")
        return {"fixed_points": value}

    return {}


class MenuItemBase(BaseModel):
    name: str = Field(..., max_length=200)
    description: Optional[str] = None
    category: MenuCategory = MenuCategory.MAIN
    cost_price: float = Field(0, ge=0)
    selling_price: float = Field(..., gt=0)
    loyalty_mode: LoyaltyMode = LoyaltyMode.SMART
    loyalty_settings: Dict[str, float] = Field(default_factory=dict)
    is_active: bool = True

    @field_validator("name")
    def require_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Item name is required")
        return v


class MenuItemCreate(MenuItemBase):

    @model_validator(mode="after")
    def apply_loyalty_defaults(self):
        self.loyalty_settings = normalize_loyalty_settings(
            self.loyalty_mode, self.loyalty_settings
        )
        return self


class MenuItemUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None
    category: Optional[MenuCategory] = None
    cost_price: Optional[float] = Field(None, ge=0)
    selling_price: Optional[float] = Field(None, gt=0)
    loyalty_mode: Optional[LoyaltyMode] = None
    loyalty_settings: Optional[Dict[str, float]] = None
    is_active: Optional[bool] = None

    @field_validator("name")
    def require_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Item name is required")
        return v


class MenuItemResponse(MenuItemBase):
    id: int
    restaurant_id: int
    profit_margin: float
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MenuItemSearchParams(BaseModel):
    query: Optional[str] = None
    category: Optional[MenuCategory] = None
    loyalty_mode: Optional[LoyaltyMode] = None
    is_active: Optional[bool] = None
    limit: int = Field(default=50, ge=1, le=500)
    offset: int = Field(default=0, ge=0)


class MenuItemListResponse(BaseModel):
    items: List[MenuItemResponse]
    total: int
    page: int
    size: int
    pages: int


class ItemPointsPreview(BaseModel):
    """Points one order line of this item would earn"""
    menu_item_id: int
    quantity: int
    customer_tier: str
    loyalty_mode: LoyaltyMode
    base_points: int
    tier_multiplier: float
    points: int
