# backend/modules/restaurants/schemas/restaurant_schemas.py

from pydantic import BaseModel, Field, field_validator
from typing import Optional, Dict, Any
from datetime import datetime


class RestaurantCreate(BaseModel):
    """Schema for creating a restaurant"""

    name: str = Field(..., min_length=1, max_length=200)
    slug: str = Field(..., min_length=1, max_length=100, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    currency: str = Field("AED", min_length=3, max_length=3)
    settings: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("name")
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Restaurant name is required")
        return v


class RestaurantSettingsUpdate(BaseModel):
    """Partial update of loyalty-related restaurant settings"""

    points_per_dollar: Optional[float] = Field(None, gt=0)
    cogs_percentage: Optional[float] = Field(None, ge=0, le=1)
    customer_lifetime_months: Optional[int] = Field(None, ge=1, le=240)
    welcome_bonus_points: Optional[int] = Field(None, ge=0)


class RestaurantResponse(BaseModel):
    """Restaurant response"""

    id: int
    name: str
    slug: str
    currency: str
    is_active: bool
    settings: Dict[str, Any]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
