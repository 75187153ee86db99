# backend/modules/customers/schemas/customer_schemas.py

from pydantic import BaseModel, EmailStr, Field, field_validator, constr
from typing import Optional, List
from datetime import datetime

from ..models.customer_models import CustomerTier


class CustomerCreate(BaseModel):
    """Signup data collected during onboarding"""

    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    email: EmailStr
    phone: Optional[constr(pattern=r"^\+?[1-9]\d{1,14}$")] = None
    date_of_birth: Optional[datetime] = None
    marketing_opt_in: bool = True

    @field_validator("first_name", "last_name")
    def require_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name fields must not be blank")
        return v

    @field_validator("email")
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class Customer(BaseModel):
    """Customer response"""

    id: int
    restaurant_id: int
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    date_of_birth: Optional[datetime] = None
    total_points: int
    lifetime_points: int
    current_tier: CustomerTier
    tier_progress: int
    visit_count: int
    total_spent: float
    last_visit: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class CustomerListResponse(BaseModel):
    customers: List[Customer]
    total: int
    page: int
    page_size: int
