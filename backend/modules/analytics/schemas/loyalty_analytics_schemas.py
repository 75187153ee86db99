# backend/modules/analytics/schemas/loyalty_analytics_schemas.py

from pydantic import BaseModel, Field
from typing import List
from datetime import date
from enum import Enum


class RoiStatus(str, Enum):
    HIGH_PERFORMING = "high-performing"
    PROFITABLE = "profitable"
    LOSING_MONEY = "losing-money"


class LoyaltyROIMetrics(BaseModel):
    """Return on the loyalty program for a date range"""

    start_date: date
    end_date: date

    # Primary KPI
    roi: float = Field(..., description="Net profit per unit of reward cost, as a percent")
    roi_status: RoiStatus
    roi_summary_text: str

    # Financial metrics
    gross_revenue: float
    reward_cost: float
    net_revenue: float
    cogs: float
    net_profit: float
    total_reward_liability: float = Field(..., description="Value of unspent points")

    # Behavioral KPIs
    repeat_purchase_rate: float
    average_order_value: float
    loyalty_aov: float
    purchase_frequency: float = Field(..., description="Orders per customer per month")
    customer_lifetime_value: float

    total_points_issued: int
    total_points_redeemed: int
    active_customers: int
    loyalty_customers: int


class RevenueBreakdownEntry(BaseModel):
    month: str = Field(..., description="Month label, e.g. 'Jan 2025'")
    gross_revenue: float
    reward_cost: float
    net_revenue: float
    net_profit: float


class RevenueBreakdownResponse(BaseModel):
    start_date: date
    end_date: date
    months: List[RevenueBreakdownEntry]


class CustomerBehaviorMetrics(BaseModel):
    start_date: date
    end_date: date
    new_customers: int
    returning_customers: int
    loyalty_participation: float = Field(..., description="Percent of customers with repeat visits")
    average_points_earned: float
    average_points_redeemed: float
