# backend/modules/analytics/routers/loyalty_analytics_router.py

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional, Tuple
from datetime import date, timedelta
import logging

from core.database import get_db
from core.error_handling import handle_api_errors, APIValidationError

from ..services.loyalty_analytics_service import LoyaltyAnalyticsService
from ..schemas.loyalty_analytics_schemas import (
    CustomerBehaviorMetrics,
    LoyaltyROIMetrics,
    RevenueBreakdownResponse,
)

router = APIRouter(
    prefix="/api/v1/restaurants/{restaurant_id}/analytics/loyalty",
    tags=["Loyalty Analytics"],
)
logger = logging.getLogger(__name__)

DEFAULT_RANGE_DAYS = 30


def resolve_date_range(
    start: Optional[date], end: Optional[date]
) -> Tuple[date, date]:
    """Fill in the default window (last 30 days) and reject inverted ranges"""
    end = end or date.today()
    start = start or end - timedelta(days=DEFAULT_RANGE_DAYS)
    if end < start:
        raise APIValidationError(
            "end must not be before start",
            {"start": start.isoformat(), "end": end.isoformat()},
        )
    return start, end


@router.get("/roi", response_model=LoyaltyROIMetrics)
@handle_api_errors
async def get_loyalty_roi(
    restaurant_id: int,
    start: Optional[date] = Query(None, description="First day of the range"),
    end: Optional[date] = Query(None, description="Last day of the range"),
    db: Session = Depends(get_db),
):
    """
    Loyalty program ROI for the range.

    ROI is net profit (revenue minus reward cost and estimated COGS) per unit
    of reward cost. Behavioral KPIs (repeat rate, AOV, frequency, CLV) are
    included for the same set of customers.
    """
    start, end = resolve_date_range(start, end)
    return LoyaltyAnalyticsService(db).get_loyalty_roi_metrics(restaurant_id, start, end)


@router.get("/revenue-breakdown", response_model=RevenueBreakdownResponse)
@handle_api_errors
async def get_revenue_breakdown(
    restaurant_id: int,
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    start, end = resolve_date_range(start, end)
    return LoyaltyAnalyticsService(db).get_revenue_breakdown(restaurant_id, start, end)


@router.get("/customer-behavior", response_model=CustomerBehaviorMetrics)
@handle_api_errors
async def get_customer_behavior(
    restaurant_id: int,
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    start, end = resolve_date_range(start, end)
    return LoyaltyAnalyticsService(db).get_customer_behavior_metrics(
        restaurant_id, start, end
    )
