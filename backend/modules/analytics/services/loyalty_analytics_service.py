# backend/modules/analytics/services/loyalty_analytics_service.py

"""
Loyalty program analytics: ROI, monthly revenue breakdown and customer
behavior for a restaurant over a date range.

Customers are attributed to the range by their signup date and points
movements by their transaction date. The ``compute_*`` functions are pure
and take plain rows, so they can be exercised without a database.
"""

import calendar
import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Iterable, List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from core.config import get_settings
from modules.customers.models.customer_models import Customer
from modules.loyalty.models.loyalty_models import LoyaltyTransaction, TransactionType
from modules.restaurants.models.restaurant_models import Restaurant
from modules.restaurants.services.restaurant_service import RestaurantService

from ..schemas.loyalty_analytics_schemas import (
    CustomerBehaviorMetrics,
    LoyaltyROIMetrics,
    RevenueBreakdownEntry,
    RevenueBreakdownResponse,
    RoiStatus,
)

logger = logging.getLogger(__name__)

DAYS_PER_MONTH = 30
NO_REDEMPTIONS_TEXT = "No loyalty rewards have been redeemed yet."


@dataclass
class AnalyticsSettings:
    """Per-restaurant inputs to the financial estimates"""

    point_value: float = 1.0  # currency value of one point
    cogs_percentage: float = 0.3
    customer_lifetime_months: int = 12


@dataclass
class CustomerActivity:
    total_points: int = 0
    lifetime_points: int = 0
    total_spent: float = 0.0
    visit_count: int = 0


def _number_setting(value, default: float, allow_zero: bool = False) -> float:
    """Stored setting as a finite number, or ``default`` when unusable"""
    if isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number) or number < 0 or (number == 0 and not allow_zero):
        return default
    return number


def analytics_settings_for(restaurant: Restaurant) -> AnalyticsSettings:
    app_settings = get_settings()

    points_per_dollar = _number_setting(restaurant.get_setting("points_per_dollar"), 1.0)

    # 0 is a valid COGS share, more than 100% is not
    cogs_percentage = _number_setting(
        restaurant.get_setting("cogs_percentage"),
        app_settings.default_cogs_percentage,
        allow_zero=True,
    )
    if cogs_percentage > 1:
        cogs_percentage = app_settings.default_cogs_percentage

    lifetime_months = int(_number_setting(
        restaurant.get_setting("customer_lifetime_months"),
        app_settings.default_customer_lifetime_months,
    ))
    if lifetime_months <= 0:
        lifetime_months = app_settings.default_customer_lifetime_months

    return AnalyticsSettings(
        point_value=1 / points_per_dollar,
        cogs_percentage=float(cogs_percentage),
        customer_lifetime_months=lifetime_months,
    )


def classify_roi(roi: float) -> RoiStatus:
    if roi > 100:
        return RoiStatus.HIGH_PERFORMING
    if roi >= 0:
        return RoiStatus.PROFITABLE
    return RoiStatus.LOSING_MONEY


def roi_summary_text(net_profit: float, reward_cost: float, currency: str = "AED") -> str:
    if reward_cost <= 0:
        return NO_REDEMPTIONS_TEXT
    return (
        f"For every 1 {currency} you give in loyalty points, "
        f"you earn {net_profit / reward_cost:.2f} {currency} in return."
    )


def months_in_range(start: date, end: date) -> int:
    """Whole 30-day months spanned by the range, at least 1"""
    days = (end - start).days
    return max(1, math.ceil(days / DAYS_PER_MONTH))


def month_windows(start: date, end: date) -> List[Tuple[str, date, date]]:
    """Calendar months intersecting [start, end] as (label, first day, last day)"""
    windows = []
    year, month = start.year, start.month
    while date(year, month, 1) <= end:
        last_day = calendar.monthrange(year, month)[1]
        first = date(year, month, 1)
        windows.append((first.strftime("%b %Y"), first, date(year, month, last_day)))
        if month == 12:
            year, month = year + 1, 1
        else:
            month += 1
    return windows


def day_bounds(start: date, end: date) -> Tuple[datetime, datetime]:
    return datetime.combine(start, time.min), datetime.combine(end, time.max)


def compute_roi_metrics(
    customers: Sequence[CustomerActivity],
    transaction_points: Iterable[int],
    settings: AnalyticsSettings,
    start: date,
    end: date,
    currency: str = "AED",
) -> LoyaltyROIMetrics:
    """ROI and behavioral KPIs from customer rows and signed point movements"""
    points = list(transaction_points)
    points_issued = sum(p for p in points if p > 0)
    points_redeemed = sum(abs(p) for p in points if p < 0)

    gross_revenue = sum(c.total_spent or 0.0 for c in customers)
    reward_cost = points_redeemed * settings.point_value
    net_revenue = gross_revenue - reward_cost
    cogs = gross_revenue * settings.cogs_percentage
    net_profit = net_revenue - cogs

    roi = (net_profit / reward_cost) * 100 if reward_cost > 0 else 0.0

    liability = sum(c.total_points or 0 for c in customers) * settings.point_value

    active_customers = len(customers)
    repeat_customers = [c for c in customers if (c.visit_count or 0) > 1]
    loyalty_customers = len(repeat_customers)
    repeat_purchase_rate = (
        loyalty_customers / active_customers * 100 if active_customers else 0.0
    )

    total_orders = sum(c.visit_count or 0 for c in customers)
    average_order_value = gross_revenue / total_orders if total_orders else 0.0
    # Average spend per repeat customer, kept as the loyalty counterpart of AOV
    loyalty_aov = (
        sum(c.total_spent or 0.0 for c in repeat_customers) / loyalty_customers
        if loyalty_customers
        else 0.0
    )

    months = months_in_range(start, end)
    purchase_frequency = (
        total_orders / active_customers / months if active_customers else 0.0
    )
    customer_lifetime_value = (
        average_order_value * purchase_frequency * settings.customer_lifetime_months
    )

    return LoyaltyROIMetrics(
        start_date=start,
        end_date=end,
        roi=roi,
        roi_status=classify_roi(roi),
        roi_summary_text=roi_summary_text(net_profit, reward_cost, currency),
        gross_revenue=gross_revenue,
        reward_cost=reward_cost,
        net_revenue=net_revenue,
        cogs=cogs,
        net_profit=net_profit,
        total_reward_liability=liability,
        repeat_purchase_rate=repeat_purchase_rate,
        average_order_value=average_order_value,
        loyalty_aov=loyalty_aov,
        purchase_frequency=purchase_frequency,
        customer_lifetime_value=customer_lifetime_value,
        total_points_issued=points_issued,
        total_points_redeemed=points_redeemed,
        active_customers=active_customers,
        loyalty_customers=loyalty_customers,
    )


def compute_month_entry(
    label: str,
    customer_spend: Iterable[float],
    redemption_points: Iterable[int],
    settings: AnalyticsSettings,
) -> RevenueBreakdownEntry:
    gross_revenue = sum(s or 0.0 for s in customer_spend)
    reward_cost = sum(abs(p) for p in redemption_points) * settings.point_value
    net_revenue = gross_revenue - reward_cost
    net_profit = net_revenue - gross_revenue * settings.cogs_percentage

    return RevenueBreakdownEntry(
        month=label,
        gross_revenue=gross_revenue,
        reward_cost=reward_cost,
        net_revenue=net_revenue,
        net_profit=net_profit,
    )


def compute_customer_behavior(
    customers: Sequence[CustomerActivity], start: date, end: date
) -> CustomerBehaviorMetrics:
    total = len(customers)
    new_customers = sum(1 for c in customers if c.visit_count == 1)
    returning_customers = sum(1 for c in customers if (c.visit_count or 0) > 1)

    if total:
        participation = returning_customers / total * 100
        avg_earned = sum(c.lifetime_points or 0 for c in customers) / total
        avg_redeemed = sum(
            (c.lifetime_points or 0) - (c.total_points or 0) for c in customers
        ) / total
    else:
        participation = avg_earned = avg_redeemed = 0.0

    return CustomerBehaviorMetrics(
        start_date=start,
        end_date=end,
        new_customers=new_customers,
        returning_customers=returning_customers,
        loyalty_participation=participation,
        average_points_earned=avg_earned,
        average_points_redeemed=avg_redeemed,
    )


class LoyaltyAnalyticsService:
    """Loads restaurant data for the loyalty analytics calculations"""

    def __init__(self, db: Session):
        self.db = db
        self.restaurants = RestaurantService(db)

    def _customer_activity(
        self, restaurant_id: int, start: datetime, end: datetime
    ) -> List[CustomerActivity]:
        rows = (
            self.db.query(
                Customer.total_points,
                Customer.lifetime_points,
                Customer.total_spent,
                Customer.visit_count,
            )
            .filter(
                Customer.restaurant_id == restaurant_id,
                Customer.created_at >= start,
                Customer.created_at <= end,
            )
            .all()
        )
        return [
            CustomerActivity(
                total_points=row.total_points or 0,
                lifetime_points=row.lifetime_points or 0,
                total_spent=row.total_spent or 0.0,
                visit_count=row.visit_count or 0,
            )
            for row in rows
        ]

    def _transaction_points(
        self,
        restaurant_id: int,
        start: datetime,
        end: datetime,
        transaction_type: Optional[TransactionType] = None,
    ) -> List[int]:
        query = self.db.query(LoyaltyTransaction.points).filter(
            LoyaltyTransaction.restaurant_id == restaurant_id,
            LoyaltyTransaction.created_at >= start,
            LoyaltyTransaction.created_at <= end,
        )
        if transaction_type is not None:
            query = query.filter(LoyaltyTransaction.type == transaction_type)
        return [row.points for row in query.all()]

    def get_loyalty_roi_metrics(
        self, restaurant_id: int, start: date, end: date
    ) -> LoyaltyROIMetrics:
        restaurant = self.restaurants.get_restaurant(restaurant_id)
        settings = analytics_settings_for(restaurant)
        range_start, range_end = day_bounds(start, end)

        customers = self._customer_activity(restaurant_id, range_start, range_end)
        points = self._transaction_points(restaurant_id, range_start, range_end)

        metrics = compute_roi_metrics(
            customers, points, settings, start, end, restaurant.currency or "AED"
        )
        logger.info(
            f"Loyalty ROI for restaurant {restaurant_id} {start}..{end}: "
            f"{metrics.roi:.2f}% ({metrics.roi_status.value})"
        )
        return metrics

    def get_revenue_breakdown(
        self, restaurant_id: int, start: date, end: date
    ) -> RevenueBreakdownResponse:
        """One entry per calendar month touching the range, each covering the whole month"""
        restaurant = self.restaurants.get_restaurant(restaurant_id)
        settings = analytics_settings_for(restaurant)

        entries = []
        for label, month_start, month_end in month_windows(start, end):
            window_start, window_end = day_bounds(month_start, month_end)
            customers = self._customer_activity(restaurant_id, window_start, window_end)
            redemptions = self._transaction_points(
                restaurant_id, window_start, window_end, TransactionType.REDEMPTION
            )
            entries.append(
                compute_month_entry(
                    label, [c.total_spent for c in customers], redemptions, settings
                )
            )

        return RevenueBreakdownResponse(start_date=start, end_date=end, months=entries)

    def get_customer_behavior_metrics(
        self, restaurant_id: int, start: date, end: date
    ) -> CustomerBehaviorMetrics:
        self.restaurants.get_restaurant(restaurant_id)
        range_start, range_end = day_bounds(start, end)
        customers = self._customer_activity(restaurant_id, range_start, range_end)
        return compute_customer_behavior(customers, start, end)
