# backend/modules/loyalty/services/reward_calculator.py

"""
Reward calculator: converts an order amount into loyalty points.

The calculator is a pure function of an immutable configuration value,
the order amount and the customer's tier. It performs no I/O and never
raises; degenerate inputs collapse to zero points (or a 1.0 multiplier)
instead.

Points are truncated twice: once when the base points are derived from
the order amount, and again after the tier multiplier is applied. The
result is finally clamped to ``[0, max_points_per_order]``.
"""

from dataclasses import dataclass, field
import math
import sys
from types import MappingProxyType
from typing import Mapping, Union

DEFAULT_TIER = "bronze"
DEFAULT_TIER_MULTIPLIER = 1.0


@dataclass(frozen=True)
class SmartStrategy:
    """Points are a share of the estimated profit on the order."""

    cost_price: float = 0.0
    selling_price: float = 0.0
    profit_allocation_percent: float = 20.0


@dataclass(frozen=True)
class ManualStrategy:
    """Points are a fixed ratio of the amount spent."""

    aed_value: float = 10.0
    point_value: float = 1.0


EarningStrategy = Union[SmartStrategy, ManualStrategy]


def _freeze(multipliers: Mapping[str, float]) -> Mapping[str, float]:
    return MappingProxyType(dict(multipliers))


@dataclass(frozen=True)
class RewardEngineConfig:
    """Immutable calculator input for one restaurant."""

    strategy: EarningStrategy
    tier_multipliers: Mapping[str, float] = field(default_factory=dict)
    max_points_per_order: int = 1000

    def __post_init__(self):
        object.__setattr__(self, "tier_multipliers", _freeze(self.tier_multipliers))


def _finite(value, default: float = 0.0) -> float:
    """Coerce to a finite float, falling back to ``default``."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def truncate_points(value: float) -> int:
    """Floor to an int; NaN is 0 and infinities saturate."""
    if math.isnan(value):
        return 0
    if math.isinf(value):
        return sys.maxsize if value > 0 else -sys.maxsize
    return math.floor(value)


def resolve_tier_multiplier(
    tier_multipliers: Mapping[str, float], customer_tier: str
) -> float:
    """Multiplier for a tier; unknown tiers and unusable values give 1.0."""
    multiplier = _finite((tier_multipliers or {}).get(customer_tier), 0.0)
    return multiplier if multiplier else DEFAULT_TIER_MULTIPLIER


def calculate_base_points(strategy: EarningStrategy, order_amount: float) -> int:
    """First truncation stage: points before the tier multiplier."""
    if isinstance(strategy, SmartStrategy):
        selling_price = _finite(strategy.selling_price)
        if selling_price <= 0:
            return 0
        cost_price = _finite(strategy.cost_price)
        allocation = _finite(strategy.profit_allocation_percent)
        profit = (selling_price - cost_price) * (order_amount / selling_price)
        reward_value = profit * (allocation / 100)
        return truncate_points(reward_value)

    if isinstance(strategy, ManualStrategy):
        aed_value = _finite(strategy.aed_value)
        if aed_value <= 0:
            return 0
        point_value = _finite(strategy.point_value)
        return truncate_points((order_amount / aed_value) * point_value)

    return 0


def compute_points(
    config: RewardEngineConfig,
    order_amount: float,
    customer_tier: str = DEFAULT_TIER,
) -> int:
    """Points awarded for ``order_amount`` at ``customer_tier``.

    Negative and non-finite amounts are treated as 0, so refunds never
    earn (or claw back) points.
    """
    amount = max(_finite(order_amount), 0.0)

    base_points = calculate_base_points(config.strategy, amount)
    multiplier = resolve_tier_multiplier(config.tier_multipliers, customer_tier)
    final_points = truncate_points(base_points * multiplier)

    ceiling = max(int(_finite(config.max_points_per_order)), 0)
    return min(max(final_points, 0), ceiling)
