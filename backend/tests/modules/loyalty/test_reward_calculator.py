# backend/tests/modules/loyalty/test_reward_calculator.py

"""
Tests for the reward calculator.
"""

import math
from dataclasses import FrozenInstanceError

import pytest

from modules.loyalty.services.reward_calculator import (
    ManualStrategy,
    RewardEngineConfig,
    SmartStrategy,
    calculate_base_points,
    compute_points,
    resolve_tier_multiplier,
    truncate_points,
)

DEFAULT_MULTIPLIERS = {"bronze": 1.0, "silver": 1.25, "gold": 1.5, "platinum": 2.0}


def smart_config(cost=5.0, sell=10.0, alloc=20.0, ceiling=1000, multipliers=None):
    return RewardEngineConfig(
        strategy=SmartStrategy(
            cost_price=cost, selling_price=sell, profit_allocation_percent=alloc
        ),
        tier_multipliers=DEFAULT_MULTIPLIERS if multipliers is None else multipliers,
        max_points_per_order=ceiling,
    )


def manual_config(aed=10.0, point=1.0, ceiling=1000, multipliers=None):
    return RewardEngineConfig(
        strategy=ManualStrategy(aed_value=aed, point_value=point),
        tier_multipliers=DEFAULT_MULTIPLIERS if multipliers is None else multipliers,
        max_points_per_order=ceiling,
    )


class TestReferenceExamples:
    """Worked examples for both earning modes"""

    def test_smart_mode_bronze(self):
        assert compute_points(smart_config(), 100, "bronze") == 10

    def test_manual_mode_silver(self):
        # floor(95 / 10 * 1) = 9, floor(9 * 1.25) = 11
        assert compute_points(manual_config(), 95, "silver") == 11

    def test_two_stage_truncation(self):
        # floor(19 / 10) = 1, floor(1 * 1.5) = 1; a single floor of 1.9 * 1.5 gives 2
        assert compute_points(manual_config(), 19, "gold") == 1

    def test_platinum_doubles_base_points(self):
        assert compute_points(smart_config(), 100, "platinum") == 20


class TestZeroAndDegenerateInputs:
    """The calculator collapses bad input to zero instead of raising"""

    @pytest.mark.parametrize("config", [smart_config(), manual_config()])
    def test_zero_amount_earns_nothing(self, config):
        assert compute_points(config, 0, "platinum") == 0

    @pytest.mark.parametrize("amount", [-50, -0.01, float("nan"), float("-inf")])
    def test_negative_and_nan_amounts_treated_as_zero(self, amount):
        assert compute_points(manual_config(), amount, "gold") == 0
        assert compute_points(smart_config(), amount, "gold") == 0

    def test_infinite_amount_is_treated_as_zero(self):
        assert compute_points(manual_config(), float("inf")) == 0

    def test_smart_zero_selling_price(self):
        assert compute_points(smart_config(sell=0), 100) == 0

    def test_manual_zero_aed_value(self):
        assert compute_points(manual_config(aed=0), 100) == 0

    def test_manual_negative_aed_value(self):
        assert compute_points(manual_config(aed=-5), 100) == 0

    def test_cost_above_selling_price_clamps_to_zero(self):
        assert compute_points(smart_config(cost=15, sell=10), 100) == 0

    def test_non_numeric_amount_does_not_raise(self):
        assert compute_points(manual_config(), "not a number") == 0


class TestTierMultipliers:

    def test_unknown_tier_matches_explicit_one(self):
        config = manual_config(multipliers={"bronze": 1.0, "diamond": 3.0})
        unknown = compute_points(config, 250, "unobtainium")
        explicit = compute_points(config, 250, "bronze")
        assert unknown == explicit == 25

    def test_missing_multiplier_map_defaults_to_one(self):
        config = manual_config(multipliers={})
        assert compute_points(config, 95, "platinum") == 9

    @pytest.mark.parametrize("bad", [0, None, float("nan"), float("inf"), "x"])
    def test_unusable_multiplier_resolves_to_one(self, bad):
        assert resolve_tier_multiplier({"gold": bad}, "gold") == 1.0

    def test_multipliers_are_read_only(self):
        config = manual_config()
        with pytest.raises(TypeError):
            config.tier_multipliers["gold"] = 10

    def test_caller_mapping_changes_do_not_leak(self):
        multipliers = dict(DEFAULT_MULTIPLIERS)
        config = manual_config(multipliers=multipliers)
        multipliers["silver"] = 100
        assert compute_points(config, 95, "silver") == 11


class TestCeiling:

    def test_result_capped_at_max_points(self):
        assert compute_points(manual_config(ceiling=50), 10_000, "platinum") == 50

    def test_result_below_ceiling_is_unchanged(self):
        assert compute_points(manual_config(ceiling=50), 100, "bronze") == 10

    def test_huge_amount_saturates_to_ceiling(self):
        assert compute_points(manual_config(aed=1e-300), 1e300, "gold") == 1000

    @pytest.mark.parametrize("amount", [0, 1, 9.99, 95, 1234.5, 10 ** 6])
    @pytest.mark.parametrize("tier", ["bronze", "silver", "gold", "platinum", "other"])
    def test_output_is_bounded_int(self, amount, tier):
        for config in (smart_config(ceiling=250), manual_config(ceiling=250)):
            points = compute_points(config, amount, tier)
            assert isinstance(points, int)
            assert 0 <= points <= 250


class TestDeterminism:

    def test_same_inputs_same_output(self):
        config = smart_config(cost=3.3, sell=12.7, alloc=33.3)
        results = {compute_points(config, 87.65, "gold") for _ in range(20)}
        assert len(results) == 1

    def test_config_is_immutable(self):
        config = manual_config()
        with pytest.raises(FrozenInstanceError):
            config.max_points_per_order = 5


class TestHelpers:

    def test_base_points_truncates_toward_negative_infinity(self):
        assert calculate_base_points(ManualStrategy(aed_value=10, point_value=1), 99.99) == 9

    def test_truncate_points_handles_non_finite(self):
        assert truncate_points(float("nan")) == 0
        assert truncate_points(float("inf")) > 0
        assert truncate_points(float("-inf")) < 0
        assert truncate_points(-0.5) == math.floor(-0.5)
