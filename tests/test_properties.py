"""Cross-engine properties: determinism, non-negativity, monotonicity, rounding."""

import pytest

from config.scenarios import SCENARIO_PRESETS
from config_manager import create_preset_config
from estimator.cost_engine import calculate_costs
from estimator.hardware import calculate_hardware_requirements
from estimator.revenue_engine import calculate_revenue, calculate_station_revenue
from estimator.validation import validate_settings

BUCKETS = ("encoding", "storage", "delivery", "other")


@pytest.fixture(params=sorted(SCENARIO_PRESETS))
def preset_config(request):
    return create_preset_config(request.param)


def test_engines_are_deterministic(preset_config):
    assert calculate_costs(preset_config) == calculate_costs(preset_config)
    assert calculate_hardware_requirements(preset_config) == calculate_hardware_requirements(preset_config)
    assert validate_settings(preset_config) == validate_settings(preset_config)
    costs = calculate_costs(preset_config)
    assert calculate_station_revenue(preset_config, costs) == calculate_station_revenue(preset_config, costs)


def test_costs_and_revenue_are_non_negative(preset_config):
    costs = calculate_costs(preset_config)
    assert all(getattr(costs, b) >= 0 for b in BUCKETS)
    assert calculate_station_revenue(preset_config, costs).total_revenue >= 0


def test_costs_are_rounded_to_cents(preset_config):
    costs = calculate_costs(preset_config)
    for bucket in BUCKETS:
        value = getattr(costs, bucket)
        assert round(value, 2) == value


def test_delivery_never_drops_with_more_viewers(preset_config):
    previous = -1.0
    for viewers in (0, 10, 100, 1000):
        delivery = calculate_costs(preset_config.replace(peak_concurrent_viewers=viewers)).delivery
        assert delivery >= previous
        previous = delivery


def test_live_revenue_never_drops_with_higher_cpm(flat_assumptions):
    previous = -1.0
    for cpm in (0, 5, 15, 40):
        assumptions = type(flat_assumptions)(**{**flat_assumptions.__dict__, "cpm_rate": cpm})
        revenue = calculate_revenue(assumptions, {}).live_ad_revenue
        assert revenue >= previous
        previous = revenue


def test_empty_detail_uses_aggregate(flat_assumptions):
    result = calculate_revenue(flat_assumptions, {}, [], [])
    assert result.live_ad_revenue == pytest.approx(3600.00)
