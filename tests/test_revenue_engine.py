"""Revenue engine tests: aggregate fallback, per-channel detail, paid programming and VOD."""

import pytest

from config_manager import ChannelStat, VodCategoryStat, RevenueAssumptions
from estimator.cost_engine import Costs, calculate_costs
from estimator.revenue_engine import (
    calculate_revenue,
    calculate_station_revenue,
    channel_monthly_revenue,
    live_multiplier,
    vod_yield_factor,
)


def _channel(**overrides):
    values = dict(id="40.1", name="Test", viewership=1000, average_retention_minutes=60,
                  ad_spots_per_hour=10, cpm_rate=10, fill_rate=50)
    values.update(overrides)
    return ChannelStat(**values)


class TestLiveAds:

    def test_aggregate_fallback(self, flat_assumptions):
        result = calculate_revenue(flat_assumptions, {}, channels=None)

        assert result.live_ad_revenue == pytest.approx(3600.00)
        assert result.total_revenue == pytest.approx(3600.00)
        assert result.channel_revenues == []

    def test_missing_fill_rate_means_full_fill(self, flat_assumptions):
        assumptions = RevenueAssumptions(**{**flat_assumptions.__dict__, "fill_rate": None})
        assert calculate_revenue(assumptions, {}).live_ad_revenue == pytest.approx(3600.00)

    def test_fill_rate_scales_aggregate(self, flat_assumptions):
        assumptions = RevenueAssumptions(**{**flat_assumptions.__dict__, "fill_rate": 35})
        assert calculate_revenue(assumptions, {}).live_ad_revenue == pytest.approx(1260.00)

    def test_multipliers_apply_to_aggregate(self, flat_assumptions):
        assumptions = RevenueAssumptions(**{**flat_assumptions.__dict__, "peak_time_multiplier": 1.2,
                                            "target_demographic_value": 1.1})
        assert live_multiplier(assumptions) == pytest.approx(1.32)
        assert calculate_revenue(assumptions, {}).live_ad_revenue == pytest.approx(3600 * 1.32)

    def test_per_channel_revenue(self, flat_assumptions):
        # 1000 viewers x 1 h x 10 spots x 50% x $10 CPM = $50/day
        result = calculate_revenue(flat_assumptions, {}, channels=[_channel()])

        assert result.live_ad_revenue == pytest.approx(1500.00)
        assert result.channel_revenues[0].channel_id == "40.1"
        assert result.channel_revenues[0].revenue == pytest.approx(1500.00)

    def test_channel_without_fill_uses_station_rate(self, flat_assumptions):
        assumptions = RevenueAssumptions(**{**flat_assumptions.__dict__, "fill_rate": 50})
        channel = _channel(fill_rate=None)
        assert channel_monthly_revenue(channel, assumptions) == pytest.approx(1500.00)

    def test_disabled_channel_earns_nothing(self, flat_assumptions):
        channels = [_channel(), _channel(id="40.2", enabled=False)]
        result = calculate_revenue(flat_assumptions, {}, channels=channels)

        assert result.live_ad_revenue == pytest.approx(1500.00)
        assert [c.revenue for c in result.channel_revenues] == [pytest.approx(1500.00), 0.0]

    def test_channel_dicts_are_accepted(self, flat_assumptions):
        row = {"id": "40.1", "viewership": 1000, "average_retention_minutes": 60, "ad_spots_per_hour": 10,
               "cpm_rate": 10, "fill_rate": 50}
        assert calculate_revenue(flat_assumptions, {}, channels=[row]).live_ad_revenue == pytest.approx(1500.00)

    def test_live_ads_disabled(self, flat_assumptions):
        assumptions = RevenueAssumptions(**{**flat_assumptions.__dict__, "live_ads_enabled": False})
        result = calculate_revenue(assumptions, {}, channels=[_channel()])

        assert result.live_ad_revenue == 0
        assert result.channel_revenues == []


class TestPaidProgramming:

    def test_blocks_times_rate(self):
        assumptions = RevenueAssumptions(live_ads_enabled=False, vod_ads_enabled=False,
                                         monthly_paid_blocks=4, rate_per_block=250)
        result = calculate_revenue(assumptions, Costs())

        assert result.paid_programming_revenue == pytest.approx(1000.00)
        assert result.premium_sponsorship_revenue is None

    def test_premium_sponsorships_reported_separately(self):
        assumptions = RevenueAssumptions(live_ads_enabled=False, vod_ads_enabled=False,
                                         monthly_paid_blocks=4, rate_per_block=250,
                                         premium_sponsorship_enabled=True, premium_sponsorship_count=2,
                                         premium_sponsorship_rate=500)
        result = calculate_revenue(assumptions, Costs())

        assert result.paid_programming_revenue == pytest.approx(2000.00)
        assert result.premium_sponsorship_revenue == pytest.approx(1000.00)
        assert result.total_revenue == pytest.approx(2000.00)


class TestVodAds:

    def test_aggregate_with_yield(self):
        assumptions = RevenueAssumptions(live_ads_enabled=False, paid_programming_enabled=False,
                                         monthly_vod_views=5000, ad_spots_per_vod_view=1, vod_cpm_rate=20,
                                         vod_fill_rate=100, vod_skip_rate=0.15, vod_completion_rate=0.85,
                                         vod_premium_placement_rate=0.05)
        assert vod_yield_factor(assumptions) == pytest.approx(0.85 * 0.85 * 1.05)
        assert calculate_revenue(assumptions, {}).vod_ad_revenue == pytest.approx(100 * 0.85 * 0.85 * 1.05)

    def test_per_category(self):
        assumptions = RevenueAssumptions(live_ads_enabled=False, paid_programming_enabled=False,
                                         vod_fill_rate=50, vod_skip_rate=0, vod_completion_rate=1,
                                         vod_premium_placement_rate=0)
        categories = [
            VodCategoryStat(id="news", monthly_views=2000, ad_spots_per_view=1, cpm_rate=10),
            VodCategoryStat(id="sports", monthly_views=1000, ad_spots_per_view=2, cpm_rate=20, fill_rate=100),
        ]
        result = calculate_revenue(assumptions, {}, vod_categories=categories)

        assert [c.category_id for c in result.vod_category_revenues] == ["news", "sports"]
        assert result.vod_category_revenues[0].revenue == pytest.approx(10.00)
        assert result.vod_category_revenues[1].revenue == pytest.approx(40.00)
        assert result.vod_ad_revenue == pytest.approx(50.00)


class TestProfit:

    def test_net_operating_profit_subtracts_costs(self, flat_assumptions):
        result = calculate_revenue(flat_assumptions, Costs(encoding=100, storage=50, delivery=25, other=25))
        assert result.net_operating_profit == pytest.approx(3400.00)

    def test_cost_mapping_is_accepted(self, flat_assumptions):
        result = calculate_revenue(flat_assumptions, {"encoding": 600})
        assert result.net_operating_profit == pytest.approx(3000.00)

    def test_station_revenue_drops_live_ads_when_not_streaming(self, default_config):
        config = default_config.replace(stream_enabled=False)
        result = calculate_station_revenue(config, calculate_costs(config))

        assert result.live_ad_revenue == 0
        assert config.revenue.live_ads_enabled is True

    def test_station_revenue_uses_channel_lineup(self, default_config):
        result = calculate_station_revenue(default_config, calculate_costs(default_config))
        assert len(result.channel_revenues) == len(default_config.channels)
        assert len(result.vod_category_revenues) == len(default_config.vod_categories)
