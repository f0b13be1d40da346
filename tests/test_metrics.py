"""KPI and breakdown table tests."""

import pytest

from analysis.metrics import (
    compute_kpis,
    cost_breakdown_frame,
    revenue_breakdown_frame,
    channel_revenue_frame,
    vod_category_frame,
    hardware_frame,
    viewer_sensitivity,
)
from estimator.cost_engine import Costs
from estimator.revenue_engine import RevenueCalculations
from estimator.runner import compute_estimate


@pytest.fixture
def sample():
    costs = Costs(encoding=100, storage=50, delivery=25, other=25)
    revenue = RevenueCalculations(live_ad_revenue=300, paid_programming_revenue=100, vod_ad_revenue=0,
                                  total_revenue=400, net_operating_profit=200)
    return costs, revenue


def test_kpis(sample):
    kpis = compute_kpis(*sample)

    assert kpis["total_monthly_cost"] == 200
    assert kpis["annual_cost"] == 2400
    assert kpis["annual_profit"] == 2400
    assert kpis["profit_margin"] == pytest.approx(0.5)
    assert kpis["break_even"] is True
    assert kpis["encoding_share"] == pytest.approx(0.5)
    assert sum(kpis[f"{b}_share"] for b in ("encoding", "storage", "delivery", "other")) == pytest.approx(1.0)


def test_kpis_with_no_cost_or_revenue():
    kpis = compute_kpis(Costs(), RevenueCalculations())

    assert kpis["profit_margin"] == 0
    assert kpis["encoding_share"] == 0


def test_cost_and_revenue_frames(sample):
    costs, revenue = sample
    cost_df = cost_breakdown_frame(costs)
    revenue_df = revenue_breakdown_frame(revenue)

    assert list(cost_df["bucket"]) == ["Encoding", "Storage", "Delivery", "Other"]
    assert cost_df["annual"].iloc[0] == 1200
    assert revenue_df["annual"].sum() == pytest.approx(4800)


def test_detail_frames_follow_config(default_config):
    estimate = compute_estimate(default_config)
    channel_df = channel_revenue_frame(default_config, estimate.revenue)
    category_df = vod_category_frame(default_config, estimate.revenue)

    assert list(channel_df["id"]) == [c.id for c in default_config.channels]
    assert channel_df["monthly_revenue"].sum() == pytest.approx(estimate.revenue.live_ad_revenue)
    assert category_df["monthly_revenue"].sum() == pytest.approx(estimate.revenue.vod_ad_revenue)
    assert "Recommended" in list(hardware_frame(estimate.hardware)["requirement"])


def test_viewer_sensitivity_grows_with_audience(managed_config):
    df = viewer_sensitivity(managed_config, [0, 100, 200])

    assert list(df["viewers"]) == [0, 100, 200]
    assert df["delivery_cost"].iloc[0] == 0
    assert df["delivery_cost"].is_monotonic_increasing
    assert (df["total_cost"] >= df["delivery_cost"]).all()
