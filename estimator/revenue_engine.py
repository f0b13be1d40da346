#!/usr/bin/env python3
"""
Monthly revenue engine: live advertising, paid programming and VOD
advertising, plus net operating profit against a cost breakdown.

Revenue values are left unrounded; presentation code rounds for display.
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, List, Any, Optional, Sequence

from config.scenarios import REVENUE_FALLBACKS
from utils.helpers import ensure_number
from estimator.cost_engine import Costs, costs_from_dict, flag

DAYS_PER_MONTH = 30


@dataclass(frozen=True)
class ChannelRevenue:
    channel_id: str
    revenue: float


@dataclass(frozen=True)
class VodCategoryRevenue:
    category_id: str
    revenue: float


@dataclass(frozen=True)
class RevenueCalculations:
    """Monthly revenue breakdown"""
    live_ad_revenue: float = 0.0
    paid_programming_revenue: float = 0.0
    vod_ad_revenue: float = 0.0
    total_revenue: float = 0.0
    net_operating_profit: float = 0.0
    channel_revenues: List[ChannelRevenue] = field(default_factory=list)
    vod_category_revenues: List[VodCategoryRevenue] = field(default_factory=list)
    premium_sponsorship_revenue: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _rate(assumptions, name: str) -> float:
    return ensure_number(getattr(assumptions, name, None), REVENUE_FALLBACKS.get(name, 0))


def _record_value(record, name: str, default: float = 0.0) -> float:
    if isinstance(record, dict):
        return ensure_number(record.get(name), default)
    return ensure_number(getattr(record, name, None), default)


def _record_id(record, name: str = "id") -> str:
    value = record.get(name) if isinstance(record, dict) else getattr(record, name, None)
    return "" if value is None else str(value)


def _fill_fraction(record, fallback_percent: float) -> float:
    """Record fill rate as a fraction, falling back when absent."""
    raw = record.get("fill_rate") if isinstance(record, dict) else getattr(record, "fill_rate", None)
    if raw is None:
        return fallback_percent / 100
    return ensure_number(raw, 100) / 100


def _is_enabled(record) -> bool:
    enabled = record.get("enabled", True) if isinstance(record, dict) else getattr(record, "enabled", True)
    return enabled is not False


def live_multiplier(assumptions) -> float:
    """Peak-time × seasonal × demographic multiplier chain."""
    return (_rate(assumptions, "peak_time_multiplier")
            * _rate(assumptions, "seasonal_multiplier")
            * _rate(assumptions, "target_demographic_value"))


def vod_yield_factor(assumptions) -> float:
    """(1 - skip) × completion × (1 + premium placement)."""
    return ((1 - _rate(assumptions, "vod_skip_rate"))
            * _rate(assumptions, "vod_completion_rate")
            * (1 + _rate(assumptions, "vod_premium_placement_rate")))


def channel_monthly_revenue(channel, assumptions) -> float:
    """Monthly live-ad revenue for one channel; 0 when the channel is disabled."""
    if not _is_enabled(channel):
        return 0.0
    fill = _fill_fraction(channel, _rate(assumptions, "fill_rate"))
    daily = (_record_value(channel, "viewership")
             * (_record_value(channel, "average_retention_minutes") / 60)
             * _record_value(channel, "ad_spots_per_hour")
             * fill
             * _record_value(channel, "cpm_rate")) / 1000
    return daily * DAYS_PER_MONTH * live_multiplier(assumptions)


def category_monthly_revenue(category, assumptions) -> float:
    """Monthly VOD-ad revenue for one content category."""
    fill = _fill_fraction(category, _rate(assumptions, "vod_fill_rate"))
    base = (_record_value(category, "monthly_views")
            * _record_value(category, "ad_spots_per_view")
            * fill
            * _record_value(category, "cpm_rate")) / 1000
    return base * vod_yield_factor(assumptions)


def _aggregate_live_revenue(assumptions) -> float:
    daily = (_rate(assumptions, "average_daily_unique_viewers")
             * _rate(assumptions, "average_viewing_hours_per_viewer")
             * _rate(assumptions, "ad_spots_per_hour")
             * (_rate(assumptions, "fill_rate") / 100)
             * _rate(assumptions, "cpm_rate")) / 1000
    return daily * DAYS_PER_MONTH * live_multiplier(assumptions)


def _aggregate_vod_revenue(assumptions) -> float:
    base = (_rate(assumptions, "monthly_vod_views")
            * _rate(assumptions, "ad_spots_per_vod_view")
            * (_rate(assumptions, "vod_fill_rate") / 100)
            * _rate(assumptions, "vod_cpm_rate")) / 1000
    return base * vod_yield_factor(assumptions)


def calculate_revenue(assumptions,
                      costs,
                      channels: Optional[Sequence] = None,
                      vod_categories: Optional[Sequence] = None) -> RevenueCalculations:
    """
    Compute monthly revenue and net operating profit.

    Per-channel and per-category detail is used when supplied and non-empty;
    otherwise the aggregate assumption fields are used with the same
    multipliers.

    Args:
        assumptions: RevenueAssumptions (or any object with its attributes)
        costs: Costs, or a mapping with encoding/storage/delivery/other
        channels: Optional ChannelStat records (or dicts)
        vod_categories: Optional VodCategoryStat records (or dicts)

    Returns:
        RevenueCalculations
    """
    if not isinstance(costs, Costs):
        costs = costs_from_dict(costs if isinstance(costs, dict) else {})

    live_ad_revenue = 0.0
    channel_revenues = []
    if getattr(assumptions, "live_ads_enabled", False):
        if channels:
            for channel in channels:
                revenue = channel_monthly_revenue(channel, assumptions)
                live_ad_revenue += revenue
                channel_revenues.append(ChannelRevenue(_record_id(channel), revenue))
        else:
            live_ad_revenue = _aggregate_live_revenue(assumptions)

    paid_programming_revenue = 0.0
    premium_sponsorship_revenue = 0.0
    if getattr(assumptions, "paid_programming_enabled", False):
        paid_programming_revenue = _rate(assumptions, "monthly_paid_blocks") * _rate(assumptions, "rate_per_block")
        if getattr(assumptions, "premium_sponsorship_enabled", False):
            premium_sponsorship_revenue = (_rate(assumptions, "premium_sponsorship_count")
                                           * _rate(assumptions, "premium_sponsorship_rate"))
            paid_programming_revenue += premium_sponsorship_revenue

    vod_ad_revenue = 0.0
    vod_category_revenues = []
    if getattr(assumptions, "vod_ads_enabled", False):
        if vod_categories:
            for category in vod_categories:
                revenue = category_monthly_revenue(category, assumptions)
                vod_ad_revenue += revenue
                vod_category_revenues.append(VodCategoryRevenue(_record_id(category), revenue))
        else:
            vod_ad_revenue = _aggregate_vod_revenue(assumptions)

    total_revenue = live_ad_revenue + paid_programming_revenue + vod_ad_revenue
    total_cost = costs.encoding + costs.storage + costs.delivery + costs.other

    return RevenueCalculations(
        live_ad_revenue=live_ad_revenue,
        paid_programming_revenue=paid_programming_revenue,
        vod_ad_revenue=vod_ad_revenue,
        total_revenue=total_revenue,
        net_operating_profit=total_revenue - total_cost,
        channel_revenues=channel_revenues,
        vod_category_revenues=vod_category_revenues,
        premium_sponsorship_revenue=premium_sponsorship_revenue if premium_sponsorship_revenue > 0 else None,
    )


def calculate_station_revenue(config, costs) -> RevenueCalculations:
    """Revenue for a full StationConfig; live ads are off while streaming is off."""
    assumptions = config.revenue
    if not flag(config, "stream_enabled") and getattr(assumptions, "live_ads_enabled", False):
        assumptions = config.replace(revenue={"live_ads_enabled": False}).revenue
    return calculate_revenue(assumptions, costs, config.channels, config.vod_categories)
