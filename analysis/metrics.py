#!/usr/bin/env python3
"""
KPI calculations and tabular breakdowns for estimator results.
Turns Costs / RevenueCalculations / HardwareRequirements into the metrics
and DataFrames shown in the dashboard and written by the export.
"""

import numpy as np
import pandas as pd
from typing import Dict, Iterable

from utils.helpers import safe_divide, round_cents
from estimator.cost_engine import calculate_costs

COST_BUCKETS = ("encoding", "storage", "delivery", "other")
COST_LABELS = {
    "encoding": "Encoding",
    "storage": "Storage",
    "delivery": "Delivery",
    "other": "Other",
}


def compute_kpis(costs, revenue) -> Dict[str, float]:
    """
    Compute headline monthly and annual KPIs.

    Args:
        costs: Costs for the configuration
        revenue: RevenueCalculations for the same configuration

    Returns:
        Dictionary of KPIs; cost shares are fractions of total cost
    """
    total_cost = sum(getattr(costs, bucket) for bucket in COST_BUCKETS)
    out = {
        "total_monthly_cost": round_cents(total_cost),
        "annual_cost": round_cents(total_cost * 12),
        "total_revenue": revenue.total_revenue,
        "annual_revenue": revenue.total_revenue * 12,
        "net_operating_profit": revenue.net_operating_profit,
        "annual_profit": revenue.net_operating_profit * 12,
        "profit_margin": safe_divide(revenue.net_operating_profit, revenue.total_revenue),
        "break_even": revenue.net_operating_profit >= 0,
    }
    for bucket in COST_BUCKETS:
        out[f"{bucket}_share"] = safe_divide(getattr(costs, bucket), total_cost)
    return out


def cost_breakdown_frame(costs) -> pd.DataFrame:
    """One row per cost bucket with monthly, annual and share columns."""
    total = sum(getattr(costs, bucket) for bucket in COST_BUCKETS)
    rows = []
    for bucket in COST_BUCKETS:
        monthly = getattr(costs, bucket)
        rows.append({
            "bucket": COST_LABELS[bucket],
            "monthly": monthly,
            "annual": round_cents(monthly * 12),
            "share": safe_divide(monthly, total),
        })
    return pd.DataFrame(rows, columns=["bucket", "monthly", "annual", "share"])


def revenue_breakdown_frame(revenue) -> pd.DataFrame:
    rows = [
        {"stream": "Live ads", "monthly": revenue.live_ad_revenue},
        {"stream": "Paid programming", "monthly": revenue.paid_programming_revenue},
        {"stream": "VOD ads", "monthly": revenue.vod_ad_revenue},
    ]
    df = pd.DataFrame(rows, columns=["stream", "monthly"])
    df["annual"] = df["monthly"] * 12
    return df


def channel_revenue_frame(config, revenue) -> pd.DataFrame:
    """
    Join per-channel statistics with their computed monthly revenue.

    Channels without a computed revenue (live ads off, or the aggregate
    fallback was used) show 0.
    """
    by_id = {item.channel_id: item.revenue for item in revenue.channel_revenues}
    rows = []
    for channel in config.channels:
        rows.append({
            "id": channel.id,
            "name": channel.name,
            "enabled": channel.enabled is not False,
            "viewership": channel.viewership,
            "fill_rate": channel.fill_rate,
            "cpm_rate": channel.cpm_rate,
            "monthly_revenue": by_id.get(channel.id, 0.0),
        })
    columns = ["id", "name", "enabled", "viewership", "fill_rate", "cpm_rate", "monthly_revenue"]
    return pd.DataFrame(rows, columns=columns)


def vod_category_frame(config, revenue) -> pd.DataFrame:
    by_id = {item.category_id: item.revenue for item in revenue.vod_category_revenues}
    rows = []
    for category in config.vod_categories:
        rows.append({
            "id": category.id,
            "name": category.name,
            "monthly_views": category.monthly_views,
            "fill_rate": category.fill_rate,
            "cpm_rate": category.cpm_rate,
            "monthly_revenue": by_id.get(category.id, 0.0),
        })
    columns = ["id", "name", "monthly_views", "fill_rate", "cpm_rate", "monthly_revenue"]
    return pd.DataFrame(rows, columns=columns)


def hardware_frame(hardware) -> pd.DataFrame:
    """Requirement dimensions as label/value rows."""
    rows = [
        ("CPU cores", hardware.cpu_cores),
        ("Memory (GB)", hardware.memory_gb),
        ("Storage (GB)", hardware.storage_gb),
        ("Network (Mbps)", hardware.network_mbps),
        ("Max viewers per channel", hardware.max_viewers),
        ("Recommended", hardware.recommended_hardware),
        ("Estimated cost ($)", hardware.estimated_cost),
        ("Catalog SKU fits", "Yes" if hardware.is_available else "No"),
    ]
    return pd.DataFrame(rows, columns=["requirement", "value"])


def viewer_sensitivity(config, viewer_counts: Iterable[int]) -> pd.DataFrame:
    """
    Sweep peak concurrent viewers and recompute costs.

    Args:
        config: StationConfig snapshot
        viewer_counts: Viewer counts to evaluate (list or numpy array)

    Returns:
        DataFrame with viewers, delivery cost and total monthly cost
    """
    counts = np.asarray(list(viewer_counts), dtype=float)
    delivery = np.zeros_like(counts)
    total = np.zeros_like(counts)
    for i, viewers in enumerate(counts):
        costs = calculate_costs(config.replace(peak_concurrent_viewers=int(viewers)))
        delivery[i] = costs.delivery
        total[i] = costs.total
    return pd.DataFrame({"viewers": counts.astype(int), "delivery_cost": delivery, "total_cost": total})
