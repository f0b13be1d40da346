# analysis/__init__.py
"""Analysis and metrics module."""

from .metrics import (
    compute_kpis,
    cost_breakdown_frame,
    revenue_breakdown_frame,
    channel_revenue_frame,
    vod_category_frame,
    hardware_frame,
    viewer_sensitivity,
)

__all__ = [
    'compute_kpis',
    'cost_breakdown_frame',
    'revenue_breakdown_frame',
    'channel_revenue_frame',
    'vod_category_frame',
    'hardware_frame',
    'viewer_sensitivity',
]
