# visualization/__init__.py
"""Visualization and chart generation module."""

from .charts import (
    figure_to_png,
    cost_breakdown_chart,
    revenue_vs_cost_chart,
    channel_revenue_chart,
    viewer_sensitivity_chart,
)

__all__ = [
    'figure_to_png',
    'cost_breakdown_chart',
    'revenue_vs_cost_chart',
    'channel_revenue_chart',
    'viewer_sensitivity_chart',
]
