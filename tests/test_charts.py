"""Chart smoke tests: every chart renders to PNG."""

import pandas as pd

from analysis.metrics import channel_revenue_frame, viewer_sensitivity
from estimator.runner import compute_estimate
from visualization.charts import (
    figure_to_png,
    cost_breakdown_chart,
    revenue_vs_cost_chart,
    channel_revenue_chart,
    viewer_sensitivity_chart,
)

PNG_MAGIC = b"\x89PNG"


def test_charts_render(default_config):
    estimate = compute_estimate(default_config)
    figures = [
        cost_breakdown_chart(estimate.costs),
        revenue_vs_cost_chart(estimate.costs, estimate.revenue),
        channel_revenue_chart(channel_revenue_frame(default_config, estimate.revenue)),
        viewer_sensitivity_chart(viewer_sensitivity(default_config, [0, 50, 100])),
    ]
    for fig in figures:
        assert figure_to_png(fig, dpi=40).startswith(PNG_MAGIC)


def test_channel_chart_without_channels():
    fig = channel_revenue_chart(pd.DataFrame())
    assert figure_to_png(fig, dpi=40).startswith(PNG_MAGIC)
