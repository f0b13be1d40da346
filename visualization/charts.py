#!/usr/bin/env python3
"""
Chart generation for the estimator dashboard and exports.
Every chart function returns a matplotlib Figure; callers render it with
st.pyplot or convert it to PNG bytes with figure_to_png.
"""

import io
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import seaborn as sns
import pandas as pd

from analysis.metrics import COST_BUCKETS, COST_LABELS

PALETTE = {
    "encoding": "#4C72B0",
    "storage": "#55A868",
    "delivery": "#C44E52",
    "other": "#8172B2",
}


def figure_to_png(fig, dpi: int = 150) -> bytes:
    """Render a figure to PNG bytes and close it."""
    buf = io.BytesIO()
    fig.tight_layout()
    fig.savefig(buf, dpi=dpi, bbox_inches="tight", format="png")
    plt.close(fig)
    buf.seek(0)
    return buf.read()


def cost_breakdown_chart(costs):
    """Horizontal bars of the four monthly cost buckets."""
    fig, ax = plt.subplots(figsize=(6, 3))
    labels = [COST_LABELS[b] for b in COST_BUCKETS]
    values = [getattr(costs, b) for b in COST_BUCKETS]
    ax.barh(labels, values, color=[PALETTE[b] for b in COST_BUCKETS])
    ax.invert_yaxis()
    ax.set_xlabel("$ / month")
    ax.set_title("Monthly cost breakdown")
    for i, v in enumerate(values):
        ax.text(v, i, f" ${v:,.2f}", va="center", fontsize=8)
    return fig


def revenue_vs_cost_chart(costs, revenue):
    """Stacked cost bar next to stacked revenue bar."""
    fig, ax = plt.subplots(figsize=(6, 3.5))

    bottom = 0.0
    for bucket in COST_BUCKETS:
        value = getattr(costs, bucket)
        ax.bar("Costs", value, bottom=bottom, color=PALETTE[bucket], label=COST_LABELS[bucket])
        bottom += value

    streams = [
        ("Live ads", revenue.live_ad_revenue, "#DD8452"),
        ("Paid programming", revenue.paid_programming_revenue, "#937860"),
        ("VOD ads", revenue.vod_ad_revenue, "#DA8BC3"),
    ]
    bottom = 0.0
    for label, value, color in streams:
        ax.bar("Revenue", value, bottom=bottom, color=color, label=label)
        bottom += value

    ax.set_ylabel("$ / month")
    ax.set_title(f"Net operating profit: ${revenue.net_operating_profit:,.0f}/mo")
    ax.legend(fontsize=7, loc="upper left", bbox_to_anchor=(1.0, 1.0))
    return fig


def channel_revenue_chart(channel_df: pd.DataFrame):
    """Per-channel monthly revenue; disabled channels are greyed."""
    fig, ax = plt.subplots(figsize=(6, 3))
    if channel_df is None or channel_df.empty:
        ax.text(0.5, 0.5, "No channels", ha="center", va="center")
        ax.set_axis_off()
        return fig

    df = channel_df.copy()
    df["status"] = df["enabled"].map({True: "Enabled", False: "Disabled"})
    sns.barplot(data=df, x="name", y="monthly_revenue", hue="status",
                palette={"Enabled": "#4C72B0", "Disabled": "#BBBBBB"}, dodge=False, ax=ax)
    ax.set_xlabel("")
    ax.set_ylabel("$ / month")
    ax.set_title("Live ad revenue by channel")
    ax.tick_params(axis="x", labelrotation=30, labelsize=8)
    return fig


def viewer_sensitivity_chart(sensitivity_df: pd.DataFrame):
    """Delivery and total cost against peak concurrent viewers."""
    fig, ax = plt.subplots(figsize=(6, 3))
    sns.lineplot(data=sensitivity_df, x="viewers", y="total_cost", label="Total", ax=ax)
    sns.lineplot(data=sensitivity_df, x="viewers", y="delivery_cost", label="Delivery", ax=ax)
    ax.set_xlabel("Peak concurrent viewers per channel")
    ax.set_ylabel("$ / month")
    ax.set_title("Cost sensitivity to viewers")
    return fig
