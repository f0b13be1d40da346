#!/usr/bin/env python3
"""
Main Streamlit application for the station streaming cost calculator.
Orchestrates the settings panels, the estimate calculation, and the
results dashboard and export.
"""

import io
import json
import logging
import zipfile
from dataclasses import asdict, fields

import numpy as np
import streamlit as st

from config.parameters import PARAM_SPECS, PARAM_GROUPS, REVENUE_GROUPS, SETTINGS_TABS
from config.scenarios import SCENARIO_PRESETS
from config.settings import get_settings
from config_manager import StationConfig, RevenueAssumptions, create_preset_config
from state_store import StateStore
from estimator.pricing import SELF_HOSTED_PLATFORMS, normalize_platform
from estimator.runner import compute_estimate
from estimator.hardware import find_option, get_hardware_options
from estimator.validation import has_validation_errors
from estimate_export import export_estimate, ExportBlockedError
from ui.components import (
    render_parameter_group, render_parameter, render_channel_editor, render_category_editor,
    render_validation_alerts, clear_widget_state
)
from utils.helpers import format_currency, format_percentage
from analysis.metrics import (
    compute_kpis, cost_breakdown_frame, revenue_breakdown_frame, channel_revenue_frame,
    vod_category_frame, hardware_frame, viewer_sensitivity
)
from visualization.charts import (
    figure_to_png, cost_breakdown_chart, revenue_vs_cost_chart, channel_revenue_chart,
    viewer_sensitivity_chart
)

logger = logging.getLogger(__name__)

REVENUE_FIELDS = {f.name for f in fields(RevenueAssumptions)}

# StationConfig fields that are unset (None) when the select shows "none"
NONE_OPTIONS = ("video_cdn_provider",)


@st.cache_resource
def get_store() -> StateStore:
    return StateStore.from_settings(get_settings())


def initialize_streamlit():
    """Initialize Streamlit configuration and page setup."""
    st.set_page_config(page_title="Streaming Cost Calculator", layout="wide")
    st.title("Station Streaming — Cost & Revenue Calculator")
    st.caption("Monthly cost, revenue and hardware projections for 24/7 live channels and on-demand programming")


def load_config() -> StationConfig:
    """Session configuration, loaded from the state store on first run."""
    if "config" not in st.session_state:
        config = get_store().load()
        st.session_state["config"] = config
        st.session_state["saved_config"] = config
    return st.session_state["config"]


def apply_config(config: StationConfig):
    """Replace the session configuration and re-render every widget from it."""
    clear_widget_state()
    st.session_state["config"] = config
    st.rerun()


def render_sidebar(config: StationConfig) -> StationConfig:
    """
    Render the sidebar: platform, presets and reset.

    Returns:
        Configuration with the selected platform applied
    """
    with st.sidebar:
        with st.expander("About this calculator", expanded=False):
            st.markdown(
                "Pick a streaming platform, describe your channels and archive, and the calculator "
                "projects monthly encoding, storage, delivery and other costs against live ad, "
                "paid programming and VOD ad revenue. Settings are saved automatically."
            )

        st.header("Configuration")
        st.caption("Hover over any label for explanation. Colors indicate how likely settings are to vary "
                   "between stations.")
        st.session_state["_show_hints"] = st.toggle("Show range hints", value=True)

        platform = render_parameter("platform", PARAM_SPECS["platform"], config.platform, "station")

        preset_names = list(SCENARIO_PRESETS.keys())
        preset_sel = st.selectbox("Scenario preset", preset_names, index=0, key="preset_choice",
                                  help=" | ".join(f"{k}: {v['description']}" for k, v in SCENARIO_PRESETS.items()))
        st.caption(SCENARIO_PRESETS[preset_sel]["description"])

        col1, col2 = st.columns(2)
        if col1.button("Apply preset", use_container_width=True):
            logger.info("Applying preset %s", preset_sel)
            apply_config(create_preset_config(preset_sel))
        if col2.button("Reset to defaults", use_container_width=True):
            logger.info("Resetting configuration to defaults")
            get_store().clear()
            apply_config(StationConfig())

    return config.replace(platform=platform)


def render_settings(config: StationConfig) -> StationConfig:
    """
    Render the settings tabs and collect a new configuration snapshot.

    Args:
        config: Current configuration

    Returns:
        New StationConfig reflecting every widget
    """
    station_state = {name: getattr(config, name) for name in PARAM_SPECS if name != "platform"}
    revenue_state = asdict(config.revenue)
    revenue_state["global_fill_rate"] = config.global_fill_rate

    channel_base = st.session_state.setdefault("channel_base", list(config.channels))
    category_base = st.session_state.setdefault("category_base", list(config.vod_categories))
    channels, categories = config.channels, config.vod_categories

    tabs = st.tabs([title for title, _ in SETTINGS_TABS])
    for tab, (title, group_names) in zip(tabs, SETTINGS_TABS):
        with tab:
            for group_name in group_names:
                group_config = PARAM_GROUPS[group_name]
                if group_name in REVENUE_GROUPS:
                    revenue_state = render_parameter_group(group_name, group_config, revenue_state, "revenue")
                else:
                    station_state = render_parameter_group(group_name, group_config, station_state, "station")

                if group_name == "live":
                    st.markdown("**Channels**")
                    channels = render_channel_editor(channel_base, revenue_state.get("global_fill_rate"))
                elif group_name == "vod":
                    st.markdown("**VOD categories**")
                    categories = render_category_editor(category_base)
                st.divider()

    station_state["global_fill_rate"] = revenue_state.pop("global_fill_rate")
    for name in NONE_OPTIONS:
        if station_state.get(name) == "none":
            station_state[name] = None

    revenue = {k: v for k, v in revenue_state.items() if k in REVENUE_FIELDS}
    return config.replace(channels=channels, vod_categories=categories, revenue=revenue, **station_state)


def persist_config(config: StationConfig):
    """Remember the snapshot for this session and save it when it changed."""
    st.session_state["config"] = config
    if st.session_state.get("saved_config") != config:
        if get_store().save(config):
            st.session_state["saved_config"] = config


def render_results(config: StationConfig, estimate):
    """
    Render projections and visualizations.

    Args:
        config: Configuration the estimate was computed for
        estimate: Estimate from compute_estimate
    """
    st.subheader(f"Projections — {config.platform}")

    with st.expander("Validation", expanded=estimate.has_errors):
        render_validation_alerts(estimate.validation)

    kpis = compute_kpis(estimate.costs, estimate.revenue)
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Monthly cost", format_currency(kpis["total_monthly_cost"]))
    col2.metric("Monthly revenue", format_currency(kpis["total_revenue"]))
    col3.metric("Net operating profit", format_currency(kpis["net_operating_profit"]),
                delta="break-even" if kpis["break_even"] else "below break-even",
                delta_color="normal" if kpis["break_even"] else "inverse")
    col4.metric("Profit margin", format_percentage(kpis["profit_margin"]))

    if estimate.revenue.premium_sponsorship_revenue is not None:
        st.caption(f"Includes premium sponsorships: "
                   f"${estimate.revenue.premium_sponsorship_revenue:,.2f}/mo")

    channel_df = channel_revenue_frame(config, estimate.revenue)
    peak = max(int(config.peak_concurrent_viewers or 0), 10)
    sensitivity_df = viewer_sensitivity(config, np.linspace(0, peak * 4, 9).astype(int))

    images = [
        ("cost_breakdown.png", figure_to_png(cost_breakdown_chart(estimate.costs))),
        ("revenue_vs_cost.png", figure_to_png(revenue_vs_cost_chart(estimate.costs, estimate.revenue))),
        ("channel_revenue.png", figure_to_png(channel_revenue_chart(channel_df))),
        ("viewer_sensitivity.png", figure_to_png(viewer_sensitivity_chart(sensitivity_df))),
    ]

    left, right = st.columns(2)
    for i, (fname, data) in enumerate(images):
        (left if i % 2 == 0 else right).image(data, caption=fname, use_container_width=True)

    left, right = st.columns(2)
    with left:
        st.markdown("#### Costs")
        st.dataframe(cost_breakdown_frame(estimate.costs), hide_index=True, use_container_width=True)
    with right:
        st.markdown("#### Revenue")
        st.dataframe(revenue_breakdown_frame(estimate.revenue), hide_index=True, use_container_width=True)

    st.markdown("#### Channel revenue")
    st.dataframe(channel_df, hide_index=True, use_container_width=True)
    st.markdown("#### VOD category revenue")
    st.dataframe(vod_category_frame(config, estimate.revenue), hide_index=True, use_container_width=True)

    if normalize_platform(config.platform) in SELF_HOSTED_PLATFORMS:
        render_hardware_section(estimate.hardware)

    render_download_section(config, estimate, images, channel_df)


def render_hardware_section(hardware):
    """Sizing for the origin server with the recommended catalog SKU."""
    st.markdown("#### Hardware recommendation")
    col1, col2 = st.columns(2)
    with col1:
        st.dataframe(hardware_frame(hardware), hide_index=True, use_container_width=True)
    with col2:
        option = find_option(hardware.recommended_hardware)
        if hardware.is_available:
            st.success(f"Recommended: **{hardware.recommended_hardware}** (${hardware.estimated_cost:,.0f})")
        else:
            st.warning(f"No catalog SKU meets every requirement; the most capable is "
                       f"**{hardware.recommended_hardware}**. Consider splitting channels across servers.")
        if option is not None:
            st.caption(f"{option.cpu_cores} cores, {option.memory_gb} GB RAM, {option.storage_gb} GB storage, "
                       f"{option.network_mbps:,} Mbps")
        with st.expander("Hardware catalog", expanded=False):
            st.dataframe(get_hardware_options(), hide_index=True, use_container_width=True)


def render_download_section(config: StationConfig, estimate, images, channel_df):
    """
    Render the download buttons and the gated export.

    Args:
        config: Configuration snapshot
        estimate: Estimate for the snapshot
        images: List of (filename, png bytes)
        channel_df: Per-channel revenue DataFrame
    """
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("config.json", json.dumps(config.to_dict(), indent=2))
        for fname, data in images:
            zf.writestr(fname, data)

    col1, col2, col3 = st.columns(3)
    with col1:
        st.download_button("Download charts (zip)", data=buf.getvalue(),
                           file_name=f"{config.platform}_estimate_charts.zip")
    with col2:
        csv_buffer = io.StringIO()
        channel_df.to_csv(csv_buffer, index=False)
        st.download_button("Download channel revenue (CSV)", data=csv_buffer.getvalue(),
                           file_name=f"{config.platform}_channel_revenue.csv", mime="text/csv")
    with col3:
        blocked = has_validation_errors(estimate.validation)
        if st.button("Export to estimate", disabled=blocked, use_container_width=True):
            try:
                result = export_estimate(config, get_settings().export_dir, estimate)
            except ExportBlockedError as e:
                st.error(str(e))
            except OSError as e:
                logger.error("Export failed: %s", e)
                st.error(f"Export failed: {e}")
            else:
                st.success(f"Exported run {result['run_id']} to {result['out_dir']}")
                with open(result["out_xlsx"], "rb") as f:
                    st.download_button("Download workbook", data=f.read(), file_name="estimate.xlsx",
                                       mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")
        if blocked:
            st.caption("Fix the validation errors above to enable export.")


def main():
    """Main application entry point."""
    initialize_streamlit()

    config = load_config()
    config = render_sidebar(config)
    config = render_settings(config)
    persist_config(config)

    estimate = compute_estimate(config)
    render_results(config, estimate)


if __name__ == "__main__":
    main()
