#!/usr/bin/env python3
"""
Reusable UI components for the Streamlit interface.
Handles parameter rendering, progressive disclosure, the channel and VOD
category editors, and validation alerts.
"""

import streamlit as st
import pandas as pd
from typing import List, Optional

from config.parameters import spec_for
from config_manager import ChannelStat, VodCategoryStat
from utils.helpers import ensure_number, clamp

WIDGET_PREFIXES = ("station", "revenue")

# Above this many slider steps a number box is easier to use
MAX_SLIDER_STEPS = 2000


def render_parameter_group(group_name: str, group_config: dict, params_state: dict, prefix: str = ""):
    """
    Render a parameter group with progressive disclosure.

    Args:
        group_name: Name of the parameter group
        group_config: Configuration for the group
        params_state: Current parameter values (updated in place)
        prefix: Prefix for widget keys

    Returns:
        Updated parameter state
    """
    color_indicators = {"green": "🟢", "amber": "🟡", "red": "🔴"}
    color_descriptions = {
        "green": "Station-specific decisions",
        "amber": "Estimates worth revisiting",
        "red": "Set once during planning"
    }

    st.markdown(f"**{group_config['title']}**")
    color = group_config.get('color', 'amber')
    st.caption(f"{color_indicators[color]} {color_descriptions[color]}")

    for param_name in group_config['basic']:
        params_state[param_name] = render_parameter(param_name, spec_for(param_name), params_state.get(param_name),
                                                    prefix)

    if group_config.get('detailed'):
        with st.expander("🔧 Advanced Settings", expanded=False):
            for param_name in group_config['detailed']:
                params_state[param_name] = render_parameter(param_name, spec_for(param_name),
                                                            params_state.get(param_name), prefix)

    return params_state


def render_parameter(param_name: str, spec: dict, current_value, prefix: str = ""):
    """
    Render an individual parameter with the appropriate widget.

    Args:
        param_name: Name of the parameter
        spec: Parameter specification
        current_value: Current parameter value (None for unset optionals)
        prefix: Prefix for widget keys

    Returns:
        Updated parameter value
    """
    param_type = spec['type']
    label = spec['label']
    help_text = build_help_text(spec)
    key = f"{prefix}_{param_name}" if prefix else param_name

    if current_value is None:
        current_value = spec.get('default', get_default_value(spec))

    if param_type == 'bool':
        return st.checkbox(label, value=bool(current_value), key=key, help=help_text)

    elif param_type in ('int', 'float'):
        cast = int if param_type == 'int' else float
        lo, hi, step = cast(spec['min']), cast(spec['max']), cast(spec['step'])
        value = cast(clamp(ensure_number(current_value, lo), lo, hi))
        if (hi - lo) / step > MAX_SLIDER_STEPS:
            value = st.number_input(label, min_value=lo, max_value=hi, value=value, step=step, key=key,
                                    help=help_text)
        else:
            value = st.slider(label, min_value=lo, max_value=hi, value=value, step=step, key=key,
                              help=help_text)
        show_range_hint(value, spec)
        return value

    elif param_type == 'select':
        options = spec['options']
        current = str(current_value).lower()
        current_index = options.index(current) if current in options else 0
        return st.selectbox(label, options=options, index=current_index, key=key, help=help_text)

    return current_value


def build_help_text(spec: dict) -> str:
    """
    Build help text from parameter specification.

    Args:
        spec: Parameter specification dictionary

    Returns:
        Formatted help text
    """
    parts = []

    if 'desc' in spec:
        parts.append(spec['desc'])

    if 'rec' in spec and isinstance(spec['rec'], (list, tuple)) and len(spec['rec']) == 2:
        parts.append(f"Typical range: {spec['rec'][0]} - {spec['rec'][1]}")

    return " | ".join(parts)


def show_range_hint(value, spec: dict):
    """Show a caption when a value falls outside the recommended range."""
    if not st.session_state.get("_show_hints", True):
        return

    rec = spec.get("rec")
    if isinstance(rec, (list, tuple)) and len(rec) == 2:
        lo, hi = float(rec[0]), float(rec[1])
        if value < lo or value > hi:
            st.caption(f"⚠️ Outside typical range ({lo:g}-{hi:g}). Consider if this fits your station.")


def get_default_value(spec: dict):
    """
    Get default value for parameter specification.

    Args:
        spec: Parameter specification

    Returns:
        Default value for the parameter
    """
    if 'default' in spec:
        return spec['default']
    elif spec['type'] == 'bool':
        return False
    elif spec['type'] in ['int', 'float']:
        return spec['min']
    elif spec['type'] == 'select':
        return spec['options'][0]
    return None


def _optional_number(value) -> Optional[float]:
    if value is None or value == "" or pd.isna(value):
        return None
    return ensure_number(value, 0.0)


def _text(value) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value).strip()


def normalize_channel_rows(df) -> List[ChannelStat]:
    """
    Convert the channel data_editor DataFrame into ChannelStat records.

    Rows without an id are dropped; an empty fill rate means "use the
    station default".
    """
    channels = []
    if df is None or (isinstance(df, pd.DataFrame) and df.empty):
        return channels

    for _, r in df.iterrows():
        channel_id = r.get("id")
        if channel_id is None or pd.isna(channel_id) or not str(channel_id).strip():
            continue
        enabled = r.get("enabled", True)
        channels.append(ChannelStat(
            id=str(channel_id).strip(),
            name=_text(r.get("name")),
            viewership=ensure_number(r.get("viewership"), 0.0),
            average_retention_minutes=ensure_number(r.get("average_retention_minutes"), 0.0),
            ad_spots_per_hour=ensure_number(r.get("ad_spots_per_hour"), 0.0),
            cpm_rate=ensure_number(r.get("cpm_rate"), 0.0),
            fill_rate=_optional_number(r.get("fill_rate")),
            live_hours=ensure_number(r.get("live_hours"), 0.0),
            vod_uniques=ensure_number(r.get("vod_uniques"), 0.0),
            vod_watch_min=ensure_number(r.get("vod_watch_min"), 0.0),
            enabled=True if enabled is None or pd.isna(enabled) else bool(enabled),
        ))
    return channels


def normalize_category_rows(df) -> List[VodCategoryStat]:
    """Convert the VOD category data_editor DataFrame into records."""
    categories = []
    if df is None or (isinstance(df, pd.DataFrame) and df.empty):
        return categories

    for _, r in df.iterrows():
        category_id = r.get("id")
        if category_id is None or pd.isna(category_id) or not str(category_id).strip():
            continue
        categories.append(VodCategoryStat(
            id=str(category_id).strip(),
            name=_text(r.get("name")),
            monthly_views=ensure_number(r.get("monthly_views"), 0.0),
            average_watch_time_minutes=ensure_number(r.get("average_watch_time_minutes"), 0.0),
            ad_spots_per_view=ensure_number(r.get("ad_spots_per_view"), 0.0),
            cpm_rate=ensure_number(r.get("cpm_rate"), 0.0),
            fill_rate=_optional_number(r.get("fill_rate")),
        ))
    return categories


def render_channel_editor(channels: List[ChannelStat], default_fill_rate: Optional[float] = None,
                          key: str = "channel_editor") -> List[ChannelStat]:
    """Editable per-channel statistics table. New rows start at ``default_fill_rate``."""
    columns = ["enabled", "id", "name", "viewership", "average_retention_minutes", "ad_spots_per_hour",
               "cpm_rate", "fill_rate", "live_hours", "vod_uniques", "vod_watch_min"]
    df = pd.DataFrame([c.__dict__ for c in channels], columns=columns)

    edited = st.data_editor(
        df,
        num_rows="dynamic",
        use_container_width=True,
        key=key,
        column_config={
            "enabled": st.column_config.CheckboxColumn("On", default=True),
            "id": st.column_config.TextColumn("Channel", required=True),
            "name": st.column_config.TextColumn("Name"),
            "viewership": st.column_config.NumberColumn("Daily uniques", min_value=0, step=10),
            "average_retention_minutes": st.column_config.NumberColumn("Retention (min)", min_value=0, step=1),
            "ad_spots_per_hour": st.column_config.NumberColumn("Spots / hr", min_value=0, step=1),
            "cpm_rate": st.column_config.NumberColumn("CPM ($)", min_value=0, step=0.5, format="$%.2f"),
            "fill_rate": st.column_config.NumberColumn("Fill (%)", min_value=0, max_value=100, step=1,
                                                       default=default_fill_rate,
                                                       help="Leave empty to use the station default"),
            "live_hours": st.column_config.NumberColumn("Live hrs / day", min_value=0, max_value=24, step=0.5),
            "vod_uniques": st.column_config.NumberColumn("VOD uniques", min_value=0, step=10),
            "vod_watch_min": st.column_config.NumberColumn("VOD watch (min)", min_value=0, step=1),
        },
    )
    return normalize_channel_rows(edited)


def render_category_editor(categories: List[VodCategoryStat], key: str = "category_editor") -> List[VodCategoryStat]:
    """Editable per-category VOD statistics table."""
    columns = ["id", "name", "monthly_views", "average_watch_time_minutes", "ad_spots_per_view", "cpm_rate",
               "fill_rate"]
    df = pd.DataFrame([c.__dict__ for c in categories], columns=columns)

    edited = st.data_editor(
        df,
        num_rows="dynamic",
        use_container_width=True,
        key=key,
        column_config={
            "id": st.column_config.TextColumn("Category", required=True),
            "name": st.column_config.TextColumn("Name"),
            "monthly_views": st.column_config.NumberColumn("Views / mo", min_value=0, step=100),
            "average_watch_time_minutes": st.column_config.NumberColumn("Watch (min)", min_value=0, step=1),
            "ad_spots_per_view": st.column_config.NumberColumn("Spots / view", min_value=0, step=0.5),
            "cpm_rate": st.column_config.NumberColumn("CPM ($)", min_value=0, step=0.5, format="$%.2f"),
            "fill_rate": st.column_config.NumberColumn("Fill (%)", min_value=0, max_value=100, step=1,
                                                       help="Leave empty to use the VOD default"),
        },
    )
    return normalize_category_rows(edited)


def render_validation_alerts(results):
    """Errors first, then warnings; channel and category results name their row."""
    if not results:
        st.success("All settings look valid.")
        return

    for result in sorted(results, key=lambda r: r.severity != "error"):
        where = result.field.replace("_", " ")
        if result.channel_id is not None:
            where = f"channel {result.channel_id}: {where}"
        elif result.category_id is not None:
            where = f"VOD category {result.category_id}: {where}"
        text = f"**{where}** — {result.message}"
        if result.severity == "error":
            st.error(text)
        else:
            st.warning(text)


def clear_widget_state():
    """Forget widget values so the next rerun renders from the stored config."""
    editor_keys = ("channel_editor", "category_editor", "channel_base", "category_base")
    for key in list(st.session_state.keys()):
        if key.startswith(tuple(f"{p}_" for p in WIDGET_PREFIXES)) or key in editor_keys:
            del st.session_state[key]
