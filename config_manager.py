#!/usr/bin/env python3
"""
config_manager.py

Configuration model for the station streaming estimator. A StationConfig
snapshot holds every user-facing setting (platform, channels, storage,
hosting, analytics and revenue assumptions). Snapshots are replaced, never
mutated, by the presentation layer; the engines only read them.
"""

import copy
import logging
from dataclasses import dataclass, field, fields, asdict, replace as dc_replace
from typing import Dict, Any, Optional, List

from config.scenarios import (
    DEFAULT_CHANNELS,
    DEFAULT_VOD_CATEGORIES,
    GLOBAL_DEFAULTS,
    DEFAULT_REVENUE,
    SCENARIO_PRESETS,
    FIELD_FALLBACKS,
    REVENUE_FALLBACKS,
)

logger = logging.getLogger(__name__)


@dataclass
class ChannelStat:
    """Audience and ad inventory for one live channel"""
    id: str
    name: str = ""
    viewership: float = 0.0               # daily unique viewers
    average_retention_minutes: float = 0.0
    ad_spots_per_hour: float = 0.0
    cpm_rate: float = 0.0
    fill_rate: Optional[float] = None     # falls back to the station-wide rate
    live_hours: float = 0.0               # hours of new live content per day
    vod_uniques: float = 0.0
    vod_watch_min: float = 0.0
    enabled: bool = True


@dataclass
class VodCategoryStat:
    """Monthly on-demand viewing for one content category"""
    id: str
    name: str = ""
    monthly_views: float = 0.0
    average_watch_time_minutes: float = 0.0
    ad_spots_per_view: float = 0.0
    cpm_rate: float = 0.0
    fill_rate: Optional[float] = None


@dataclass
class RevenueAssumptions:
    """Rates and toggles for the live-ad, paid-programming and VOD-ad streams"""
    # Live ads
    live_ads_enabled: bool = True
    average_daily_unique_viewers: float = 1000
    average_viewing_hours_per_viewer: float = 2
    ad_spots_per_hour: float = 4
    cpm_rate: float = 15
    fill_rate: float = 35

    # Live multipliers
    peak_time_multiplier: float = 1.2
    seasonal_multiplier: float = 1.0
    target_demographic_value: float = 1.1

    # Paid programming
    paid_programming_enabled: bool = True
    monthly_paid_blocks: float = 4
    rate_per_block: float = 250
    premium_sponsorship_enabled: bool = False
    premium_sponsorship_rate: float = 500
    premium_sponsorship_count: float = 0

    # VOD ads
    vod_ads_enabled: bool = True
    monthly_vod_views: float = 5000
    ad_spots_per_vod_view: float = 1
    vod_cpm_rate: float = 20
    vod_fill_rate: float = 35
    vod_skip_rate: float = 0.15
    vod_completion_rate: float = 0.85
    vod_premium_placement_rate: float = 0.05


def _default_channels() -> List[ChannelStat]:
    return [ChannelStat(**row) for row in DEFAULT_CHANNELS]


def _default_vod_categories() -> List[VodCategoryStat]:
    return [VodCategoryStat(**row) for row in DEFAULT_VOD_CATEGORIES]


def _default_revenue() -> RevenueAssumptions:
    return RevenueAssumptions(**DEFAULT_REVENUE)


@dataclass
class StationConfig:
    """
    Complete estimator configuration.

    Field groups follow the settings tabs: live stream, live to VOD, legacy
    VOD, storage and database, email, CDN, hardware and hosting, analytics,
    station-wide rates, and the embedded revenue assumptions.
    """
    # Stream (live)
    platform: str = "mux"
    stream_enabled: bool = True
    channel_count: int = 1
    peak_concurrent_viewers: int = 100     # per channel
    encoding_preset: str = "1080p-tri-ladder"
    live_dvr_enabled: bool = True
    recording_storage_location: str = "same-as-vod"
    channels: List[ChannelStat] = field(default_factory=_default_channels)

    # Live -> VOD
    vod_enabled: bool = True
    vod_provider: str = "same-as-live"
    hours_per_day_archived: float = 24
    retention_window: int = 30             # days
    delivery_region: str = "us"
    peak_concurrent_vod_viewers: int = 50
    vod_categories: List[VodCategoryStat] = field(default_factory=_default_vod_categories)

    # Legacy VOD
    legacy_enabled: bool = False
    back_catalog_hours: float = 0
    legacy_provider: str = "same-as-vod"
    pre_encoded: bool = False

    # Storage & DB
    data_store: str = "local-sqlite"
    db_backup_retention: int = 7
    video_storage_strategy: str = "local-nas"

    # Email
    outbound_email: bool = False
    monthly_email_volume: int = 0

    # CDN
    cdn_plan: str = "free"
    cdn_egress_rate: Optional[float] = 0.085
    video_cdn_provider: Optional[str] = None
    video_cdn_plan: Optional[str] = None
    video_cdn_egress_rate: Optional[float] = None

    # Hardware & hosting
    server_type: str = "mac-mini"
    server_count: int = 1
    server_cost: float = 1299
    hardware_available: bool = False
    hardware_mode: str = "own"             # "own" or "rent"
    cap_ex: Optional[float] = GLOBAL_DEFAULTS["cap_ex"]
    amort_months: Optional[int] = GLOBAL_DEFAULTS["amort_months"]
    wattage: Optional[float] = GLOBAL_DEFAULTS["wattage"]
    power_rate: float = GLOBAL_DEFAULTS["power_rate"]
    monthly_rental_cost: Optional[float] = None
    internet_colo_monthly_cost: Optional[float] = GLOBAL_DEFAULTS["internet_colo_monthly_cost"]
    network_interface: str = "1gbe"
    bandwidth_capacity: Optional[float] = 1000
    transcoding_engine: str = "hardware"
    cloud_provider: str = "cloudflare"
    origin_egress_cost: Optional[float] = 0.09
    hybrid_redundancy_mode: str = "active-passive"
    rack_hosting_location: str = "in-station"
    rack_cost: float = 0
    network_switch_needed: bool = False
    mac_mini_needed: bool = False

    # Analytics
    viewer_analytics: str = "none"
    site_analytics: str = "none"

    # Station-wide rates
    global_fill_rate: float = GLOBAL_DEFAULTS["global_fill_rate"]
    cdn_cost_per_gb: Optional[float] = GLOBAL_DEFAULTS["cdn_cost_per_gb"]
    avg_bitrate_override: Optional[float] = GLOBAL_DEFAULTS["avg_bitrate_override"]

    revenue: RevenueAssumptions = field(default_factory=_default_revenue)

    def replace(self, **changes) -> 'StationConfig':
        """
        Return a new snapshot with the given fields replaced.

        ``revenue`` may be a partial dict, which is shallow-merged into the
        current assumptions. Unknown field names raise ``TypeError``.
        """
        revenue = changes.get("revenue")
        if isinstance(revenue, dict):
            changes["revenue"] = dc_replace(self.revenue, **revenue)
        return dc_replace(copy.deepcopy(self), **changes)

    def enabled_channels(self) -> List[ChannelStat]:
        return [c for c in self.channels if c.enabled is not False]

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a JSON-ready dictionary"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StationConfig':
        """
        Create configuration from dictionary.

        Starts from the compiled-in defaults and applies known keys only.
        Malformed channel or category rows are skipped.
        """
        config = cls()
        if not isinstance(data, dict):
            logger.warning("Ignoring non-dict configuration snapshot of type %s", type(data).__name__)
            return config

        known = {f.name for f in fields(cls)} - {"channels", "vod_categories", "revenue"}
        updates = {k: v for k, v in data.items() if k in known}
        config = dc_replace(config, **updates)

        # A missing or non-list table keeps the compiled-in rows
        if isinstance(data.get("channels"), list):
            config.channels = _parse_rows(data["channels"], ChannelStat, "channel")
        elif data.get("channels") is not None:
            logger.warning("Ignoring non-list channels of type %s", type(data["channels"]).__name__)
        if isinstance(data.get("vod_categories"), list):
            config.vod_categories = _parse_rows(data["vod_categories"], VodCategoryStat, "VOD category")
        elif data.get("vod_categories") is not None:
            logger.warning("Ignoring non-list VOD categories of type %s", type(data["vod_categories"]).__name__)
        if isinstance(data.get("revenue"), dict):
            config.revenue = _parse_record(data["revenue"], RevenueAssumptions, _default_revenue())

        return config


def _parse_record(row: Dict[str, Any], record_cls, base=None):
    known = {f.name for f in fields(record_cls)}
    values = {k: v for k, v in row.items() if k in known}
    if base is not None:
        return dc_replace(base, **values)
    return record_cls(**values)


def _parse_rows(rows, record_cls, label: str) -> list:
    parsed = []
    for row in rows:
        if isinstance(row, record_cls):
            parsed.append(row)
        elif isinstance(row, dict) and row.get("id") is not None:
            parsed.append(_parse_record(row, record_cls))
        else:
            logger.warning("Skipping malformed %s row: %r", label, row)
    return parsed


def create_preset_config(preset_name: str) -> StationConfig:
    """Create a configuration using one of the predefined presets"""
    if preset_name not in SCENARIO_PRESETS:
        raise ValueError(f"Unknown preset: {preset_name}. Available: {list(SCENARIO_PRESETS.keys())}")

    preset = SCENARIO_PRESETS[preset_name]
    return StationConfig().replace(**preset["modifications"])
