#!/usr/bin/env python3
"""
Monthly cost engine.

Maps a StationConfig snapshot to four independent cost buckets (encoding,
storage, delivery, other). Pure: no I/O, no shared state, and missing or
malformed numeric fields fall back to FIELD_FALLBACKS instead of raising.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any

from config.scenarios import FIELD_FALLBACKS, FLAG_FALLBACKS
from utils.helpers import ensure_number, safe_divide, round_cents
from estimator import pricing
from estimator.pricing import (
    CLOUDFLARE,
    SELF_HOSTED,
    HYBRID,
    MANAGED_PLATFORMS,
    SELF_HOSTED_PLATFORMS,
    SELF_HOSTED_R2,
    MINUTES_PER_HOUR,
    DAYS_PER_MONTH,
    HOURS_PER_MONTH,
    LEGACY_AMORTIZATION_MONTHS,
)


@dataclass(frozen=True)
class Costs:
    """Monthly cost breakdown in dollars, each bucket rounded to cents"""
    encoding: float = 0.0
    storage: float = 0.0
    delivery: float = 0.0
    other: float = 0.0

    @property
    def total(self) -> float:
        return round_cents(self.encoding + self.storage + self.delivery + self.other)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def setting(config, name: str, default=None) -> float:
    """
    Read a numeric configuration field with its documented fallback.

    Args:
        config: StationConfig snapshot (or any object with the attribute)
        name: Field name
        default: Overrides the FIELD_FALLBACKS entry when given

    Returns:
        Finite float
    """
    fallback = FIELD_FALLBACKS.get(name, 0) if default is None else default
    if fallback is None:
        fallback = 0
    return ensure_number(getattr(config, name, None), fallback)


def flag(config, name: str) -> bool:
    """Read a toggle; missing or None falls back to FLAG_FALLBACKS (off when unlisted)."""
    value = getattr(config, name, None)
    if value is None:
        return FLAG_FALLBACKS.get(name, False)
    return bool(value)


def _text(config, name: str) -> str:
    return str(getattr(config, name, None) or "").strip().lower()


def monthly_live_minutes(config) -> float:
    """24/7 live minutes per month across all channels."""
    return HOURS_PER_MONTH * MINUTES_PER_HOUR * setting(config, "channel_count")


def archived_minutes(config) -> float:
    """Minutes of programming archived per month across all channels."""
    return (setting(config, "hours_per_day_archived") * MINUTES_PER_HOUR * DAYS_PER_MONTH
            * setting(config, "channel_count"))


def _managed_live_encoding(provider: str, config) -> float:
    preset = _text(config, "encoding_preset")
    return monthly_live_minutes(config) * pricing.managed_encoding_rate(provider, preset)


def _self_hosted_live_encoding(config) -> float:
    preset = _text(config, "encoding_preset")
    return HOURS_PER_MONTH * pricing.self_hosted_compute_rate(preset) * setting(config, "channel_count")


def _hybrid_cloud_partner(config) -> str:
    partner = pricing.normalize_platform(getattr(config, "cloud_provider", None))
    return partner if partner in MANAGED_PLATFORMS else CLOUDFLARE


def calculate_encoding_cost(config) -> float:
    """Live transcoding plus the amortized back-catalog re-encode."""
    platform = pricing.normalize_platform(getattr(config, "platform", None))
    cost = 0.0

    if flag(config, "stream_enabled"):
        if platform in MANAGED_PLATFORMS:
            cost += _managed_live_encoding(platform, config)
        elif platform == SELF_HOSTED:
            cost += _self_hosted_live_encoding(config)
        elif platform == HYBRID:
            managed = _managed_live_encoding(_hybrid_cloud_partner(config), config)
            cost += (managed + _self_hosted_live_encoding(config)) / 2

    if flag(config, "legacy_enabled") and not flag(config, "pre_encoded"):
        provider = pricing.resolve_provider(config, "legacy")
        rate = pricing.provider_encoding_rate(provider, _text(config, "encoding_preset"))
        legacy_minutes = setting(config, "back_catalog_hours") * MINUTES_PER_HOUR
        cost += legacy_minutes * rate / LEGACY_AMORTIZATION_MONTHS

    return cost


def calculate_storage_cost(config) -> float:
    """DVR archive held for the retention window plus the legacy back catalog."""
    cost = 0.0

    if flag(config, "stream_enabled") and flag(config, "live_dvr_enabled") and flag(config, "vod_enabled"):
        provider = pricing.resolve_provider(config, "vod")
        retention_months = setting(config, "retention_window") / DAYS_PER_MONTH
        cost += archived_minutes(config) * retention_months * pricing.STORAGE_RATES.get(provider, 0.0)

    if flag(config, "legacy_enabled"):
        provider = pricing.resolve_provider(config, "legacy")
        legacy_minutes = setting(config, "back_catalog_hours") * MINUTES_PER_HOUR
        cost += legacy_minutes * pricing.STORAGE_RATES.get(provider, 0.0)

    return cost


def _vod_delivery_rate(provider: str, config) -> float:
    if provider == SELF_HOSTED_R2:
        return pricing.VOD_GB_PER_MINUTE * setting(config, "cdn_cost_per_gb")
    return pricing.MANAGED_DELIVERY_RATES.get(provider, 0.0)


def video_cdn_egress_rate(config) -> float:
    """Configured video CDN $/GB, or the provider's list price."""
    override = ensure_number(getattr(config, "video_cdn_egress_rate", None), 0.0)
    if override > 0:
        return override
    provider = _text(config, "video_cdn_provider")
    return pricing.VIDEO_CDN_EGRESS_RATES.get(provider, pricing.VIDEO_CDN_DEFAULT_EGRESS)


def has_video_cdn(config) -> bool:
    platform = pricing.normalize_platform(getattr(config, "platform", None))
    provider = _text(config, "video_cdn_provider")
    return platform in SELF_HOSTED_PLATFORMS and provider not in ("", "none")


def calculate_delivery_cost(config) -> float:
    """Live and VOD viewer delivery plus video CDN egress."""
    platform = pricing.normalize_platform(getattr(config, "platform", None))
    cost = 0.0

    if flag(config, "stream_enabled"):
        viewer_minutes = monthly_live_minutes(config) * setting(config, "peak_concurrent_viewers")
        if platform in MANAGED_PLATFORMS:
            cost += viewer_minutes * pricing.MANAGED_DELIVERY_RATES[platform]
        elif platform == SELF_HOSTED:
            cost += viewer_minutes * pricing.LIVE_GB_PER_MINUTE * setting(config, "cdn_cost_per_gb")
        elif platform == HYBRID:
            cost += viewer_minutes * pricing.LIVE_GB_PER_MINUTE * setting(config, "origin_egress_cost")

        if flag(config, "live_dvr_enabled") and flag(config, "vod_enabled"):
            provider = pricing.resolve_provider(config, "vod")
            vod_minutes = archived_minutes(config) * setting(config, "peak_concurrent_vod_viewers")
            cost += vod_minutes * _vod_delivery_rate(provider, config)

    if has_video_cdn(config):
        viewer_hours = (setting(config, "peak_concurrent_viewers") * setting(config, "channel_count")
                        * HOURS_PER_MONTH)
        cost += viewer_hours * pricing.VIDEO_CDN_GB_PER_VIEWER_HOUR * video_cdn_egress_rate(config)

    return cost


def hardware_monthly_cost(config) -> float:
    """Server amortization or rent, electricity and uplink for self-hosted origins."""
    platform = pricing.normalize_platform(getattr(config, "platform", None))
    if platform not in SELF_HOSTED_PLATFORMS:
        return 0.0

    server_count = setting(config, "server_count")
    cost = 0.0
    if _text(config, "hardware_mode") == "rent":
        cost += setting(config, "monthly_rental_cost") * server_count
    elif not flag(config, "hardware_available"):
        cost += safe_divide(setting(config, "server_cost") * server_count, setting(config, "amort_months"))

    kwh = setting(config, "wattage") * HOURS_PER_MONTH / 1000
    cost += kwh * setting(config, "power_rate") * server_count
    cost += setting(config, "internet_colo_monthly_cost")
    return cost


def analytics_cost(config) -> float:
    """Viewer and site analytics fees; native platform analytics are free."""
    platform = pricing.normalize_platform(getattr(config, "platform", None))
    cost = 0.0

    fee, included_on = pricing.VIEWER_ANALYTICS_FEES.get(_text(config, "viewer_analytics"), (0.0, None))
    if included_on != platform:
        cost += fee

    cost += pricing.SITE_ANALYTICS_FEES.get(_text(config, "site_analytics"), 0.0)
    return cost


def calculate_other_cost(config) -> float:
    """Flat and linear add-ons that do not scale with viewing."""
    cost = 0.0

    cost += pricing.DATA_STORE_FEES.get(_text(config, "data_store"), 0.0)
    cost += pricing.db_backup_fee(setting(config, "db_backup_retention"))
    cost += pricing.VIDEO_STORAGE_STRATEGY_FEES.get(_text(config, "video_storage_strategy"), 0.0)

    if flag(config, "outbound_email"):
        tiers = min(setting(config, "monthly_email_volume") / pricing.EMAIL_TIER_VOLUME, 1)
        cost += max(tiers, 0) * pricing.EMAIL_TIER_FEE

    cost += pricing.WEBSITE_CDN_PLAN_FEES.get(_text(config, "cdn_plan"), 0.0)
    if has_video_cdn(config):
        cost += pricing.VIDEO_CDN_PLAN_FEES.get(_text(config, "video_cdn_plan"), 0.0)

    cost += hardware_monthly_cost(config)

    if flag(config, "mac_mini_needed"):
        cost += safe_divide(setting(config, "cap_ex"), setting(config, "amort_months"))
    if flag(config, "network_switch_needed"):
        cost += pricing.NETWORK_SWITCH_MONTHLY
    if _text(config, "rack_hosting_location") == "colo":
        rack_units = pricing.rack_units_for(getattr(config, "server_type", None))
        cost += setting(config, "rack_cost") * rack_units * setting(config, "server_count")

    cost += analytics_cost(config)
    return cost


def calculate_costs(config) -> Costs:
    """
    Compute the monthly cost breakdown for a configuration.

    Each bucket is computed independently and rounded to cents.

    Args:
        config: StationConfig snapshot

    Returns:
        Costs with encoding, storage, delivery and other in dollars
    """
    return Costs(
        encoding=round_cents(calculate_encoding_cost(config)),
        storage=round_cents(calculate_storage_cost(config)),
        delivery=round_cents(calculate_delivery_cost(config)),
        other=round_cents(calculate_other_cost(config)),
    )


def costs_from_dict(data: Dict[str, Any]) -> Costs:
    """Build Costs from a loose mapping, treating missing buckets as 0."""
    data = data or {}
    return Costs(**{name: ensure_number(data.get(name), 0.0) for name in ("encoding", "storage", "delivery", "other")})
