#!/usr/bin/env python3
"""
Pricing tables and provider resolution for the cost and hardware engines.

All rates are US dollars. Per-minute rates apply to minutes of video
(encoded, stored for a month, or delivered to one viewer). Lookups of
unknown platforms, presets or providers return 0 so the affected cost term
drops out; the validation rules report those values as errors.
"""

import re
from typing import Optional

# Platforms
MUX = "mux"
CLOUDFLARE = "cloudflare"
SELF_HOSTED = "self-hosted"
HYBRID = "hybrid"

PLATFORMS = (MUX, CLOUDFLARE, SELF_HOSTED, HYBRID)
MANAGED_PLATFORMS = (MUX, CLOUDFLARE)
SELF_HOSTED_PLATFORMS = (SELF_HOSTED, HYBRID)

PLATFORM_ALIASES = {
    "managed-a": MUX,
    "managed-b": CLOUDFLARE,
}

# Storage / delivery providers and chain markers
SELF_HOSTED_R2 = "self-hosted-r2"
SAME_AS_LIVE = "same-as-live"
SAME_AS_VOD = "same-as-vod"

PROVIDERS = (MUX, CLOUDFLARE, SELF_HOSTED_R2)
PROVIDER_CHOICES = PROVIDERS + (SAME_AS_LIVE, SAME_AS_VOD)

# Encoding presets: top-rung bitrate in Mbps and whether the ladder is UHD
ENCODING_PRESETS = {
    "1080p-tri-ladder": {"label": "1080p Tri-ladder (5 Mbps × 2.8)", "bitrate_mbps": 5.0, "uhd": False},
    "720p-tri-ladder": {"label": "720p Tri-ladder (3 Mbps × 2.8)", "bitrate_mbps": 3.0, "uhd": False},
    "1080p-single": {"label": "1080p Single (5 Mbps × 1)", "bitrate_mbps": 5.0, "uhd": False},
    "4k-tri-ladder": {"label": "4K Tri-ladder (15 Mbps × 2.8)", "bitrate_mbps": 15.0, "uhd": True},
    "4k-single": {"label": "4K Single (15 Mbps × 1)", "bitrate_mbps": 15.0, "uhd": True},
}

MINUTES_PER_HOUR = 60
DAYS_PER_MONTH = 30
HOURS_PER_MONTH = 24 * DAYS_PER_MONTH
LEGACY_AMORTIZATION_MONTHS = 12

# Managed encoding, $/minute of live input, keyed by preset
MANAGED_ENCODING_RATES = {
    MUX: {
        "1080p-tri-ladder": 0.0045,
        "720p-tri-ladder": 0.0030,
        "1080p-single": 0.0025,
        "4k-tri-ladder": 0.0125,
        "4k-single": 0.0075,
    },
    # Cloudflare Stream bills per minute regardless of rendition count
    CLOUDFLARE: {preset: 0.0035 for preset in ENCODING_PRESETS},
}

# Self-hosted transcoding compute, $/hour per channel
SELF_HOSTED_COMPUTE_HOURLY = {
    "1080p-tri-ladder": 0.0624,
    "720p-tri-ladder": 0.0416,
    "1080p-single": 0.0208,
    "4k-tri-ladder": 0.1248,
    "4k-single": 0.0624,
}

# R2 object storage
R2_GB_MONTH = 0.015
GB_PER_STORED_MINUTE = 0.0375  # 5 Mbps rendition

# $/minute stored per month
STORAGE_RATES = {
    MUX: 0.0025,
    CLOUDFLARE: 0.005,
    SELF_HOSTED_R2: R2_GB_MONTH * GB_PER_STORED_MINUTE,
}

# $/viewer-minute delivered by managed providers
MANAGED_DELIVERY_RATES = {
    MUX: 0.0015,
    CLOUDFLARE: 0.001,
}

# Self-hosted egress conversion, GB per viewer-minute
LIVE_GB_PER_MINUTE = 0.01     # 1080p average
VOD_GB_PER_MINUTE = 0.0075    # 720p average
DEFAULT_EGRESS_PER_GB = 0.04

# Video CDN in front of a self-hosted origin
VIDEO_CDN_GB_PER_VIEWER_HOUR = 0.3
VIDEO_CDN_EGRESS_RATES = {
    "cloudfront": 0.085,
    "bunny": 0.01,
    "fastly": 0.12,
    "cloudflare": 0.01,
}
VIDEO_CDN_DEFAULT_EGRESS = 0.01
VIDEO_CDN_PLAN_FEES = {"standard": 0.0, "premium": 50.0, "enterprise": 200.0}

# Flat monthly add-ons
WEBSITE_CDN_PLAN_FEES = {"free": 0.0, "pro": 20.0, "business": 200.0}
DATA_STORE_FEES = {"local-sqlite": 0.0, "local-postgres": 0.0, "cockroach-db": 25.0}
DB_BACKUP_TIERS = ((7, 0.0), (30, 5.0), (90, 10.0), (365, 20.0))
VIDEO_STORAGE_STRATEGY_FEES = {"local-nas": 0.0, "r2": 5.0, "s3-standard-ia": 12.0}
EMAIL_TIER_VOLUME = 1000
EMAIL_TIER_FEE = 10.0
NETWORK_SWITCH_MONTHLY = 20.0

# Analytics: (monthly fee, platform on which it is included)
VIEWER_ANALYTICS_FEES = {
    "mux-data": (50.0, MUX),
    "cf-analytics": (20.0, CLOUDFLARE),
    "self-host-grafana": (10.0, None),
    "google-analytics": (0.0, None),
}
SITE_ANALYTICS_FEES = {
    "ga4": 0.0,
    "plausible": 9.0,
    "fathom": 14.0,
    "matomo": 19.0,
}

# Rack units per server type for colocation billing
RACK_UNITS = {
    "mac-mini": 1,
    "mac-studio": 2,
    "linux-server": 1,
}


def normalize_platform(platform) -> str:
    """Map aliases like ``managed-a`` onto concrete platform names."""
    value = str(platform or "").strip().lower()
    return PLATFORM_ALIASES.get(value, value)


def platform_provider(platform: Optional[str]) -> str:
    """Storage/delivery provider that backs a live platform."""
    value = normalize_platform(platform)
    if value in SELF_HOSTED_PLATFORMS:
        return SELF_HOSTED_R2
    return value


def resolve_provider(config, chain: str) -> str:
    """
    Resolve a provider chain to a concrete provider name.

    ``chain`` names where to start: ``"live"``, ``"vod"`` or ``"legacy"``.
    ``same-as-vod`` defers to the VOD provider and ``same-as-live`` to the
    live platform. Cycles and unknown chain names resolve to an empty string.

    Args:
        config: StationConfig-like object
        chain: Starting link of the chain

    Returns:
        Concrete provider, or the raw unknown value
    """
    links = {
        "live": lambda: platform_provider(getattr(config, "platform", None)),
        "vod": lambda: getattr(config, "vod_provider", None) or SAME_AS_LIVE,
        "legacy": lambda: getattr(config, "legacy_provider", None) or SAME_AS_VOD,
    }
    markers = {SAME_AS_LIVE: "live", SAME_AS_VOD: "vod"}

    seen = set()
    current = chain
    while current in links and current not in seen:
        seen.add(current)
        value = str(links[current]()).strip().lower()
        if value in markers:
            current = markers[value]
            continue
        return value
    return ""


def managed_encoding_rate(provider: str, preset: str) -> float:
    """Per-minute encoding rate for a managed provider, 0 when unknown."""
    return MANAGED_ENCODING_RATES.get(provider, {}).get(preset, 0.0)


def self_hosted_compute_rate(preset: str) -> float:
    """Hourly compute rate to transcode one channel on owned hardware."""
    return SELF_HOSTED_COMPUTE_HOURLY.get(preset, 0.0)


def provider_encoding_rate(provider: str, preset: str) -> float:
    """Per-minute encoding rate for any provider, self-hosted included."""
    if provider == SELF_HOSTED_R2:
        return self_hosted_compute_rate(preset) / MINUTES_PER_HOUR
    return managed_encoding_rate(provider, preset)


def db_backup_fee(retention_days: float) -> float:
    """Off-site backup fee for the smallest tier covering the retention."""
    for max_days, fee in DB_BACKUP_TIERS:
        if retention_days <= max_days:
            return fee
    return DB_BACKUP_TIERS[-1][1]


def rack_units_for(server_type: Optional[str]) -> int:
    """Rack units occupied by one server, parsed from names like ``rack-server-2u``."""
    name = (server_type or "").lower()
    if name in RACK_UNITS:
        return RACK_UNITS[name]
    if "studio" in name:
        return 2
    match = re.search(r"(\d+)u\b", name)
    if match:
        return int(match.group(1))
    return 1
