#!/usr/bin/env python3
"""
Input validation for station configurations.

A fixed list of declarative rules is evaluated against a StationConfig.
Every applicable rule is checked independently and violations accumulate.
Results never block the engines; error-severity results gate the
"export to estimate" action.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Callable, Any, Sequence

from estimator import pricing
from estimator.cost_engine import flag
from estimator.pricing import HYBRID, SELF_HOSTED, SELF_HOSTED_PLATFORMS, ENCODING_PRESETS, PROVIDER_CHOICES

WARNING = "warning"
ERROR = "error"


@dataclass(frozen=True)
class ValidationRule:
    """
    One declarative check.

    Attributes:
        field: Attribute name on the record being checked
        message: Text shown to the user
        severity: "warning" or "error"
        min/max: Inclusive numeric bounds
        integer: Value must be a whole number
        choices: Allowed values for an enumerated field
        required: A missing (None) value is a violation instead of skipped
        condition: Predicate over the whole configuration gating the rule
    """
    field: str
    message: str
    severity: str = ERROR
    min: Optional[float] = None
    max: Optional[float] = None
    integer: bool = False
    choices: Optional[Sequence[str]] = None
    required: bool = False
    condition: Optional[Callable[[Any], bool]] = None

    @property
    def has_constraint(self) -> bool:
        return (self.min is not None or self.max is not None or self.integer
                or self.choices is not None or self.required)

    def applies(self, config) -> bool:
        return self.condition is None or bool(self.condition(config))

    def is_violated(self, value) -> bool:
        if not self.has_constraint:
            return True
        if value is None:
            return self.required
        if self.choices is not None:
            return str(value).strip().lower() not in self.choices
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return True
        if math.isnan(value) or math.isinf(value):
            return True
        if self.min is not None and value < self.min:
            return True
        if self.max is not None and value > self.max:
            return True
        if self.integer and float(value) != int(value):
            return True
        return False


@dataclass(frozen=True)
class ValidationResult:
    field: str
    message: str
    severity: str
    channel_id: Optional[str] = None
    category_id: Optional[str] = None


def _platform(config) -> str:
    return pricing.normalize_platform(getattr(config, "platform", None))


def _self_hosted(config) -> bool:
    return _platform(config) in SELF_HOSTED_PLATFORMS


def _streaming(config) -> bool:
    return flag(config, "stream_enabled")


def _archiving(config) -> bool:
    return flag(config, "vod_enabled") and _streaming(config)


def _number(config, name: str) -> float:
    value = getattr(config, name, None)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


def _bandwidth_insufficient(config) -> bool:
    if not _self_hosted(config):
        return False
    # ~5 Mbps per viewer
    estimated = _number(config, "peak_concurrent_viewers") * _number(config, "channel_count") * 5
    return _number(config, "bandwidth_capacity") < estimated


STATION_RULES = [
    # Stream (live)
    ValidationRule("platform", "Choose Mux, Cloudflare, self-hosted or hybrid",
                   choices=pricing.PLATFORMS + tuple(pricing.PLATFORM_ALIASES), required=True),
    ValidationRule("channel_count", "Channel count should be between 1 and 100",
                   min=1, max=100, integer=True, required=True, condition=_streaming),
    ValidationRule("peak_concurrent_viewers", "Peak concurrent viewers should be between 0 and 100,000",
                   min=0, max=100_000, integer=True, condition=_streaming),
    ValidationRule("peak_concurrent_viewers", "High viewer counts may require additional infrastructure planning",
                   severity=WARNING,
                   condition=lambda c: _streaming(c) and _platform(c) == SELF_HOSTED
                   and _number(c, "peak_concurrent_viewers") >= 1000),
    ValidationRule("encoding_preset", "Choose a supported encoding preset",
                   choices=tuple(ENCODING_PRESETS), required=True, condition=_streaming),

    # Live -> VOD
    ValidationRule("vod_provider", "Choose a supported VOD provider",
                   choices=PROVIDER_CHOICES, required=True, condition=_archiving),
    ValidationRule("hours_per_day_archived", "Hours per day archived should be between 0 and 24",
                   min=0, max=24, condition=_archiving),
    ValidationRule("retention_window", "Retention window should be between 1 and 1825 days",
                   min=1, max=365 * 5, integer=True, condition=_archiving),
    ValidationRule("peak_concurrent_vod_viewers", "Peak concurrent VOD viewers should be between 0 and 100,000",
                   min=0, max=100_000, integer=True, condition=_archiving),

    # Legacy VOD
    ValidationRule("legacy_provider", "Choose a supported legacy provider",
                   choices=PROVIDER_CHOICES, required=True, condition=lambda c: flag(c, "legacy_enabled")),
    ValidationRule("back_catalog_hours", "Back-catalog hours should be a positive number",
                   min=0, max=1_000_000, condition=lambda c: flag(c, "legacy_enabled")),
    ValidationRule("back_catalog_hours", "Large back-catalog may result in significant storage costs",
                   severity=WARNING,
                   condition=lambda c: flag(c, "legacy_enabled")
                   and _number(c, "back_catalog_hours") >= 10_000),

    # Hardware & hosting
    ValidationRule("server_count", "Server count should be between 1 and 100",
                   min=1, max=100, integer=True, condition=_self_hosted),
    ValidationRule("server_cost", "Server cost should be between $0 and $100,000",
                   min=0, max=100_000,
                   condition=lambda c: _self_hosted(c) and not flag(c, "hardware_available")),
    ValidationRule("server_cost", "Hardware costs must be entered for self-hosted or hybrid platforms",
                   min=1, required=True,
                   condition=lambda c: _self_hosted(c) and getattr(c, "hardware_mode", "own") == "own"
                   and not flag(c, "hardware_available")),
    ValidationRule("monthly_rental_cost", "Monthly rental cost must be entered for self-hosted or hybrid platforms",
                   min=1, required=True,
                   condition=lambda c: _self_hosted(c) and getattr(c, "hardware_mode", "own") == "rent"),
    ValidationRule("internet_colo_monthly_cost",
                   "Internet/colocation costs must be entered for self-hosted or hybrid platforms",
                   min=1, required=True, condition=_self_hosted),
    ValidationRule("rack_cost", "Rack cost should be between $0 and $10,000",
                   min=0, max=10_000, condition=lambda c: getattr(c, "rack_hosting_location", None) == "colo"),

    # CDN
    ValidationRule("cdn_egress_rate", "CDN egress rate should be between $0 and $1 per GB", min=0, max=1),
    ValidationRule("video_cdn_egress_rate", "Video CDN egress rate should be between $0 and $1 per GB",
                   min=0, max=1,
                   condition=lambda c: _self_hosted(c)
                   and str(getattr(c, "video_cdn_provider", None) or "none").lower() != "none"),
    ValidationRule("origin_egress_cost", "Origin egress cost should be between $0 and $1 per GB",
                   min=0, max=1, condition=lambda c: _platform(c) == HYBRID),
    ValidationRule("cdn_cost_per_gb", "Self-hosted egress should be between $0 and $1 per GB",
                   min=0, max=1, condition=_self_hosted),

    # Email
    ValidationRule("monthly_email_volume", "Monthly email volume should be between 0 and 10,000,000",
                   min=0, max=10_000_000, integer=True, condition=lambda c: flag(c, "outbound_email")),

    # Bandwidth
    ValidationRule("bandwidth_capacity", "Bandwidth capacity should be between 0 and 100,000 Mbps",
                   min=0, max=100_000, condition=_self_hosted),
    ValidationRule("bandwidth_capacity", "Bandwidth may be insufficient for your viewer count",
                   severity=WARNING, condition=_bandwidth_insufficient),

    # Station-wide rates
    ValidationRule("global_fill_rate", "Default fill rate should be between 0 and 100%", min=0, max=100),
]


def _revenue(config):
    return getattr(config, "revenue", None)


REVENUE_RULES = [
    ValidationRule("cpm_rate", "Live CPM cannot be negative", min=0),
    ValidationRule("fill_rate", "Live fill rate should be between 0 and 100%", min=0, max=100),
    ValidationRule("ad_spots_per_hour", "Ad spots per hour cannot be negative", min=0),
    ValidationRule("average_daily_unique_viewers", "Daily unique viewers cannot be negative", min=0),
    ValidationRule("average_viewing_hours_per_viewer", "Viewing hours should be between 0 and 24", min=0, max=24),
    ValidationRule("peak_time_multiplier", "Multipliers cannot be negative", min=0),
    ValidationRule("seasonal_multiplier", "Multipliers cannot be negative", min=0),
    ValidationRule("target_demographic_value", "Multipliers cannot be negative", min=0),
    ValidationRule("monthly_paid_blocks", "Paid blocks cannot be negative", min=0),
    ValidationRule("rate_per_block", "Rate per block cannot be negative", min=0),
    ValidationRule("premium_sponsorship_count", "Sponsorship count cannot be negative", min=0),
    ValidationRule("premium_sponsorship_rate", "Sponsorship rate cannot be negative", min=0),
    ValidationRule("monthly_vod_views", "Monthly VOD views cannot be negative", min=0),
    ValidationRule("ad_spots_per_vod_view", "Ad spots per view cannot be negative", min=0),
    ValidationRule("vod_cpm_rate", "VOD CPM cannot be negative", min=0),
    ValidationRule("vod_fill_rate", "VOD fill rate should be between 0 and 100%", min=0, max=100),
    ValidationRule("vod_skip_rate", "Skip rate should be between 0 and 1", min=0, max=1),
    ValidationRule("vod_completion_rate", "Completion rate should be between 0 and 1", min=0, max=1),
    ValidationRule("vod_premium_placement_rate", "Premium placement uplift cannot be negative", min=0),
]

CHANNEL_RULES = [
    ValidationRule("live_hours", "Live hours should be between 0 and 24", min=0, max=24),
    ValidationRule("fill_rate", "Fill rate should be between 0 and 100%", min=0, max=100),
    ValidationRule("viewership", "Viewership cannot be negative", min=0),
    ValidationRule("average_retention_minutes", "Retention cannot be negative", min=0),
    ValidationRule("ad_spots_per_hour", "Ad spots per hour cannot be negative", min=0),
    ValidationRule("cpm_rate", "CPM cannot be negative", min=0),
    ValidationRule("vod_uniques", "VOD uniques cannot be negative", min=0),
    ValidationRule("vod_watch_min", "VOD watch minutes cannot be negative", min=0),
]

VOD_CATEGORY_RULES = [
    ValidationRule("fill_rate", "Fill rate should be between 0 and 100%", min=0, max=100),
    ValidationRule("monthly_views", "Monthly views cannot be negative", min=0),
    ValidationRule("average_watch_time_minutes", "Watch time cannot be negative", min=0),
    ValidationRule("ad_spots_per_view", "Ad spots per view cannot be negative", min=0),
    ValidationRule("cpm_rate", "CPM cannot be negative", min=0),
]


def _value(record, name: str):
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


def _check(rules, record, config, **tags) -> List[ValidationResult]:
    results = []
    for rule in rules:
        if not rule.applies(config):
            continue
        if rule.is_violated(_value(record, rule.field)):
            results.append(ValidationResult(rule.field, rule.message, rule.severity, **tags))
    return results


def validate_settings(config) -> List[ValidationResult]:
    """
    Evaluate every applicable rule against a configuration.

    Station rules run first, then revenue, per-channel and per-category
    rules. Channel and category results carry the record id.

    Args:
        config: StationConfig snapshot

    Returns:
        List of ValidationResult, empty when everything passes
    """
    results = _check(STATION_RULES, config, config)

    revenue = _revenue(config)
    if revenue is not None:
        results.extend(_check(REVENUE_RULES, revenue, config))

    seen_ids = set()
    for channel in getattr(config, "channels", None) or []:
        channel_id = _value(channel, "id")
        channel_id = None if channel_id is None else str(channel_id)
        results.extend(_check(CHANNEL_RULES, channel, config, channel_id=channel_id))
        if channel_id in seen_ids:
            results.append(ValidationResult("channels", f"Duplicate channel id {channel_id}", ERROR,
                                            channel_id=channel_id))
        seen_ids.add(channel_id)

    for category in getattr(config, "vod_categories", None) or []:
        category_id = _value(category, "id")
        category_id = None if category_id is None else str(category_id)
        results.extend(_check(VOD_CATEGORY_RULES, category, config, category_id=category_id))

    return results


def get_field_validation(field: str, results: List[ValidationResult]) -> Optional[ValidationResult]:
    """First result reported for a field, if any."""
    for result in results:
        if result.field == field:
            return result
    return None


def has_validation_errors(results: List[ValidationResult]) -> bool:
    """True when any result has error severity."""
    return any(result.severity == ERROR for result in results)
