"""
Shared fixtures for the estimator tests.

Configurations are built from the compiled-in defaults and then narrowed so
each engine scenario isolates the term under test.
"""

import pytest

from config_manager import StationConfig, RevenueAssumptions


@pytest.fixture
def default_config() -> StationConfig:
    return StationConfig()


@pytest.fixture
def managed_config() -> StationConfig:
    """Single Mux channel with nothing but live encoding."""
    return StationConfig(
        platform="mux",
        stream_enabled=True,
        channel_count=1,
        encoding_preset="1080p-tri-ladder",
        vod_enabled=False,
        legacy_enabled=False,
        peak_concurrent_viewers=0,
    )


@pytest.fixture
def self_hosted_config() -> StationConfig:
    """One self-hosted channel on owned hardware, no archive."""
    return StationConfig(
        platform="self-hosted",
        channel_count=1,
        peak_concurrent_viewers=10,
        encoding_preset="1080p-tri-ladder",
        network_interface="1gbe",
        vod_enabled=False,
        hardware_mode="own",
        server_cost=1299,
        server_count=1,
        amort_months=36,
        wattage=25,
        power_rate=0.144,
        internet_colo_monthly_cost=99,
        bandwidth_capacity=1000,
    )


@pytest.fixture
def flat_assumptions() -> RevenueAssumptions:
    """Aggregate live ads only, every multiplier 1 and a full fill rate."""
    return RevenueAssumptions(
        live_ads_enabled=True,
        average_daily_unique_viewers=1000,
        average_viewing_hours_per_viewer=2,
        ad_spots_per_hour=4,
        cpm_rate=15,
        fill_rate=100,
        peak_time_multiplier=1,
        seasonal_multiplier=1,
        target_demographic_value=1,
        paid_programming_enabled=False,
        vod_ads_enabled=False,
    )
