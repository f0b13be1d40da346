"""Provider resolution and pricing table helpers."""

import pytest

from config_manager import StationConfig
from estimator.pricing import (
    db_backup_fee,
    normalize_platform,
    rack_units_for,
    resolve_provider,
)


@pytest.mark.parametrize("platform, expected", [
    ("mux", "mux"),
    ("cloudflare", "cloudflare"),
    ("self-hosted", "self-hosted-r2"),
    ("hybrid", "self-hosted-r2"),
])
def test_vod_follows_live_platform(platform, expected):
    assert resolve_provider(StationConfig(platform=platform), "vod") == expected


def test_legacy_follows_vod_then_live():
    config = StationConfig(platform="cloudflare", vod_provider="same-as-live", legacy_provider="same-as-vod")
    assert resolve_provider(config, "legacy") == "cloudflare"


def test_explicit_provider_wins():
    config = StationConfig(platform="mux", vod_provider="self-hosted-r2")
    assert resolve_provider(config, "legacy") == "self-hosted-r2"


def test_cycle_resolves_to_empty():
    config = StationConfig(vod_provider="same-as-vod")
    assert resolve_provider(config, "vod") == ""


def test_unknown_chain():
    assert resolve_provider(StationConfig(), "satellite") == ""


@pytest.mark.parametrize("days, fee", [(0, 0.0), (7, 0.0), (8, 5.0), (90, 10.0), (400, 20.0)])
def test_db_backup_tiers(days, fee):
    assert db_backup_fee(days) == fee


@pytest.mark.parametrize("server_type, units", [
    ("mac-mini", 1), ("mac-studio", 2), ("rack-server-2u", 2), ("rack-server-1u", 1), (None, 1),
])
def test_rack_units(server_type, units):
    assert rack_units_for(server_type) == units


@pytest.mark.parametrize("raw, expected", [
    ("Managed-A", "mux"),
    (" hybrid ", "hybrid"),
    (None, ""),
    (1, "1"),
])
def test_normalize_platform(raw, expected):
    assert normalize_platform(raw) == expected
