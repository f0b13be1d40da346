"""Persistence adapter tests."""

import json

from config.settings import AppSettings
from config_manager import StationConfig
from estimator.cost_engine import calculate_costs
from estimator.hardware import calculate_hardware_requirements
from estimator.validation import has_validation_errors, validate_settings
from state_store import StateStore


def test_missing_file_gives_defaults(tmp_path):
    assert StateStore(tmp_path / "state.json").load() == StationConfig()


def test_save_then_load(tmp_path):
    store = StateStore(tmp_path / "nested" / "state.json")
    config = StationConfig(platform="cloudflare", channel_count=4)

    assert store.save(config) is True
    assert store.load() == config


def test_corrupt_file_gives_defaults(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("{not json", encoding="utf-8")
    assert StateStore(path).load() == StationConfig()


def test_saved_partial_snapshot_is_merged(tmp_path):
    path = tmp_path / "state.json"
    path.write_text(json.dumps({"platform": "hybrid"}), encoding="utf-8")
    config = StateStore(path).load()

    assert config.platform == "hybrid"
    assert config.retention_window == StationConfig().retention_window


def test_non_string_platform_degrades_instead_of_raising(tmp_path):
    path = tmp_path / "state.json"
    path.write_text(json.dumps({"platform": 1}), encoding="utf-8")
    config = StateStore(path).load()

    costs = calculate_costs(config)
    hardware = calculate_hardware_requirements(config)
    results = validate_settings(config)

    assert costs.encoding == 0
    assert hardware.is_available is True
    assert [r.field for r in results] == ["platform"]
    assert has_validation_errors(results) is True


def test_failed_write_returns_false(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory", encoding="utf-8")
    assert StateStore(blocker / "state.json").save(StationConfig()) is False


def test_clear(tmp_path):
    store = StateStore(tmp_path / "state.json")
    store.save(StationConfig())
    store.clear()
    store.clear()

    assert not store.path.exists()


def test_from_settings(tmp_path):
    settings = AppSettings(state_dir=tmp_path, state_key="station")
    assert StateStore.from_settings(settings).path == tmp_path / "station.json"
