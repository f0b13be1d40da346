"""Hardware sizing advisor tests."""

import pytest

from estimator.hardware import (
    BASE_REQUIREMENTS,
    ENCODING_PER_CHANNEL,
    HARDWARE_OPTIONS,
    REQUIREMENT_CEILING,
    calculate_hardware_requirements,
    find_option,
    find_recommended_hardware,
    get_hardware_options,
    raw_requirements,
)


def _cheapest_meeting(hw):
    needs = {"cpu_cores": hw.cpu_cores, "memory_gb": hw.memory_gb, "storage_gb": hw.storage_gb,
             "network_mbps": hw.network_mbps}
    return min((o for o in HARDWARE_OPTIONS if o.meets(needs)), key=lambda o: o.cost)


class TestSizing:

    def test_single_channel_meets_floor_plus_preset(self, self_hosted_config):
        hw = calculate_hardware_requirements(self_hosted_config)
        per_channel = ENCODING_PER_CHANNEL["1080p-tri-ladder"]

        assert hw.cpu_cores >= BASE_REQUIREMENTS["cpu_cores"] + per_channel["cpu_cores"]
        assert hw.memory_gb >= BASE_REQUIREMENTS["memory_gb"] + per_channel["memory_gb"]
        assert hw.network_mbps >= BASE_REQUIREMENTS["network_mbps"] + per_channel["network_mbps"]
        assert hw.recommended_hardware == _cheapest_meeting(hw).name
        assert hw.is_available is True

    def test_single_channel_exact_values(self, self_hosted_config):
        hw = calculate_hardware_requirements(self_hosted_config)

        assert (hw.cpu_cores, hw.memory_gb, hw.storage_gb, hw.network_mbps) == (6, 8, 50, 200)
        assert hw.recommended_hardware == "Mac Mini (M2 Pro)"
        assert hw.estimated_cost == 1299
        # (1000 - 100) Mbps / 5 Mbps per viewer
        assert hw.max_viewers == 180

    def test_archive_storage_moves_to_rack_server(self, self_hosted_config):
        hw = calculate_hardware_requirements(self_hosted_config.replace(vod_enabled=True))

        # 24 h x 30 days x 2 GB/h + 50 GB floor, rounded up to 50 GB
        assert hw.storage_gb == 1500
        assert hw.recommended_hardware == "1U Rack Server (Intel)"
        assert hw.is_available is True

    def test_hybrid_offloads_encoding(self, self_hosted_config):
        local = raw_requirements(self_hosted_config.replace(channel_count=2))
        hybrid = raw_requirements(self_hosted_config.replace(channel_count=2, platform="hybrid"))

        assert local["cpu_cores"] == pytest.approx(2 + 8)
        assert hybrid["cpu_cores"] == pytest.approx(2 + 8 * 0.7)

    def test_network_capped_at_interface(self, self_hosted_config):
        hw = calculate_hardware_requirements(self_hosted_config.replace(peak_concurrent_viewers=1000))
        assert hw.network_mbps == 1000

    def test_bitrate_override_changes_capacity(self, self_hosted_config):
        hw = calculate_hardware_requirements(self_hosted_config.replace(avg_bitrate_override=3.0))
        assert hw.max_viewers == 300

    def test_managed_platform_sizes_base_only(self, managed_config):
        hw = calculate_hardware_requirements(managed_config)
        assert (hw.cpu_cores, hw.memory_gb, hw.storage_gb, hw.network_mbps) == (2, 4, 50, 100)

    def test_oversized_lineup_falls_back_to_most_capable(self, self_hosted_config):
        config = self_hosted_config.replace(channel_count=20, encoding_preset="4k-tri-ladder",
                                            network_interface="10gbe")
        hw = calculate_hardware_requirements(config)

        assert hw.is_available is False
        assert hw.recommended_hardware == "2U Rack Server (Intel)"

    def test_unset_stream_toggle_sizes_as_streaming(self, self_hosted_config):
        hw = calculate_hardware_requirements(self_hosted_config.replace(stream_enabled=None))
        assert hw == calculate_hardware_requirements(self_hosted_config)

    def test_overflowing_archive_is_capped(self, self_hosted_config):
        config = self_hosted_config.replace(legacy_enabled=True, back_catalog_hours=1e308)
        hw = calculate_hardware_requirements(config)

        assert hw.storage_gb == REQUIREMENT_CEILING
        assert hw.is_available is False
        assert hw.recommended_hardware == "2U Rack Server (Intel)"


class TestCatalog:

    def test_apple_preference_falls_back_to_whole_catalog(self):
        needs = {"cpu_cores": 16, "memory_gb": 64, "storage_gb": 2000, "network_mbps": 1000}
        option, viable = find_recommended_hardware(needs, prefer_apple_silicon=True)

        assert viable is True
        assert option.name == "1U Rack Server (Intel)"

    def test_software_transcoding_considers_every_sku(self):
        needs = {"cpu_cores": 6, "memory_gb": 8, "storage_gb": 50, "network_mbps": 200}
        option, viable = find_recommended_hardware(needs, prefer_apple_silicon=False)
        assert (option.name, viable) == ("Mac Mini (M2 Pro)", True)

    def test_select_box_entries(self):
        options = get_hardware_options()

        assert len(options) == len(HARDWARE_OPTIONS)
        assert options[0]["value"] == "mac-mini-m2-pro"
        assert options[0]["specs"].endswith("1GbE network")

    def test_find_option_by_name(self):
        assert find_option("Mac Studio (M2 Max)").cost == 2999
        assert find_option("Cray-1") is None
