#!/usr/bin/env python3
"""
Hardware sizing advisor for self-hosted and hybrid origins.

Derives CPU, memory, storage and network requirements from a StationConfig
and recommends the cheapest catalog SKU that covers all four. When nothing
in the catalog fits, the most capable SKU is recommended and
``is_available`` is False. Recommendations are advisory and never raise.
"""

import math
from dataclasses import dataclass, asdict
from typing import Dict, List, Any, Optional, Tuple

from utils.helpers import ensure_number, round_up_to
from estimator import pricing
from estimator.pricing import HYBRID, SELF_HOSTED_PLATFORMS, ENCODING_PRESETS
from estimator.cost_engine import setting, flag

# Control plane / web server footprint
BASE_REQUIREMENTS = {"cpu_cores": 2, "memory_gb": 4, "storage_gb": 50, "network_mbps": 100}

# Per-channel encoding overhead keyed by preset
ENCODING_PER_CHANNEL = {
    "1080p-tri-ladder": {"cpu_cores": 4, "memory_gb": 4, "network_mbps": 5},
    "720p-tri-ladder": {"cpu_cores": 3, "memory_gb": 3, "network_mbps": 3},
    "1080p-single": {"cpu_cores": 2, "memory_gb": 2, "network_mbps": 5},
    "4k-tri-ladder": {"cpu_cores": 8, "memory_gb": 8, "network_mbps": 15},
    "4k-single": {"cpu_cores": 4, "memory_gb": 4, "network_mbps": 15},
}

HYBRID_OFFLOAD_FACTOR = 0.7

# GB per hour of archived content
STORAGE_GB_PER_HOUR = {"hd": 2, "uhd": 6}

NETWORK_CAPACITY_MBPS = {"1gbe": 1000, "10gbe": 10000}

# Requirements and viewer counts are reported no higher than this
REQUIREMENT_CEILING = 10 ** 9


@dataclass(frozen=True)
class HardwareOption:
    """One catalog SKU"""
    name: str
    cpu_cores: int
    memory_gb: int
    storage_gb: int
    network_mbps: int
    cost: float
    is_apple_silicon: bool

    @property
    def capability_score(self) -> float:
        return self.cpu_cores + self.memory_gb + self.storage_gb / 100 + self.network_mbps / 1000

    def meets(self, requirements: Dict[str, float]) -> bool:
        return (self.cpu_cores >= requirements["cpu_cores"]
                and self.memory_gb >= requirements["memory_gb"]
                and self.storage_gb >= requirements["storage_gb"]
                and self.network_mbps >= requirements["network_mbps"])


HARDWARE_OPTIONS = [
    HardwareOption("Mac Mini (M2 Pro)", 10, 16, 512, 1000, 1299, True),
    HardwareOption("Mac Mini (M2 Pro, 32GB)", 10, 32, 512, 1000, 1899, True),
    HardwareOption("Mac Studio (M2 Max)", 12, 32, 1024, 10000, 2999, True),
    HardwareOption("Mac Studio (M2 Ultra)", 24, 64, 1024, 10000, 3999, True),
    HardwareOption("1U Rack Server (Intel)", 16, 64, 2048, 10000, 3500, False),
    HardwareOption("2U Rack Server (Intel)", 32, 128, 4096, 10000, 5500, False),
]


@dataclass(frozen=True)
class HardwareRequirements:
    """Sized requirements plus the recommended SKU"""
    cpu_cores: int
    memory_gb: int
    storage_gb: int
    network_mbps: int
    recommended_hardware: str
    estimated_cost: float
    is_available: bool
    max_viewers: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _preset(config) -> str:
    return str(getattr(config, "encoding_preset", None) or "").strip().lower()


def viewer_bitrate_mbps(config) -> float:
    """Per-viewer bitrate: the override when set, else the preset's top rung."""
    override = ensure_number(getattr(config, "avg_bitrate_override", None), 0.0)
    if override > 0:
        return override
    return ENCODING_PRESETS.get(_preset(config), {}).get("bitrate_mbps", 0.0)


def interface_capacity(config) -> int:
    interface = str(getattr(config, "network_interface", None) or "").strip().lower()
    return NETWORK_CAPACITY_MBPS.get(interface, NETWORK_CAPACITY_MBPS["1gbe"])


def storage_gb_per_hour(config) -> int:
    uhd = ENCODING_PRESETS.get(_preset(config), {}).get("uhd", False)
    return STORAGE_GB_PER_HOUR["uhd" if uhd else "hd"]


def raw_requirements(config) -> Dict[str, float]:
    """Unrounded requirements: base floor plus encoding, egress and archive load."""
    platform = pricing.normalize_platform(getattr(config, "platform", None))
    self_hosted = platform in SELF_HOSTED_PLATFORMS
    offload = HYBRID_OFFLOAD_FACTOR if platform == HYBRID else 1.0
    channel_count = setting(config, "channel_count")

    requirements = dict(BASE_REQUIREMENTS)

    if self_hosted and flag(config, "stream_enabled"):
        per_channel = ENCODING_PER_CHANNEL.get(_preset(config))
        if per_channel:
            for key, amount in per_channel.items():
                requirements[key] += amount * channel_count * offload

        viewer_egress = setting(config, "peak_concurrent_viewers") * channel_count * viewer_bitrate_mbps(config)
        requirements["network_mbps"] += viewer_egress * offload

    gb_per_hour = storage_gb_per_hour(config)
    if flag(config, "vod_enabled"):
        archive_hours = (setting(config, "hours_per_day_archived") * setting(config, "retention_window")
                         * channel_count)
        requirements["storage_gb"] += archive_hours * gb_per_hour
    if flag(config, "legacy_enabled"):
        requirements["storage_gb"] += setting(config, "back_catalog_hours") * gb_per_hour

    return requirements


def _bounded(value: float) -> float:
    if not math.isfinite(value) or value > REQUIREMENT_CEILING:
        return REQUIREMENT_CEILING
    return value


def max_viewers_per_channel(config) -> int:
    """Concurrent viewers per channel the interface can serve above the base floor."""
    bitrate = viewer_bitrate_mbps(config)
    channel_count = setting(config, "channel_count")
    if bitrate <= 0 or channel_count <= 0:
        return 0
    headroom = interface_capacity(config) - BASE_REQUIREMENTS["network_mbps"]
    return max(0, math.floor(min(headroom / bitrate / channel_count, REQUIREMENT_CEILING)))


def find_recommended_hardware(requirements: Dict[str, float],
                              prefer_apple_silicon: bool = False) -> Tuple[HardwareOption, bool]:
    """
    Pick the cheapest SKU meeting every requirement.

    Args:
        requirements: Rounded requirement dimensions
        prefer_apple_silicon: Restrict the pool to SKUs with media engines

    Returns:
        (option, viable) where viable is False on the most-capable fallback
    """
    pool = [o for o in HARDWARE_OPTIONS if o.is_apple_silicon] if prefer_apple_silicon else HARDWARE_OPTIONS
    viable = [o for o in pool if o.meets(requirements)]
    if not viable and prefer_apple_silicon:
        viable = [o for o in HARDWARE_OPTIONS if o.meets(requirements)]
    if viable:
        return min(viable, key=lambda o: o.cost), True
    return max(HARDWARE_OPTIONS, key=lambda o: o.capability_score), False


def calculate_hardware_requirements(config) -> HardwareRequirements:
    """
    Size an origin server for a configuration.

    Cores round up to an even count, memory to 4 GB, storage to 50 GB and
    network to 100 Mbps; network is then capped at the interface capacity.
    """
    raw = {key: _bounded(value) for key, value in raw_requirements(config).items()}
    requirements = {
        "cpu_cores": int(round_up_to(raw["cpu_cores"], 2)),
        "memory_gb": int(round_up_to(raw["memory_gb"], 4)),
        "storage_gb": int(round_up_to(raw["storage_gb"], 50)),
        "network_mbps": int(min(round_up_to(raw["network_mbps"], 100), interface_capacity(config))),
    }

    prefer_apple = str(getattr(config, "transcoding_engine", "") or "").lower() == "hardware"
    option, viable = find_recommended_hardware(requirements, prefer_apple)

    return HardwareRequirements(
        cpu_cores=requirements["cpu_cores"],
        memory_gb=requirements["memory_gb"],
        storage_gb=requirements["storage_gb"],
        network_mbps=requirements["network_mbps"],
        recommended_hardware=option.name,
        estimated_cost=float(option.cost),
        is_available=viable,
        max_viewers=max_viewers_per_channel(config),
    )


def _option_value(name: str) -> str:
    value = name.lower().replace("(", "").replace(")", "").replace(",", "")
    return "-".join(value.split())


def get_hardware_options() -> List[Dict[str, Any]]:
    """Catalog entries formatted for a select box."""
    return [
        {
            "value": _option_value(option.name),
            "label": option.name,
            "specs": (f"{option.cpu_cores} cores, {option.memory_gb}GB RAM, {option.storage_gb}GB storage, "
                      f"{'10GbE' if option.network_mbps >= 10000 else '1GbE'} network"),
            "cost": option.cost,
        }
        for option in HARDWARE_OPTIONS
    ]


def find_option(name: str) -> Optional[HardwareOption]:
    for option in HARDWARE_OPTIONS:
        if option.name == name:
            return option
    return None
