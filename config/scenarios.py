#!/usr/bin/env python3
"""
Compiled-in defaults for the station estimator.
Default channel lineup, VOD categories, global rates and revenue assumptions.
"""

# Station channel lineup (subchannels 40.1 - 40.6)
DEFAULT_CHANNELS = [
    {"id": "40.1", "name": "40.1 Independent", "viewership": 1000, "average_retention_minutes": 15,
     "ad_spots_per_hour": 20, "cpm_rate": 3.0, "fill_rate": 35, "live_hours": 5,
     "vod_uniques": 100, "vod_watch_min": 12},
    {"id": "40.2", "name": "40.2 Defy", "viewership": 1500, "average_retention_minutes": 18,
     "ad_spots_per_hour": 14, "cpm_rate": 5.0, "fill_rate": 40, "live_hours": 2,
     "vod_uniques": 50, "vod_watch_min": 10},
    {"id": "40.3", "name": "40.3 The365", "viewership": 1500, "average_retention_minutes": 18,
     "ad_spots_per_hour": 14, "cpm_rate": 5.0, "fill_rate": 40, "live_hours": 2,
     "vod_uniques": 50, "vod_watch_min": 10},
    {"id": "40.4", "name": "40.4 Music", "viewership": 300, "average_retention_minutes": 8,
     "ad_spots_per_hour": 6, "cpm_rate": 2.0, "fill_rate": 15, "live_hours": 0,
     "vod_uniques": 0, "vod_watch_min": 0},
    {"id": "40.5", "name": "40.5 UrbanTS", "viewership": 1000, "average_retention_minutes": 15,
     "ad_spots_per_hour": 20, "cpm_rate": 4.0, "fill_rate": 35, "live_hours": 3,
     "vod_uniques": 50, "vod_watch_min": 10},
    {"id": "40.6", "name": "40.6 Simul", "viewership": 300, "average_retention_minutes": 15,
     "ad_spots_per_hour": 20, "cpm_rate": 3.0, "fill_rate": 35, "live_hours": 0,
     "vod_uniques": 0, "vod_watch_min": 0},
]

# On-demand library categories
DEFAULT_VOD_CATEGORIES = [
    {"id": "news", "name": "Local News", "monthly_views": 2500, "average_watch_time_minutes": 6,
     "ad_spots_per_view": 1, "cpm_rate": 18.0},
    {"id": "sports", "name": "High School Sports", "monthly_views": 1500, "average_watch_time_minutes": 25,
     "ad_spots_per_view": 2, "cpm_rate": 22.0},
    {"id": "community", "name": "Community Programming", "monthly_views": 1000,
     "average_watch_time_minutes": 12, "ad_spots_per_view": 1, "cpm_rate": 12.0, "fill_rate": 25},
]

# Station-wide rates and hosting opex
GLOBAL_DEFAULTS = {
    "global_fill_rate": 35,      # % of ad slots filled station-wide
    "power_rate": 0.144,         # $/kWh (Ohio average)
    "cdn_cost_per_gb": 0.04,     # self-hosted egress $/GB
    "avg_bitrate_override": None,
    "cap_ex": 1299,              # Mac Mini
    "amort_months": 36,
    "wattage": 25,
    "internet_colo_monthly_cost": 99,
}

DEFAULT_REVENUE = {
    "live_ads_enabled": True,
    "average_daily_unique_viewers": 1000,
    "average_viewing_hours_per_viewer": 2,
    "ad_spots_per_hour": 4,
    "cpm_rate": 15,
    "fill_rate": 35,
    "peak_time_multiplier": 1.2,
    "seasonal_multiplier": 1.0,
    "target_demographic_value": 1.1,
    "paid_programming_enabled": True,
    "monthly_paid_blocks": 4,
    "rate_per_block": 250,
    "premium_sponsorship_enabled": False,
    "premium_sponsorship_rate": 500,
    "premium_sponsorship_count": 0,
    "vod_ads_enabled": True,
    "monthly_vod_views": 5000,
    "ad_spots_per_vod_view": 1,
    "vod_cpm_rate": 20,
    "vod_fill_rate": 35,
    "vod_skip_rate": 0.15,
    "vod_completion_rate": 0.85,
    "vod_premium_placement_rate": 0.05,
}

# Starting points offered in the sidebar; values override the defaults
SCENARIO_PRESETS = {
    "managed-starter": {
        "description": "Single channel on Mux with DVR archive and Mux Data",
        "modifications": {
            "platform": "mux",
            "channel_count": 1,
            "viewer_analytics": "mux-data",
        },
    },
    "cloudflare-lineup": {
        "description": "Full subchannel lineup on Cloudflare Stream",
        "modifications": {
            "platform": "cloudflare",
            "channel_count": 6,
            "peak_concurrent_viewers": 50,
            "vod_provider": "same-as-live",
            "viewer_analytics": "cf-analytics",
            "cdn_plan": "pro",
        },
    },
    "self-hosted-station": {
        "description": "Mac hardware in the station rack with a Bunny video CDN",
        "modifications": {
            "platform": "self-hosted",
            "channel_count": 2,
            "vod_provider": "self-hosted-r2",
            "video_cdn_provider": "bunny",
            "video_cdn_plan": "standard",
            "viewer_analytics": "self-host-grafana",
            "network_switch_needed": True,
        },
    },
    "hybrid-failover": {
        "description": "Self-hosted origin with Cloudflare for overflow and failover",
        "modifications": {
            "platform": "hybrid",
            "channel_count": 2,
            "cloud_provider": "cloudflare",
            "hybrid_redundancy_mode": "active-passive",
            "network_interface": "10gbe",
            "bandwidth_capacity": 10000,
        },
    },
}

# Fallbacks applied by the engines when a numeric field is missing or not a number
FIELD_FALLBACKS = {
    "channel_count": 1,
    "peak_concurrent_viewers": 0,
    "hours_per_day_archived": 0,
    "retention_window": 30,
    "peak_concurrent_vod_viewers": 0,
    "back_catalog_hours": 0,
    "db_backup_retention": 0,
    "monthly_email_volume": 0,
    "cdn_egress_rate": 0.085,
    "video_cdn_egress_rate": None,
    "server_count": 1,
    "server_cost": 0,
    "cap_ex": GLOBAL_DEFAULTS["cap_ex"],
    "amort_months": GLOBAL_DEFAULTS["amort_months"],
    "wattage": 0,
    "power_rate": GLOBAL_DEFAULTS["power_rate"],
    "monthly_rental_cost": 0,
    "internet_colo_monthly_cost": 0,
    "bandwidth_capacity": 0,
    "origin_egress_cost": 0.09,
    "rack_cost": 0,
    "global_fill_rate": GLOBAL_DEFAULTS["global_fill_rate"],
    "cdn_cost_per_gb": GLOBAL_DEFAULTS["cdn_cost_per_gb"],
    "avg_bitrate_override": None,
}

# Toggles that default on when missing; every other toggle defaults off
FLAG_FALLBACKS = {
    "stream_enabled": True,
    "live_dvr_enabled": True,
    "vod_enabled": True,
}

REVENUE_FALLBACKS = {
    "average_daily_unique_viewers": 0,
    "average_viewing_hours_per_viewer": 0,
    "ad_spots_per_hour": 0,
    "cpm_rate": 0,
    "fill_rate": 100,
    "peak_time_multiplier": 1,
    "seasonal_multiplier": 1,
    "target_demographic_value": 1,
    "monthly_paid_blocks": 0,
    "rate_per_block": 0,
    "premium_sponsorship_rate": 0,
    "premium_sponsorship_count": 0,
    "monthly_vod_views": 0,
    "ad_spots_per_vod_view": 0,
    "vod_cpm_rate": 0,
    "vod_fill_rate": 100,
    "vod_skip_rate": 0,
    "vod_completion_rate": 1,
    "vod_premium_placement_rate": 0,
}
