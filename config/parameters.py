#!/usr/bin/env python3
"""
Parameter specifications for the station estimator settings panels.
Each spec describes how one StationConfig (or RevenueAssumptions) field is
rendered: widget type, bounds, step, label, help text, recommended range,
and a confidence color (green = station-specific, amber = estimate,
red = rarely changed).
"""

from estimator.pricing import (
    PLATFORMS,
    PROVIDER_CHOICES,
    ENCODING_PRESETS,
    VIDEO_CDN_EGRESS_RATES,
    VIDEO_CDN_PLAN_FEES,
    WEBSITE_CDN_PLAN_FEES,
    DATA_STORE_FEES,
    VIDEO_STORAGE_STRATEGY_FEES,
    VIEWER_ANALYTICS_FEES,
    SITE_ANALYTICS_FEES,
)

# STATION PARAMETER SPECIFICATIONS
PARAM_SPECS = {
    # Live stream (GREEN - station decisions)
    "platform": {"type": "select", "options": list(PLATFORMS), "label": "Streaming platform",
                 "desc": "Managed encoder (Mux, Cloudflare Stream), own hardware, or a hybrid of both",
                 "default": "mux", "color": "green"},
    "stream_enabled": {"type": "bool", "label": "Live streaming", "desc": "Stream channels live 24/7",
                       "default": True, "color": "green"},
    "channel_count": {"type": "int", "min": 1, "max": 100, "step": 1, "label": "Live channels",
                      "desc": "Number of simultaneous 24/7 channels", "rec": (1, 6), "color": "green"},
    "peak_concurrent_viewers": {"type": "int", "min": 0, "max": 100_000, "step": 10,
                                "label": "Peak concurrent viewers (per channel)",
                                "desc": "Viewers watching one channel at the busiest moment",
                                "rec": (50, 500), "color": "amber"},
    "encoding_preset": {"type": "select", "options": list(ENCODING_PRESETS), "label": "Encoding preset",
                        "desc": "Resolution and adaptive bitrate ladder for every channel",
                        "default": "1080p-tri-ladder", "color": "green"},
    "live_dvr_enabled": {"type": "bool", "label": "Live DVR / archive",
                         "desc": "Record the stream as it airs so viewers can rewind and replay",
                         "default": True, "color": "green"},
    "recording_storage_location": {"type": "select", "options": ["same-as-vod", "local-nas", "r2"],
                                   "label": "DVR recording storage",
                                   "desc": "Where DVR recordings are kept before they become VOD",
                                   "default": "same-as-vod", "color": "red"},

    # Live -> VOD
    "vod_enabled": {"type": "bool", "label": "Live to VOD", "desc": "Keep recorded programming on demand",
                    "default": True, "color": "green"},
    "vod_provider": {"type": "select", "options": list(PROVIDER_CHOICES), "label": "VOD provider",
                     "desc": "Where archived programming is stored and delivered",
                     "default": "same-as-live", "color": "green"},
    "hours_per_day_archived": {"type": "float", "min": 0.0, "max": 24.0, "step": 0.5,
                               "label": "Hours archived per day (per channel)",
                               "desc": "Hours of each day's programming kept as VOD", "rec": (4, 24),
                               "color": "green"},
    "retention_window": {"type": "int", "min": 1, "max": 1825, "step": 1, "label": "Retention window (days)",
                         "desc": "How long archived programming stays online", "rec": (7, 90), "color": "green"},
    "peak_concurrent_vod_viewers": {"type": "int", "min": 0, "max": 100_000, "step": 10,
                                    "label": "Peak concurrent VOD viewers",
                                    "desc": "On-demand viewers at the busiest moment", "rec": (10, 200),
                                    "color": "amber"},
    "delivery_region": {"type": "select", "options": ["us", "eu", "global"], "label": "Delivery region",
                        "desc": "Where most on-demand viewers are located", "default": "us", "color": "red"},

    # Legacy VOD
    "legacy_enabled": {"type": "bool", "label": "Migrate back catalog",
                       "desc": "Host older programming alongside the live archive", "default": False,
                       "color": "amber"},
    "back_catalog_hours": {"type": "float", "min": 0.0, "max": 1_000_000.0, "step": 10.0,
                           "label": "Back-catalog hours", "desc": "Total hours of legacy programming",
                           "rec": (0, 5000), "color": "amber"},
    "legacy_provider": {"type": "select", "options": list(PROVIDER_CHOICES), "label": "Legacy provider",
                        "desc": "Where the back catalog is stored", "default": "same-as-vod", "color": "amber"},
    "pre_encoded": {"type": "bool", "label": "Already encoded",
                    "desc": "Skip the one-time re-encode when files are already streaming-ready",
                    "default": False, "color": "amber"},

    # Storage & database (RED - rarely changed)
    "data_store": {"type": "select", "options": list(DATA_STORE_FEES), "label": "Application database",
                   "desc": "Backend for schedules, users and metadata", "default": "local-sqlite",
                   "color": "red"},
    "db_backup_retention": {"type": "int", "min": 0, "max": 365, "step": 1, "label": "DB backup retention (days)",
                            "desc": "Off-site backup retention; longer tiers cost more", "rec": (7, 30),
                            "color": "red"},
    "video_storage_strategy": {"type": "select", "options": list(VIDEO_STORAGE_STRATEGY_FEES),
                               "label": "Master file storage", "desc": "Where mezzanine files are kept",
                               "default": "local-nas", "color": "red"},

    # Email
    "outbound_email": {"type": "bool", "label": "Outbound email", "desc": "Newsletters and account email",
                       "default": False, "color": "red"},
    "monthly_email_volume": {"type": "int", "min": 0, "max": 10_000_000, "step": 100,
                             "label": "Emails per month", "desc": "Messages sent per month", "rec": (0, 5000),
                             "color": "red"},

    # CDN
    "cdn_plan": {"type": "select", "options": list(WEBSITE_CDN_PLAN_FEES), "label": "Website CDN plan",
                 "desc": "Cloudflare plan for the station website", "default": "free", "color": "red"},
    "cdn_egress_rate": {"type": "float", "min": 0.0, "max": 1.0, "step": 0.005, "label": "Website CDN egress ($/GB)",
                        "desc": "Metered egress for the website CDN", "rec": (0.0, 0.1), "color": "red"},
    "video_cdn_provider": {"type": "select", "options": ["none"] + list(VIDEO_CDN_EGRESS_RATES),
                           "label": "Video CDN", "desc": "CDN in front of a self-hosted origin",
                           "default": "none", "color": "amber"},
    "video_cdn_plan": {"type": "select", "options": list(VIDEO_CDN_PLAN_FEES), "label": "Video CDN plan",
                       "desc": "Premium and enterprise tiers add a base fee", "default": "standard",
                       "color": "amber"},
    "video_cdn_egress_rate": {"type": "float", "min": 0.0, "max": 1.0, "step": 0.005,
                              "label": "Video CDN egress ($/GB)",
                              "desc": "Leave at 0 to use the provider's list price", "rec": (0.005, 0.085),
                              "color": "amber"},

    # Hardware & hosting
    "server_type": {"type": "select", "options": ["mac-mini", "mac-studio", "rack-server-1u", "rack-server-2u"],
                    "label": "Server type", "desc": "Hardware running the self-hosted origin",
                    "default": "mac-mini", "color": "green"},
    "server_count": {"type": "int", "min": 1, "max": 100, "step": 1, "label": "Servers",
                     "desc": "Number of origin servers", "rec": (1, 3), "color": "green"},
    "hardware_mode": {"type": "select", "options": ["own", "rent"], "label": "Own or rent",
                      "desc": "Buy and amortize hardware, or rent it monthly", "default": "own", "color": "green"},
    "hardware_available": {"type": "bool", "label": "Hardware already owned",
                           "desc": "Skip purchase amortization for hardware on hand", "default": False,
                           "color": "green"},
    "server_cost": {"type": "int", "min": 0, "max": 100_000, "step": 50, "label": "Server cost ($ each)",
                    "desc": "Purchase price per server", "rec": (1299, 3999), "color": "green"},
    "monthly_rental_cost": {"type": "int", "min": 0, "max": 10_000, "step": 10,
                            "label": "Rental ($/mo per server)", "desc": "Monthly rent per server",
                            "rec": (50, 400), "color": "green"},
    "amort_months": {"type": "int", "min": 1, "max": 120, "step": 1, "label": "Amortization (months)",
                     "desc": "Months over which hardware purchases are spread", "rec": (24, 48), "color": "red"},
    "wattage": {"type": "int", "min": 0, "max": 2000, "step": 5, "label": "Power draw (W per server)",
                "desc": "Average electrical draw", "rec": (20, 300), "color": "red"},
    "power_rate": {"type": "float", "min": 0.0, "max": 1.0, "step": 0.005, "label": "Electricity ($/kWh)",
                   "desc": "Local commercial power rate", "rec": (0.10, 0.20), "color": "red"},
    "internet_colo_monthly_cost": {"type": "int", "min": 0, "max": 10_000, "step": 1,
                                   "label": "Internet / colo ($/mo)", "desc": "Uplink or colocation contract",
                                   "rec": (50, 500), "color": "amber"},
    "network_interface": {"type": "select", "options": ["1gbe", "10gbe"], "label": "Network interface",
                          "desc": "Origin NIC speed; caps concurrent viewers", "default": "1gbe", "color": "amber"},
    "bandwidth_capacity": {"type": "int", "min": 0, "max": 100_000, "step": 100,
                           "label": "Uplink bandwidth (Mbps)", "desc": "Contracted upstream bandwidth",
                           "rec": (1000, 10_000), "color": "amber"},
    "transcoding_engine": {"type": "select", "options": ["hardware", "software"], "label": "Transcoding engine",
                           "desc": "Hardware media engines favour Apple silicon", "default": "hardware",
                           "color": "amber"},
    "cloud_provider": {"type": "select", "options": ["mux", "cloudflare"], "label": "Cloud partner (hybrid)",
                       "desc": "Managed platform used for hybrid overflow", "default": "cloudflare",
                       "color": "amber"},
    "origin_egress_cost": {"type": "float", "min": 0.0, "max": 1.0, "step": 0.005,
                           "label": "Origin egress ($/GB, hybrid)", "desc": "Egress from origin to the cloud partner",
                           "rec": (0.0, 0.09), "color": "amber"},
    "hybrid_redundancy_mode": {"type": "select", "options": ["active-passive", "active-active"],
                               "label": "Redundancy mode", "desc": "How traffic is split in hybrid mode",
                               "default": "active-passive", "color": "red"},
    "rack_hosting_location": {"type": "select", "options": ["in-station", "colo"], "label": "Rack location",
                              "desc": "In the station or in a colocation facility", "default": "in-station",
                              "color": "red"},
    "rack_cost": {"type": "int", "min": 0, "max": 10_000, "step": 5, "label": "Colo cost ($/U per month)",
                  "desc": "Per rack unit per month", "rec": (20, 100), "color": "red"},
    "network_switch_needed": {"type": "bool", "label": "Network switch", "desc": "Adds an amortized switch",
                              "default": False, "color": "red"},
    "mac_mini_needed": {"type": "bool", "label": "Control Mac Mini",
                        "desc": "Adds an amortized Mac Mini for station control", "default": False,
                        "color": "red"},
    "cap_ex": {"type": "int", "min": 0, "max": 20_000, "step": 50, "label": "Control Mac Mini price ($)",
               "desc": "Purchase price of the control machine", "rec": (599, 1999), "color": "red"},

    # Analytics
    "viewer_analytics": {"type": "select", "options": ["none"] + list(VIEWER_ANALYTICS_FEES),
                         "label": "Viewer analytics", "desc": "Included free with its native platform",
                         "default": "none", "color": "amber"},
    "site_analytics": {"type": "select", "options": ["none"] + list(SITE_ANALYTICS_FEES),
                       "label": "Website analytics", "desc": "Website traffic analytics", "default": "none",
                       "color": "amber"},

    # Station-wide rates
    "global_fill_rate": {"type": "float", "min": 0.0, "max": 100.0, "step": 1.0, "label": "Default fill rate (%)",
                         "desc": "Applied to channels without their own fill rate", "rec": (25, 50),
                         "color": "amber"},
    "cdn_cost_per_gb": {"type": "float", "min": 0.0, "max": 1.0, "step": 0.005, "label": "Self-hosted egress ($/GB)",
                        "desc": "Bandwidth price for self-hosted delivery", "rec": (0.01, 0.09), "color": "amber"},
    "avg_bitrate_override": {"type": "float", "min": 0.0, "max": 50.0, "step": 0.5,
                             "label": "Average bitrate override (Mbps)",
                             "desc": "Replaces the preset bitrate in hardware sizing; 0 uses the preset",
                             "rec": (2, 8), "color": "red"},
}

# REVENUE PARAMETER SPECIFICATIONS
REVENUE_PARAM_SPECS = {
    "live_ads_enabled": {"type": "bool", "label": "Live ads", "desc": "Sell ad spots during live programming",
                         "default": True, "color": "green"},
    "average_daily_unique_viewers": {"type": "int", "min": 0, "max": 1_000_000, "step": 50,
                                     "label": "Daily unique viewers",
                                     "desc": "Used when no per-channel statistics are entered",
                                     "rec": (500, 5000), "color": "amber"},
    "average_viewing_hours_per_viewer": {"type": "float", "min": 0.0, "max": 24.0, "step": 0.25,
                                         "label": "Viewing hours per viewer", "desc": "Daily hours per unique viewer",
                                         "rec": (0.5, 3.0), "color": "amber"},
    "ad_spots_per_hour": {"type": "int", "min": 0, "max": 60, "step": 1, "label": "Ad spots per hour",
                          "desc": "Sellable spots per programming hour", "rec": (4, 20), "color": "amber"},
    "cpm_rate": {"type": "float", "min": 0.0, "max": 200.0, "step": 0.5, "label": "Live CPM ($)",
                 "desc": "Price per thousand live impressions", "rec": (3, 25), "color": "green"},
    "fill_rate": {"type": "float", "min": 0.0, "max": 100.0, "step": 1.0, "label": "Live fill rate (%)",
                  "desc": "Share of live spots actually sold", "rec": (25, 60), "color": "amber"},
    "peak_time_multiplier": {"type": "float", "min": 0.0, "max": 5.0, "step": 0.05, "label": "Peak-time multiplier",
                             "desc": "Premium for prime-time inventory", "rec": (1.0, 1.5), "color": "red"},
    "seasonal_multiplier": {"type": "float", "min": 0.0, "max": 5.0, "step": 0.05, "label": "Seasonal multiplier",
                            "desc": "Holiday and election season uplift", "rec": (0.8, 1.3), "color": "red"},
    "target_demographic_value": {"type": "float", "min": 0.0, "max": 5.0, "step": 0.05,
                                 "label": "Demographic multiplier", "desc": "Value of the audience to buyers",
                                 "rec": (0.9, 1.3), "color": "red"},
    "paid_programming_enabled": {"type": "bool", "label": "Paid programming",
                                 "desc": "Sell blocks of airtime to producers", "default": True, "color": "green"},
    "monthly_paid_blocks": {"type": "int", "min": 0, "max": 1000, "step": 1, "label": "Paid blocks per month",
                            "desc": "Blocks of airtime sold per month", "rec": (0, 20), "color": "green"},
    "rate_per_block": {"type": "int", "min": 0, "max": 100_000, "step": 25, "label": "Rate per block ($)",
                       "desc": "Price per block of airtime", "rec": (100, 1000), "color": "green"},
    "premium_sponsorship_enabled": {"type": "bool", "label": "Premium sponsorships",
                                    "desc": "Title sponsorships on top of paid blocks", "default": False,
                                    "color": "amber"},
    "premium_sponsorship_count": {"type": "int", "min": 0, "max": 100, "step": 1, "label": "Sponsorships per month",
                                  "desc": "Number of premium sponsors", "rec": (0, 4), "color": "amber"},
    "premium_sponsorship_rate": {"type": "int", "min": 0, "max": 100_000, "step": 50,
                                 "label": "Sponsorship rate ($)", "desc": "Monthly price per sponsorship",
                                 "rec": (250, 2000), "color": "amber"},
    "vod_ads_enabled": {"type": "bool", "label": "VOD ads", "desc": "Pre- and mid-roll ads on demand",
                        "default": True, "color": "green"},
    "monthly_vod_views": {"type": "int", "min": 0, "max": 10_000_000, "step": 100, "label": "Monthly VOD views",
                          "desc": "Used when no per-category statistics are entered", "rec": (1000, 20_000),
                          "color": "amber"},
    "ad_spots_per_vod_view": {"type": "float", "min": 0.0, "max": 10.0, "step": 0.5, "label": "Ad spots per view",
                              "desc": "Ads served per on-demand view", "rec": (1, 3), "color": "amber"},
    "vod_cpm_rate": {"type": "float", "min": 0.0, "max": 200.0, "step": 0.5, "label": "VOD CPM ($)",
                     "desc": "Price per thousand VOD impressions", "rec": (10, 30), "color": "green"},
    "vod_fill_rate": {"type": "float", "min": 0.0, "max": 100.0, "step": 1.0, "label": "VOD fill rate (%)",
                      "desc": "Share of VOD spots actually sold", "rec": (25, 60), "color": "amber"},
    "vod_skip_rate": {"type": "float", "min": 0.0, "max": 1.0, "step": 0.01, "label": "Skip rate",
                      "desc": "Share of ads skipped", "rec": (0.05, 0.3), "color": "red"},
    "vod_completion_rate": {"type": "float", "min": 0.0, "max": 1.0, "step": 0.01, "label": "Completion rate",
                            "desc": "Share of ads watched to the end", "rec": (0.7, 0.95), "color": "red"},
    "vod_premium_placement_rate": {"type": "float", "min": 0.0, "max": 1.0, "step": 0.01,
                                   "label": "Premium placement uplift", "desc": "Extra yield from premium slots",
                                   "rec": (0.0, 0.1), "color": "red"},
}

# PARAMETER GROUPS - one per settings section
PARAM_GROUPS = {
    "live": {
        "title": "Live Stream",
        "color": "green",
        "basic": ["stream_enabled", "channel_count", "peak_concurrent_viewers", "encoding_preset"],
        "detailed": ["live_dvr_enabled", "recording_storage_location"]
    },
    "vod": {
        "title": "Live to VOD",
        "color": "green",
        "basic": ["vod_enabled", "vod_provider", "hours_per_day_archived", "retention_window"],
        "detailed": ["peak_concurrent_vod_viewers", "delivery_region"]
    },
    "legacy": {
        "title": "Legacy VOD",
        "color": "amber",
        "basic": ["legacy_enabled", "back_catalog_hours", "legacy_provider"],
        "detailed": ["pre_encoded"]
    },
    "storage": {
        "title": "Storage & Database",
        "color": "red",
        "basic": ["data_store", "video_storage_strategy"],
        "detailed": ["db_backup_retention"]
    },
    "email": {
        "title": "Email",
        "color": "red",
        "basic": ["outbound_email", "monthly_email_volume"],
        "detailed": []
    },
    "cdn": {
        "title": "CDN",
        "color": "amber",
        "basic": ["cdn_plan", "video_cdn_provider"],
        "detailed": ["video_cdn_plan", "video_cdn_egress_rate", "cdn_egress_rate", "cdn_cost_per_gb"]
    },
    "hardware": {
        "title": "Hardware & Hosting",
        "color": "green",
        "basic": ["server_type", "server_count", "hardware_mode", "hardware_available", "server_cost",
                  "monthly_rental_cost", "internet_colo_monthly_cost"],
        "detailed": ["network_interface", "bandwidth_capacity", "transcoding_engine", "cloud_provider",
                     "origin_egress_cost", "hybrid_redundancy_mode", "amort_months", "wattage", "power_rate",
                     "rack_hosting_location", "rack_cost", "network_switch_needed", "mac_mini_needed", "cap_ex",
                     "avg_bitrate_override"]
    },
    "analytics": {
        "title": "Analytics",
        "color": "amber",
        "basic": ["viewer_analytics", "site_analytics"],
        "detailed": []
    },
    "live_ads": {
        "title": "Live Advertising",
        "color": "green",
        "basic": ["live_ads_enabled", "cpm_rate", "fill_rate", "ad_spots_per_hour"],
        "detailed": ["average_daily_unique_viewers", "average_viewing_hours_per_viewer", "peak_time_multiplier",
                     "seasonal_multiplier", "target_demographic_value", "global_fill_rate"]
    },
    "paid_programming": {
        "title": "Paid Programming",
        "color": "green",
        "basic": ["paid_programming_enabled", "monthly_paid_blocks", "rate_per_block"],
        "detailed": ["premium_sponsorship_enabled", "premium_sponsorship_count", "premium_sponsorship_rate"]
    },
    "vod_ads": {
        "title": "VOD Advertising",
        "color": "amber",
        "basic": ["vod_ads_enabled", "vod_cpm_rate", "vod_fill_rate", "ad_spots_per_vod_view"],
        "detailed": ["monthly_vod_views", "vod_skip_rate", "vod_completion_rate", "vod_premium_placement_rate"]
    },
}

# Groups whose fields live on RevenueAssumptions rather than StationConfig
REVENUE_GROUPS = ("live_ads", "paid_programming", "vod_ads")

# Settings tabs in display order
SETTINGS_TABS = [
    ("Live", ["live", "vod"]),
    ("Legacy VOD", ["legacy"]),
    ("Storage", ["storage"]),
    ("Email", ["email"]),
    ("CDN", ["cdn"]),
    ("Hardware", ["hardware"]),
    ("Analytics", ["analytics"]),
    ("Revenue", ["live_ads", "paid_programming", "vod_ads"]),
]


def spec_for(field_name: str) -> dict:
    """Look up the widget spec for a station or revenue field."""
    if field_name in PARAM_SPECS:
        return PARAM_SPECS[field_name]
    return REVENUE_PARAM_SPECS[field_name]
