# config/__init__.py
"""Configuration module for the stream cost estimator."""

from .parameters import PARAM_SPECS, PARAM_GROUPS, SETTINGS_TABS
from .scenarios import (
    DEFAULT_CHANNELS,
    DEFAULT_VOD_CATEGORIES,
    GLOBAL_DEFAULTS,
    DEFAULT_REVENUE,
    SCENARIO_PRESETS,
    FIELD_FALLBACKS,
    FLAG_FALLBACKS,
    REVENUE_FALLBACKS,
)
from .settings import AppSettings, get_settings, configure_logging

__all__ = [
    'PARAM_SPECS',
    'PARAM_GROUPS',
    'SETTINGS_TABS',
    'DEFAULT_CHANNELS',
    'DEFAULT_VOD_CATEGORIES',
    'GLOBAL_DEFAULTS',
    'DEFAULT_REVENUE',
    'SCENARIO_PRESETS',
    'FIELD_FALLBACKS',
    'FLAG_FALLBACKS',
    'REVENUE_FALLBACKS',
    'AppSettings',
    'get_settings',
    'configure_logging',
]
