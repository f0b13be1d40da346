# utils/__init__.py
"""Utilities and helper functions module."""

from .helpers import (
    ensure_number,
    safe_divide,
    clamp,
    round_cents,
    round_up_to,
    format_currency,
    format_percentage,
)

__all__ = [
    'ensure_number',
    'safe_divide',
    'clamp',
    'round_cents',
    'round_up_to',
    'format_currency',
    'format_percentage',
]
