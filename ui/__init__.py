# ui/__init__.py
"""User interface components module."""

from .components import (
    render_parameter_group,
    render_parameter,
    render_channel_editor,
    render_category_editor,
    render_validation_alerts,
    normalize_channel_rows,
    normalize_category_rows,
)

__all__ = [
    'render_parameter_group',
    'render_parameter',
    'render_channel_editor',
    'render_category_editor',
    'render_validation_alerts',
    'normalize_channel_rows',
    'normalize_category_rows',
]
