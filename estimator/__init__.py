# estimator/__init__.py
"""Cost, revenue, hardware sizing and validation engines."""

from .pricing import resolve_provider, normalize_platform
from .cost_engine import Costs, calculate_costs
from .revenue_engine import RevenueCalculations, calculate_revenue, calculate_station_revenue
from .hardware import HardwareRequirements, calculate_hardware_requirements, get_hardware_options
from .validation import ValidationResult, validate_settings, get_field_validation, has_validation_errors
from .runner import Estimate, EstimateRunner, compute_estimate

__all__ = [
    'resolve_provider',
    'normalize_platform',
    'Costs',
    'calculate_costs',
    'RevenueCalculations',
    'calculate_revenue',
    'calculate_station_revenue',
    'HardwareRequirements',
    'calculate_hardware_requirements',
    'get_hardware_options',
    'ValidationResult',
    'validate_settings',
    'get_field_validation',
    'has_validation_errors',
    'Estimate',
    'EstimateRunner',
    'compute_estimate',
]
