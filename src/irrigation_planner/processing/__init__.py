"""
Input processing module for the irrigation planner.

Provides unit conversion, input normalization and hydraulic validation.
"""

from .converter import UnitConverter
from .normalizer import InputNormalizer, coerce_float
from .validator import HydraulicValidator, clamp_percent

__all__ = [
    "UnitConverter",
    "InputNormalizer",
    "coerce_float",
    "HydraulicValidator",
    "clamp_percent",
]
