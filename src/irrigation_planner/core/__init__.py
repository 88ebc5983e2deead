"""
Core utilities for the irrigation planner.

Provides configuration management, logging and date functionality.
"""

from . import constants
from .config import Config
from .logger import setup_logger, LoggerContext
from .date_utils import DateUtils

__all__ = [
    "Config",
    "setup_logger",
    "LoggerContext",
    "constants",
    "DateUtils",
]
