"""
Core module initialization.
Exports configuration, logging utilities and the chain failure type.
"""

from restaurant_api.core.config import get_settings, setup_logging, Settings, EnvironmentMode, IdStrategy
from restaurant_api.core.errors import ChainFailure, validation_error, not_found

__all__ = [
    "get_settings",
    "setup_logging",
    "Settings",
    "EnvironmentMode",
    "IdStrategy",
    "ChainFailure",
    "validation_error",
    "not_found",
]
