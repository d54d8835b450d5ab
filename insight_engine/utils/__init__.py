"""
Utility modules for the insight engine.
Provides common functionality for logging, config file loading and cell coercion.
"""

from .logging_utils import setup_logger, get_logger
from .file_utils import load_config
from .stats_utils import (
    coerce_column,
    coerce_value,
    is_missing,
    pearson_correlation,
    population_std,
)

__all__ = [
    'setup_logger',
    'get_logger',
    'load_config',
    'coerce_column',
    'coerce_value',
    'is_missing',
    'pearson_correlation',
    'population_std',
]
