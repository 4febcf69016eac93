"""
Genetic MKP - core problem model

Item/capacity model of the multidimensional knapsack problem, instance
loading, search settings and result statistics.
"""

__version__ = "0.5.2"

# Export main classes for easy importing
from .knapsack import Item, Knapsack, InstanceError
from .instance_loader import load_instance, parse_instance, InstanceFormatError
from .statistics import (
    ResultSummary,
    InternalConsistencyError,
    collect_statistics,
    format_report,
    print_report
)
from .config_loader import SearchSettings, ConfigurationError, load_config, settings_from_config

__all__ = [
    'Item',
    'Knapsack',
    'InstanceError',
    'load_instance',
    'parse_instance',
    'InstanceFormatError',
    'ResultSummary',
    'InternalConsistencyError',
    'collect_statistics',
    'format_report',
    'print_report',
    'SearchSettings',
    'ConfigurationError',
    'load_config',
    'settings_from_config'
]
