"""
Utility modules for the TopUp Store API
"""
from .config_loader import AppConfig, load_app_config
from .timestamps import format_timestamp

__all__ = [
    'AppConfig',
    'load_app_config',
    'format_timestamp',
]
