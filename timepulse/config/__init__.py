"""
Configuration module for TimePulse.
"""
from .settings import (
    TimePulseConfig,
    get_config,
    load_config,
    reload_config
)

__all__ = [
    'TimePulseConfig',
    'get_config',
    'load_config',
    'reload_config'
]
