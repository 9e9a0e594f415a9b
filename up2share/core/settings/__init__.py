"""
Settings module.

Persists the API key and the desktop integration flags.
"""
from .protocols import SettingsStorage
from .base import BaseSettings
from .json_settings import JSONSettings, default_config_dir
from .memory_settings import MemorySettings

__all__ = [
    'SettingsStorage',
    'BaseSettings',
    'JSONSettings',
    'MemorySettings',
    'default_config_dir',
]
