"""
Configuration module for poly-lexis
"""

from .settings import (
    Settings, ProjectSettings, ProviderSettings, AutoFillSettings,
    CONFIG_FILE_NAME, API_KEY_ENV_VARS, detect_existing_translations,
)
from .load_config import load_settings, get_settings, reload_settings

__all__ = [
    'Settings', 'ProjectSettings', 'ProviderSettings', 'AutoFillSettings',
    'CONFIG_FILE_NAME', 'API_KEY_ENV_VARS', 'detect_existing_translations',
    'load_settings', 'get_settings', 'reload_settings',
]
