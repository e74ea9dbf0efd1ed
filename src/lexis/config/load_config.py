"""
Configuration loading utilities
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .settings import Settings

logger = logging.getLogger(__name__)

# Global settings instance
_settings: Optional[Settings] = None


def load_settings(project_root: Union[str, Path] = '.') -> Settings:
    """Load and return settings for a project root"""
    global _settings

    project_root = Path(project_root)
    if _settings is None or _settings.project_root != project_root:
        try:
            _settings = Settings.load(project_root)
            logger.info(f"Configuration loaded from {project_root}")
        except Exception as e:
            logger.error(f"Failed to load configuration: {e}")
            raise

    return _settings


def get_settings() -> Settings:
    """Get current settings instance"""
    if _settings is None:
        return load_settings()
    return _settings


def reload_settings(project_root: Optional[Union[str, Path]] = None) -> Settings:
    """Reload settings from disk and environment"""
    global _settings
    root = project_root if project_root is not None else (_settings.project_root if _settings else '.')
    _settings = None
    return load_settings(root)
