"""Configuration and logging setup."""

from goblinsheet.config.logging import get_logger, setup_logging
from goblinsheet.config.settings import Settings, get_settings, load_settings

__all__ = ["Settings", "get_logger", "get_settings", "load_settings", "setup_logging"]
