"""Configuration module for DocStats."""

from .manager import ConfigManager, get_config_manager
from .models import AnalysisSettings, DisplaySettings, DocStatsConfig, LoggingSettings

__all__ = [
    "DocStatsConfig",
    "AnalysisSettings",
    "DisplaySettings",
    "LoggingSettings",
    "ConfigManager",
    "get_config_manager",
]
