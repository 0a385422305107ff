"""WineJournal configuration module.

This module provides TOML-based configuration with environment variable overrides.

Configuration is loaded from the following locations (in order of priority):
1. Environment variables (highest priority)
2. ./config.toml (project root - for development)
3. ~/.config/winejournal/config.toml (user config)
4. /etc/winejournal/config.toml (system config)
"""

from winejournal.config.schema import (
    ImportConfig,
    LoggingConfig,
    ServerConfig,
    WinejournalConfig,
)
from winejournal.config.settings import (
    get_settings,
    init_settings,
    reset_settings,
    settings,
)

__all__ = [
    "ImportConfig",
    "LoggingConfig",
    "ServerConfig",
    "WinejournalConfig",
    "get_settings",
    "init_settings",
    "reset_settings",
    "settings",
]
