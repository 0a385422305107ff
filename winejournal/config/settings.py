"""Global settings instance for WineJournal.

This module provides a unified settings object backed by the structured
configuration from config.toml plus environment variable overrides.
"""

import logging
from pathlib import Path

from winejournal.config.loader import load_config
from winejournal.config.schema import WinejournalConfig

logger = logging.getLogger(__name__)


class Settings:
    """Unified settings object with a flat property interface.

    Internally uses the structured WinejournalConfig.
    """

    def __init__(
        self,
        config: WinejournalConfig | None = None,
        config_file: Path | None = None,
    ):
        """Initialize settings.

        Args:
            config: Optional WinejournalConfig instance. If not provided, loads from file.
            config_file: Optional explicit config file path used when loading.
        """
        self._config = config or load_config(config_file)

    @property
    def config(self) -> WinejournalConfig:
        """Get the full configuration object."""
        return self._config

    # Application
    @property
    def app_name(self) -> str:
        return self._config.app_name

    @property
    def debug(self) -> bool:
        return self._config.server.debug

    # Server
    @property
    def host(self) -> str:
        return self._config.server.host

    @property
    def port(self) -> int:
        return self._config.server.port

    @property
    def rate_limit_per_minute(self) -> int:
        return self._config.server.rate_limit_per_minute

    @property
    def cors_origins(self) -> list[str]:
        return self._config.server.cors_origins

    # Imports
    @property
    def default_import_mode(self) -> str:
        return self._config.imports.default_mode

    @property
    def max_text_chars(self) -> int:
        return self._config.imports.max_text_chars

    @property
    def similarity_threshold(self) -> float:
        return self._config.imports.similarity_threshold

    # Logging
    @property
    def log_level(self) -> str:
        return self._config.logging.level

    @property
    def log_format(self) -> str:
        return self._config.logging.format


# Global settings instance - lazily initialized
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance.

    The settings are loaded once and cached for subsequent calls.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the global settings instance.

    This is primarily useful for testing to reload configuration.
    """
    global _settings
    _settings = None


class _SettingsProxy:
    """Proxy object that lazily loads settings on first access."""

    def __getattr__(self, name: str):
        return getattr(get_settings(), name)

    def __repr__(self) -> str:
        return repr(get_settings())


settings = _SettingsProxy()


def init_settings(config_file: Path | None = None) -> Settings:
    """Load settings from an explicit config file and make them global."""
    global _settings
    _settings = Settings(config_file=config_file)
    return _settings
