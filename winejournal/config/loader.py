"""Configuration loader for WineJournal.

Loads configuration from TOML files. Environment variables can override
any configuration value.
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from winejournal.config.schema import WinejournalConfig

logger = logging.getLogger(__name__)


def get_config_search_paths() -> list[Path]:
    """Get the list of paths to search for configuration files.

    Returns paths in priority order (first found wins):
    1. ./config.toml (project root - for development)
    2. ~/.config/winejournal/config.toml (user config)
    3. /etc/winejournal/config.toml (system config)
    """
    paths = []

    # Project root (current working directory)
    paths.append(Path.cwd() / "config.toml")

    # User config directory
    paths.append(Path.home() / ".config" / "winejournal" / "config.toml")

    # System config (Linux FHS)
    paths.append(Path("/etc/winejournal/config.toml"))

    return paths


def find_config_file() -> Path | None:
    """Find the first existing config file from search paths."""
    for path in get_config_search_paths():
        if path.exists() and path.is_file():
            logger.debug(f"Found config file: {path}")
            return path
    return None


def load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file and return its contents as a dictionary."""
    with open(path, "rb") as f:
        return tomllib.load(f)


def apply_env_overrides(config_dict: dict[str, Any], prefix: str = "WINEJOURNAL") -> None:
    """Apply environment variable overrides to configuration dictionary.

    Environment variables are mapped as follows:
    - WINEJOURNAL_SERVER_HOST -> config_dict["server"]["host"]
    - WINEJOURNAL_IMPORTS_MAX_TEXT_CHARS -> config_dict["imports"]["max_text_chars"]
    - etc.

    Note: This modifies config_dict in place.
    """
    env_mappings = {
        # Server
        f"{prefix}_SERVER_HOST": ("server", "host"),
        f"{prefix}_SERVER_PORT": ("server", "port"),
        f"{prefix}_SERVER_DEBUG": ("server", "debug"),
        f"{prefix}_SERVER_RATE_LIMIT_PER_MINUTE": ("server", "rate_limit_per_minute"),
        f"{prefix}_DEBUG": ("server", "debug"),  # Shorthand
        f"{prefix}_HOST": ("server", "host"),  # Shorthand
        f"{prefix}_PORT": ("server", "port"),  # Shorthand
        # Imports
        f"{prefix}_IMPORTS_DEFAULT_MODE": ("imports", "default_mode"),
        f"{prefix}_IMPORTS_MAX_TEXT_CHARS": ("imports", "max_text_chars"),
        f"{prefix}_IMPORTS_SIMILARITY_THRESHOLD": ("imports", "similarity_threshold"),
        # Logging
        f"{prefix}_LOGGING_LEVEL": ("logging", "level"),
        f"{prefix}_LOG_LEVEL": ("logging", "level"),  # Shorthand
    }

    for env_var, path in env_mappings.items():
        value = os.environ.get(env_var)
        if value is not None:
            section, key = path

            # Ensure section exists
            if section not in config_dict:
                config_dict[section] = {}

            # Convert value to appropriate type
            if key in ("port", "rate_limit_per_minute", "max_text_chars"):
                config_dict[section][key] = int(value)
            elif key == "similarity_threshold":
                config_dict[section][key] = float(value)
            elif key == "debug":
                config_dict[section][key] = value.lower() in ("true", "1", "yes")
            elif key == "level":
                config_dict[section][key] = value.upper()
            else:
                config_dict[section][key] = value


def load_config(config_file: Path | None = None) -> WinejournalConfig:
    """Load configuration from TOML file with environment variable overrides.

    Args:
        config_file: Optional path to config file. If not provided,
                     searches default locations.

    Returns:
        WinejournalConfig instance with all settings loaded.
    """
    config_dict: dict[str, Any] = {}

    # Find and load config file
    if config_file is None:
        config_file = find_config_file()

    if config_file and config_file.exists():
        logger.info(f"Loading config from: {config_file}")
        config_dict = load_toml_file(config_file)
    else:
        logger.info("No config file found, using defaults with env overrides")

    # Apply environment variable overrides
    apply_env_overrides(config_dict)

    return WinejournalConfig(**config_dict)
