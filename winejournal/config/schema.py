"""Pydantic models for WineJournal configuration.

These models define the structure of the config.toml file.
"""

from typing import Literal

from pydantic import BaseModel, Field


class ServerConfig(BaseModel):
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    rate_limit_per_minute: int = 60
    # CORS configuration - empty list means same-origin only
    cors_origins: list[str] = []


class ImportConfig(BaseModel):
    """Text import configuration."""

    default_mode: Literal["standard", "receipt", "label"] = "standard"
    # Upper bound on pasted text accepted by the preview endpoint
    max_text_chars: int = 200_000
    # Minimum name similarity to flag a probable duplicate wine
    similarity_threshold: float = Field(0.85, ge=0.0, le=1.0)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class WinejournalConfig(BaseModel):
    """Main WineJournal configuration loaded from config.toml."""

    app_name: str = "WineJournal"
    server: ServerConfig = Field(default_factory=ServerConfig)
    imports: ImportConfig = Field(default_factory=ImportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
