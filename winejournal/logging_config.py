"""Logging setup for the command line entry points."""

import logging

from winejournal.config import settings


def configure_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Configure root logging from settings, with optional overrides."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=fmt or settings.log_format,
        force=True,
    )
