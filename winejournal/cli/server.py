"""WineJournal server script.

Usage:
    winejournal-server [--host HOST] [--port PORT] [--reload]
"""

import argparse
import sys
from pathlib import Path

import uvicorn

from winejournal.config import init_settings, settings
from winejournal.logging_config import configure_logging


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Run the WineJournal API server")
    parser.add_argument(
        "--host",
        help="Host to bind to (default: from config)",
    )
    parser.add_argument(
        "--port", "-p",
        type=int,
        help="Port to bind to (default: from config)",
    )
    parser.add_argument(
        "--reload", "-r",
        action="store_true",
        help="Enable auto-reload for development",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Path to config.toml",
    )

    args = parser.parse_args(argv)

    if args.config:
        init_settings(args.config)
    configure_logging()

    host = args.host or settings.host
    port = args.port or settings.port
    print(f"Starting WineJournal server on http://{host}:{port}")

    try:
        uvicorn.run(
            "winejournal.main:app",
            host=host,
            port=port,
            reload=args.reload,
            log_level=settings.log_level.lower(),
        )
    except KeyboardInterrupt:
        print("\nServer stopped")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
