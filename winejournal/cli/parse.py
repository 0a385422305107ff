"""Parse a wine journal, receipt or label text file.

Usage:
    winejournal-parse FILE [--mode standard|receipt|label] [--json]
    winejournal-parse - < notes.txt
"""

import argparse
import logging
import sys
from pathlib import Path

from winejournal.config import init_settings, settings
from winejournal.logging_config import configure_logging
from winejournal.schemas.journal import ImportResult
from winejournal.services.journal_parser import ImportMode, JournalParserService

logger = logging.getLogger(__name__)


def read_input(source: str) -> str:
    """Read text from a file path, or stdin for "-"."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def format_result(result: ImportResult) -> str:
    """Render a parse result as a human-readable summary."""
    lines: list[str] = []

    for batch in result.batches:
        header = batch.purchase_date.isoformat()
        if batch.theme:
            header += f"  {batch.theme}"
        lines.append(header)

        for item in batch.items:
            price = f"${item.price:.2f}" if item.price is not None else "no price"
            lines.append(
                f"  - {item.name} ({item.vintage_year}, {item.color}) "
                f"{price} x{item.quantity}"
            )
            if item.seller_notes:
                lines.append(f"      notes: {item.seller_notes}")
            for tasting in item.tastings:
                rating = f"{tasting.rating:g}" if tasting.rating else "-"
                text = f"      {tasting.date.isoformat()}: {rating}"
                if tasting.notes:
                    text += f"  {tasting.notes}"
                lines.append(text)

    item_count = sum(len(batch.items) for batch in result.batches)
    lines.append("")
    lines.append(f"{len(result.batches)} batches, {item_count} items")

    if result.dropped.total:
        dropped = ", ".join(
            f"{name.replace('_', ' ')}: {count}"
            for name, count in result.dropped.model_dump().items()
            if count
        )
        lines.append(f"Dropped: {dropped}")

    for ambiguity in result.ambiguities:
        lines.append(f"Ambiguity ({ambiguity.type}): {ambiguity.message}")

    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Parse wine journal, receipt or label text",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s journal.txt                  Summarize a journal file
  %(prog)s receipt.txt --mode receipt   Parse OCR'd receipt text
  %(prog)s - --json < label.txt         Read stdin, print JSON
        """,
    )
    parser.add_argument("file", help="Text file to parse, or - for stdin")
    parser.add_argument(
        "--mode", "-m",
        choices=[mode.value for mode in ImportMode],
        help="Text layout (default: from config)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full result as JSON",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Path to config.toml",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: from config)",
    )

    args = parser.parse_args(argv)

    if args.config:
        init_settings(args.config)
    configure_logging(args.log_level)

    try:
        text = read_input(args.file)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read {args.file}: {e}", file=sys.stderr)
        return 1

    mode = args.mode or settings.default_import_mode
    result = JournalParserService().parse(text, mode)

    if args.json:
        print(result.model_dump_json(indent=2))
    else:
        print(format_result(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
