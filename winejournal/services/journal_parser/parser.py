"""Entry points for parsing journal, receipt and label text."""

import logging
from datetime import date
from enum import Enum

from winejournal.schemas.journal import ImportResult

from .assembler import JournalAssembler
from .label import parse_label_text

logger = logging.getLogger(__name__)


class ImportMode(str, Enum):
    """Shape of the text being imported."""

    STANDARD = "standard"
    RECEIPT = "receipt"
    LABEL = "label"


def parse_standard_text(text: str, today: date | None = None) -> ImportResult:
    """Parse wine-journal text into purchase batches.

    Args:
        text: Journal text with date headers, wine lines, tastings and
            ``//``-delimited seller notes.
        today: Purchase date for wines listed before any date header.

    Returns:
        The assembled batches plus counts of anything dropped.
    """
    assembler = JournalAssembler(today=today)
    for line in text.split("\n"):
        assembler.feed(line)
    return assembler.finish()


def parse_receipt_text(text: str, today: date | None = None) -> ImportResult:
    """Parse OCR'd store receipt text.

    Receipt shapes (product codes, ``N @ price`` lines, year-only lines) are
    recognised by the shared line classifier, so this is the journal parse.
    """
    return parse_standard_text(text, today=today)


class JournalParserService:
    """Service dispatching import text to the parser for its mode."""

    def __init__(self, today: date | None = None) -> None:
        self.today = today

    def parse(self, text: str, mode: ImportMode | str = ImportMode.STANDARD) -> ImportResult:
        """Parse text in the given mode.

        Raises:
            ValueError: If mode is not a known import mode.
        """
        mode = ImportMode(mode)

        if mode is ImportMode.LABEL:
            result = parse_label_text(text, today=self.today)
        elif mode is ImportMode.RECEIPT:
            result = parse_receipt_text(text, today=self.today)
        else:
            result = parse_standard_text(text, today=self.today)

        item_count = sum(len(batch.items) for batch in result.batches)
        logger.info(
            f"Parsed {mode.value} text: {len(result.batches)} batches, "
            f"{item_count} items, {result.dropped.total} dropped, "
            f"{len(result.ambiguities)} ambiguities"
        )
        return result
