"""Single-shot parser for OCR text from a photographed bottle label."""

import logging
import re
from datetime import date

from winejournal.schemas.journal import (
    Ambiguity,
    ImportResult,
    ParsedBatch,
    ParsedPurchaseItem,
)

from .constants import (
    BARCODE_PATTERN,
    LABEL_DEFAULT_VINTAGE_AGE,
    LABEL_MAX_NAME_LENGTH,
    LABEL_MIN_LINE_LENGTH,
    LABEL_NOISE_PATTERNS,
    UNKNOWN_WINE_NAME,
    VARIETAL_PATTERN,
    WINERY_PATTERN,
)
from .extractors import detect_color, parse_vintage_year

logger = logging.getLogger(__name__)

_STANDALONE_TWO_DIGITS = re.compile(r"\b(\d{2})\b")
_NAME_YEAR = re.compile(r"\b(19|20)\d{2}\b")
_NAME_PERCENT = re.compile(r"\d+(\.\d+)?%")
_NAME_EDGES = re.compile(r"^[,.\s-]+|[,.\s-]+$")
_MAX_UNLABELLED_LINES = 3
_AMBIGUITY_CONTEXT_LENGTH = 100


def _find_label_vintage(text: str) -> int | None:
    year = parse_vintage_year(text)
    if year:
        return year

    for token in _STANDALONE_TWO_DIGITS.findall(text):
        value = int(token)
        if 10 <= value <= 30:
            return 2000 + value
        if 80 <= value <= 99:
            return 1900 + value
    return None


def _is_significant(line: str) -> bool:
    if len(line) < LABEL_MIN_LINE_LENGTH:
        return False
    if BARCODE_PATTERN.match(re.sub(r"\s", "", line)):
        return False
    return not any(pattern.search(line) for pattern in LABEL_NOISE_PATTERNS)


def _combine_name_lines(lines: list[str], fallback: str) -> str:
    if not lines:
        return fallback or UNKNOWN_WINE_NAME
    if len(lines) == 1:
        return lines[0]

    winery = next((line for line in lines if WINERY_PATTERN.search(line)), None)
    if winery is None:
        return " ".join(lines[:_MAX_UNLABELLED_LINES])

    others = [line for line in lines if line != winery]
    wine_type = next((line for line in others if VARIETAL_PATTERN.search(line)), None)
    wine_type = wine_type or (others[0] if others else None)
    if wine_type:
        return f"{winery} {wine_type}"
    return winery


def _clean_label_name(name: str) -> str:
    name = _NAME_YEAR.sub("", name)
    name = _NAME_PERCENT.sub("", name)
    name = re.sub(r"\s+", " ", name).strip()
    return _NAME_EDGES.sub("", name).strip()


def parse_label_text(text: str, today: date | None = None) -> ImportResult:
    """Parse label OCR text into exactly one batch holding one item.

    Labels have no line structure worth classifying: the vintage and color
    come from the whole text, the name from the most wine-like lines. When
    no vintage is readable the item gets a recent default and an ambiguity
    is reported for review.
    """
    today = today or date.today()
    normalized = text.replace("\r\n", "\n").replace("\r", "\n").strip()
    ambiguities: list[Ambiguity] = []

    vintage_year = _find_label_vintage(normalized)
    if vintage_year is None:
        vintage_year = today.year - LABEL_DEFAULT_VINTAGE_AGE
        ambiguities.append(
            Ambiguity(
                type="vintage_parse",
                message="Could not find vintage year, defaulting to recent",
                context=normalized[:_AMBIGUITY_CONTEXT_LENGTH],
                suggestion=f"Using {vintage_year}",
            )
        )
        logger.debug(f"No vintage on label, defaulting to {vintage_year}")

    lines = [line.strip() for line in normalized.split("\n") if line.strip()]
    significant = [line for line in lines if _is_significant(line)]

    first_line = normalized.split("\n")[0].strip()
    name = _clean_label_name(_combine_name_lines(significant, first_line))
    if len(name) < LABEL_MIN_LINE_LENGTH:
        name = " ".join(significant)[:LABEL_MAX_NAME_LENGTH].strip()
    if len(name) < 2:
        name = UNKNOWN_WINE_NAME

    item = ParsedPurchaseItem(
        name=name,
        color=detect_color(normalized),
        vintage_year=vintage_year,
        quantity=1,
    )
    batch = ParsedBatch(purchase_date=today, items=[item])
    return ImportResult(batches=[batch], ambiguities=ambiguities)
