"""Line classification for journal and receipt text.

``classify_line`` looks at one line plus the type of the line before it and
returns one of the ``ClassifiedLine`` variants below. Rules are tried in a
fixed priority order and a decision is never revisited.
"""

import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import ClassVar

from .constants import (
    DATE_FRAGMENT,
    DESCRIPTION_STARTERS,
    DIVIDER,
    MAX_RATING,
    MIN_RATING,
    SKIP_PATTERNS,
)
from .extractors import count_vintage_years, has_vintage_year, parse_date


class LineType(str, Enum):
    """Discriminator for classified lines."""

    DATE_HEADER = "date_header"
    WINE = "wine"
    RECEIPT_WINE = "receipt_wine"
    RECEIPT_YEAR = "receipt_year"
    RECEIPT_PRICE = "receipt_price"
    TASTING = "tasting"
    DESCRIPTION = "description"
    SKIP = "skip"


class SkipReason(str, Enum):
    """Why a line was classified as skip."""

    BLANK = "blank"
    PATTERN = "pattern"
    DIVIDER = "divider"
    MULTIPLE_VINTAGES = "multiple_vintages"
    TRUNCATED_TASTING = "truncated_tasting"
    REGULAR_PRICE = "regular_price"
    UNCLASSIFIED = "unclassified"


@dataclass(frozen=True)
class DateHeaderLine:
    raw: str
    date: date
    theme: str | None = None
    line_type: ClassVar[LineType] = LineType.DATE_HEADER


@dataclass(frozen=True)
class WineLine:
    raw: str
    line_type: ClassVar[LineType] = LineType.WINE


@dataclass(frozen=True)
class ReceiptWineLine:
    raw: str
    code: str
    rest: str
    line_type: ClassVar[LineType] = LineType.RECEIPT_WINE


@dataclass(frozen=True)
class ReceiptYearLine:
    raw: str
    year: int
    line_type: ClassVar[LineType] = LineType.RECEIPT_YEAR


@dataclass(frozen=True)
class ReceiptPriceLine:
    raw: str
    quantity: int
    price: float
    line_type: ClassVar[LineType] = LineType.RECEIPT_PRICE


@dataclass(frozen=True)
class TastingLine:
    raw: str
    date: date
    rating: float
    notes: str | None = None
    line_type: ClassVar[LineType] = LineType.TASTING


@dataclass(frozen=True)
class DescriptionLine:
    raw: str
    line_type: ClassVar[LineType] = LineType.DESCRIPTION


@dataclass(frozen=True)
class SkipLine:
    raw: str
    reason: SkipReason = SkipReason.UNCLASSIFIED
    line_type: ClassVar[LineType] = LineType.SKIP


ClassifiedLine = (
    DateHeaderLine
    | WineLine
    | ReceiptWineLine
    | ReceiptYearLine
    | ReceiptPriceLine
    | TastingLine
    | DescriptionLine
    | SkipLine
)


_DATE_HEADER = re.compile(rf"^({DATE_FRAGMENT})\s*(.*?)$")
_ORDER_THEME = re.compile(r"^Order$", re.IGNORECASE)

# "11/13/25: 8.5. big viscous tart honey"
_RATED_TASTING = re.compile(rf"^({DATE_FRAGMENT})\s*[:\s]\s*(\d+(?:\.\d+)?)[.,]?\s*(.*)$")
# "10/25/25: better than expected"
_UNRATED_TASTING = re.compile(rf"^({DATE_FRAGMENT})\s*:\s*([A-Za-z].*)$")
# "2019: 6/25, 8+"
_VINTAGE_TASTING = re.compile(
    r"^(20\d{2}):\s*(\d{1,2})/(\d{1,2}),?\s*(\d+(?:\.\d+)?)\+?[,.]?\s*(.*)$"
)

# Wrapped multi-line tasting fragments that cannot be reattached safely
_BARE_YEAR_COLON = re.compile(r"^20\d{2}:")
_BARE_YEAR_COLON_MAX_LENGTH = 20
_TRUNCATED_TASTINGS = [
    re.compile(r"^20\d{2}:\s*\d(?:\.\d)?\s+\d{1,2}/\d{1,2}", re.IGNORECASE),
    re.compile(r"^20\d{2}:\s*\d{1,2}/\d{1,2}(?:/\d{2,4})?[:\s]", re.IGNORECASE),
]

_RECEIPT_WINE = re.compile(r"^(\d{5})\s+(.+)$")
_RECEIPT_YEAR = re.compile(r"^(19[89]\d|20[0-2]\d)\s*$")
_RECEIPT_PRICE = re.compile(r"^(\d{1,4})\s*@\s*(\d+(?:\.\d{2})?)")
# OCR sometimes reads "@" as "0": "2039.99"
_OCR_RECEIPT_PRICE_SHAPE = re.compile(r"^\d+\s*[@0]\s*\d+")
_OCR_RECEIPT_PRICE = re.compile(r"(\d{1,4})\s*[@0]\s*(\d+(?:\.\d{2})?)")
_REGULAR_PRICE = re.compile(r"^REGULAR\s+\d+", re.IGNORECASE)

# All-caps text this long with no vintage is seller copy
_SHOUTED_DESCRIPTION_MIN_LENGTH = 20

_RECEIPT_CONTEXT = {LineType.RECEIPT_WINE}
_WINE_CONTEXT = {LineType.WINE, LineType.RECEIPT_WINE}


def _is_rating(value: float) -> bool:
    return MIN_RATING <= value <= MAX_RATING


def _classify_tasting(line: str, text: str) -> TastingLine | None:
    match = _RATED_TASTING.match(text)
    if match:
        tasting_date = parse_date(match.group(1))
        rating = float(match.group(2))
        if tasting_date and _is_rating(rating):
            return TastingLine(line, tasting_date, rating, match.group(3).strip() or None)

    match = _UNRATED_TASTING.match(text)
    if match:
        tasting_date = parse_date(match.group(1))
        if tasting_date:
            return TastingLine(line, tasting_date, 0, match.group(2).strip() or None)

    match = _VINTAGE_TASTING.match(text)
    if match:
        rating = float(match.group(4))
        if _is_rating(rating):
            year, month, day = (int(match.group(i)) for i in (1, 2, 3))
            try:
                tasting_date = date(year, month, day)
            except ValueError:
                return None
            return TastingLine(line, tasting_date, rating, match.group(5).strip() or None)

    return None


def classify_line(line: str, prev_type: LineType | None = None) -> ClassifiedLine:
    """Classify one line of journal or receipt text.

    Args:
        line: Raw line of text.
        prev_type: Type of the immediately preceding line, if any.

    Returns:
        The classified line variant.
    """
    text = line.strip()

    if not text:
        return SkipLine(line, SkipReason.BLANK)
    if text == DIVIDER:
        return SkipLine(line, SkipReason.DIVIDER)
    if any(pattern.search(text) for pattern in SKIP_PATTERNS):
        return SkipLine(line, SkipReason.PATTERN)

    # Two vintages on one line means two wines we cannot tell apart
    if count_vintage_years(text) >= 2:
        return SkipLine(line, SkipReason.MULTIPLE_VINTAGES)

    header = _DATE_HEADER.match(text)
    if header and ":" not in text:
        header_date = parse_date(header.group(1))
        if header_date:
            theme = header.group(2).strip()
            if not theme or _ORDER_THEME.match(theme):
                theme = None
            return DateHeaderLine(line, header_date, theme)

    tasting = _classify_tasting(line, text)
    if tasting:
        return tasting

    if _BARE_YEAR_COLON.match(text) and len(text) < _BARE_YEAR_COLON_MAX_LENGTH:
        return SkipLine(line, SkipReason.TRUNCATED_TASTING)
    if any(pattern.match(text) for pattern in _TRUNCATED_TASTINGS):
        return SkipLine(line, SkipReason.TRUNCATED_TASTING)

    receipt_wine = _RECEIPT_WINE.match(text)
    if receipt_wine:
        return ReceiptWineLine(line, receipt_wine.group(1), receipt_wine.group(2))

    if prev_type in _RECEIPT_CONTEXT:
        receipt_year = _RECEIPT_YEAR.match(text)
        if receipt_year:
            return ReceiptYearLine(line, int(receipt_year.group(1)))

    receipt_price = _RECEIPT_PRICE.match(text)
    if receipt_price:
        return ReceiptPriceLine(
            line, int(receipt_price.group(1)), float(receipt_price.group(2))
        )

    if _REGULAR_PRICE.match(text):
        return SkipLine(line, SkipReason.REGULAR_PRICE)

    if any(pattern.search(text) for pattern in DESCRIPTION_STARTERS):
        return DescriptionLine(line)

    if prev_type in _RECEIPT_CONTEXT and _OCR_RECEIPT_PRICE_SHAPE.match(text):
        price_match = _OCR_RECEIPT_PRICE.search(text)
        if price_match:
            return ReceiptPriceLine(
                line, int(price_match.group(1)), float(price_match.group(2))
            )

    if has_vintage_year(text):
        return WineLine(line)

    if text == text.upper() and len(text) > _SHOUTED_DESCRIPTION_MIN_LENGTH:
        return DescriptionLine(line)

    if prev_type in _WINE_CONTEXT:
        return DescriptionLine(line)

    return SkipLine(line, SkipReason.UNCLASSIFIED)
