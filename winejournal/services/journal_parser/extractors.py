"""Extraction functions for pulling single values out of a line of text.

Each extractor is an ordered table of ``Rule`` entries evaluated by
``first_match``: the first rule whose pattern is found *and* whose converter
accepts the captured value wins. Rules never backtrack into each other.
"""

import re
import unicodedata
from collections.abc import Callable, Sequence
from datetime import date
from typing import Any, NamedTuple

from winejournal.schemas.journal import ParsedTasting, WineColor

from .constants import (
    FOUR_DIGIT_VINTAGE,
    MAX_PRICE,
    MAX_RATING,
    MIN_PRICE,
    MIN_RATING,
    NAME_NUMBER_GUARD,
    RED_PATTERN,
    ROSE_EXCLUSION_PATTERN,
    ROSE_PATTERN,
    SPARKLING_PATTERN,
    WHITE_PATTERN,
)


class Rule(NamedTuple):
    """A named pattern plus a converter that may decline its match."""

    name: str
    pattern: re.Pattern[str]
    convert: Callable[[re.Match[str]], Any]


def first_match(rules: Sequence[Rule], text: str) -> Any:
    """Return the value of the first rule that matches and converts, else None."""
    for rule in rules:
        match = rule.pattern.search(text)
        if match is None:
            continue
        value = rule.convert(match)
        if value is not None:
            return value
    return None


def matching_rule(rules: Sequence[Rule], text: str) -> str | None:
    """Return the name of the rule ``first_match`` would use for text."""
    for rule in rules:
        match = rule.pattern.search(text)
        if match is not None and rule.convert(match) is not None:
            return rule.name
    return None


# =============================================================================
# Dates
# =============================================================================


def _safe_date(year: int, month: int, day: int) -> date | None:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _full_date(match: re.Match[str]) -> date | None:
    year = int(match.group(3))
    # Two-digit years always land in the 2000s (no century pivot)
    if year < 100:
        year += 2000
    return _safe_date(year, int(match.group(1)), int(match.group(2)))


def _month_year_date(match: re.Match[str]) -> date | None:
    return _safe_date(int(match.group(2)) + 2000, int(match.group(1)), 1)


def _iso_date(match: re.Match[str]) -> date | None:
    return _safe_date(int(match.group(1)), int(match.group(2)), int(match.group(3)))


DATE_RULES = [
    Rule("month_day_year", re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{2,4})$"), _full_date),
    Rule("month_year", re.compile(r"^(\d{1,2})/(\d{2})$"), _month_year_date),
    Rule("iso", re.compile(r"^(\d{4})-(\d{2})-(\d{2})$"), _iso_date),
]


def parse_date(text: str) -> date | None:
    """Parse M/D/YY, M/D/YYYY, M/YY or YYYY-MM-DD into a date."""
    if not text:
        return None
    return first_match(DATE_RULES, text.strip())


# =============================================================================
# Vintage years
# =============================================================================


def _two_digit_vintage(value: int) -> int | None:
    if 10 <= value <= 30:
        return 2000 + value
    if 80 <= value <= 99:
        return 1900 + value
    return None


def _apostrophe_vintage(match: re.Match[str]) -> int:
    year = int(match.group(1))
    return 2000 + year if year < 50 else 1900 + year


VINTAGE_RULES = [
    Rule("four_digit", FOUR_DIGIT_VINTAGE, lambda m: int(m.group(1))),
    Rule("apostrophe", re.compile(r"'(\d{2})\b"), _apostrophe_vintage),
    Rule(
        "two_digit_after_word",
        re.compile(r"[A-Z]\s+(\d{2})(?:\s|$|,)", re.IGNORECASE),
        lambda m: _two_digit_vintage(int(m.group(1))),
    ),
    Rule(
        "glued_two_digit",
        re.compile(r"[A-Z](\d{2})$", re.IGNORECASE),
        lambda m: _two_digit_vintage(int(m.group(1))),
    ),
]

# Looser shapes the classifier accepts as "this line names a vintage"
_VINTAGE_HINTS = [
    FOUR_DIGIT_VINTAGE,
    re.compile(r"\b[A-Z]{3,}\s*'?\d{2}\b", re.IGNORECASE),
    re.compile(r"'(1[89]|[012]\d)\b"),
    re.compile(r"[A-Z]\d{2}$", re.IGNORECASE),
]


def parse_vintage_year(text: str) -> int | None:
    """Extract a vintage year from a wine line."""
    return first_match(VINTAGE_RULES, text.strip())


def has_vintage_year(text: str) -> bool:
    """Check whether a line looks like it carries a vintage."""
    stripped = text.strip()
    return any(pattern.search(stripped) for pattern in _VINTAGE_HINTS)


def count_vintage_years(text: str) -> int:
    """Count four-digit vintage years in text (repeats included)."""
    return len(FOUR_DIGIT_VINTAGE.findall(text))


# =============================================================================
# Prices and quantities
# =============================================================================


def _price(bounded: bool) -> Callable[[re.Match[str]], float | None]:
    def convert(match: re.Match[str]) -> float | None:
        value = float(match.group(1).replace(",", "."))
        if bounded and not MIN_PRICE <= value <= MAX_PRICE:
            return None
        return value

    return convert


PRICE_RULES = [
    Rule("dollar", re.compile(r"\$\s*(\d+(?:[.,]\d{2})?)"), _price(bounded=False)),
    Rule("at_unit_price", re.compile(r"@\s*(\d+(?:\.\d{2})?)"), _price(bounded=False)),
    # "2015, 25: 8.5" - price between vintage and rating
    Rule("year_comma_price_colon", re.compile(r"\d{4},\s*(\d{2,3}):"), _price(bounded=True)),
    # ", 29.99, 2015" - price between commas before the year
    Rule("comma_price_year", re.compile(r",\s*(\d+(?:\.\d{2})?),\s*\d{4}"), _price(bounded=True)),
    Rule("trailing_comma_price", re.compile(r",\s*(\d{2,3})\s*$"), _price(bounded=True)),
    # "50+" floor price
    Rule("plus_price", re.compile(r"\b(\d{2,3})\+"), _price(bounded=True)),
    Rule("paren_price", re.compile(r"\((\d{2,3})\)"), _price(bounded=True)),
    # Receipt lines may end in a tax code letter
    Rule("trailing_price", re.compile(r"\s(\d{2,3})(?:\s*$|\s+T\s*$)"), _price(bounded=True)),
]


def _positive_int(match: re.Match[str]) -> int | None:
    value = int(match.group(1))
    return value if value > 0 else None


QUANTITY_RULES = [
    Rule("paren_digit", re.compile(r"\((\d)\)"), _positive_int),
    Rule("x_count", re.compile(r"[xX](\d{1,4})"), _positive_int),
    Rule("at_count", re.compile(r"(\d{1,4})\s*@"), _positive_int),
    Rule("quantity_field", re.compile(r"Quantity:\s*(\d{1,4})", re.IGNORECASE), _positive_int),
]


def parse_price(text: str) -> float | None:
    """Extract a bottle price from a line."""
    return first_match(PRICE_RULES, text)


def parse_quantity(text: str) -> int:
    """Extract a bottle count from a line, defaulting to 1."""
    return first_match(QUANTITY_RULES, text) or 1


# =============================================================================
# Color
# =============================================================================


def strip_accents(text: str) -> str:
    """Remove combining accent marks (é -> e)."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def detect_color(text: str) -> WineColor:
    """Classify a wine name or label as red, white, rose or sparkling."""
    normalized = strip_accents(text.lower())

    if SPARKLING_PATTERN.search(normalized):
        return "sparkling"
    if ROSE_PATTERN.search(normalized) and not ROSE_EXCLUSION_PATTERN.search(normalized):
        return "rose"
    if WHITE_PATTERN.search(normalized):
        return "white"
    if RED_PATTERN.search(normalized):
        return "red"
    return "red"


# =============================================================================
# Name cleanup
# =============================================================================


class NameRewrite(NamedTuple):
    """One step of the name cleanup pipeline."""

    name: str
    pattern: re.Pattern[str]
    replacement: str
    # Skip this step when the name ends in an identity number like "BIN 389"
    guarded: bool = False


NAME_REWRITES = [
    NameRewrite("product_code", re.compile(r"^\d{5}\s+"), ""),
    # Inline tastings go first: "Wine, 2015, 25: 8.5, notes"
    NameRewrite("inline_tasting", re.compile(r":\s*\d+(?:\.\d+)?[.,]\s*.*"), ""),
    NameRewrite(
        "inline_rating_notes",
        re.compile(r",\s*\d+(?:\.\d+)?,\s*[A-Z].*", re.IGNORECASE),
        "",
    ),
    NameRewrite("four_digit_year", re.compile(r"\b(19[89]\d|20[0-2]\d|2030)\b"), ""),
    NameRewrite("apostrophe_year", re.compile(r"'(\d{2})\b"), ""),
    NameRewrite("glued_year", re.compile(r"([A-Z])(\d{2})$", re.IGNORECASE), r"\1"),
    NameRewrite("trailing_two_digit_year", re.compile(r"\s+\d{2}\s*$"), "", guarded=True),
    NameRewrite("dollar_price", re.compile(r"\$\s*\d+(?:[.,]\d{2})?"), ""),
    NameRewrite("comma_price_comma", re.compile(r",\s*\d+(?:\.\d{2})?,"), ","),
    NameRewrite("comma_price_end", re.compile(r",\s*\d+(?:\.\d{2})?\s*$"), ""),
    NameRewrite("trailing_price", re.compile(r"\s+\d{2,3}\+?\s*$"), "", guarded=True),
    NameRewrite("paren_price", re.compile(r"\(\d{2,3}\)"), ""),
    NameRewrite("paren_quantity", re.compile(r"\(\d\)"), ""),
    NameRewrite("x_quantity", re.compile(r"[xX]\d+"), ""),
    NameRewrite("at_quantity", re.compile(r"\d+\s*@\s*[\d.]+"), ""),
    NameRewrite("quantity_field", re.compile(r"Quantity:\s*\d+", re.IGNORECASE), ""),
    NameRewrite("decimal_rating", re.compile(r"\b\d\.\d\b"), ""),
    NameRewrite(
        "trailing_rating",
        re.compile(r"(?<![A-Z0-9])\s+\d(?:\.\d)?\s*[,.]?\s*$", re.IGNORECASE),
        "",
    ),
    NameRewrite("regular_paren", re.compile(r"\(Regular\s*\$?\d*\s*\)", re.IGNORECASE), ""),
    NameRewrite("regular_price", re.compile(r"Regular\s*\$?\d+", re.IGNORECASE), ""),
    NameRewrite("recommended_paren", re.compile(r"\([^)]*rec['’]?d[^)]*\)", re.IGNORECASE), ""),
    NameRewrite("sic_paren", re.compile(r"\(sic[^)]*\)", re.IGNORECASE), ""),
    NameRewrite("empty_paren", re.compile(r"\(\s*\)"), ""),
    NameRewrite("whitespace", re.compile(r"\s+"), " "),
    NameRewrite("leading_asterisks", re.compile(r"^\*+\s*"), ""),
]

# Each removal can expose new trailing garbage, hence several passes
TRAILING_GARBAGE = [
    re.compile(r",\s*,+\s*$"),
    re.compile(r"[,\s]+[?,;:.]+\s*$"),
    re.compile(r"[,\s]+$"),
]
TRAILING_GARBAGE_PASSES = 3

_LEADING_GARBAGE = re.compile(r"^[,\s]+")
_LEFTOVER_TWO_DIGITS = re.compile(r",\s+\d{2}\s*$")


def extract_wine_name(text: str) -> str:
    """Reduce a raw wine line to the wine's name.

    Strips product codes, inline tastings, vintages, prices, quantity
    markers, ratings and parenthetical commentary in a fixed order.
    """
    cleaned = text.strip()

    for step in NAME_REWRITES:
        if step.guarded and NAME_NUMBER_GUARD.search(cleaned):
            continue
        cleaned = step.pattern.sub(step.replacement, cleaned).strip()

    for _ in range(TRAILING_GARBAGE_PASSES):
        for pattern in TRAILING_GARBAGE:
            cleaned = pattern.sub("", cleaned).strip()
    cleaned = _LEADING_GARBAGE.sub("", cleaned).strip()

    return _LEFTOVER_TWO_DIGITS.sub("", cleaned).strip()


# =============================================================================
# Inline tastings
# =============================================================================

_EMBEDDED_TASTING = re.compile(r":\s*(\d+(?:\.\d+)?)[.,]\s*(.+)$")


def extract_embedded_tasting(text: str, today: date | None = None) -> ParsedTasting | None:
    """Pull a "price: rating, notes" tasting out of a wine line.

    The line carries no tasting date, so the tasting is dated ``today``.
    """
    match = _EMBEDDED_TASTING.search(text)
    if not match:
        return None

    rating = float(match.group(1))
    if not MIN_RATING <= rating <= MAX_RATING:
        return None

    return ParsedTasting(
        date=today or date.today(),
        rating=rating,
        notes=match.group(2).strip(),
    )
