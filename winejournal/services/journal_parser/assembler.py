"""State machine that assembles classified lines into purchase batches."""

import logging
import re
from dataclasses import dataclass, field
from datetime import date

from winejournal.schemas.journal import (
    DropCounts,
    ImportResult,
    ParsedBatch,
    ParsedPurchaseItem,
    ParsedTasting,
    WineColor,
)

from .classifier import (
    ClassifiedLine,
    DateHeaderLine,
    DescriptionLine,
    LineType,
    ReceiptPriceLine,
    ReceiptWineLine,
    ReceiptYearLine,
    SkipLine,
    SkipReason,
    TastingLine,
    WineLine,
    classify_line,
)
from .constants import MIN_DESCRIPTION_LENGTH
from .extractors import (
    detect_color,
    extract_embedded_tasting,
    extract_wine_name,
    parse_price,
    parse_quantity,
    parse_vintage_year,
)

logger = logging.getLogger(__name__)

_TRAILING_DIVIDER = re.compile(r"\s*//\s*$")
_MIN_NAME_LENGTH = 2


@dataclass
class ItemDraft:
    """A wine item still open for updates from following lines.

    ``vintage_year`` stays None while a receipt waits for its year line.
    """

    name: str
    color: WineColor
    vintage_year: int | None
    price: float | None = None
    quantity: int = 1
    seller_notes: str | None = None
    tastings: list[ParsedTasting] = field(default_factory=list)

    def to_item(self) -> ParsedPurchaseItem:
        return ParsedPurchaseItem(
            name=self.name,
            color=self.color,
            vintage_year=self.vintage_year,
            price=self.price,
            quantity=self.quantity,
            seller_notes=self.seller_notes,
            tastings=self.tastings,
        )


class JournalAssembler:
    """Single-pass assembler for journal and receipt text.

    Feed lines in order with ``feed`` (or already classified lines with
    ``apply``) and call ``finish`` once to collect the result. One instance
    handles one parse; nothing is shared between instances.
    """

    def __init__(self, today: date | None = None) -> None:
        self.today = today or date.today()
        self.batches: list[ParsedBatch] = []
        self.dropped = DropCounts()
        self.batch: ParsedBatch | None = None
        self.item: ItemDraft | None = None
        self.descriptions: list[str] = []
        self.prev_type: LineType | None = None
        self.line_number = 0

    # -------------------------------------------------------------------------
    # Driving
    # -------------------------------------------------------------------------

    def feed(self, line: str) -> ClassifiedLine:
        """Classify a raw line against the previous one and apply it."""
        self.line_number += 1
        classified = classify_line(line, self.prev_type)
        self.apply(classified)
        return classified

    def apply(self, line: ClassifiedLine) -> None:
        """Perform the state transition for one classified line."""
        if isinstance(line, DateHeaderLine):
            self._on_date_header(line)
        elif isinstance(line, (WineLine, ReceiptWineLine)):
            self._on_wine(line)
        elif isinstance(line, ReceiptYearLine):
            if self.item and self.item.vintage_year is None:
                self.item.vintage_year = line.year
        elif isinstance(line, ReceiptPriceLine):
            if self.item:
                self.item.price = line.price
                self.item.quantity = max(line.quantity, 1)
        elif isinstance(line, TastingLine):
            self._on_tasting(line)
        elif isinstance(line, DescriptionLine):
            self._on_description(line)
        elif isinstance(line, SkipLine):
            self._on_skip(line)

        self.prev_type = line.line_type

    def finish(self) -> ImportResult:
        """Close any open item and batch and return the assembled result."""
        self._finalize_batch()
        return ImportResult(batches=self.batches, ambiguities=[], dropped=self.dropped)

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def _on_date_header(self, line: DateHeaderLine) -> None:
        self._finalize_batch()
        self.batch = ParsedBatch(purchase_date=line.date, theme=line.theme)

    def _on_wine(self, line: WineLine | ReceiptWineLine) -> None:
        self._finalize_item()

        if self.batch is None:
            # Orphaned items before any header are bought "today"
            self.batch = ParsedBatch(purchase_date=self.today)

        text = line.raw.strip()
        wine_text = line.rest if isinstance(line, ReceiptWineLine) else text

        vintage_year = parse_vintage_year(wine_text)
        # Receipts may carry the year on the following line
        if vintage_year is None and isinstance(line, WineLine):
            self.dropped.wine_lines_without_vintage += 1
            logger.debug(f"Line {self.line_number}: no vintage in wine line {text!r}")
            return

        name = extract_wine_name(wine_text)
        if len(name) < _MIN_NAME_LENGTH:
            self.dropped.wine_lines_without_name += 1
            logger.debug(f"Line {self.line_number}: no name left in wine line {text!r}")
            return

        embedded = extract_embedded_tasting(text, today=self.today)
        self.item = ItemDraft(
            name=name,
            color=detect_color(wine_text),
            vintage_year=vintage_year,
            price=parse_price(text),
            quantity=parse_quantity(text),
            tastings=[embedded] if embedded else [],
        )

    def _on_tasting(self, line: TastingLine) -> None:
        if self.item is None:
            self.dropped.orphaned_tastings += 1
            logger.debug(f"Line {self.line_number}: tasting with no open wine")
            return
        self.item.tastings.append(
            ParsedTasting(date=line.date, rating=line.rating, notes=line.notes)
        )

    def _on_description(self, line: DescriptionLine) -> None:
        if self.item is None:
            return
        text = line.raw.strip()
        if len(text) > MIN_DESCRIPTION_LENGTH and text not in self.descriptions:
            self.descriptions.append(text)

    def _on_skip(self, line: SkipLine) -> None:
        if line.reason is SkipReason.MULTIPLE_VINTAGES:
            self.dropped.multi_vintage_lines += 1
            logger.debug(f"Line {self.line_number}: skipped line with several vintages")
        elif line.reason is SkipReason.DIVIDER and self.item:
            self._flush_descriptions()

    # -------------------------------------------------------------------------
    # Finalization
    # -------------------------------------------------------------------------

    def _flush_descriptions(self) -> None:
        # Copy after a divider replaces notes flushed before it
        if self.item is None or not self.descriptions:
            return
        notes = _TRAILING_DIVIDER.sub("", " ".join(self.descriptions).strip()).strip()
        if notes:
            self.item.seller_notes = notes
        self.descriptions = []

    def _finalize_item(self) -> None:
        if self.item is None:
            return

        if self.item.vintage_year is None:
            self.dropped.items_without_vintage += 1
            logger.debug(f"Dropping {self.item.name!r}: vintage never resolved")
        else:
            self._flush_descriptions()
            if self.batch is not None:
                self.batch.items.append(self.item.to_item())

        self.item = None
        self.descriptions = []

    def _finalize_batch(self) -> None:
        self._finalize_item()
        if self.batch is not None:
            if self.batch.items:
                self.batches.append(self.batch)
            else:
                self.dropped.empty_batches += 1
        self.batch = None
