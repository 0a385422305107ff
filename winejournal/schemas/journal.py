"""Pydantic schemas for parsed journal, receipt and label text."""

import datetime
from typing import Literal

from pydantic import BaseModel, Field

WineColor = Literal["red", "white", "rose", "sparkling"]

AmbiguityType = Literal[
    "wine_match", "vintage_parse", "date_parse", "color_guess", "rating_parse"
]


class ParsedTasting(BaseModel):
    """One dated impression of a wine.

    A rating of 0 means the entry carried notes only.
    """

    date: datetime.date
    rating: float = Field(0, ge=0, le=10)
    notes: str | None = None


class ParsedPurchaseItem(BaseModel):
    """One wine entry within a purchase batch."""

    name: str = Field(..., min_length=2)
    color: WineColor = "red"
    vintage_year: int
    price: float | None = None
    quantity: int = Field(1, ge=1)
    seller_notes: str | None = None
    tastings: list[ParsedTasting] = Field(default_factory=list)


class ParsedBatch(BaseModel):
    """One purchase occasion grouping wine items under a date and theme."""

    purchase_date: datetime.date
    theme: str | None = None
    items: list[ParsedPurchaseItem] = Field(default_factory=list)


class Ambiguity(BaseModel):
    """A low-confidence guess made during parsing, for human review."""

    type: AmbiguityType
    message: str
    context: str
    suggestion: str | None = None


class DropCounts(BaseModel):
    """Counts of candidates silently discarded while assembling a result."""

    wine_lines_without_vintage: int = 0
    wine_lines_without_name: int = 0
    items_without_vintage: int = 0
    empty_batches: int = 0
    orphaned_tastings: int = 0
    multi_vintage_lines: int = 0

    @property
    def total(self) -> int:
        return (
            self.wine_lines_without_vintage
            + self.wine_lines_without_name
            + self.items_without_vintage
            + self.empty_batches
            + self.orphaned_tastings
            + self.multi_vintage_lines
        )


class ImportResult(BaseModel):
    """Shared result shape of every parsing entry point."""

    batches: list[ParsedBatch] = Field(default_factory=list)
    ambiguities: list[Ambiguity] = Field(default_factory=list)
    dropped: DropCounts = Field(default_factory=DropCounts)
