"""Pydantic schemas for WineJournal."""

from winejournal.schemas.journal import (
    Ambiguity,
    DropCounts,
    ImportResult,
    ParsedBatch,
    ParsedPurchaseItem,
    ParsedTasting,
)

__all__ = [
    "Ambiguity",
    "DropCounts",
    "ImportResult",
    "ParsedBatch",
    "ParsedPurchaseItem",
    "ParsedTasting",
]
