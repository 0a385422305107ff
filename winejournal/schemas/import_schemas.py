"""Pydantic schemas for the text import API."""

from typing import Literal

from pydantic import BaseModel, Field

from winejournal.schemas.journal import Ambiguity, DropCounts, ParsedBatch
from winejournal.services.fuzzy import ExistingWine, PotentialMatch
from winejournal.services.import_service import ImportSummary


class ImportPreviewRequest(BaseModel):
    """Text to preview, and the wines it may duplicate."""

    text: str = Field(..., description="Journal, receipt or label text")
    mode: Literal["standard", "receipt", "label"] | None = Field(
        None, description="How the text is laid out (default from config)"
    )
    existing_wines: list[ExistingWine] = Field(
        default_factory=list,
        description="Known wines to check imported names against",
    )


class ImportPreviewResponse(BaseModel):
    """What the import would commit, and what needs review."""

    batches: list[ParsedBatch]
    ambiguities: list[Ambiguity]
    dropped: DropCounts
    summary: ImportSummary
    potential_matches: list[PotentialMatch]
    empty_tastings_skipped: int
