"""Import boundary between parsed text and what would be committed.

The parser keeps every tasting it recognises, including dated entries with
neither a rating nor notes. Those are never committed; this module applies
that rule and flags probable duplicate wines, without touching storage.
"""

import logging

from pydantic import BaseModel, Field

from winejournal.schemas.journal import (
    Ambiguity,
    DropCounts,
    ImportResult,
    ParsedBatch,
    ParsedTasting,
)
from winejournal.services.fuzzy import (
    DEFAULT_SIMILARITY_THRESHOLD,
    ExistingWine,
    PotentialMatch,
    find_potential_matches,
    should_auto_match,
)

logger = logging.getLogger(__name__)


class ImportSummary(BaseModel):
    """Counts shown to the user before an import is confirmed."""

    batch_count: int = 0
    item_count: int = 0
    tasting_count: int = 0
    ambiguity_count: int = 0


class ImportPlan(BaseModel):
    """What an import would commit, plus everything needing review."""

    batches: list[ParsedBatch] = Field(default_factory=list)
    ambiguities: list[Ambiguity] = Field(default_factory=list)
    potential_matches: list[PotentialMatch] = Field(default_factory=list)
    empty_tastings_skipped: int = 0
    dropped: DropCounts = Field(default_factory=DropCounts)
    summary: ImportSummary = Field(default_factory=ImportSummary)


def is_empty_tasting(tasting: ParsedTasting) -> bool:
    """A tasting with no rating and no notes records nothing."""
    return tasting.rating == 0 and not tasting.notes


def skip_empty_tastings(tastings: list[ParsedTasting]) -> list[ParsedTasting]:
    """Return the tastings worth committing."""
    return [t for t in tastings if not is_empty_tasting(t)]


def summarize(result: ImportResult) -> ImportSummary:
    """Count batches, items, tastings and ambiguities."""
    items = [item for batch in result.batches for item in batch.items]
    return ImportSummary(
        batch_count=len(result.batches),
        item_count=len(items),
        tasting_count=sum(len(item.tastings) for item in items),
        ambiguity_count=len(result.ambiguities),
    )


def build_import_plan(
    result: ImportResult,
    existing_wines: list[ExistingWine] | None = None,
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> ImportPlan:
    """Turn a parse result into a reviewable import plan.

    Args:
        result: Output of one of the parsers. It is not modified.
        existing_wines: Wines to check imported names against.
        threshold: Similarity needed to suggest a match.

    Returns:
        The plan, with empty tastings removed and a ``wine_match`` ambiguity
        for each match that needs confirmation.
    """
    batches = [batch.model_copy(deep=True) for batch in result.batches]
    ambiguities = [a.model_copy() for a in result.ambiguities]

    skipped = 0
    for batch in batches:
        for item in batch.items:
            kept = skip_empty_tastings(item.tastings)
            skipped += len(item.tastings) - len(kept)
            item.tastings = kept

    potential_matches: list[PotentialMatch] = []
    if existing_wines:
        seen: set[str] = set()
        for batch in batches:
            for item in batch.items:
                if item.name in seen:
                    continue
                seen.add(item.name)
                for match in find_potential_matches(item.name, existing_wines, threshold):
                    potential_matches.append(match)
                    if should_auto_match(match):
                        continue
                    ambiguities.append(
                        Ambiguity(
                            type="wine_match",
                            message=f"Possible duplicate of existing wine '{match.existing_name}'",
                            context=item.name,
                            suggestion=f"{match.match_type} ({match.similarity:.2f})",
                        )
                    )

    if skipped:
        logger.debug(f"Skipped {skipped} tastings with neither rating nor notes")

    return ImportPlan(
        batches=batches,
        ambiguities=ambiguities,
        potential_matches=potential_matches,
        empty_tastings_skipped=skipped,
        dropped=result.dropped.model_copy(),
        summary=summarize(ImportResult(batches=batches, ambiguities=ambiguities)),
    )
