"""Wine name similarity for flagging probable duplicates before import.

OCR and hand-typed journals spell the same wine in slightly different ways
("Ch. Margaux" vs "Château Margaux"). Names are normalized first, then
compared by edit distance and containment. Only exact normalized matches
are safe to merge without asking.
"""

import re
import unicodedata
from typing import Literal

from pydantic import BaseModel
from rapidfuzz.distance import Levenshtein

MatchType = Literal["exact_normalized", "high_similarity", "contains"]

DEFAULT_SIMILARITY_THRESHOLD = 0.85
# Containment only counts between names this similar
CONTAINS_MIN_SIMILARITY = 0.5
CONTAINS_MIN_LENGTH_DIFFERENCE = 3


class ExistingWine(BaseModel):
    """A wine already known to the caller."""

    id: int
    name: str


class PotentialMatch(BaseModel):
    """An existing wine that an imported name may refer to."""

    existing_id: int
    existing_name: str
    imported_name: str
    similarity: float
    match_type: MatchType


def normalize_wine_name(name: str) -> str:
    """Normalize a wine name for comparison."""
    decomposed = unicodedata.normalize("NFD", name)
    normalized = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    normalized = normalized.lower()
    normalized = re.sub(r"[‘’`]", "'", normalized)
    normalized = re.sub(r"[“”]", '"', normalized)
    # "Ch." and "Ch" are the same abbreviation
    normalized = normalized.replace(".", "")
    normalized = re.sub(r"[–—−]", "-", normalized)
    return re.sub(r"\s+", " ", normalized).strip()


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance with unit cost insertions, deletions and substitutions."""
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """Similarity ratio between two wine names, from 0.0 to 1.0."""
    norm_a = normalize_wine_name(a)
    norm_b = normalize_wine_name(b)

    if norm_a == norm_b:
        return 1.0
    if not norm_a or not norm_b:
        return 0.0

    distance = levenshtein_distance(norm_a, norm_b)
    return 1 - distance / max(len(norm_a), len(norm_b))


def contains_match(a: str, b: str) -> bool:
    """Check whether one name contains a noticeably shorter other name.

    Catches "Château Margaux" vs "Château Margaux Grand Vin".
    """
    norm_a = normalize_wine_name(a)
    norm_b = normalize_wine_name(b)

    if abs(len(norm_a) - len(norm_b)) < CONTAINS_MIN_LENGTH_DIFFERENCE:
        return False
    return norm_a in norm_b or norm_b in norm_a


def find_potential_matches(
    imported_name: str,
    existing_wines: list[ExistingWine],
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> list[PotentialMatch]:
    """Find existing wines an imported name may duplicate.

    Args:
        imported_name: Name produced by the parser.
        existing_wines: Wines to compare against.
        threshold: Minimum similarity for a ``high_similarity`` match.

    Returns:
        Matches sorted by descending similarity.
    """
    matches: list[PotentialMatch] = []
    norm_imported = normalize_wine_name(imported_name)

    for wine in existing_wines:
        if norm_imported == normalize_wine_name(wine.name):
            match_type: MatchType | None = "exact_normalized"
            score = 1.0
        else:
            score = similarity(imported_name, wine.name)
            if score >= threshold:
                match_type = "high_similarity"
            elif score >= CONTAINS_MIN_SIMILARITY and contains_match(imported_name, wine.name):
                match_type = "contains"
            else:
                match_type = None

        if match_type:
            matches.append(
                PotentialMatch(
                    existing_id=wine.id,
                    existing_name=wine.name,
                    imported_name=imported_name,
                    similarity=score,
                    match_type=match_type,
                )
            )

    matches.sort(key=lambda m: m.similarity, reverse=True)
    return matches


def should_auto_match(match: PotentialMatch) -> bool:
    """Only exact normalized matches are merged without confirmation."""
    return match.match_type == "exact_normalized"
