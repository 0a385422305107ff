"""Import endpoints for previewing free-text wine journal imports."""

import logging

from fastapi import APIRouter, HTTPException, Request, status
from slowapi import Limiter
from slowapi.util import get_remote_address

from winejournal.config import settings
from winejournal.schemas.import_schemas import ImportPreviewRequest, ImportPreviewResponse
from winejournal.services.import_service import build_import_plan
from winejournal.services.journal_parser import JournalParserService

logger = logging.getLogger(__name__)

router = APIRouter()

limiter = Limiter(key_func=get_remote_address)


def _preview_rate_limit() -> str:
    return f"{settings.rate_limit_per_minute}/minute"


@router.post("/preview", response_model=ImportPreviewResponse)
@limiter.limit(_preview_rate_limit)
async def preview_import(
    request: Request,
    body: ImportPreviewRequest,
) -> ImportPreviewResponse:
    """Parse pasted text and show what an import would create.

    Nothing is stored. Tastings with neither rating nor notes are left out,
    and imported names resembling ``existing_wines`` are flagged for review.
    """
    if not body.text.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Text is required",
        )

    if len(body.text) > settings.max_text_chars:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Text exceeds maximum size of {settings.max_text_chars} characters",
        )

    mode = body.mode or settings.default_import_mode
    result = JournalParserService().parse(body.text, mode)
    plan = build_import_plan(
        result,
        existing_wines=body.existing_wines,
        threshold=settings.similarity_threshold,
    )

    return ImportPreviewResponse(
        batches=plan.batches,
        ambiguities=plan.ambiguities,
        dropped=plan.dropped,
        summary=plan.summary,
        potential_matches=plan.potential_matches,
        empty_tastings_skipped=plan.empty_tastings_skipped,
    )
