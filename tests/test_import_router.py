"""Integration tests for the import preview endpoint."""

import os
from unittest.mock import patch

import pytest
from httpx import AsyncClient

from winejournal.config import reset_settings

JOURNAL_TEXT = """10/14/25 Mid-range unusual whites

Delille Chaleur White 2022 $40 (3)
11/13/25: 8.5. big viscous tart honey, tart bitter finish.
Caymus 2018, 55+ Silver Oak Cabernet 2018, 55"""


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient) -> None:
    """Test the health endpoint."""
    response = await client.get("/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert data["app_name"] == "WineJournal"
    assert "version" in data


@pytest.mark.asyncio
async def test_security_headers(client: AsyncClient) -> None:
    """Test security headers are set on responses."""
    response = await client.get("/health")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


@pytest.mark.asyncio
async def test_preview_journal(client: AsyncClient) -> None:
    """Test previewing journal text."""
    response = await client.post("/api/import/preview", json={"text": JOURNAL_TEXT})
    assert response.status_code == 200

    data = response.json()
    assert len(data["batches"]) == 1
    batch = data["batches"][0]
    assert batch["purchase_date"] == "2025-10-14"
    assert batch["theme"] == "Mid-range unusual whites"

    item = batch["items"][0]
    assert item["name"] == "Delille Chaleur White"
    assert item["vintage_year"] == 2022
    assert item["color"] == "white"
    assert item["quantity"] == 3
    assert item["tastings"][0]["rating"] == 8.5

    assert data["dropped"]["multi_vintage_lines"] == 1
    assert data["summary"] == {
        "batch_count": 1,
        "item_count": 1,
        "tasting_count": 1,
        "ambiguity_count": 0,
    }
    assert data["empty_tastings_skipped"] == 0


@pytest.mark.asyncio
async def test_preview_receipt_mode(client: AsyncClient) -> None:
    """Test receipt mode from the request body."""
    text = "2/12/23 order\n14248 PINTAS CHARACTER 2019\n2 @ 39.99"
    response = await client.post(
        "/api/import/preview", json={"text": text, "mode": "receipt"}
    )
    assert response.status_code == 200

    item = response.json()["batches"][0]["items"][0]
    assert item["name"] == "PINTAS CHARACTER"
    assert item["quantity"] == 2
    assert item["price"] == pytest.approx(39.99)


@pytest.mark.asyncio
async def test_preview_label_without_vintage(client: AsyncClient) -> None:
    """Test a label with no year is flagged for review."""
    response = await client.post(
        "/api/import/preview",
        json={"text": "Domaine Tempier\nBandol\nRouge", "mode": "label"},
    )
    assert response.status_code == 200

    data = response.json()
    assert len(data["batches"]) == 1
    assert data["ambiguities"][0]["type"] == "vintage_parse"
    assert data["summary"]["ambiguity_count"] == 1


@pytest.mark.asyncio
async def test_preview_flags_existing_wines(client: AsyncClient) -> None:
    """Test names close to existing wines come back as matches."""
    response = await client.post(
        "/api/import/preview",
        json={
            "text": "6/20\nRidge Lyton Springs 2019 $40",
            "existing_wines": [
                {"id": 7, "name": "Ridge Lytton Springs"},
                {"id": 8, "name": "Opus One"},
            ],
        },
    )
    assert response.status_code == 200

    data = response.json()
    assert len(data["potential_matches"]) == 1
    match = data["potential_matches"][0]
    assert match["existing_id"] == 7
    assert match["match_type"] == "high_similarity"
    assert data["ambiguities"][0]["type"] == "wine_match"


@pytest.mark.asyncio
async def test_preview_blank_text(client: AsyncClient) -> None:
    """Test whitespace-only text is rejected."""
    response = await client.post("/api/import/preview", json={"text": "   \n  "})
    assert response.status_code == 400
    assert response.json()["detail"] == "Text is required"


@pytest.mark.asyncio
async def test_preview_missing_text(client: AsyncClient) -> None:
    """Test the text field is required."""
    response = await client.post("/api/import/preview", json={})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_preview_unknown_mode(client: AsyncClient) -> None:
    """Test an unknown mode fails validation."""
    response = await client.post(
        "/api/import/preview", json={"text": JOURNAL_TEXT, "mode": "spreadsheet"}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_preview_text_too_large(client: AsyncClient) -> None:
    """Test text over the configured limit is rejected."""
    with patch.dict(os.environ, {"WINEJOURNAL_IMPORTS_MAX_TEXT_CHARS": "50"}):
        reset_settings()
        response = await client.post("/api/import/preview", json={"text": JOURNAL_TEXT})

    assert response.status_code == 413


@pytest.mark.asyncio
async def test_preview_default_mode_from_config(client: AsyncClient) -> None:
    """Test the configured mode is used when the request has none."""
    with patch.dict(os.environ, {"WINEJOURNAL_IMPORTS_DEFAULT_MODE": "label"}):
        reset_settings()
        response = await client.post("/api/import/preview", json={"text": JOURNAL_TEXT})

    assert response.status_code == 200
    # Label mode always yields exactly one item
    assert len(response.json()["batches"][0]["items"]) == 1
    assert response.json()["dropped"]["multi_vintage_lines"] == 0
