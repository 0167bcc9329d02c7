"""Scrape endpoint.

Routes
------
POST /scrape    Body: {"url": "https://..."}    → scrape_url
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from scrapequery.errors import ValidationError
from scrapequery.scraper import scrape_url

logger = logging.getLogger(__name__)

router = APIRouter()

SCRAPE_FAILED = "Failed to scrape the provided URL"


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class ScrapeRequest(BaseModel):
    # Optional so a missing URL reaches the handler and gets a 400, not a 422
    url: Optional[str] = None


class ScrapeResponse(BaseModel):
    message: str
    file: str


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/scrape", response_model=ScrapeResponse)
def scrape_endpoint(body: ScrapeRequest, request: Request) -> ScrapeResponse:
    """Fetch a URL, extract its body text and store it as a new record."""
    state = request.app.state
    try:
        identifier = scrape_url(
            state.store,
            body.url,
            timeout=state.settings.request_timeout,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except Exception as exc:  # noqa: BLE001
        logger.exception("Scrape of %r failed", body.url)
        raise HTTPException(status_code=500, detail=SCRAPE_FAILED) from exc
    return ScrapeResponse(message="Scraping completed successfully", file=identifier)
