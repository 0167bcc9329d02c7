"""Query endpoint.

Routes
------
POST /query    Body: {"query": "...", "file": "scrape-....json"}    → answer_query

``file`` is optional; without it the most recent record is used.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from scrapequery.errors import ScrapeQueryError
from scrapequery.query import answer_query

logger = logging.getLogger(__name__)

router = APIRouter()

QUERY_FAILED = "Failed to process the query with ChatGPT"


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class QueryRequest(BaseModel):
    query: Optional[str] = None
    file: Optional[str] = None


class QueryResponse(BaseModel):
    answer: Optional[str]


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/query", response_model=QueryResponse)
def query_endpoint(body: QueryRequest, request: Request) -> QueryResponse:
    """Answer a question about a stored record with the chat model."""
    state = request.app.state
    try:
        answer = answer_query(state.store, state.llm, body.query, identifier=body.file)
    except ScrapeQueryError as exc:
        if exc.status_code == 400:
            logger.warning("Rejected query: %s", exc)
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        logger.exception("Query failed")
        raise HTTPException(status_code=500, detail=QUERY_FAILED) from exc
    except Exception as exc:  # noqa: BLE001
        logger.exception("Query failed")
        raise HTTPException(status_code=500, detail=QUERY_FAILED) from exc
    return QueryResponse(answer=answer)
