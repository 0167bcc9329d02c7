"""FastAPI application factory.

Lifespan
--------
On startup the app builds its collaborators once and keeps them on
``app.state``:

    settings   — :class:`~scrapequery.config.Settings`
    store      — :class:`~scrapequery.store.RecordStore` (directory created here)
    llm        — LangChain chat model, or ``None`` if the provider is not
                 configured (queries then fail with a 500)

Routers
-------
    POST /scrape   — fetch a page and persist its text
    POST /query    — ask the chat model about a stored page

Every error response has the shape ``{"error": "<message>"}``.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from scrapequery.config import Settings, configure_logging
from scrapequery.errors import ConfigurationError
from scrapequery.query import get_chat_model
from scrapequery.store import RecordStore

from scrapequery.api.routers import query as query_router
from scrapequery.api.routers import scrape as scrape_router

logger = logging.getLogger(__name__)


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("Invalid request body for %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


def create_app(settings: Settings | None = None, llm: Any = None) -> FastAPI:
    """Return a fully-configured FastAPI application instance.

    Args:
        settings: Configuration to use; defaults to one read from the
            environment.
        llm: Pre-built chat model.  When omitted the lifespan builds one from
            *settings*.
    """
    settings = settings or Settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Build the record store and chat model on startup."""
        store = RecordStore(settings.scrapes_dir)
        store.ensure_dir()
        app.state.store = store

        model = llm
        if model is None:
            try:
                model = get_chat_model(settings)
            except ConfigurationError as exc:
                logger.warning("Chat model unavailable, /query will fail: %s", exc)
        app.state.llm = model

        logger.info("Storing scrapes in %s", settings.scrapes_dir)
        yield

    app = FastAPI(
        title="Scrape & Query API",
        description=(
            "Scrapes web pages into timestamped JSON records and answers "
            "questions about them with a chat-completion model."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Allow browser frontends on any origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    app.include_router(scrape_router.router, tags=["scrape"])
    app.include_router(query_router.router, tags=["query"])

    return app
