"""Question answering over a single scrape record.

``answer_query`` resolves the record (explicit identifier, or the latest one),
builds the prompt, and calls the chat model once.  Record selection happens
before the model is touched, so a bad selection never costs a provider call.
"""

from __future__ import annotations

import logging
from typing import Any

from scrapequery.errors import (
    AnswerMissingError,
    EmptyStoreError,
    NotFoundError,
    ProviderError,
    SelectionError,
    ValidationError,
)
from scrapequery.query.prompt import build_messages
from scrapequery.store import RecordStore, ScrapeRecord

logger = logging.getLogger(__name__)

MISSING_FILE_MESSAGE = "Specified file does not exist"
EMPTY_STORE_MESSAGE = "No scraped data available. Please scrape a URL first."


def resolve_record(store: RecordStore, identifier: str | None = None) -> ScrapeRecord:
    """Return the record named *identifier*, or the latest one when omitted.

    Raises:
        SelectionError: If the named record does not exist or the store is
            empty.
        CorruptRecordError: If the selected record does not parse.
    """
    if identifier:
        try:
            return store.read(identifier)
        except NotFoundError as exc:
            raise SelectionError(MISSING_FILE_MESSAGE) from exc

    try:
        return store.latest()
    except EmptyStoreError as exc:
        raise SelectionError(EMPTY_STORE_MESSAGE) from exc
    except NotFoundError as exc:
        # Newest file vanished between listing and reading
        raise SelectionError(MISSING_FILE_MESSAGE) from exc


def _content_text(response: Any) -> str:
    content = getattr(response, "content", None)
    if isinstance(content, list):
        content = "".join(
            part if isinstance(part, str) else str(part.get("text", ""))
            for part in content
            if isinstance(part, (str, dict))
        )
    return content if isinstance(content, str) else ""


def answer_query(
    store: RecordStore,
    llm: Any,
    question: str | None,
    identifier: str | None = None,
) -> str:
    """Answer *question* using the selected record as context.

    Args:
        store: Record store to read from.
        llm: Chat model exposing ``invoke(messages)``, or ``None`` when
            the provider could not be configured.
        question: The user's question, sent verbatim.
        identifier: Record to use; ``None`` selects the latest record.

    Returns:
        The model's answer text.

    Raises:
        ValidationError: If *question* is empty or missing.
        SelectionError: If no usable record can be selected.
        CorruptRecordError: If the selected record does not parse.
        ProviderError: If the model call fails.
        AnswerMissingError: If the model returns no content.
    """
    if not question:
        raise ValidationError("Query is required")

    record = resolve_record(store, identifier)
    messages = build_messages(record, question)

    if llm is None:
        raise ProviderError("No chat model is configured")
    try:
        response = llm.invoke(messages)
    except Exception as exc:  # noqa: BLE001
        raise ProviderError(f"Chat completion failed: {exc}") from exc

    answer = _content_text(response)
    if not answer:
        raise AnswerMissingError("The provider returned no message content")

    logger.info("Answered query against %s", record.source_url)
    return answer
