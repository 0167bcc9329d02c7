"""Prompt construction for record-grounded questions."""

from __future__ import annotations

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from scrapequery.store import ScrapeRecord

SYSTEM_PROMPT = "You are a helpful assistant."


def build_messages(record: ScrapeRecord, question: str) -> list[BaseMessage]:
    """Return the three-message prompt for *question* about *record*.

    The record text is embedded in full; nothing is truncated.
    """
    context = (
        f"Here is some data from {record.source_url} at {record.captured_at}: "
        f"{record.extracted_text}"
    )
    return [
        SystemMessage(content=SYSTEM_PROMPT),
        HumanMessage(content=context),
        HumanMessage(content=question),
    ]
