"""Query package — record selection, prompt building and the chat model call."""

from scrapequery.query.llm import get_chat_model
from scrapequery.query.prompt import build_messages
from scrapequery.query.recall import answer_query, resolve_record

__all__ = ["answer_query", "resolve_record", "build_messages", "get_chat_model"]
