"""Chat model construction.

The model is built once per process (app lifespan or CLI command) and handed
to :func:`~scrapequery.query.recall.answer_query` explicitly.
"""

from __future__ import annotations

from typing import Any

from scrapequery.config import Settings
from scrapequery.errors import ConfigurationError


def get_chat_model(settings: Settings) -> Any:
    """Return a LangChain chat model for ``settings.llm_provider``.

    No sampling options are passed; the provider defaults apply.

    Raises:
        ConfigurationError: For an unknown provider or a missing OpenAI key.
    """
    if settings.llm_provider == "openai":
        if not settings.openai_api_key:
            raise ConfigurationError("OPENAI_API_KEY is not set")
        from langchain_openai import ChatOpenAI

        return ChatOpenAI(model=settings.openai_chat_model, api_key=settings.openai_api_key)

    if settings.llm_provider == "ollama":
        from langchain_ollama import ChatOllama

        return ChatOllama(model=settings.ollama_chat_model, base_url=settings.ollama_base_url)

    raise ConfigurationError(f"Unknown LLM provider {settings.llm_provider!r}")
