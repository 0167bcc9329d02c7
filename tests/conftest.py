"""Shared fixtures: an isolated record store and a fake chat model."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from langchain_core.messages import AIMessage

from scrapequery.config import Settings
from scrapequery.store import RecordStore


class FakeChatModel:
    """Stands in for a LangChain chat model; records every ``invoke`` call."""

    def __init__(self, content: Any = "It says Hello.", error: Exception | None = None) -> None:
        self.content = content
        self.error = error
        self.calls: list[list[Any]] = []

    def invoke(self, messages: list[Any]) -> AIMessage:
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return AIMessage(content=self.content)


@pytest.fixture(autouse=True)
def mtime_creation_time(monkeypatch) -> None:
    """Rank records by modification time so ``os.utime`` controls ordering.

    Platforms with ``st_birthtime`` would otherwise ignore the times tests set.
    """
    monkeypatch.setattr(
        "scrapequery.store.records._created_at", lambda stat: stat.st_mtime
    )


@pytest.fixture()
def scrapes_dir(tmp_path: Path) -> Path:
    return tmp_path / "scrapes"


@pytest.fixture()
def store(scrapes_dir: Path) -> RecordStore:
    s = RecordStore(scrapes_dir)
    s.ensure_dir()
    return s


@pytest.fixture()
def settings(scrapes_dir: Path) -> Settings:
    return Settings(
        scrapes_dir=scrapes_dir,
        llm_provider="openai",
        openai_api_key=None,
        request_timeout=None,
    )


@pytest.fixture()
def fake_llm() -> FakeChatModel:
    return FakeChatModel()


@pytest.fixture()
def chat_model() -> type[FakeChatModel]:
    """The fake model class, for tests that need a custom reply or failure."""
    return FakeChatModel
