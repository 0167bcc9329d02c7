"""Tests for record selection, prompt building and the chat model call.

The chat model is always a :class:`FakeChatModel`; no provider is contacted.
"""

from __future__ import annotations

import os

import pytest
from langchain_core.messages import HumanMessage, SystemMessage

from scrapequery.config import Settings
from scrapequery.errors import (
    AnswerMissingError,
    ConfigurationError,
    CorruptRecordError,
    ProviderError,
    SelectionError,
    ValidationError,
)
from scrapequery.query import answer_query, build_messages, get_chat_model, resolve_record
from scrapequery.query.recall import EMPTY_STORE_MESSAGE, MISSING_FILE_MESSAGE
from scrapequery.store import RecordInfo, RecordStore, ScrapeRecord

_RECORD = ScrapeRecord(
    source_url="https://example.com/",
    captured_at="2024-05-01T12:00:01.000Z",
    extracted_text="Hello",
)


def _joined(messages) -> str:
    return "".join(m.content for m in messages)


def _seed(store: RecordStore, record: ScrapeRecord = _RECORD, mtime: float = 1_000_000) -> str:
    identifier = store.save(record)
    os.utime(store.directory / identifier, (mtime, mtime))
    return identifier


# ---------------------------------------------------------------------------
# Prompt
# ---------------------------------------------------------------------------

class TestBuildMessages:
    def test_three_messages_in_order(self) -> None:
        messages = build_messages(_RECORD, "What does the page say?")

        assert [type(m) for m in messages] == [SystemMessage, HumanMessage, HumanMessage]
        assert messages[0].content == "You are a helpful assistant."
        assert messages[1].content == (
            "Here is some data from https://example.com/ at "
            "2024-05-01T12:00:01.000Z: Hello"
        )
        assert messages[2].content == "What does the page say?"

    def test_text_is_not_truncated(self) -> None:
        long_text = "word " * 50_000
        record = ScrapeRecord("https://e.com/", "t", long_text)
        assert _joined(build_messages(record, "q")).count("word") == 50_000


# ---------------------------------------------------------------------------
# Record selection
# ---------------------------------------------------------------------------

class TestResolveRecord:
    def test_explicit_identifier(self, store: RecordStore) -> None:
        identifier = _seed(store)
        assert resolve_record(store, identifier) == _RECORD

    def test_unknown_identifier(self, store: RecordStore) -> None:
        _seed(store)
        with pytest.raises(SelectionError, match=MISSING_FILE_MESSAGE):
            resolve_record(store, "scrape-0.json")

    def test_latest_when_omitted(self, store: RecordStore) -> None:
        newer = ScrapeRecord("https://example.com/new", "2024-05-01T12:00:02.000Z", "New")
        _seed(store, _RECORD, mtime=1_000_000)
        _seed(store, newer, mtime=2_000_000)
        assert resolve_record(store) == newer

    def test_empty_store(self, store: RecordStore) -> None:
        with pytest.raises(SelectionError) as excinfo:
            resolve_record(store)
        assert str(excinfo.value) == EMPTY_STORE_MESSAGE

    def test_latest_removed_before_read(self, store: RecordStore, monkeypatch) -> None:
        _seed(store)
        monkeypatch.setattr(
            store, "list", lambda: [RecordInfo("scrape-gone.json", 9_000_000.0)]
        )
        with pytest.raises(SelectionError) as excinfo:
            resolve_record(store)
        assert str(excinfo.value) == MISSING_FILE_MESSAGE


# ---------------------------------------------------------------------------
# answer_query
# ---------------------------------------------------------------------------

class TestAnswerQuery:
    def test_returns_model_answer(self, store: RecordStore, fake_llm) -> None:
        _seed(store)
        answer = answer_query(store, fake_llm, "What does the page say?")

        assert answer == "It says Hello."
        assert len(fake_llm.calls) == 1
        assert fake_llm.calls[0][2].content == "What does the page say?"

    @pytest.mark.parametrize("question", [None, ""])
    def test_missing_question(self, store: RecordStore, fake_llm, question) -> None:
        _seed(store)
        with pytest.raises(ValidationError, match="Query is required"):
            answer_query(store, fake_llm, question)
        assert fake_llm.calls == []

    def test_empty_store_skips_provider(self, store: RecordStore, fake_llm) -> None:
        with pytest.raises(SelectionError):
            answer_query(store, fake_llm, "q")
        assert fake_llm.calls == []

    def test_unknown_file_skips_provider(self, store: RecordStore, fake_llm) -> None:
        _seed(store)
        with pytest.raises(SelectionError):
            answer_query(store, fake_llm, "q", identifier="scrape-404.json")
        assert fake_llm.calls == []

    def test_corrupt_record(self, store: RecordStore, fake_llm) -> None:
        (store.directory / "scrape-1.json").write_text("garbage", encoding="utf-8")
        with pytest.raises(CorruptRecordError):
            answer_query(store, fake_llm, "q", identifier="scrape-1.json")
        assert fake_llm.calls == []

    def test_provider_failure_is_wrapped(self, store: RecordStore, chat_model) -> None:
        _seed(store)
        llm = chat_model(error=RuntimeError("rate limited"))
        with pytest.raises(ProviderError) as excinfo:
            answer_query(store, llm, "q")
        assert isinstance(excinfo.value.__cause__, RuntimeError)

    def test_empty_content_is_an_error(self, store: RecordStore, chat_model) -> None:
        _seed(store)
        with pytest.raises(AnswerMissingError):
            answer_query(store, chat_model(content=""), "q")

    def test_list_content_is_joined(self, store: RecordStore, chat_model) -> None:
        _seed(store)
        llm = chat_model(content=[{"type": "text", "text": "It says "}, "Hello."])
        assert answer_query(store, llm, "q") == "It says Hello."

    def test_unconfigured_model(self, store: RecordStore) -> None:
        _seed(store)
        with pytest.raises(ProviderError):
            answer_query(store, None, "q")


# ---------------------------------------------------------------------------
# get_chat_model
# ---------------------------------------------------------------------------

class TestGetChatModel:
    def test_openai_requires_key(self, settings: Settings) -> None:
        with pytest.raises(ConfigurationError):
            get_chat_model(settings)

    def test_openai_model(self, settings: Settings) -> None:
        settings.openai_api_key = "sk-test"
        model = get_chat_model(settings)
        assert model.model_name == "gpt-4"

    def test_unknown_provider(self, settings: Settings) -> None:
        settings.llm_provider = "carrier-pigeon"
        with pytest.raises(ConfigurationError):
            get_chat_model(settings)
