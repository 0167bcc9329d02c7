"""Dataclass models for persisted scrape records.

These are plain Python objects.  :class:`~scrapequery.store.records.RecordStore`
serialises / deserialises to and from these types.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from scrapequery.errors import CorruptRecordError

# Python attribute -> JSON key in the stored file
_FIELD_KEYS = {
    "source_url": "url",
    "captured_at": "timestamp",
    "extracted_text": "data",
}


def utc_timestamp(now: datetime | None = None) -> str:
    """Return *now* (default: current time) as ISO-8601 UTC with a ``Z`` suffix.

    Millisecond precision, e.g. ``2024-05-01T12:00:00.123Z``.
    """
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


@dataclass(frozen=True)
class ScrapeRecord:
    """One page capture: where it came from, when, and its body text."""

    source_url: str
    captured_at: str
    extracted_text: str

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------
    def to_dict(self) -> dict[str, str]:
        return {key: getattr(self, attr) for attr, key in _FIELD_KEYS.items()}

    def to_json(self) -> str:
        """Pretty-printed JSON exactly as written to disk."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def from_dict(cls, raw: Any) -> ScrapeRecord:
        if not isinstance(raw, dict):
            raise CorruptRecordError("Record is not a JSON object")
        values: dict[str, str] = {}
        for attr, key in _FIELD_KEYS.items():
            value = raw.get(key)
            if not isinstance(value, str):
                raise CorruptRecordError(f"Record field {key!r} is missing or not a string")
            values[attr] = value
        return cls(**values)

    @classmethod
    def from_json(cls, data: str) -> ScrapeRecord:
        try:
            raw = json.loads(data)
        except json.JSONDecodeError as exc:
            raise CorruptRecordError(f"Record is not valid JSON: {exc}") from exc
        return cls.from_dict(raw)


@dataclass(frozen=True)
class RecordInfo:
    """Directory-listing entry: identifier plus its creation time (epoch seconds)."""

    identifier: str
    created_at: float
