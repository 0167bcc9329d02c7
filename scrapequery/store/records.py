"""Filesystem-backed record store.

Each :class:`ScrapeRecord` lives in its own pretty-printed JSON file inside a
single directory.  File names double as record identifiers and are derived
from the capture time::

    scrapes/
        scrape-1714564800123.json
        scrape-1714564805871.json

There is no index: :meth:`RecordStore.latest` stats every file on each call.
Concurrent writers are not coordinated; a name collision (two captures within
the same millisecond) fails the second write rather than overwriting the first.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path

from scrapequery.errors import (
    CorruptRecordError,
    EmptyStoreError,
    NotFoundError,
    StorageWriteError,
)
from scrapequery.store.models import RecordInfo, ScrapeRecord

logger = logging.getLogger(__name__)

_PREFIX = "scrape-"
_SUFFIX = ".json"


def _epoch_millis(captured_at: str) -> int:
    """Milliseconds since the epoch for an ISO-8601 capture time.

    Raises:
        StorageWriteError: If *captured_at* is not an ISO-8601 timestamp.
    """
    try:
        moment = datetime.fromisoformat(captured_at.replace("Z", "+00:00"))
    except ValueError as exc:
        raise StorageWriteError(f"Invalid capture time {captured_at!r}") from exc
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.timestamp() * 1000)


def _created_at(stat: os.stat_result) -> float:
    # Linux has no birth time in os.stat; records are never rewritten, so the
    # modification time is the creation time there.
    return getattr(stat, "st_birthtime", stat.st_mtime)


class RecordStore:
    """Read / write :class:`ScrapeRecord` files under *directory*."""

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)

    def __repr__(self) -> str:
        return f"RecordStore({str(self.directory)!r})"

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def ensure_dir(self) -> None:
        """Create the storage directory if it does not exist (idempotent)."""
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path_for(self, identifier: str) -> Path:
        """Resolve *identifier* to a file inside the store.

        Raises:
            NotFoundError: If the identifier is empty or would escape the
                store directory.
        """
        if (
            not identifier
            or identifier in (".", "..")
            or "/" in identifier
            or "\\" in identifier
        ):
            raise NotFoundError(f"No record named {identifier!r}")
        return self.directory / identifier

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def save(self, record: ScrapeRecord) -> str:
        """Write *record* to a new file and return its identifier.

        Raises:
            StorageWriteError: On any filesystem failure, including an
                identifier collision, or when the capture time does
                not parse.
        """
        identifier = f"{_PREFIX}{_epoch_millis(record.captured_at)}{_SUFFIX}"
        path = self.directory / identifier
        try:
            self.ensure_dir()
            # "x" refuses to clobber an existing record
            with path.open("x", encoding="utf-8") as fh:
                fh.write(record.to_json())
        except OSError as exc:
            raise StorageWriteError(f"Could not write record {identifier!r}: {exc}") from exc
        logger.info("Saved record %s (%s)", identifier, record.source_url)
        return identifier

    def read(self, identifier: str) -> ScrapeRecord:
        """Load the record stored under *identifier*.

        Raises:
            NotFoundError: If no such record exists.
            CorruptRecordError: If the file does not parse as a record.
        """
        path = self._path_for(identifier)
        try:
            content = path.read_text(encoding="utf-8")
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as exc:
            raise NotFoundError(f"No record named {identifier!r}") from exc
        except UnicodeDecodeError as exc:
            raise CorruptRecordError(f"Record {identifier!r} is not valid UTF-8") from exc
        return ScrapeRecord.from_json(content)

    def list(self) -> list[RecordInfo]:
        """Return every stored record's identifier, newest first."""
        if not self.directory.is_dir():
            return []
        infos: list[RecordInfo] = []
        for path in self.directory.glob(f"*{_SUFFIX}"):
            try:
                stat = path.stat()
            except FileNotFoundError:
                # Removed between listing and stat
                continue
            if path.is_file():
                infos.append(RecordInfo(identifier=path.name, created_at=_created_at(stat)))
        infos.sort(key=lambda info: (info.created_at, info.identifier), reverse=True)
        return infos

    def latest(self) -> ScrapeRecord:
        """Return the most recently created record.

        Raises:
            EmptyStoreError: If the store holds no records.
            NotFoundError: If the newest file disappears before it is read.
            CorruptRecordError: If the newest file does not parse.
        """
        infos = self.list()
        if not infos:
            raise EmptyStoreError("The record store is empty")
        return self.read(infos[0].identifier)
