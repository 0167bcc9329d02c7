"""Scrape pipeline: fetch a page, extract its body text, persist a record."""

from __future__ import annotations

import logging
from datetime import datetime

from scrapequery.errors import ValidationError
from scrapequery.scraper.extractor import extract_content
from scrapequery.scraper.fetcher import fetch_url
from scrapequery.store import RecordStore, ScrapeRecord
from scrapequery.store.models import utc_timestamp

logger = logging.getLogger(__name__)


def scrape_url(
    store: RecordStore,
    url: str | None,
    *,
    timeout: float | None = None,
    now: datetime | None = None,
) -> str:
    """Scrape *url* into a new record and return the record's identifier.

    Every call creates a new record, even for a URL scraped before.

    Raises:
        ValidationError: If *url* is empty or missing.
        FetchError: If the page cannot be fetched.
        StorageWriteError: If the record cannot be written.
    """
    if not url:
        raise ValidationError("URL is required")

    logger.info("Fetching %s", url)
    raw = fetch_url(url, timeout=timeout)
    text = extract_content(raw)

    record = ScrapeRecord(
        source_url=url,
        captured_at=utc_timestamp(now),
        extracted_text=text,
    )
    return store.save(record)
