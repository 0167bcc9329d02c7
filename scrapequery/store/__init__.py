"""Record store package — JSON scrape records on the local filesystem."""

from scrapequery.store.models import RecordInfo, ScrapeRecord
from scrapequery.store.records import RecordStore

__all__ = ["RecordStore", "ScrapeRecord", "RecordInfo"]
