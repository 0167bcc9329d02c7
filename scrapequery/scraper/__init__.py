"""Scraper package — web fetch, body-text extraction and the scrape pipeline."""

from scrapequery.scraper.extractor import extract_body_text, extract_content
from scrapequery.scraper.fetcher import fetch_url
from scrapequery.scraper.models import RawPage
from scrapequery.scraper.pipeline import scrape_url

__all__ = ["fetch_url", "extract_content", "extract_body_text", "scrape_url", "RawPage"]
