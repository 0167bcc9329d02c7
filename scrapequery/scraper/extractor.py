"""Body-text extraction: turns a :class:`RawPage` into plain text."""

from __future__ import annotations

from bs4 import BeautifulSoup

from scrapequery.scraper.models import RawPage


def extract_body_text(html: str) -> str:
    """Return the concatenated text of every node under ``<body>``.

    Tags are stripped and whitespace is kept exactly as the parser produced
    it.  ``html.parser`` does not synthesise a ``<body>``, so documents
    without one yield the text of everything outside ``<head>``.
    """
    soup = BeautifulSoup(html, "html.parser")
    if soup.body is not None:
        return soup.body.get_text()
    for head in soup.find_all("head"):
        head.decompose()
    return soup.get_text()


def extract_content(raw: RawPage) -> str:
    """Extract the body text of *raw*."""
    return extract_body_text(raw.html)
