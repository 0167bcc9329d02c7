"""Plain HTTP fetcher for the scrape pipeline.

One GET per call: redirects are followed, nothing is retried and the body is
not size-capped.  The timeout comes from the caller (``None`` waits forever).
"""

from __future__ import annotations

import httpx

from scrapequery.errors import FetchError
from scrapequery.scraper.models import RawPage

_DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; ScrapeQuery-Bot/1.0)"
}


def fetch_url(url: str, timeout: float | None = None) -> RawPage:
    """Fetch *url* and return a :class:`RawPage`.

    Raises:
        FetchError: On transport failures, malformed URLs and 4xx/5xx
            responses.
    """
    try:
        with httpx.Client(
            headers=_DEFAULT_HEADERS,
            timeout=timeout,
            follow_redirects=True,
        ) as client:
            response = client.get(url)
            response.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise FetchError(f"Fetching {url!r} failed: {exc}") from exc

    return RawPage(url=url, html=response.text, status_code=response.status_code)
