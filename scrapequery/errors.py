"""Error taxonomy shared by the store, the pipelines and the HTTP layer.

Each error carries the HTTP status it maps to: ``400`` when the caller's input
is at fault, ``500`` for everything else.  The message is safe to show to the
caller; the underlying library exception (if any) is chained as ``__cause__``
and only ever logged.
"""

from __future__ import annotations


class ScrapeQueryError(Exception):
    """Base class for every error raised by this package."""

    status_code: int = 500


# ---------------------------------------------------------------------------
# Caller-input problems (400)
# ---------------------------------------------------------------------------

class ValidationError(ScrapeQueryError):
    """A required request field is missing or empty."""

    status_code = 400


class SelectionError(ScrapeQueryError):
    """The requested (or implied) record cannot be used for a query."""

    status_code = 400


class NotFoundError(ScrapeQueryError):
    """No record is stored under the given identifier."""

    status_code = 400


class EmptyStoreError(ScrapeQueryError):
    """The record store holds no records yet."""

    status_code = 400


# ---------------------------------------------------------------------------
# Service-side failures (500)
# ---------------------------------------------------------------------------

class FetchError(ScrapeQueryError):
    """The outbound page fetch failed (network, invalid URL, non-2xx)."""


class StorageWriteError(ScrapeQueryError):
    """A record could not be written to the store."""


class CorruptRecordError(ScrapeQueryError):
    """A stored record is not valid JSON or does not match the record shape."""


class ProviderError(ScrapeQueryError):
    """The chat-completion provider call failed."""


class AnswerMissingError(ScrapeQueryError):
    """The provider answered without any message content."""


class ConfigurationError(ScrapeQueryError):
    """The configured chat provider cannot be constructed."""
