"""Scrape & Query CLI — the service's operations without the HTTP layer.

Usage:
    python cli/main.py --help

Commands:
    scrape    fetch a URL and store its body text as a new record
    query     ask the chat model about a stored record
    records   list stored records, newest first
    serve     run the HTTP API with uvicorn
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from scrapequery.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from datetime import datetime, timezone
from typing import NoReturn, Optional

import typer

from scrapequery.config import configure_logging, settings
from scrapequery.errors import ConfigurationError, ScrapeQueryError
from scrapequery.query import answer_query, get_chat_model
from scrapequery.scraper import scrape_url
from scrapequery.store import RecordStore

app = typer.Typer(
    name="scrapequery",
    help="Scrape web pages and ask questions about them.",
    no_args_is_help=True,
)


def _store() -> RecordStore:
    store = RecordStore(settings.scrapes_dir)
    store.ensure_dir()
    return store


def _fail(exc: ScrapeQueryError) -> NoReturn:
    typer.echo(f"[error] {exc}", err=True)
    raise typer.Exit(code=1)


@app.callback()
def main() -> None:
    """Configure logging before any command runs."""
    configure_logging(settings.log_level)


@app.command("scrape")
def scrape(url: str = typer.Argument(..., help="URL to scrape.")) -> None:
    """Scrape a URL and store its text as a new record."""
    typer.echo(f"[scrape] Fetching {url!r} …")
    try:
        identifier = scrape_url(_store(), url, timeout=settings.request_timeout)
    except ScrapeQueryError as exc:
        _fail(exc)
    typer.echo(f"[scrape] Saved {identifier}")


@app.command("query")
def query(
    question: str = typer.Argument(..., help="Question about the scraped page."),
    file: Optional[str] = typer.Option(
        None, "--file", "-f", help="Record identifier (default: latest record)."
    ),
) -> None:
    """Ask the chat model a question about a stored record."""
    try:
        llm = get_chat_model(settings)
    except ConfigurationError as exc:
        # answer_query reports input and selection errors before the missing model
        typer.echo(f"[query] Chat model unavailable: {exc}", err=True)
        llm = None
    try:
        answer = answer_query(_store(), llm, question, identifier=file)
    except ScrapeQueryError as exc:
        _fail(exc)
    typer.echo(answer)


@app.command("records")
def records() -> None:
    """List stored records, newest first."""
    infos = _store().list()
    if not infos:
        typer.echo("[records] No records found.")
        return
    for info in infos:
        created = datetime.fromtimestamp(info.created_at, tz=timezone.utc)
        typer.echo(f"  {info.identifier}  {created.isoformat(timespec='seconds')}")


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default: HOST or 0.0.0.0)."),
    port: Optional[int] = typer.Option(None, help="Port (default: PORT or 3000)."),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    from scrapequery.api import create_app

    bind_host = host or settings.host
    bind_port = port or settings.port
    typer.echo(f"[serve] Server running on {bind_host}:{bind_port}")
    uvicorn.run(create_app(settings), host=bind_host, port=bind_port)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
