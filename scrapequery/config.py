"""Centralised settings for the scrape & query service.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _optional_float(name: str) -> float | None:
    raw = os.environ.get(name, "").strip()
    return float(raw) if raw else None


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Record store
    # ------------------------------------------------------------------
    scrapes_dir: Path = field(
        default_factory=lambda: Path(
            os.environ.get("SCRAPES_DIR", Path.cwd() / "scrapes")
        )
    )

    # ------------------------------------------------------------------
    # Chat model
    # ------------------------------------------------------------------
    llm_provider: str = field(
        default_factory=lambda: os.environ.get("LLM_PROVIDER", "openai")
    )
    openai_api_key: str | None = field(
        default_factory=lambda: os.environ.get("OPENAI_API_KEY") or None
    )
    openai_chat_model: str = field(
        default_factory=lambda: os.environ.get("OPENAI_CHAT_MODEL", "gpt-4")
    )
    ollama_base_url: str = field(
        default_factory=lambda: os.environ.get("OLLAMA_BASE_URL", "http://localhost:11434")
    )
    ollama_chat_model: str = field(
        default_factory=lambda: os.environ.get("OLLAMA_CHAT_MODEL", "llama3.2")
    )

    # ------------------------------------------------------------------
    # Scraper
    # ------------------------------------------------------------------
    # ``None`` means the outbound fetch waits indefinitely.
    request_timeout: float | None = field(
        default_factory=lambda: _optional_float("REQUEST_TIMEOUT")
    )

    # ------------------------------------------------------------------
    # Server / logging
    # ------------------------------------------------------------------
    host: str = field(default_factory=lambda: os.environ.get("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.environ.get("PORT", "3000")))
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO").upper()
    )


def configure_logging(level: str = "INFO") -> None:
    """Install a basic root handler; later calls are no-ops."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Module-level instance for the CLI:
#   from scrapequery.config import settings
# The HTTP app receives its own Settings through ``create_app``.
settings = Settings()
