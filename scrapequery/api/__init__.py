"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from scrapequery.api import create_app

    uvicorn --factory scrapequery.api:create_app --port 3000
"""

from scrapequery.api.app import create_app

__all__ = ["create_app"]
