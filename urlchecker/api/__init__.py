"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from urlchecker.api import app

    uvicorn urlchecker.api:app --reload
"""

from urlchecker.api.app import app, create_app

__all__ = ["app", "create_app"]
