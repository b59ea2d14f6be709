"""FastAPI application factory.

Routers
-------
    /api/check-url  probe a single URL (status, timing, SEO metadata)
    /health         liveness check
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from urlchecker import __version__
from urlchecker.api.routers import check as check_router


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="URL Checker API",
        description=(
            "Probe a URL with a bounded-time HEAD request and, for HTML pages, "
            "scrape the title, meta description and canonical link."
        ),
        version=__version__,
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(check_router.router, prefix="/api", tags=["check"])

    @app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


# Module-level instance used by uvicorn:
#   uvicorn urlchecker.api.app:app --reload
app = create_app()
