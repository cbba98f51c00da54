"""
FastAPI application entry point for the emotes backend.
"""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from emotes_backend.config import get_settings
from emotes_backend.error_handlers import register_error_handlers
from emotes_backend.routes import router

STATIC_DIR = Path(__file__).resolve().parent / "static"
API_PREFIX_PLACEHOLDER = "__API_PREFIX__"


def _render_page(name: str, api_prefix: str) -> str:
    """Load a static page with its API base path filled in."""
    html = (STATIC_DIR / name).read_text(encoding="utf-8")
    return html.replace(API_PREFIX_PLACEHOLDER, api_prefix)


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="Ruby Emotes Backend", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        # Starlette will not allow credentials with a wildcard origin; the admin key is a plain header.
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    api_prefix = settings.api_prefix.rstrip("/")
    landing_html = _render_page("index.html", api_prefix)
    admin_html = _render_page("admin.html", api_prefix)

    @app.get("/", include_in_schema=False)
    def landing_page() -> HTMLResponse:
        return HTMLResponse(landing_html)

    @app.get("/admin", include_in_schema=False)
    def admin_page() -> HTMLResponse:
        return HTMLResponse(admin_html)

    app.include_router(router, prefix=api_prefix)
    return app


app = create_app()
