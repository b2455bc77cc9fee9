"""App factory for the element API."""
from __future__ import annotations

from fastapi import FastAPI

from content_engines.common.health import router as health_router
from content_engines.element_store.routes import router as elements_router


def create_app() -> FastAPI:
    app = FastAPI(title="content-engines")
    app.include_router(health_router)
    app.include_router(elements_router)
    return app


app = create_app()
