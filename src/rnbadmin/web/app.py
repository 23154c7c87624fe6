"""FastAPI application serving reconciled building records.

Run with::

    uvicorn rnbadmin.web.app:create_app --factory --port 8080
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from rnbadmin.core.config import Settings
from rnbadmin.mapview.layers import load_tile_layers
from rnbadmin.store.json_store import JsonItemStore
from rnbadmin.web.items_router import router as items_router
from rnbadmin.web.map_router import router as map_router


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
    version: str = "0.1.0"


def create_app(
    settings: Settings | None = None,
    store: JsonItemStore | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. Defaults to Settings().
        store: Optional pre-built record store, used by tests.

    Returns:
        A configured FastAPI instance.
    """
    if settings is None:
        settings = Settings()

    logging.getLogger("rnbadmin").setLevel(settings.log_level)

    app = FastAPI(
        title="RNB reconciliation admin",
        description="Browse and correct building records matched against the RNB",
        version="0.1.0",
        debug=settings.debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "PATCH", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    if store is None:
        store = JsonItemStore(settings.store.data_path, max_items=settings.store.max_items)

    app.state.settings = settings
    app.state.item_store = store
    app.state.tile_layers = load_tile_layers(settings.map.layers_path)

    app.include_router(items_router)
    app.include_router(map_router)

    @app.get("/api/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy", service="rnbadmin")

    return app
