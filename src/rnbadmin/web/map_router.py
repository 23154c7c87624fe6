"""FastAPI router exposing map configuration to the front end."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request

from rnbadmin.mapview.layers import DEFAULT_TILE_STYLE, SELECTED_TILE_STYLE
from rnbadmin.registry.client import tiles_url_template

router = APIRouter()


@router.get("/api/map/config")
async def get_map_config(request: Request) -> dict[str, Any]:
    """Tile sources, registry endpoints and shape styles."""
    layers = getattr(request.app.state, "tile_layers", None)
    settings = getattr(request.app.state, "settings", None)
    if layers is None or settings is None:
        raise HTTPException(status_code=503, detail="Map configuration not available")

    registry = settings.registry
    return {
        "base_layers": [layer.model_dump() for layer in layers.base],
        "overlay_layers": [layer.model_dump() for layer in layers.overlays],
        "registry": {
            "base_url": registry.base_url,
            "tiles_url": tiles_url_template(registry.base_url),
            "search_radius": registry.search_radius,
            "click_debounce_ms": registry.click_debounce_ms,
        },
        "styles": {
            "default": DEFAULT_TILE_STYLE.model_dump(),
            "selected": SELECTED_TILE_STYLE.model_dump(),
        },
        "fit_padding": settings.map.fit_padding,
    }
