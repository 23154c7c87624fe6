"""Map layer definitions, styles and marker building."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from rnbadmin.catalog.models import Item
from rnbadmin.core.types import LatLng

_DEFAULT_LAYERS_PATH = Path(__file__).resolve().parents[3] / "config" / "map_layers.yml"

# Used when there is nothing to fit the view to (Paris)
DEFAULT_CENTER: LatLng = (48.8566, 2.3522)


class PathStyle(BaseModel):
    """Stroke/fill options of a vector shape."""

    fill_color: str
    color: str
    weight: float
    fill_opacity: float


DEFAULT_TILE_STYLE = PathStyle(fill_color="#CBD5E1", color="#94A3B8", weight=0.6, fill_opacity=0.18)
SELECTED_TILE_STYLE = PathStyle(fill_color="#EA580C", color="#C2410C", weight=1.6, fill_opacity=0.65)


class TileLayerDefinition(BaseModel):
    """A raster tile source offered in the layer switcher."""

    name: str
    url: str
    attribution: str = ""
    max_zoom: int = 19
    opacity: float = 1.0
    default: bool = False


class TileLayerSet(BaseModel):
    base: list[TileLayerDefinition] = Field(default_factory=list)
    overlays: list[TileLayerDefinition] = Field(default_factory=list)


class Marker(BaseModel):
    """A circle marker for one item."""

    item_id: str
    center: LatLng
    radius: int
    color: str
    fill_color: str
    fill_opacity: float = 0.75
    popup_title: str = ""
    popup_text: str = ""


def load_tile_layers(path: str | Path | None = None) -> TileLayerSet:
    """Load base and overlay tile sources from YAML. A missing file yields none."""
    layers_path = Path(path) if path else _DEFAULT_LAYERS_PATH
    if not layers_path.exists():
        return TileLayerSet()
    with open(layers_path) as fh:
        data = yaml.safe_load(fh) or {}
    return TileLayerSet(
        base=[TileLayerDefinition(**entry) for entry in data.get("base_layers", [])],
        overlays=[TileLayerDefinition(**entry) for entry in data.get("overlay_layers", [])],
    )


def build_markers(items: list[Item], selected_id: str | None) -> list[Marker]:
    """One marker per item, the active one larger and in blue."""
    markers = []
    for item in items:
        active = item.id == selected_id
        markers.append(
            Marker(
                item_id=item.id,
                center=item.coordinates,
                radius=12 if active else 8,
                color="#1D4ED8" if active else "#7C3AED",
                fill_color="#1D4ED8" if active else "#C084FC",
                popup_title=item.name,
                popup_text=item.address,
            )
        )
    return markers


def item_bounds(item: Item) -> list[LatLng]:
    """Points the view must contain for one item: its zone, else its anchor."""
    return list(item.zone) if item.zone else [item.coordinates]


def catalog_bounds(items: list[Item]) -> list[LatLng]:
    """Points the overview map must contain."""
    return [point for item in items for point in item_bounds(item)]


def initial_view(items: list[Item]) -> tuple[LatLng, int]:
    """Center and zoom of the overview map before bounds fitting kicks in."""
    bounds = catalog_bounds(items)
    if bounds:
        return bounds[0], 11
    return DEFAULT_CENTER, 6
