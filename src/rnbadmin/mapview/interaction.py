"""Map interaction: markers, the active zone, and click-to-registry toggling.

Rendering goes through a :class:`MapSurface`, the thin adapter over
whatever map widget hosts the view. The layer owns its debounce timestamp,
the registry tile layer handle and the set of highlighted shapes, and
releases all of them in :meth:`MapInteractionLayer.deactivate`.
"""

from __future__ import annotations

import logging
import time
from enum import StrEnum
from typing import Any, Awaitable, Callable, Protocol

from rnbadmin.catalog.models import Item
from rnbadmin.core.config import MapConfig, RegistryConfig
from rnbadmin.core.types import LatLng
from rnbadmin.mapview.layers import (
    DEFAULT_TILE_STYLE,
    SELECTED_TILE_STYLE,
    Marker,
    PathStyle,
    build_markers,
    catalog_bounds,
    initial_view,
    item_bounds,
)
from rnbadmin.registry.client import RegistryClient, RegistryLookupError

logger = logging.getLogger(__name__)

ClickHandler = Callable[[float, float], Awaitable[object]]
MarkerHandler = Callable[[str], object]


class MapSurface(Protocol):
    """Operations the interaction layer needs from the map widget."""

    def show_markers(self, markers: list[Marker]) -> None: ...
    def set_view(self, center: LatLng, zoom: int) -> None: ...
    def show_zone(self, points: list[LatLng], editable: bool = True) -> None: ...
    def fit_bounds(self, points: list[LatLng], padding: int) -> None: ...
    def add_vector_layer(self, url: str, style: PathStyle, feature_id_property: str) -> Any: ...
    def remove_layer(self, layer: Any) -> None: ...
    def set_feature_style(self, layer: Any, feature_id: str, style: PathStyle) -> None: ...
    def reset_feature_style(self, layer: Any, feature_id: str) -> None: ...
    def add_click_listener(self, handler: ClickHandler) -> None: ...
    def remove_click_listener(self, handler: ClickHandler) -> None: ...
    def add_marker_listener(self, handler: MarkerHandler) -> None: ...
    def remove_marker_listener(self, handler: MarkerHandler) -> None: ...


class LookupState(StrEnum):
    IDLE = "idle"
    LOOKING_UP = "looking_up"


def toggle_rnb_id(rnb_ids: list[str], rnb_id: str) -> list[str]:
    """Remove ``rnb_id`` if present, else append it. Order is preserved."""
    if rnb_id in rnb_ids:
        toggled = list(rnb_ids)
        toggled.remove(rnb_id)
        return toggled
    return [*rnb_ids, rnb_id]


class MapInteractionLayer:
    """Drives one map view for the active item.

    Clicks closer than ``click_debounce_ms`` to the last accepted click are
    dropped, including while a lookup is still in flight.
    """

    def __init__(
        self,
        surface: MapSurface,
        registry: RegistryClient,
        config: RegistryConfig,
        on_toggle: Callable[[list[str]], None] | None = None,
        clock: Callable[[], float] = time.monotonic,
        map_config: MapConfig | None = None,
        on_select: Callable[[str], object] | None = None,
    ) -> None:
        self._surface = surface
        self._registry = registry
        self._config = config
        self._map_config = map_config or MapConfig()
        self._on_toggle = on_toggle
        self._on_select = on_select
        self._clock = clock

        self._vector_layer: Any = None
        self._last_click: float | None = None
        self._highlighted: list[str] = []
        self._last_bounds: list[LatLng] | None = None

        self.active_item: Item | None = None
        self.rnb_ids: list[str] = []
        self.state = LookupState.IDLE

    @property
    def is_active(self) -> bool:
        return self._vector_layer is not None

    # -- Lifecycle --

    def activate(self) -> None:
        """Attach the registry shapes layer and start listening to clicks."""
        if self.is_active:
            return
        self._vector_layer = self._surface.add_vector_layer(
            self._registry.tiles_url, DEFAULT_TILE_STYLE, "rnb_id"
        )
        self._surface.add_click_listener(self.handle_click)
        if self._on_select is not None:
            self._surface.add_marker_listener(self.handle_marker_click)
        self.sync_highlights(self.rnb_ids)

    def deactivate(self) -> None:
        """Detach the listener and layer and forget per-view state."""
        if not self.is_active:
            return
        self._surface.remove_click_listener(self.handle_click)
        if self._on_select is not None:
            self._surface.remove_marker_listener(self.handle_marker_click)
        self._surface.remove_layer(self._vector_layer)
        self._vector_layer = None
        self._highlighted = []
        self._last_click = None
        self._last_bounds = None
        self.state = LookupState.IDLE

    # -- Rendering --

    def render_markers(self, items: list[Item], selected_id: str | None) -> list[Marker]:
        markers = build_markers(items, selected_id)
        self._surface.show_markers(markers)
        return markers

    def show_overview(self, items: list[Item]) -> None:
        """Center the map on the catalog, then fit it to every item."""
        center, zoom = initial_view(items)
        self._surface.set_view(center, zoom)
        self.fit_to(catalog_bounds(items))

    def set_active_item(self, item: Item | None) -> None:
        """Show ``item``'s zone, fit the view to it and highlight its buildings."""
        self.active_item = item
        if item is None:
            self.set_rnb_ids([])
            return
        self.render_zone(item)
        self.set_rnb_ids(item.rnb_ids)

    def render_zone(self, item: Item) -> None:
        """Show the editable zone polygon and fit the view to it."""
        self._surface.show_zone(list(item.zone), editable=True)
        self.fit_to(item_bounds(item))

    def fit_to(self, bounds: list[LatLng]) -> None:
        """Fit the viewport, skipping the call when the bounds did not change."""
        if not bounds or bounds == self._last_bounds:
            return
        self._surface.fit_bounds(bounds, padding=self._map_config.fit_padding)
        self._last_bounds = list(bounds)

    def set_rnb_ids(self, rnb_ids: list[str]) -> None:
        self.rnb_ids = list(rnb_ids)
        self.sync_highlights(self.rnb_ids)

    def sync_highlights(self, rnb_ids: list[str]) -> None:
        """Reset shapes that left the selection and highlight the current ones."""
        if self._vector_layer is None:
            return
        for previous in self._highlighted:
            if previous in rnb_ids:
                continue
            try:
                self._surface.reset_feature_style(self._vector_layer, previous)
            except Exception as exc:
                logger.warning("Could not reset style of RNB %s: %s", previous, exc)
        for rnb_id in rnb_ids:
            try:
                self._surface.set_feature_style(self._vector_layer, rnb_id, SELECTED_TILE_STYLE)
            except Exception as exc:
                logger.warning("Could not highlight RNB %s: %s", rnb_id, exc)
        self._highlighted = list(rnb_ids)

    # -- Click handling --

    def handle_marker_click(self, item_id: str) -> None:
        """Forward a marker click as a selection request."""
        if self._on_select is not None:
            self._on_select(item_id)

    def _accept_click(self) -> bool:
        now = self._clock()
        debounce = self._config.click_debounce_ms / 1000
        if self._last_click is not None and now - self._last_click < debounce:
            return False
        self._last_click = now
        return True

    async def handle_click(self, lat: float, lng: float) -> str | None:
        """Look up the building under the click and toggle it.

        Returns the toggled RNB id, or None when the click was dropped or
        the lookup produced nothing.
        """
        if self.active_item is None:
            return None
        if not self._accept_click():
            logger.debug("Dropped click at %s,%s (debounce)", lat, lng)
            return None

        self.state = LookupState.LOOKING_UP
        try:
            rnb_id = await self._registry.closest_building(lat, lng, self._config.search_radius)
        except RegistryLookupError as exc:
            logger.warning("RNB lookup at %s,%s failed: %s", lat, lng, exc)
            return None
        finally:
            self.state = LookupState.IDLE

        if not rnb_id:
            return None
        self.set_rnb_ids(toggle_rnb_id(self.rnb_ids, rnb_id))
        if self._on_toggle is not None:
            self._on_toggle(list(self.rnb_ids))
        return rnb_id
