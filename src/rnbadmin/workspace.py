"""Operator workspace wiring the catalog, the editor and the map together."""

from __future__ import annotations

import logging

from rnbadmin.catalog.editing import ItemEditor
from rnbadmin.catalog.fetcher import ItemCatalogFetcher
from rnbadmin.catalog.filtering import SelectionState
from rnbadmin.catalog.models import Item
from rnbadmin.core.config import Settings
from rnbadmin.mapview.interaction import MapInteractionLayer, MapSurface
from rnbadmin.registry.client import RegistryClient

logger = logging.getLogger(__name__)


class AdminWorkspace:
    """One operator session: list, detail form and map.

    Map clicks edit the draft's RNB ids, so a toggle is a proposed
    correction until the draft is submitted.
    """

    def __init__(
        self,
        settings: Settings,
        surface: MapSurface,
        fetcher: ItemCatalogFetcher | None = None,
        registry: RegistryClient | None = None,
    ) -> None:
        self.settings = settings
        self.fetcher = fetcher or ItemCatalogFetcher(settings.api)
        self.registry = registry or RegistryClient(settings.registry)
        self.state = SelectionState()
        self.editor = ItemEditor(self.fetcher, self.state)
        self.map = MapInteractionLayer(
            surface,
            self.registry,
            settings.registry,
            on_toggle=self.editor.set_rnb_ids,
            map_config=settings.map,
            on_select=self.select,
        )

    async def open(self) -> None:
        """Load the catalog, attach the map layer and frame every item."""
        await self.state.load(self.fetcher)
        self.map.activate()
        self.map.show_overview(self.state.visible)
        self.map.render_markers(self.state.visible, self.state.selected_id)

    def select(self, item_id: str) -> Item:
        item = self.state.select(item_id)
        self.editor.begin(item)
        self.map.set_active_item(item)
        self.map.render_markers(self.state.visible, item_id)
        return item

    def search(self, query: str, mode: str | None = None) -> list[Item]:
        if mode is not None:
            self.state.mode = mode
        self.state.query = query
        self.map.render_markers(self.state.visible, self.state.selected_id)
        return self.state.visible

    async def save(self) -> bool:
        """Submit the draft, then reload so the backend record wins."""
        saved = await self.editor.submit()
        if saved:
            await self.state.load(self.fetcher)
            selected = self.state.selected
            if selected is not None:
                self.editor.begin(selected)
                self.map.set_active_item(selected)
            self.map.render_markers(self.state.visible, self.state.selected_id)
        return saved

    async def close(self) -> None:
        self.map.deactivate()
        await self.fetcher.close()
        await self.registry.close()
