"""List filtering and the selection state behind the sidebar and map."""

from __future__ import annotations

import logging

from rnbadmin.catalog.fetcher import CatalogLoadError, ItemCatalogFetcher
from rnbadmin.catalog.models import FilterMode, Item
from rnbadmin.core.types import LoadStatus

logger = logging.getLogger(__name__)


def filter_items(
    items: list[Item],
    query: str,
    mode: FilterMode | str = FilterMode.ALL,
    *,
    include_name_in_reference: bool = False,
) -> list[Item]:
    """Case-insensitive substring filter.

    An empty or whitespace-only query returns every item whatever the mode.
    """
    term = query.strip().lower()
    if not term:
        return list(items)
    mode = FilterMode(mode)

    def matches(item: Item) -> bool:
        id_match = term in item.id.lower()
        name_match = term in item.name.lower()
        if mode is FilterMode.REFERENCE:
            return id_match or (include_name_in_reference and name_match)
        rnb_match = any(term in rnb_id.lower() for rnb_id in item.rnb_ids)
        if mode is FilterMode.RNB:
            return rnb_match
        address_match = term in item.address.lower()
        if mode is FilterMode.ADDRESS:
            return address_match
        return id_match or name_match or address_match or rnb_match

    return [item for item in items if matches(item)]


class SelectionState:
    """Holds the catalog, the search criteria and the active item.

    ``visible`` is recomputed synchronously whenever the items, the query or
    the mode change. The active item stays addressable through ``selected``
    even when the current filter hides it.
    """

    def __init__(self, *, include_name_in_reference: bool = False) -> None:
        self._items: list[Item] = []
        self._query = ""
        self._mode = FilterMode.ALL
        self._include_name_in_reference = include_name_in_reference
        self._visible: list[Item] = []
        self.selected_id: str | None = None
        self.status = LoadStatus.IDLE
        self.error: str | None = None

    # -- Criteria --

    @property
    def items(self) -> list[Item]:
        return list(self._items)

    @items.setter
    def items(self, items: list[Item]) -> None:
        self._items = list(items)
        self._refresh()

    @property
    def query(self) -> str:
        return self._query

    @query.setter
    def query(self, query: str) -> None:
        self._query = query
        self._refresh()

    @property
    def mode(self) -> FilterMode:
        return self._mode

    @mode.setter
    def mode(self, mode: FilterMode | str) -> None:
        self._mode = FilterMode(mode)
        self._refresh()

    @property
    def visible(self) -> list[Item]:
        return list(self._visible)

    def _refresh(self) -> None:
        self._visible = filter_items(
            self._items,
            self._query,
            self._mode,
            include_name_in_reference=self._include_name_in_reference,
        )

    # -- Selection --

    def select(self, item_id: str) -> Item:
        """Make a visible item the active detail target."""
        for item in self._visible:
            if item.id == item_id:
                self.selected_id = item_id
                return item
        raise KeyError(f"Item {item_id!r} is not in the visible list")

    @property
    def selected(self) -> Item | None:
        if self.selected_id is None:
            return None
        for item in self._items:
            if item.id == self.selected_id:
                return item
        return None

    def get(self, item_id: str) -> Item | None:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def replace_item(self, item: Item) -> None:
        """Swap in a locally updated copy of an item, keeping list order."""
        self._items = [item if existing.id == item.id else existing for existing in self._items]
        self._refresh()

    # -- Loading --

    async def load(self, fetcher: ItemCatalogFetcher) -> None:
        """Fetch the catalog; a load failure becomes the blocking error state."""
        self.status = LoadStatus.LOADING
        self.error = None
        try:
            items = await fetcher.fetch_items()
        except CatalogLoadError as exc:
            logger.error("Catalog load failed: %s", exc)
            self.status = LoadStatus.ERROR
            self.error = str(exc)
            return
        self.items = items
        self.status = LoadStatus.READY
