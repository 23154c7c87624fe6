"""Record catalog: normalization, fetching, filtering and editing of items."""

from rnbadmin.catalog.editing import ItemEditor
from rnbadmin.catalog.fetcher import (
    CatalogLoadError,
    ItemCatalogFetcher,
    ItemNotFoundError,
    ItemSaveError,
)
from rnbadmin.catalog.filtering import SelectionState, filter_items
from rnbadmin.catalog.models import FilterMode, Item, ItemDraft, Notification
from rnbadmin.catalog.normalizer import transform_raw_item

__all__ = [
    "CatalogLoadError",
    "FilterMode",
    "Item",
    "ItemCatalogFetcher",
    "ItemDraft",
    "ItemEditor",
    "ItemNotFoundError",
    "ItemSaveError",
    "Notification",
    "SelectionState",
    "filter_items",
    "transform_raw_item",
]
