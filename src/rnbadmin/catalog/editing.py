"""Local edit state for the active item and its submission."""

from __future__ import annotations

import logging

from rnbadmin.catalog.fetcher import ItemCatalogFetcher, ItemNotFoundError, ItemSaveError
from rnbadmin.catalog.filtering import SelectionState
from rnbadmin.catalog.models import Item, ItemDraft, Notification
from rnbadmin.core.types import NotificationLevel

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "address", "surface", "usage", "gestionnaire")


class ItemEditor:
    """Optimistic form state for one item at a time.

    The draft survives a failed submission so the operator can retry.
    Notifications accumulate until dismissed.
    """

    def __init__(self, fetcher: ItemCatalogFetcher, state: SelectionState) -> None:
        self._fetcher = fetcher
        self._state = state
        self.draft: ItemDraft | None = None
        self.notifications: list[Notification] = []

    def begin(self, item: Item) -> ItemDraft:
        self.draft = ItemDraft(
            item_id=item.id,
            name=item.name,
            address=item.address,
            surface=item.surface,
            usage=item.usage,
            gestionnaire=item.gestionnaire,
            rnb_ids=list(item.rnb_ids),
        )
        return self.draft

    def _require_draft(self) -> ItemDraft:
        if self.draft is None:
            raise RuntimeError("No item is being edited")
        return self.draft

    def set_field(self, field: str, value: str) -> None:
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Field {field!r} is not editable")
        setattr(self._require_draft(), field, value)

    def set_rnb_ids(self, rnb_ids: list[str]) -> None:
        self._require_draft().rnb_ids = list(rnb_ids)

    async def submit(self) -> bool:
        """Send the draft to the backend. Returns True on success."""
        draft = self._require_draft()
        try:
            await self._fetcher.update_item(draft.item_id, draft.to_payload())
        except ItemNotFoundError:
            self._notify(NotificationLevel.ERROR, f"Item {draft.item_id} no longer exists", draft.item_id)
            return False
        except ItemSaveError as exc:
            logger.warning("Saving item %s failed: %s", draft.item_id, exc)
            self._notify(NotificationLevel.WARNING, f"Could not save item {draft.item_id}", draft.item_id)
            return False

        current = self._state.get(draft.item_id)
        if current is not None:
            self._state.replace_item(
                current.model_copy(
                    update={
                        **{field: getattr(draft, field) for field in EDITABLE_FIELDS},
                        "rnb_ids": list(draft.rnb_ids),
                    }
                )
            )
        self._notify(NotificationLevel.SUCCESS, f"Item {draft.item_id} saved", draft.item_id)
        return True

    def dismiss(self, notification_id: str) -> None:
        self.notifications = [n for n in self.notifications if n.id != notification_id]

    def _notify(self, level: NotificationLevel, message: str, item_id: str | None) -> None:
        self.notifications.append(Notification(level=level, message=message, item_id=item_id))
