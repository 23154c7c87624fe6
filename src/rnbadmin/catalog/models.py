"""Catalog data models."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from rnbadmin.core.types import ORIGIN, LatLng, NotificationLevel


class FilterMode(StrEnum):
    """Which fields a list search is matched against."""

    ALL = "all"
    REFERENCE = "reference"
    RNB = "rnb"
    ADDRESS = "address"


class Item(BaseModel):
    """A reconciled building/address record, ready for display."""

    model_config = {"populate_by_name": True}

    id: str
    name: str = ""
    address: str = ""
    score: str = ""
    surface: str = ""
    usage: str = ""
    gestionnaire: str = ""
    rnb_ids: list[str] = Field(default_factory=list, alias="rnbIds")
    coordinates: LatLng = ORIGIN
    zone: list[LatLng] = Field(default_factory=list)


class ItemDraft(BaseModel):
    """Editable fields of an item, held locally until submitted."""

    model_config = {"populate_by_name": True}

    item_id: str
    name: str = ""
    address: str = ""
    surface: str = ""
    usage: str = ""
    gestionnaire: str = ""
    rnb_ids: list[str] = Field(default_factory=list, alias="rnbIds")

    def to_payload(self) -> dict[str, Any]:
        """Body of the ``PATCH /api/items/{id}`` request."""
        return {
            "name": self.name,
            "address": self.address,
            "surface": self.surface,
            "usage": self.usage,
            "gestionnaire": self.gestionnaire,
            "rnbIds": list(self.rnb_ids),
        }


class Notification(BaseModel):
    """A transient message surfaced to the operator."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    level: NotificationLevel
    message: str
    item_id: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
