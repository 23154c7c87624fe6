"""RNB registry data models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class RegistryBuilding(BaseModel):
    """A building as returned by the RNB ``buildings`` endpoint."""

    model_config = {"extra": "ignore"}

    rnb_id: str
    status: str = ""
    is_active: bool = True
    point: dict[str, Any] | None = None
    shape: dict[str, Any] | None = None
    addresses: list[dict[str, Any]] = Field(default_factory=list)
