"""HTTP client for the record API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from rnbadmin.catalog.models import Item
from rnbadmin.catalog.normalizer import transform_raw_item
from rnbadmin.core.config import ApiConfig

logger = logging.getLogger(__name__)


class CatalogLoadError(Exception):
    """The record list could not be loaded."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ItemSaveError(Exception):
    """An item edit could not be submitted."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ItemNotFoundError(ItemSaveError):
    """The edited item does not exist on the server."""


class ItemCatalogFetcher:
    """Reads and updates records through ``/api/items``.

    Requests are never retried; every failure is terminal for that call.
    """

    def __init__(self, config: ApiConfig, http: httpx.AsyncClient | None = None) -> None:
        self.config = config
        self._http = http or httpx.AsyncClient(
            base_url=config.base_url,
            timeout=httpx.Timeout(config.timeout_seconds),
        )

    async def fetch_items(self) -> list[Item]:
        """Load every record and normalize it, keeping the backend order."""
        try:
            resp = await self._http.get("/api/items")
        except httpx.HTTPError as exc:
            logger.error("Record list request failed: %s", exc)
            raise CatalogLoadError(f"Could not reach the record API: {exc}") from exc

        if not resp.is_success:
            raise CatalogLoadError(
                f"Record API returned HTTP {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            records = resp.json()
        except ValueError as exc:
            raise CatalogLoadError("Record API returned invalid JSON") from exc
        if not isinstance(records, list):
            raise CatalogLoadError("Record API did not return a list")

        return [transform_raw_item(record) for record in records if isinstance(record, dict)]

    async def update_item(self, item_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        """Submit edited fields; returns the payload echoed by the server."""
        try:
            resp = await self._http.patch(f"/api/items/{item_id}", json=changes)
        except httpx.HTTPError as exc:
            logger.error("Update of item %s failed: %s", item_id, exc)
            raise ItemSaveError(f"Could not reach the record API: {exc}") from exc

        if resp.status_code == 404:
            raise ItemNotFoundError(f"Item {item_id!r} not found", status_code=404)
        if not resp.is_success:
            raise ItemSaveError(
                f"Record API returned HTTP {resp.status_code}",
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as exc:
            raise ItemSaveError(
                f"Record API returned invalid JSON for item {item_id!r}",
                status_code=resp.status_code,
            ) from exc

    async def close(self) -> None:
        await self._http.aclose()
