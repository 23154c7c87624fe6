"""FastAPI router for the reconciled record endpoints."""

from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, HTTPException, Request

from rnbadmin.store.json_store import JsonItemStore, RecordNotFoundError, StoreError

router = APIRouter()


def _get_store(request: Request) -> JsonItemStore:
    store = getattr(request.app.state, "item_store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Item store not available")
    return store


@router.get("/api/items")
async def list_items(request: Request) -> list[dict[str, Any]]:
    """List reconciled records (capped by the store)."""
    store = _get_store(request)
    try:
        return store.list_records()
    except StoreError as exc:
        raise HTTPException(status_code=500, detail=str(exc))


@router.patch("/api/items/{item_id}")
async def update_item(item_id: str, request: Request) -> dict[str, Any]:
    """Merge edited fields into a record and echo the submitted payload."""
    store = _get_store(request)
    try:
        payload = json.loads(await request.body())
    except ValueError:
        payload = None
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Invalid payload")

    try:
        store.update_record(item_id, payload)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail=f"Item {item_id!r} not found")
    except StoreError as exc:
        raise HTTPException(status_code=500, detail=str(exc))
    return payload
