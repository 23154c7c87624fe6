"""JSON file store for reconciled records.

The whole dataset lives in one JSON array. Reads are capped at
``max_items`` rows; updates rewrite the file.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

UPDATE_SOURCE = "DetailPanel editable-form"

# Payload key -> stored record keys
_FIELD_MAP: dict[str, tuple[str, ...]] = {
    "name": ("Libelle_bat_ter",),
    "address": ("Adresse", "die_adresse"),
    "usage": ("Usage_detaille_du_bien",),
    "gestionnaire": ("Gestionnaire",),
}


class StoreError(Exception):
    """The data file could not be read or written."""


class RecordNotFoundError(KeyError):
    """No record carries the requested identifier."""


def _coerce_surface(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        return value


class JsonItemStore:
    """Reads and rewrites the record file."""

    def __init__(self, path: str | Path, max_items: int = 10) -> None:
        self._path = Path(path)
        self._max_items = max_items

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> list[dict[str, Any]]:
        try:
            with open(self._path, encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as exc:
            raise StoreError(f"Cannot read data file {self._path}: {exc}") from exc
        if not isinstance(data, list):
            raise StoreError(f"Data file {self._path} does not hold a JSON array")
        return data

    def _write(self, records: list[dict[str, Any]]) -> None:
        try:
            with open(self._path, "w", encoding="utf-8") as fh:
                json.dump(records, fh, ensure_ascii=False, indent=4)
        except (OSError, TypeError) as exc:
            raise StoreError(f"Cannot write data file {self._path}: {exc}") from exc

    def list_records(self) -> list[dict[str, Any]]:
        """First ``max_items`` records in file order."""
        return self._read()[: self._max_items]

    def update_record(self, item_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Merge an edit payload into the stored record and persist it.

        ``rnbIds`` is stored JSON-encoded under ``contre_proposition_rnb_ids``;
        the automatically matched ``rnb_ids`` are left untouched. Keys set to
        null are ignored, except ``rnbIds`` which then clears the list.
        """
        records = self._read()
        for record in records:
            if str(record.get("Code_bat_ter")) != str(item_id):
                continue

            for key, targets in _FIELD_MAP.items():
                if payload.get(key) is not None:
                    for target in targets:
                        record[target] = payload[key]
            if payload.get("surface") is not None:
                record["Surface_de_plancher"] = _coerce_surface(payload["surface"])
            if "rnbIds" in payload:
                rnb_ids = payload["rnbIds"]
                valid = list(rnb_ids) if isinstance(rnb_ids, list) else []
                record["contre_proposition_rnb_ids"] = json.dumps(valid, ensure_ascii=False)

            record["last_update_source"] = UPDATE_SOURCE
            record["last_update_date"] = date.today().isoformat()

            self._write(records)
            logger.info("Updated record %s (%s)", item_id, ", ".join(sorted(payload)))
            return record

        raise RecordNotFoundError(item_id)
