"""Shared test fixtures and helpers."""

from __future__ import annotations

import json
import struct

import pytest

from rnbadmin.catalog.models import Item


def wkb_point_hex(lng: float, lat: float, *, little_endian: bool = True, srid: int | None = None) -> str:
    """Encode a WKB (or EWKB when ``srid`` is given) point as hex."""
    endian = "<" if little_endian else ">"
    geom_type = 1 | (0x20000000 if srid is not None else 0)
    buffer = struct.pack(f"{endian}BI", 1 if little_endian else 0, geom_type)
    if srid is not None:
        buffer += struct.pack(f"{endian}I", srid)
    buffer += struct.pack(f"{endian}dd", lng, lat)
    return buffer.hex()


def make_item(item_id: str, **overrides) -> Item:
    defaults = {
        "id": item_id,
        "name": f"Building {item_id}",
        "address": "1 Rue de la Paix 75002 Paris",
        "rnb_ids": [],
        "coordinates": (48.85, 2.35),
    }
    defaults.update(overrides)
    return Item(**defaults)


class FakeSurface:
    """Records every call made by the interaction layer."""

    def __init__(self) -> None:
        self.markers = []
        self.zones = []
        self.fits = []
        self.layers = []
        self.removed = []
        self.styled: dict[str, object] = {}
        self.resets: list[str] = []
        self.listeners = []
        self.marker_listeners = []
        self.views = []
        self.fail_style_for: set[str] = set()

    def show_markers(self, markers):
        self.markers = markers

    def set_view(self, center, zoom):
        self.views.append((center, zoom))

    def show_zone(self, points, editable=True):
        self.zones.append((points, editable))

    def fit_bounds(self, points, padding):
        self.fits.append((points, padding))

    def add_vector_layer(self, url, style, feature_id_property):
        layer = {"url": url, "style": style, "id_property": feature_id_property}
        self.layers.append(layer)
        return layer

    def remove_layer(self, layer):
        self.removed.append(layer)

    def set_feature_style(self, layer, feature_id, style):
        if feature_id in self.fail_style_for:
            raise RuntimeError("feature not loaded")
        self.styled[feature_id] = style

    def reset_feature_style(self, layer, feature_id):
        self.resets.append(feature_id)
        self.styled.pop(feature_id, None)

    def add_click_listener(self, handler):
        self.listeners.append(handler)

    def remove_click_listener(self, handler):
        self.listeners.remove(handler)

    def add_marker_listener(self, handler):
        self.marker_listeners.append(handler)

    def remove_marker_listener(self, handler):
        self.marker_listeners.remove(handler)


@pytest.fixture
def raw_records() -> list[dict]:
    return [
        {
            "Code_bat_ter": 120034,
            "Libelle_bat_ter": "Préfecture du Gard",
            "Adresse": "10 Avenue Feuchères",
            "Code_Postal": "30000",
            "Ville": "Nîmes",
            "Completude": 0.82,
            "Surface_de_plancher": 5120.0,
            "Usage_detaille_du_bien": "Bureaux",
            "Gestionnaire": "Préfecture",
            "rnb_ids": "['RNB-1', 'RNB-2']",
            "contre_proposition_rnb_ids": "",
            "coordinates": [4.3601, 43.8367],
        },
        {
            "Code_bat_ter": "120035",
            "Libelle_bat_ter": "Maison des champs",
            "Adresse": "168 rue des Vignoles",
            "Code_Postal": 75020,
            "Ville": "Paris",
            "Completude": "0.64",
            "Surface_de_plancher": "312.5",
            "Usage_detaille_du_bien": "Logement",
            "Gestionnaire": "DDT",
            "rnb_ids": "['RNB-3']",
            "contre_proposition_rnb_ids": "['RNB-5', 'RNB-50']",
            "geometry": wkb_point_hex(2.35, 48.85),
        },
    ]


@pytest.fixture
def data_file(tmp_path, raw_records):
    path = tmp_path / "items.json"
    path.write_text(json.dumps(raw_records, ensure_ascii=False), encoding="utf-8")
    return path
