"""Normalization of raw backend records into display-ready items.

Raw records are loosely typed: numbers may arrive as strings, identifier
lists are stringified with single quotes, and the location may come from an
explicit ``[lng, lat]`` pair, an explicit zone, or a hex WKB point. Every
function here is pure and never raises on malformed input; unusable values
fall back to empty lists or the ``(0, 0)`` origin.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from rnbadmin.catalog.models import Item
from rnbadmin.catalog.wkb import decode_wkb_point
from rnbadmin.core.types import ORIGIN, LatLng

logger = logging.getLogger(__name__)

ZONE_HALF_WIDTH = 0.00035

# Raw record field names
ID_FIELD = "Code_bat_ter"
NAME_FIELD = "Libelle_bat_ter"
STREET_FIELD = "Adresse"
POSTAL_CODE_FIELD = "Code_Postal"
CITY_FIELD = "Ville"
SCORE_FIELD = "Completude"
SURFACE_FIELD = "Surface_de_plancher"
USAGE_FIELD = "Usage_detaille_du_bien"
MANAGER_FIELD = "Gestionnaire"
RNB_IDS_FIELD = "rnb_ids"
COUNTER_PROPOSAL_FIELD = "contre_proposition_rnb_ids"


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _to_lat_lng(point: Any) -> LatLng | None:
    """Convert a backend ``[lng, lat]`` pair to ``(lat, lng)``."""
    if not isinstance(point, (list, tuple)) or len(point) < 2:
        return None
    lng, lat = _to_float(point[0]), _to_float(point[1])
    return (lat, lng)


def parse_rnb_ids(raw: Any) -> list[str]:
    """Parse a single-quoted stringified list such as ``"['A', 'B']"``."""
    if not isinstance(raw, str):
        return []
    try:
        parsed = json.loads(raw.replace("'", '"'))
    except (ValueError, RecursionError):
        logger.debug("Unparseable identifier list %r", raw)
        return []
    if not isinstance(parsed, list):
        return []
    return [str(entry) for entry in parsed]


def build_address(street: Any, postal_code: Any, city: Any) -> str:
    """Join street, postal code and city, dropping segments already present."""
    segments: list[str] = []
    for position, value in enumerate((street, postal_code, city)):
        segment = _to_text(value).strip()
        if not segment:
            continue
        if position > 0 and segment.lower() in " ".join(segments).lower():
            continue
        segments.append(segment)
    return " ".join(segments)


def resolve_coordinates(raw: dict[str, Any]) -> LatLng:
    """Resolve the anchor point.

    Precedence: explicit ``coordinates`` unless both components are zero,
    then the WKB ``geometry``, then the origin.
    """
    explicit = _to_lat_lng(raw.get("coordinates"))
    if explicit is not None and explicit != ORIGIN:
        return explicit
    return decode_wkb_point(raw.get("geometry"))


def square_zone(center: LatLng, half_width: float = ZONE_HALF_WIDTH) -> list[LatLng]:
    """Closed square around ``center``: BL, BR, TR, TL, BL."""
    lat, lng = center
    bottom, top = lat - half_width, lat + half_width
    left, right = lng - half_width, lng + half_width
    return [
        (bottom, left),
        (bottom, right),
        (top, right),
        (top, left),
        (bottom, left),
    ]


def resolve_zone(raw: dict[str, Any], coordinates: LatLng) -> list[LatLng]:
    """Use the backend zone when it has usable points, else a square."""
    explicit = raw.get("zone")
    if isinstance(explicit, (list, tuple)):
        points = [p for p in (_to_lat_lng(point) for point in explicit) if p is not None]
        if points:
            return points
    return square_zone(coordinates)


def resolve_rnb_ids(raw: dict[str, Any]) -> list[str]:
    """Counter-proposal identifiers win over the matched ones when non-empty."""
    counter_proposal = parse_rnb_ids(raw.get(COUNTER_PROPOSAL_FIELD))
    if counter_proposal:
        return counter_proposal
    return parse_rnb_ids(raw.get(RNB_IDS_FIELD))


def transform_raw_item(raw: dict[str, Any]) -> Item:
    """Map one raw backend record to an :class:`Item`."""
    coordinates = resolve_coordinates(raw)
    return Item(
        id=_to_text(raw.get(ID_FIELD)),
        name=_to_text(raw.get(NAME_FIELD)),
        address=build_address(
            raw.get(STREET_FIELD), raw.get(POSTAL_CODE_FIELD), raw.get(CITY_FIELD)
        ),
        score=_to_text(raw.get(SCORE_FIELD)),
        surface=_to_text(raw.get(SURFACE_FIELD)),
        usage=_to_text(raw.get(USAGE_FIELD)),
        gestionnaire=_to_text(raw.get(MANAGER_FIELD)),
        rnb_ids=resolve_rnb_ids(raw),
        coordinates=coordinates,
        zone=resolve_zone(raw, coordinates),
    )
