"""Well-known-binary point decoding.

Only the single point record is supported: a byte-order flag, a uint32
geometry type (optionally carrying the EWKB SRID flag), then X and Y as
IEEE-754 doubles.
"""

from __future__ import annotations

import logging
import struct

from rnbadmin.core.types import ORIGIN, LatLng

logger = logging.getLogger(__name__)

SRID_FLAG = 0x20000000


def decode_wkb_point(geometry: str | None) -> LatLng:
    """Decode a hex WKB point into ``(lat, lng)``.

    Returns ``(0, 0)`` on any failure: missing payload, bad hex, truncated
    buffer.
    """
    if not geometry or not isinstance(geometry, str):
        return ORIGIN
    try:
        buffer = bytes.fromhex(geometry.strip())
        endian = "<" if buffer[0] == 1 else ">"
        (geom_type,) = struct.unpack_from(f"{endian}I", buffer, 1)
        offset = 5
        if geom_type & SRID_FLAG:
            offset += 4
        lng, lat = struct.unpack_from(f"{endian}dd", buffer, offset)
    except (ValueError, IndexError, struct.error) as exc:
        logger.debug("Could not decode WKB point %r: %s", geometry, exc)
        return ORIGIN
    return (lat, lng)
