"""Core type definitions shared across all rnbadmin modules."""

from __future__ import annotations

from enum import StrEnum

LatLng = tuple[float, float]
"""A ``(latitude, longitude)`` pair, the order used for display."""

ORIGIN: LatLng = (0.0, 0.0)


class LoadStatus(StrEnum):
    """Lifecycle of the catalog as seen by the UI."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class NotificationLevel(StrEnum):
    """Severity of a notification shown to the operator."""

    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
