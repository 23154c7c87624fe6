"""Client for the RNB national building registry API."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from rnbadmin.core.config import RegistryConfig
from rnbadmin.registry.models import RegistryBuilding

logger = logging.getLogger(__name__)

CLOSEST_PATH = "/api/alpha/buildings/closest/"
BUILDING_PATH = "/api/alpha/buildings/{rnb_id}/"
TILES_PATH = "/api/alpha/tiles/shapes/{x}/{y}/{z}.pbf"


class RegistryLookupError(Exception):
    """A registry request failed or returned an unusable payload."""


def tiles_url_template(base_url: str) -> str:
    """Vector tile URL template for building shapes."""
    return base_url.rstrip("/") + TILES_PATH


class RegistryClient:
    """Talks to the RNB API. No retries."""

    def __init__(self, config: RegistryConfig, http: httpx.AsyncClient | None = None) -> None:
        self.config = config
        self._http = http or httpx.AsyncClient(
            base_url=config.base_url,
            timeout=httpx.Timeout(config.timeout_seconds),
        )

    @property
    def tiles_url(self) -> str:
        return tiles_url_template(self.config.base_url)

    async def closest_building(
        self, lat: float, lng: float, radius: int | None = None
    ) -> str | None:
        """Return the RNB id of the nearest building, or None if none is in range."""
        params = {
            "point": f"{lat},{lng}",
            "radius": radius if radius is not None else self.config.search_radius,
        }
        data = await self._get_json(CLOSEST_PATH, params=params)
        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list) or not results or not isinstance(results[0], dict):
            return None
        rnb_id = results[0].get("rnb_id")
        return str(rnb_id) if rnb_id else None

    async def get_building(self, rnb_id: str) -> RegistryBuilding:
        """Fetch the full registry record of a building."""
        data = await self._get_json(BUILDING_PATH.format(rnb_id=rnb_id))
        try:
            return RegistryBuilding.model_validate(data)
        except ValidationError as exc:
            raise RegistryLookupError(f"Unexpected payload for building {rnb_id}") from exc

    async def close(self) -> None:
        await self._http.aclose()

    async def _get_json(self, path: str, params: dict | None = None):
        try:
            resp = await self._http.get(path, params=params)
        except httpx.HTTPError as exc:
            raise RegistryLookupError(f"Registry request to {path} failed: {exc}") from exc
        if not resp.is_success:
            raise RegistryLookupError(f"Registry returned HTTP {resp.status_code} for {path}")
        try:
            return resp.json()
        except ValueError as exc:
            raise RegistryLookupError(f"Registry returned invalid JSON for {path}") from exc
