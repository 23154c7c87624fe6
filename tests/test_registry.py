"""Tests for the RNB registry client."""

from __future__ import annotations

import httpx
import pytest

from rnbadmin.core.config import RegistryConfig
from rnbadmin.registry.client import RegistryClient, RegistryLookupError

BASE_URL = "https://rnb.test"


@pytest.fixture
def registry():
    return RegistryClient(RegistryConfig(base_url=BASE_URL))


class TestClosestBuilding:
    @pytest.mark.asyncio
    async def test_returns_first_result(self, registry, httpx_mock):
        httpx_mock.add_response(
            json={"results": [{"rnb_id": "RNB-1", "distance": 1.2}, {"rnb_id": "RNB-2"}]},
        )

        assert await registry.closest_building(48.85, 2.35) == "RNB-1"

        request = httpx_mock.get_request()
        assert request.url.path == "/api/alpha/buildings/closest/"
        assert request.url.params["point"] == "48.85,2.35"
        assert request.url.params["radius"] == "5"

    @pytest.mark.asyncio
    async def test_explicit_radius(self, registry, httpx_mock):
        httpx_mock.add_response(json={"results": []})

        await registry.closest_building(48.85, 2.35, radius=20)

        assert httpx_mock.get_request().url.params["radius"] == "20"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"results": []},
            {"results": None},
            {},
            {"results": [{"distance": 3}]},
            {"results": {"rnb_id": "X"}},
            [],
        ],
    )
    async def test_no_building_in_range(self, registry, httpx_mock, payload):
        httpx_mock.add_response(json=payload)
        assert await registry.closest_building(48.85, 2.35) is None

    @pytest.mark.asyncio
    async def test_http_error_raises(self, registry, httpx_mock):
        httpx_mock.add_response(status_code=502)

        with pytest.raises(RegistryLookupError):
            await registry.closest_building(48.85, 2.35)

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self, registry, httpx_mock):
        httpx_mock.add_response(text="<html>oops</html>")

        with pytest.raises(RegistryLookupError):
            await registry.closest_building(48.85, 2.35)

    @pytest.mark.asyncio
    async def test_transport_error_raises(self, registry, httpx_mock):
        httpx_mock.add_exception(httpx.ReadTimeout("slow"))

        with pytest.raises(RegistryLookupError):
            await registry.closest_building(48.85, 2.35)


class TestGetBuilding:
    @pytest.mark.asyncio
    async def test_parses_building(self, registry, httpx_mock):
        httpx_mock.add_response(
            url=f"{BASE_URL}/api/alpha/buildings/K2PD8V3XWQ1M/",
            json={
                "rnb_id": "K2PD8V3XWQ1M",
                "status": "constructed",
                "is_active": True,
                "point": {"type": "Point", "coordinates": [2.35, 48.85]},
                "addresses": [{"id": "75120_8765_00168"}],
                "ext_ids": [],
            },
        )

        building = await registry.get_building("K2PD8V3XWQ1M")

        assert building.rnb_id == "K2PD8V3XWQ1M"
        assert building.status == "constructed"
        assert building.point["coordinates"] == [2.35, 48.85]
        assert building.addresses[0]["id"] == "75120_8765_00168"

    @pytest.mark.asyncio
    async def test_unexpected_payload_raises(self, registry, httpx_mock):
        httpx_mock.add_response(json={"detail": "Not found."})

        with pytest.raises(RegistryLookupError):
            await registry.get_building("nope")


def test_tiles_url(registry):
    assert registry.tiles_url == f"{BASE_URL}/api/alpha/tiles/shapes/{{x}}/{{y}}/{{z}}.pbf"
