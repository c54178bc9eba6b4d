"""テスト共通のフィクスチャ"""

import threading
from typing import Any, Optional
from urllib.parse import unquote

import pytest

from mileage.infrastructure.config.settings import Settings
from mileage.shared.exceptions.errors import ServiceError

GEOCODE_URL = "https://geocode.test/geocoding/v5/mapbox.places"
DIRECTIONS_URL = "https://directions.test/directions/v5/mapbox/driving"

# 住所 → [経度, 緯度]
KNOWN_PLACES = {
    "123 Fake St, Springfield IL": [-89.650, 39.780],
    "200 Lakeshore Rd, Springfield IL": [-89.600, 39.760],
    "14 Jacobs Ct, Springfield IL": [-89.700, 39.800],
    "500 Corporate Dr, Springfield IL": [-89.620, 39.740],
}


class FakeHTTPClient:
    """Mapbox APIを模倣するHTTPクライアント（ネットワークなし）"""

    def __init__(
        self,
        places: Optional[dict[str, list[float]]] = None,
        legs: bool = True,
        fail_routes_after: Optional[int] = None,
    ) -> None:
        self.places = dict(KNOWN_PLACES if places is None else places)
        self.legs = legs
        self.fail_routes_after = fail_routes_after
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self._lock = threading.Lock()

    @property
    def geocode_calls(self) -> list[tuple[str, dict[str, Any]]]:
        return [c for c in self.calls if c[0].startswith(GEOCODE_URL)]

    @property
    def route_calls(self) -> list[tuple[str, dict[str, Any]]]:
        return [c for c in self.calls if c[0].startswith(DIRECTIONS_URL)]

    def get_json(self, url: str, params: Optional[dict[str, Any]] = None) -> Any:
        with self._lock:
            self.calls.append((url, dict(params or {})))

        if url.startswith(GEOCODE_URL):
            address = unquote(url[len(GEOCODE_URL) + 1 : -len(".json")])
            center = self.places.get(address)
            return {"features": [{"center": center}] if center else []}

        if url.startswith(DIRECTIONS_URL):
            if self.fail_routes_after is not None and len(self.route_calls) > self.fail_routes_after:
                raise ServiceError("Request failed (HTTP 503)")
            points = [
                tuple(float(v) for v in segment.split(","))
                for segment in url[len(DIRECTIONS_URL) + 1 :].split(";")
            ]
            leg_meters = [fake_meters(a, b) for a, b in zip(points, points[1:])]
            route: dict[str, Any] = {"distance": sum(leg_meters)}
            route["legs"] = [{"distance": m} for m in leg_meters] if self.legs else []
            return {"routes": [route]}

        raise AssertionError(f"unexpected url: {url}")

    def close(self) -> None:
        pass


def fake_meters(a: tuple[float, ...], b: tuple[float, ...]) -> float:
    """座標から決定的な距離（メートル）を作る"""
    return round((abs(a[0] - b[0]) + abs(a[1] - b[1])) * 100000, 1)


@pytest.fixture
def fake_http() -> FakeHTTPClient:
    return FakeHTTPClient()


@pytest.fixture
def settings(tmp_path: Any) -> Settings:
    return Settings(
        _env_file=None,
        mapbox_access_token="pk.test-token",
        mapbox_geocode_url=GEOCODE_URL,
        mapbox_directions_url=DIRECTIONS_URL,
        geo_cache_file=str(tmp_path / "geoCache.json"),
        route_cache_file=str(tmp_path / "routeCache.json"),
        output_file=str(tmp_path / "mileageTable.js"),
        home_addr=None,
    )
