"""Mapbox Directions API実装"""
from typing import Any, Sequence

from ..domain.models import Leg, Route
from ....shared.exceptions.errors import ConfigError, ServiceError
from ....shared.http.client import HTTPClient
from ....shared.logging.config import get_logger
from ...geocoding.domain.models import Coordinate

logger = get_logger(__name__)


class MapboxDirections:
    """Mapbox Directions API実装"""

    def __init__(self, http_client: HTTPClient, access_token: str, base_url: str) -> None:
        """
        Args:
            http_client: HTTPクライアント
            access_token: Mapboxアクセストークン
            base_url: Directions APIのベースURL（例: .../directions/v5/mapbox/driving）
        """
        self.http_client = http_client
        self.access_token = access_token
        self.base_url = base_url.rstrip("/")
        logger.info("MapboxDirections initialized")

    def get_route(self, coordinates: Sequence[Coordinate]) -> Route:
        """
        順序付きの座標列に対して1回のルート検索を行う

        Args:
            coordinates: 経由順の座標（2点以上）

        Returns:
            Route: 総距離と区間ごとの距離

        Raises:
            ConfigError: 座標が2点未満の場合
            ServiceError: APIリクエストの失敗、またはルートが0件の場合
        """
        if len(coordinates) < 2:
            raise ConfigError("At least two coordinates are required to compute a route")

        path = ";".join(c.to_path_segment() for c in coordinates)
        data = self.http_client.get_json(
            f"{self.base_url}/{path}",
            params={
                "access_token": self.access_token,
                "overview": "false",
                "steps": "false",
                "geometries": "geojson",
            },
        )

        routes = data.get("routes") if isinstance(data, dict) else None
        if not routes:
            raise ServiceError("No route found for given locations")

        route = self._parse_route(routes[0])
        if route.legs and len(route.legs) != len(coordinates) - 1:
            raise ServiceError(
                f"Directions response has {len(route.legs)} legs for {len(coordinates)} stops"
            )
        logger.debug(
            f"Route computed: {len(coordinates)} stops, {route.distance_m} m, {len(route.legs)} legs"
        )
        return route

    def get_meters(self, origin: Coordinate, destination: Coordinate) -> float:
        """2点間の走行距離（メートル）を取得"""
        return self.get_route([origin, destination]).distance_m

    def _parse_route(self, raw: Any) -> Route:
        try:
            distance = float(raw["distance"])
            legs = [Leg(distance_m=float(leg["distance"])) for leg in raw.get("legs") or []]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ServiceError("Malformed route in directions response") from e
        return Route(distance_m=distance, legs=legs)
