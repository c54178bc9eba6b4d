"""Mapbox Geocoding API実装"""
from typing import Any
from urllib.parse import quote

from ..domain.models import Coordinate
from ....shared.exceptions.errors import ConfigError, NotFoundError, ServiceError
from ....shared.http.client import HTTPClient
from ....shared.logging.config import get_logger

logger = get_logger(__name__)


class MapboxGeocoder:
    """Mapbox Geocoding API実装"""

    def __init__(self, http_client: HTTPClient, access_token: str, base_url: str) -> None:
        """
        Args:
            http_client: HTTPクライアント
            access_token: Mapboxアクセストークン
            base_url: Geocoding APIのベースURL
        """
        self.http_client = http_client
        self.access_token = access_token
        self.base_url = base_url.rstrip("/")
        logger.info("MapboxGeocoder initialized")

    def geocode(self, address: str) -> Coordinate:
        """
        住所をジオコーディング

        Args:
            address: 住所文字列

        Returns:
            Coordinate: 最上位のマッチの座標

        Raises:
            ConfigError: 住所が空の場合
            NotFoundError: マッチが0件の場合
            ServiceError: APIリクエストに失敗した場合
        """
        if not address or not address.strip():
            raise ConfigError("Address must not be empty")

        logger.debug(f"Geocoding address: {address}")

        url = f"{self.base_url}/{quote(address, safe='')}.json"
        data = self.http_client.get_json(
            url,
            params={"access_token": self.access_token, "limit": 1},
        )

        features = data.get("features") if isinstance(data, dict) else None
        if not isinstance(features, list):
            raise ServiceError(f"Geocoding failed for \"{address}\" (malformed response)")
        if not features:
            logger.warning(f"No geocoding results for address: {address}")
            raise NotFoundError(f"No match found for \"{address}\"")

        coordinate = self._parse_center(features[0], address)

        logger.debug(f"Geocoded: {address} -> ({coordinate.lon}, {coordinate.lat})")

        return coordinate

    def _parse_center(self, feature: Any, address: str) -> Coordinate:
        """featureのcenter（[経度, 緯度]）を座標に変換"""
        center = feature.get("center") if isinstance(feature, dict) else None
        try:
            lon, lat = center
            return Coordinate(lon=float(lon), lat=float(lat))
        except (TypeError, ValueError) as e:
            raise ServiceError(
                f"Geocoding failed for \"{address}\" (missing or invalid center)"
            ) from e
