"""ルートマイレージ計算サービス（対話用）"""

import asyncio
from typing import Sequence

from ..domain.models import MileageReport
from .presentation import build_report
from ....infrastructure.config.settings import Settings
from ....shared.exceptions.errors import ConfigError
from ....shared.http.client import HTTPClient
from ....shared.logging.config import get_logger
from ...geocoding.domain.models import GeocodedAddress
from ...geocoding.providers.mapbox_geocoder import MapboxGeocoder
from ...routing.providers.mapbox_directions import MapboxDirections

logger = get_logger(__name__)


def parse_locations(text: str) -> list[str]:
    """
    改行区切りの入力を住所リストに変換

    前後の空白を除去し、空行は捨てる
    """
    return [line.strip() for line in text.splitlines() if line.strip()]


class RouteMileageService:
    """
    入力された住所リストのルート距離を計算するサービス

    処理フロー:
    1. 入力チェック（2地点以上、アクセストークン設定済み）
    2. 全住所を並列にジオコーディング（1件でも失敗したら全体を中断）
    3. 全地点を経由する1回のルート検索
    4. 区間ごとのマイレージ表を組み立て
    """

    def __init__(self, settings: Settings, http_client: HTTPClient) -> None:
        """
        Args:
            settings: アプリケーション設定
            http_client: HTTPクライアント
        """
        self.settings = settings
        self.http_client = http_client

    async def calculate(self, locations: Sequence[str], round_trip: bool = False) -> MileageReport:
        """
        ルートのマイレージを計算

        Args:
            locations: 経由順の住所
            round_trip: Trueの場合、最初の住所に戻る区間を追加

        Returns:
            MileageReport: マイレージ表

        Raises:
            ConfigError: 住所が2件未満、またはトークン未設定の場合
            NotFoundError: ジオコーディング結果が0件の住所がある場合
            ServiceError: APIリクエストに失敗した場合
        """
        stops = [loc.strip() for loc in locations if loc and loc.strip()]
        if len(stops) < 2:
            raise ConfigError("Enter at least two locations.")

        access_token = self.settings.require_access_token()

        if round_trip:
            stops = [*stops, stops[0]]

        geocoder = MapboxGeocoder(
            self.http_client, access_token, self.settings.mapbox_geocode_url
        )
        directions = MapboxDirections(
            self.http_client, access_token, self.settings.mapbox_directions_url
        )

        logger.info(f"Geocoding {len(stops)} locations")
        geocoded = await self._geocode_all(geocoder, stops)

        logger.info("Requesting route and calculating distance")
        route = await asyncio.to_thread(
            directions.get_route, [g.coordinate for g in geocoded]
        )

        report = build_report(geocoded, route)
        logger.info(f"Route calculated: {len(report.rows)} legs, {report.total_miles:.2f} miles")
        return report

    async def _geocode_all(
        self, geocoder: MapboxGeocoder, addresses: Sequence[str]
    ) -> list[GeocodedAddress]:
        """全住所を並列にジオコーディング（最初の失敗を送出し、残りは破棄）"""
        # GETのみでセッション状態は変更しないため、HTTPClientのセッションをスレッド間で共有する
        tasks = [
            asyncio.ensure_future(asyncio.to_thread(geocoder.geocode, address))
            for address in addresses
        ]
        try:
            coordinates = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            raise

        return [
            GeocodedAddress(address=address, coordinate=coordinate)
            for address, coordinate in zip(addresses, coordinates)
        ]
