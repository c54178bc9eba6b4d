"""バッチオーケストレーター"""

from pathlib import Path
from typing import Optional

from ...infrastructure.config.settings import Settings
from ...shared.http.client import HTTPClient
from ...shared.logging.config import get_logger
from ..geocoding.providers.cache_geocoder import CacheGeocoder
from ..geocoding.providers.mapbox_geocoder import MapboxGeocoder
from ..routing.providers.cache_router import CachedDistanceResolver
from ..routing.providers.mapbox_directions import MapboxDirections
from ..storage.repositories.cache_store import JsonCacheStore
from .jobs.mileage_table_job import MileageTableJob, MileageTableResult
from .writers.table_writer import validate_output_path

logger = get_logger(__name__)


class BatchOrchestrator:
    """
    バッチオーケストレーター

    設定からストア・リゾルバーを組み立て、依存性注入を行う
    """

    def __init__(self, settings: Settings, http_client: Optional[HTTPClient] = None) -> None:
        """
        Args:
            settings: アプリケーション設定
            http_client: HTTPクライアント（省略時は設定から作成）
        """
        self.settings = settings
        self.http_client = http_client or HTTPClient(timeout=settings.http_timeout)

        logger.info("BatchOrchestrator initialized")

    def run_mileage_table(
        self,
        output_file: Optional[str] = None,
        show_progress: bool = True,
    ) -> MileageTableResult:
        """
        マイレージ表生成ジョブを実行

        Args:
            output_file: 出力先（省略時は設定値）
            show_progress: プログレスバーを表示するか

        Returns:
            MileageTableResult: 生成結果

        Raises:
            ConfigError: トークン未設定、または出力形式が未対応の場合（API呼び出し前）
        """
        access_token = self.settings.require_access_token()

        output_path = Path(output_file or self.settings.output_file)
        validate_output_path(output_path)

        geo_store = JsonCacheStore(self.settings.geo_cache_file)
        route_store = JsonCacheStore(self.settings.route_cache_file)
        geo_store.load()
        route_store.load()

        geocoder = CacheGeocoder(
            MapboxGeocoder(self.http_client, access_token, self.settings.mapbox_geocode_url),
            geo_store,
        )
        distance_resolver = CachedDistanceResolver(
            MapboxDirections(self.http_client, access_token, self.settings.mapbox_directions_url),
            route_store,
        )

        job = MileageTableJob(
            locations=self.settings.get_locations(),
            geocoder=geocoder,
            distance_resolver=distance_resolver,
            geo_store=geo_store,
            route_store=route_store,
            output_path=output_path,
            show_progress=show_progress,
        )

        return job.execute()

    def close(self) -> None:
        """HTTPセッションをクローズ"""
        self.http_client.close()
