"""マイレージ表生成ジョブ"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from tqdm import tqdm

from ....shared.logging.config import get_logger
from ....shared.utils.units import round_miles
from ...geocoding.domain.models import Coordinate
from ...geocoding.providers.cache_geocoder import CacheGeocoder
from ...routing.providers.cache_router import CachedDistanceResolver
from ...storage.repositories.cache_store import JsonCacheStore
from ..pairs import enumerate_pairs, pair_key
from ..writers.table_writer import write_mileage_table

logger = get_logger(__name__)


@dataclass
class MileageTableResult:
    """マイレージ表生成の結果"""

    table: dict[str, float]
    output_path: Optional[Path]
    started_at: datetime
    finished_at: datetime
    geocode_requests: int = 0  # 実際にAPIを呼び出した回数
    route_requests: int = 0
    location_count: int = 0
    pair_count: int = 0
    stats: dict[str, dict] = field(default_factory=dict)

    @property
    def api_requests(self) -> int:
        return self.geocode_requests + self.route_requests


class MileageTableJob:
    """
    固定ロケーション間の全ペアのマイレージ表を生成するジョブ

    処理フロー:
    1. 全ロケーションをジオコーディング（キャッシュあり）
    2. 順序なしペアごとに距離を取得（キャッシュあり）し、両方向のキーで表に格納
    3. キャッシュをファイルに保存
    4. マイレージ表を書き出し

    全て逐次実行。途中で失敗した場合はキャッシュを保存せずに例外を送出する
    """

    def __init__(
        self,
        locations: dict[str, str],
        geocoder: CacheGeocoder,
        distance_resolver: CachedDistanceResolver,
        geo_store: JsonCacheStore,
        route_store: JsonCacheStore,
        output_path: Optional[str | Path] = None,
        show_progress: bool = True,
    ) -> None:
        """
        Args:
            locations: ロケーションID → 住所
            geocoder: キャッシュ付きジオコーダー
            distance_resolver: キャッシュ付き距離リゾルバー
            geo_store: 座標キャッシュのストア
            route_store: 距離キャッシュのストア
            output_path: マイレージ表の出力先（Noneの場合は書き出さない）
            show_progress: プログレスバーを表示するか
        """
        self.locations = dict(locations)
        self.geocoder = geocoder
        self.distance_resolver = distance_resolver
        self.geo_store = geo_store
        self.route_store = route_store
        self.output_path = Path(output_path) if output_path is not None else None
        self.show_progress = show_progress

        logger.info(f"MileageTableJob initialized: {len(self.locations)} locations")

    def execute(self) -> MileageTableResult:
        """
        ジョブを実行

        Returns:
            MileageTableResult: 生成結果
        """
        started_at = datetime.now()
        keys = list(self.locations)

        if len(keys) < 2:
            logger.warning("Fewer than two locations configured; the mileage table will be empty")

        logger.info("=== Geocoding ===")
        coords = self._geocode_locations(keys)

        logger.info("=== Computing Distances (unique pairs only) ===")
        table = self._build_table(keys, coords)

        logger.info("=== Saving caches ===")
        self.geo_store.save()
        self.route_store.save()

        written: Optional[Path] = None
        if self.output_path is not None:
            logger.info(f"=== Writing {self.output_path.name} ===")
            written = write_mileage_table(table, self.output_path)

        result = MileageTableResult(
            table=table,
            output_path=written,
            started_at=started_at,
            finished_at=datetime.now(),
            geocode_requests=self.geocoder.miss_count,
            route_requests=self.distance_resolver.miss_count,
            location_count=len(keys),
            pair_count=len(table) // 2,
            stats={"geocode": self.geocoder.get_cache_stats()},
        )

        logger.info(
            f"Mileage table completed: {result.pair_count} pairs, "
            f"{result.api_requests} API requests "
            f"({result.geocode_requests} geocode, {result.route_requests} route)"
        )

        return result

    def _geocode_locations(self, keys: list[str]) -> dict[str, Coordinate]:
        coords: dict[str, Coordinate] = {}
        iterator = tqdm(keys, desc="Geocoding") if self.show_progress else keys

        for key in iterator:
            address = self.locations[key]
            logger.info(f"Geocoding {key}: {address}")
            coords[key] = self.geocoder.geocode(address)

        return coords

    def _build_table(self, keys: list[str], coords: dict[str, Coordinate]) -> dict[str, float]:
        table: dict[str, float] = {}
        pairs = list(enumerate_pairs(keys))
        iterator = tqdm(pairs, desc="Routing") if self.show_progress else pairs

        for a, b in iterator:
            logger.info(f"Route {a} <-> {b}")

            meters = self.distance_resolver.get_meters(coords[a], coords[b], pair_key(a, b))
            miles = round_miles(meters)

            # 両方向を同時に登録
            table[pair_key(a, b)] = miles
            table[pair_key(b, a)] = miles

        return table
