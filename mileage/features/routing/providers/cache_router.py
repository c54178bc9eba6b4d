"""キャッシュ付きペア間距離リゾルバー"""

from ....shared.logging.config import get_logger
from ...geocoding.domain.models import Coordinate
from ...storage.repositories.cache_store import JsonCacheStore
from .mapbox_directions import MapboxDirections

logger = get_logger(__name__)


class CachedDistanceResolver:
    """ペアキー単位で2点間距離をキャッシュするリゾルバー"""

    def __init__(self, directions: MapboxDirections, store: JsonCacheStore) -> None:
        """
        Args:
            directions: Directions APIクライアント
            store: 距離キャッシュのストア（キー: "A|B"、値: メートル）
        """
        self.directions = directions
        self.store = store
        self.hit_count = 0
        self.miss_count = 0

    def get_meters(self, origin: Coordinate, destination: Coordinate, pair_key: str) -> float:
        """
        2点間の走行距離（メートル）を取得（キャッシュあり）

        Args:
            origin: 出発地の座標
            destination: 目的地の座標
            pair_key: キャッシュキー（"A|B"）

        Returns:
            float: 距離（メートル）
        """
        cached = self.store.get(pair_key)
        if cached is not None:
            self.hit_count += 1
            logger.debug(f"Cache hit for pair: {pair_key}")
            return float(cached)

        self.miss_count += 1
        logger.debug(f"Cache miss for pair: {pair_key}")

        meters = self.directions.get_meters(origin, destination)
        self.store.set(pair_key, meters)
        return meters
