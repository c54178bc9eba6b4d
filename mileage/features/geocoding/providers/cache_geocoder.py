"""キャッシュ付きジオコーダー"""

from ....shared.exceptions.errors import StorageError
from ....shared.logging.config import get_logger
from ...storage.repositories.cache_store import JsonCacheStore
from ..domain.models import Coordinate
from .mapbox_geocoder import MapboxGeocoder

logger = get_logger(__name__)


class CacheGeocoder:
    """
    キャッシュ付きジオコーダー

    課金対象のAPI呼び出しを削減するため、
    永続化されたキャッシュストアを使用する。
    キーは住所文字列そのもの（正規化しない）
    """

    def __init__(self, geocoder: MapboxGeocoder, store: JsonCacheStore) -> None:
        """
        Args:
            geocoder: ベースとなるジオコーダー
            store: 座標キャッシュのストア
        """
        self.geocoder = geocoder
        self.store = store
        self.hit_count = 0
        self.miss_count = 0

        logger.info(f"CacheGeocoder initialized ({len(store)} cached addresses)")

    def geocode(self, address: str) -> Coordinate:
        """
        住所をジオコーディング（キャッシュあり）

        Args:
            address: 住所文字列

        Returns:
            Coordinate: 座標
        """
        cached = self.store.get(address)
        if cached is not None:
            self.hit_count += 1
            logger.debug(f"Cache hit for address: {address}")
            try:
                return Coordinate.from_cache_dict(cached)
            except ValueError as e:
                raise StorageError(
                    f"Invalid geo cache entry for \"{address}\" in {self.store.path}"
                ) from e

        self.miss_count += 1
        logger.debug(f"Cache miss for address: {address}")

        coordinate = self.geocoder.geocode(address)
        self.store.set(address, coordinate.to_cache_dict())

        return coordinate

    def get_cache_stats(self) -> dict[str, int | float]:
        """
        キャッシュ統計を取得

        Returns:
            dict: キャッシュ統計（サイズ、ヒット数、ミス数、ヒット率）
        """
        total_requests = self.hit_count + self.miss_count
        hit_rate = (self.hit_count / total_requests * 100) if total_requests > 0 else 0.0

        return {
            "cache_size": len(self.store),
            "hit_count": self.hit_count,
            "miss_count": self.miss_count,
            "total_requests": total_requests,
            "hit_rate_percent": round(hit_rate, 2),
        }
