"""ジオコーディング機能のドメインモデル"""
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Coordinate:
    """地理座標（WGS84、度）"""

    lon: float  # 経度
    lat: float  # 緯度

    def __repr__(self) -> str:
        return f"Coordinate(lon={self.lon}, lat={self.lat})"

    def to_path_segment(self) -> str:
        """Directions APIのパス用に "経度,緯度" 形式で返す"""
        return f"{self.lon},{self.lat}"

    def to_cache_dict(self) -> dict[str, float]:
        """キャッシュ保存用の辞書に変換"""
        return {"lat": self.lat, "lon": self.lon}

    @classmethod
    def from_cache_dict(cls, data: dict[str, Any]) -> "Coordinate":
        """
        キャッシュの辞書から生成

        Raises:
            ValueError: lat/lonが欠けている、または数値でない場合
        """
        try:
            return cls(lon=float(data["lon"]), lat=float(data["lat"]))
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid cached coordinate: {data!r}") from e


@dataclass(frozen=True)
class GeocodedAddress:
    """ジオコーディング済みの住所"""

    address: str
    coordinate: Coordinate
