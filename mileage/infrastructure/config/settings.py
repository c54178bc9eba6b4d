"""アプリケーション設定（Pydantic Settings）"""
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ...shared.exceptions.errors import ConfigError

PLACEHOLDER_ACCESS_TOKEN = "YOUR_MAPBOX_ACCESS_TOKEN_HERE"


def _default_locations() -> dict[str, str]:
    return {
        "HOME": "123 Fake St, Springfield IL",
        "LS": "200 Lakeshore Rd, Springfield IL",
        "JACOBS": "14 Jacobs Ct, Springfield IL",
        "OFFICE": "500 Corporate Dr, Springfield IL",
    }


class Settings(BaseSettings):
    """アプリケーション設定"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Project
    project_name: str = Field(
        default="mileage-table",
        description="プロジェクト名",
    )
    environment: str = Field(
        default="development",
        description="環境 (development, staging, production)",
    )

    # Mapbox
    mapbox_access_token: str = Field(
        default=PLACEHOLDER_ACCESS_TOKEN,
        description="Mapboxアクセストークン",
    )
    mapbox_geocode_url: str = Field(
        default="https://api.mapbox.com/geocoding/v5/mapbox.places",
        description="Mapbox Geocoding APIのベースURL",
    )
    mapbox_directions_url: str = Field(
        default="https://api.mapbox.com/directions/v5/mapbox/driving",
        description="Mapbox Directions APIのベースURL（プロファイル込み）",
    )
    http_timeout: int = Field(
        default=20,
        description="HTTPリクエストのタイムアウト（秒）",
    )

    # Batch
    locations: dict[str, str] = Field(
        default_factory=_default_locations,
        description="短縮コード → 住所のマッピング（環境変数ではJSONで指定）",
    )
    home_addr: Optional[str] = Field(
        default=None,
        description="HOMEの住所（設定時はlocationsのHOMEを上書き）",
    )
    geo_cache_file: str = Field(
        default="geoCache.json",
        description="ジオコーディング結果のキャッシュファイル",
    )
    route_cache_file: str = Field(
        default="routeCache.json",
        description="ペア間距離のキャッシュファイル",
    )
    output_file: str = Field(
        default="mileageTable.js",
        description="生成するマイレージ表ファイル（拡張子で形式を決定: .js / .py）",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="ログレベル (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # HTTP server
    port: int = Field(
        default=8080,
        description="HTTPサーバーのポート番号",
    )

    def get_locations(self) -> dict[str, str]:
        """HOME_ADDRの上書きを反映したロケーションのマッピングを取得"""
        locations = dict(self.locations)
        if self.home_addr:
            locations["HOME"] = self.home_addr
        return locations

    def require_access_token(self) -> str:
        """
        アクセストークンを取得

        Raises:
            ConfigError: 未設定、またはプレースホルダーのままの場合
        """
        token = (self.mapbox_access_token or "").strip()
        if not token or token == PLACEHOLDER_ACCESS_TOKEN:
            raise ConfigError(
                "Mapbox access token is not configured. "
                "Set MAPBOX_ACCESS_TOKEN in the environment or .env file."
            )
        return token

