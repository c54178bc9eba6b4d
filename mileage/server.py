"""対話用HTTPサーバー（FastAPI）"""
from typing import Any, Union

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .features.trip.services.route_mileage_service import RouteMileageService, parse_locations
from .infrastructure.config.settings import Settings
from .shared.exceptions.errors import ConfigError, MileageError, NotFoundError, ServiceError
from .shared.http.client import HTTPClient
from .shared.logging.config import get_logger, setup_logging

# 設定を読み込み
settings = Settings()

# ロギングを設定
setup_logging(level=settings.log_level)
logger = get_logger(__name__)

http_client = HTTPClient(timeout=settings.http_timeout)

app = FastAPI(
    title="Mileage Calculator",
    description="住所リストを順に巡るルートの区間ごとの走行距離（マイル）を計算するサービス",
    version="1.0.0",
)


class MileageRequest(BaseModel):
    """マイレージ計算リクエスト"""

    # 住所のリスト、または改行区切りのテキスト
    locations: Union[list[str], str] = Field(..., description="経由順の住所")
    round_trip: bool = Field(default=False, description="最初の住所に戻る区間を追加")

    def location_list(self) -> list[str]:
        if isinstance(self.locations, str):
            return parse_locations(self.locations)
        return parse_locations("\n".join(self.locations))


def get_route_mileage_service() -> RouteMileageService:
    """RouteMileageServiceを取得（テストで差し替え可能）"""
    return RouteMileageService(settings, http_client)


@app.on_event("startup")
async def startup_event() -> None:
    """起動時の処理"""
    logger.info("Application starting up")
    logger.info(f"Environment: {settings.environment}")


@app.on_event("shutdown")
async def shutdown_event() -> None:
    """シャットダウン時の処理"""
    http_client.close()
    logger.info("Application shutting down")


@app.get("/")
async def root() -> dict[str, Any]:
    """ルートエンドポイント"""
    return {
        "service": "Mileage Calculator",
        "version": "1.0.0",
        "status": "running",
        "environment": settings.environment,
    }


@app.get("/health")
async def health() -> dict[str, str]:
    """ヘルスチェックエンドポイント"""
    return {"status": "healthy"}


@app.post("/api/mileage")
async def calculate_mileage(
    body: MileageRequest,
    service: RouteMileageService = Depends(get_route_mileage_service),
) -> dict[str, Any]:
    """
    ルートのマイレージを計算

    Args:
        body: 住所リストと往復フラグ

    Returns:
        dict[str, Any]: 区間ごとの行と合計距離
    """
    locations = body.location_list()
    logger.info(f"Received mileage request: {len(locations)} locations (round_trip={body.round_trip})")

    report = await service.calculate(locations, round_trip=body.round_trip)
    return report.to_dict()


_ERROR_STATUS: dict[type[MileageError], int] = {
    ConfigError: 400,
    NotFoundError: 404,
    ServiceError: 502,
}


@app.exception_handler(MileageError)
async def mileage_exception_handler(request: Request, exc: MileageError) -> JSONResponse:
    """計算エラーをステータス表示用のメッセージとして返す"""
    status_code = next(
        (code for cls, code in _ERROR_STATUS.items() if isinstance(exc, cls)),
        500,
    )
    logger.error(f"Mileage calculation failed: {exc}")
    return JSONResponse(status_code=status_code, content={"message": str(exc)})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """グローバル例外ハンドラー"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"message": "Something went wrong."},
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
