"""CLIエントリーポイント"""
import argparse
import asyncio
import sys
from typing import Optional

from .features.batch.orchestrator import BatchOrchestrator
from .features.trip.services.presentation import render_text_table
from .features.trip.services.route_mileage_service import RouteMileageService, parse_locations
from .infrastructure.config.settings import Settings
from .shared.exceptions.errors import MileageError
from .shared.http.client import HTTPClient
from .shared.logging.config import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """引数パーサーを作成"""
    parser = argparse.ArgumentParser(
        description="Mapboxを使った走行距離（マイル）計算ツール"
    )

    parser.add_argument(
        "--env-file",
        type=str,
        default=".env",
        help="環境変数ファイルのパス（デフォルト: .env）",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="ログレベル",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    table_parser = subparsers.add_parser(
        "table",
        help="固定ロケーション間の全ペアのマイレージ表を生成",
    )
    table_parser.add_argument(
        "--output",
        "-o",
        type=str,
        help="出力ファイル（.js または .py、デフォルト: 設定値）",
    )
    table_parser.add_argument(
        "--no-progress",
        action="store_true",
        help="プログレスバーを表示しない",
    )

    route_parser = subparsers.add_parser(
        "route",
        help="指定した住所を順に巡るルートの区間ごとの距離を表示",
    )
    route_parser.add_argument(
        "locations",
        nargs="*",
        help="経由順の住所（省略時は標準入力から1行1件で読み込み）",
    )
    route_parser.add_argument(
        "--round-trip",
        action="store_true",
        help="最初の住所に戻る区間を追加",
    )

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """
    メインエントリーポイント

    Returns:
        int: 終了コード（0: 成功, 1: 失敗）
    """
    args = build_parser().parse_args(argv)

    try:
        settings = Settings(_env_file=args.env_file)

        if args.log_level:
            settings.log_level = args.log_level

        setup_logging(level=settings.log_level)

        logger.info(f"Environment: {settings.environment}")
        logger.info(f"Project: {settings.project_name}")

        if args.command == "table":
            return _run_table(settings, args.output, show_progress=not args.no_progress)
        return _run_route(settings, args.locations, args.round_trip)

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130  # SIGINT
    except MileageError as e:
        logger.error(f"Application failed: {e}")
        return 1
    except Exception as e:
        logger.error(f"Application failed: {e}", exc_info=True)
        return 1


def _run_table(settings: Settings, output: Optional[str], show_progress: bool) -> int:
    logger.info("=== Starting mileage table generation ===")

    orchestrator = BatchOrchestrator(settings)
    try:
        result = orchestrator.run_mileage_table(output_file=output, show_progress=show_progress)
    finally:
        orchestrator.close()

    logger.info(f"Done! Mileage table saved to {result.output_path}")
    return 0


def _run_route(settings: Settings, locations: list[str], round_trip: bool) -> int:
    if not locations:
        locations = parse_locations(sys.stdin.read())

    with HTTPClient(timeout=settings.http_timeout) as http_client:
        service = RouteMileageService(settings, http_client)
        report = asyncio.run(service.calculate(locations, round_trip=round_trip))

    print(render_text_table(report))
    return 0


if __name__ == "__main__":
    sys.exit(main())
