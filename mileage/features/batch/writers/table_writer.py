"""マイレージ表モジュールの書き出し"""

import json
from pathlib import Path

from ....shared.exceptions.errors import ConfigError, StorageError
from ....shared.logging.config import get_logger

logger = get_logger(__name__)

CONSTANT_NAME = "MILEAGE_TABLE"


def render_js_module(table: dict[str, float]) -> str:
    """ES Module形式（export default）のソースを生成"""
    return (
        "// Auto-generated mileage table\n\n"
        f"const {CONSTANT_NAME} = {json.dumps(table, indent=2)};\n\n"
        f"export default {CONSTANT_NAME};\n"
    )


def render_python_module(table: dict[str, float]) -> str:
    """Pythonモジュール形式のソースを生成"""
    return (
        '"""Auto-generated mileage table"""\n\n'
        f"{CONSTANT_NAME} = {json.dumps(table, indent=2)}\n"
    )


_RENDERERS = {
    ".js": render_js_module,
    ".mjs": render_js_module,
    ".py": render_python_module,
}


def validate_output_path(path: str | Path) -> None:
    """出力先の拡張子が対応形式か確認（API呼び出し前のチェック用）"""
    suffix = Path(path).suffix.lower()
    if suffix not in _RENDERERS:
        raise ConfigError(
            f"Unsupported output file type: {Path(path).name} "
            f"(expected one of {', '.join(sorted(_RENDERERS))})"
        )


def write_mileage_table(table: dict[str, float], path: str | Path) -> Path:
    """
    マイレージ表をソースファイルとして書き出す

    形式は拡張子で決定（.js / .mjs / .py）

    Args:
        table: ペアキー → マイル
        path: 出力先

    Returns:
        Path: 書き出したファイルのパス

    Raises:
        ConfigError: 未対応の拡張子の場合
        StorageError: 書き込みに失敗した場合
    """
    validate_output_path(path)
    output_path = Path(path)
    renderer = _RENDERERS[output_path.suffix.lower()]

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(renderer(table), encoding="utf-8")
    except OSError as e:
        raise StorageError(f"Failed to write mileage table {output_path}: {e}") from e

    logger.info(f"Mileage table saved to {output_path} ({len(table)} entries)")
    return output_path
