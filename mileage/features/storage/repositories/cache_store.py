"""JSONファイルによるキャッシュストア"""

import json
from pathlib import Path
from typing import Any, Optional

from ....shared.exceptions.errors import StorageError
from ....shared.logging.config import get_logger

logger = get_logger(__name__)


class JsonCacheStore:
    """
    フラットなキー・値マッピングをJSONファイルに永続化するストア

    - load(): ファイル全体をメモリに読み込む（ファイルがなければ空）
    - save(): メモリ上の内容でファイル全体を上書きする
    - 有効期限・バージョン管理なし（無効化はファイル削除で行う）
    - ロックやアトミックな書き込みは行わない
    """

    def __init__(self, path: str | Path) -> None:
        """
        Args:
            path: キャッシュファイルのパス
        """
        self.path = Path(path)
        self.data: dict[str, Any] = {}

    def load(self) -> dict[str, Any]:
        """
        キャッシュファイルを読み込む

        Returns:
            dict[str, Any]: 読み込んだマッピング（ファイルがなければ空）

        Raises:
            StorageError: ファイルが壊れている場合
        """
        if not self.path.exists():
            logger.info(f"Cache file not found, starting empty: {self.path}")
            self.data = {}
            return self.data

        try:
            with self.path.open("r", encoding="utf-8") as f:
                loaded = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"Failed to read cache file {self.path}: {e}") from e

        if not isinstance(loaded, dict):
            raise StorageError(f"Cache file {self.path} does not contain a JSON object")

        self.data = loaded
        logger.info(f"Loaded {len(self.data)} entries from {self.path}")
        return self.data

    def save(self) -> None:
        """
        キャッシュ全体をファイルに書き出す（既存の内容は上書き）

        Raises:
            StorageError: 書き込みに失敗した場合
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as f:
                json.dump(self.data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise StorageError(f"Failed to write cache file {self.path}: {e}") from e

        logger.info(f"Saved {len(self.data)} entries to {self.path}")

    def get(self, key: str) -> Optional[Any]:
        """キーの値を取得（なければNone）"""
        return self.data.get(key)

    def set(self, key: str, value: Any) -> None:
        """キーに値を設定（永続化はsave()で行う）"""
        self.data[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self.data

    def __len__(self) -> int:
        return len(self.data)
