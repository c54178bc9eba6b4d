"""カスタム例外定義"""


class MileageError(Exception):
    """マイレージ計算の基底例外"""

    pass


class ConfigError(MileageError):
    """設定・入力エラー（ネットワーク呼び出し前に検出）"""

    pass


class NotFoundError(MileageError):
    """ジオコーディング結果が0件"""

    pass


class ServiceError(MileageError):
    """外部API（Mapbox）のエラー"""

    pass


class StorageError(MileageError):
    """キャッシュファイル関連のエラー"""

    pass
