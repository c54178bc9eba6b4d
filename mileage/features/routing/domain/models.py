"""ルーティング機能のドメインモデル"""
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Leg:
    """ルートの1区間（連続する2地点間）"""

    distance_m: float  # 距離（メートル）


@dataclass(frozen=True)
class Route:
    """Directions APIが返すルート（先頭の候補）"""

    distance_m: float  # 総距離（メートル）
    legs: list[Leg] = field(default_factory=list)  # 入力順の区間（空の場合あり）
