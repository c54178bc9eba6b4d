"""ルートマイレージ表示用のドメインモデル"""
from dataclasses import dataclass, field
from typing import Any

from ....shared.utils.units import format_miles


@dataclass(frozen=True)
class MileageRow:
    """マイレージ表の1行（1区間）"""

    index: int  # 1始まりの区間番号
    origin: str  # 出発地の住所
    destination: str  # 到着地の住所
    miles: float  # 区間距離（マイル）

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "origin": self.origin,
            "destination": self.destination,
            "miles": format_miles(self.miles),
        }


@dataclass
class MileageReport:
    """ルート全体のマイレージ"""

    rows: list[MileageRow] = field(default_factory=list)
    total_miles: float = 0.0
    # 区間情報がなく総距離で代用した場合True
    synthetic_legs: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "rows": [row.to_dict() for row in self.rows],
            "total_miles": format_miles(self.total_miles),
            "synthetic_legs": self.synthetic_legs,
        }
