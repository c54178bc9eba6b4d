"""マイレージ表の組み立てと表示"""

from typing import Sequence

from ..domain.models import MileageReport, MileageRow
from ....shared.logging.config import get_logger
from ....shared.utils.units import format_miles, meters_to_miles
from ...geocoding.domain.models import GeocodedAddress
from ...routing.domain.models import Route

logger = get_logger(__name__)


def build_report(stops: Sequence[GeocodedAddress], route: Route) -> MileageReport:
    """
    ルート検索結果から区間ごとのマイレージ表を組み立てる

    区間情報が返らなかった場合は、連続する地点ごとに1行ずつ
    ルート全体の距離をそのまま割り当てる（按分しない）

    Args:
        stops: 経由順のジオコーディング済み住所
        route: Directions APIのルート

    Returns:
        MileageReport: マイレージ表
    """
    total_miles = meters_to_miles(route.distance_m)

    if not route.legs:
        logger.warning("Route has no legs; attributing total distance to each leg")
        rows = [
            MileageRow(
                index=i + 1,
                origin=stops[i].address,
                destination=stops[i + 1].address,
                miles=total_miles,
            )
            for i in range(len(stops) - 1)
        ]
        return MileageReport(rows=rows, total_miles=total_miles, synthetic_legs=True)

    rows = [
        MileageRow(
            index=idx + 1,
            origin=stops[idx].address,
            destination=stops[idx + 1].address,
            miles=meters_to_miles(leg.distance_m),
        )
        for idx, leg in enumerate(route.legs)
    ]
    return MileageReport(rows=rows, total_miles=total_miles)


def render_text_table(report: MileageReport) -> str:
    """マイレージ表をプレーンテキストで描画（CLI用）"""
    headers = ("#", "From", "To", "Miles")
    body = [
        (str(row.index), row.origin, row.destination, format_miles(row.miles))
        for row in report.rows
    ]

    widths = [len(h) for h in headers]
    for line in body:
        widths = [max(w, len(cell)) for w, cell in zip(widths, line)]

    def fmt(cells: Sequence[str]) -> str:
        return "  ".join(
            cell.rjust(w) if i in (0, 3) else cell.ljust(w)
            for i, (cell, w) in enumerate(zip(cells, widths))
        ).rstrip()

    lines = [fmt(headers), fmt(["-" * w for w in widths])]
    lines.extend(fmt(line) for line in body)
    lines.append("")
    lines.append(f"Total distance: {format_miles(report.total_miles)} miles")
    return "\n".join(lines)
