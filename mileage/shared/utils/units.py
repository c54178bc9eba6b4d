"""距離の単位変換ユーティリティ"""

METERS_PER_MILE = 1609.344


def meters_to_miles(meters: float) -> float:
    """メートルをマイルに変換"""
    return meters / METERS_PER_MILE


def format_miles(miles: float) -> str:
    """マイルを小数点以下2桁の文字列に整形"""
    return f"{miles:.2f}"


def round_miles(meters: float) -> float:
    """
    メートルをマイルに変換し、小数点以下2桁に丸めた数値を返す

    マイレージ表に書き出す値はこの形式
    """
    return float(format_miles(meters_to_miles(meters)))
