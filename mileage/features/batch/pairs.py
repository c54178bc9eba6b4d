"""ロケーションのペア列挙"""

from typing import Iterator, Sequence

PAIR_SEPARATOR = "|"


def pair_key(a: str, b: str) -> str:
    """2つのロケーションIDからペアキー（"A|B"）を作成"""
    return f"{a}{PAIR_SEPARATOR}{b}"


def enumerate_pairs(keys: Sequence[str]) -> Iterator[tuple[str, str]]:
    """
    全ての順序なしペアを1回ずつ列挙

    (i, j) を i < j の昇順で返す。自己ペア・重複はなし
    """
    for i in range(len(keys)):
        for j in range(i + 1, len(keys)):
            yield keys[i], keys[j]
