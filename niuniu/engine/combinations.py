"""分组枚举 - 把5张牌拆成 3 张底牌 + 2 张尾牌的全部方式"""

from dataclasses import dataclass
from itertools import combinations
from typing import List, Sequence, Tuple

from .card import Card


@dataclass(frozen=True)
class Split:
    """一种分组：base 3 张（需凑成10的倍数），final2 2 张（决定倍数）"""
    base: Tuple[Card, Card, Card]
    final2: Tuple[Card, Card]


def generate_splits(cards: Sequence[Card]) -> List[Split]:
    """
    按组合下标顺序生成 C(5,3)=10 种分组。
    底牌下标 i<j<k，尾牌为剩余两张（保持输入顺序）。
    仅对恰好5张牌有定义，张数由上层检查。
    """
    splits: List[Split] = []
    for idx in combinations(range(len(cards)), 3):
        base = tuple(cards[i] for i in idx)
        final2 = tuple(c for i, c in enumerate(cards) if i not in idx)
        splits.append(Split(base=base, final2=final2))
    return splits
