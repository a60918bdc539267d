"""点数取值 - 每张牌的计算点数，以及 3/6 互换的全部取值组合"""

from typing import Dict, List, Sequence

from .card import Card, Rank


# 默认（展示用）点数：3 显示为 6，6 显示为 3
BASE_VALUES = {
    Rank.ACE: 1,
    Rank.TWO: 2,
    Rank.THREE: 6,
    Rank.FOUR: 4,
    Rank.FIVE: 5,
    Rank.SIX: 3,
    Rank.SEVEN: 7,
    Rank.EIGHT: 8,
    Rank.NINE: 9,
    Rank.TEN: 10,
    Rank.JACK: 10,
    Rank.QUEEN: 10,
    Rank.KING: 10,
}

# 可互换点数的牌及其可取值
FLEXIBLE_RANKS = frozenset({Rank.THREE, Rank.SIX})
FLEXIBLE_VALUES = (3, 6)

ValueMap = Dict[Card, int]


def resolve_base_value(rank: Rank) -> int:
    """查表得到点数的默认值"""
    return BASE_VALUES[rank]


def is_flexible(rank: Rank) -> bool:
    return rank in FLEXIBLE_RANKS


def enumerate_assignments(cards: Sequence[Card]) -> List[ValueMap]:
    """
    枚举整手牌所有合法的取值方案。
    非 3/6 的牌取固定值；每张 3/6 独立取 3 或 6，
    用位掩码遍历 k 张可变牌的 2^k 种组合（该位为 0 取 3，为 1 取 6）。
    k == 0 时返回唯一的一种方案。
    """
    fixed = {c: resolve_base_value(c.rank) for c in cards if not is_flexible(c.rank)}
    flex_cards = [c for c in cards if is_flexible(c.rank)]

    low, high = FLEXIBLE_VALUES
    assignments: List[ValueMap] = []
    for mask in range(1 << len(flex_cards)):
        values = dict(fixed)
        for i, card in enumerate(flex_cards):
            values[card] = high if (mask >> i) & 1 else low
        assignments.append(values)
    return assignments
