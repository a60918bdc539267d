"""牌型定义 - 牛牛6种结果类别、倍数表与评估结果"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, Tuple

from .card import Card


class HandType(str, Enum):
    """结果类别枚举"""
    FIVE_FACE_CARDS = "five_face_cards"          # 五公
    FACE_ACE_SPADES = "face_ace_spades"          # 公加黑桃A
    PAIR = "pair"                                # 对子
    SUM_TEN = "sum_ten"                          # 凑十
    VALID_BASE_NO_BONUS = "valid_base_no_bonus"  # 有牛
    NO_VALID_BASE = "no_valid_base"              # 无牛


# 倍数只由类别决定
MULTIPLIERS = {
    HandType.FIVE_FACE_CARDS: 7,
    HandType.FACE_ACE_SPADES: 5,
    HandType.PAIR: 3,
    HandType.SUM_TEN: 2,
    HandType.VALID_BASE_NO_BONUS: 1,
    HandType.NO_VALID_BASE: 0,
}

LABELS = {
    HandType.FIVE_FACE_CARDS: "五公 (Five Face Cards)",
    HandType.FACE_ACE_SPADES: "公加黑桃A (Face + A♠)",
    HandType.PAIR: "對子 (Pair)",
    HandType.SUM_TEN: "湊十 (Sum to 10)",
    HandType.VALID_BASE_NO_BONUS: "有牛 (Valid Base)",
    HandType.NO_VALID_BASE: "無牛 (No Valid Base)",
}

# 大字展示名；有牛时运行时算成 牛X
HERO_NAMES = {
    HandType.FIVE_FACE_CARDS: "五公",
    HandType.FACE_ACE_SPADES: "公加黑桃A",
    HandType.PAIR: "對子",
    HandType.SUM_TEN: "湊十",
    HandType.VALID_BASE_NO_BONUS: "",
    HandType.NO_VALID_BASE: "無牛",
}


@dataclass(frozen=True)
class EvaluationResult:
    """一手牌的评估结果"""
    type: HandType
    base: Tuple[Card, ...] = ()
    final2: Tuple[Card, ...] = ()
    card_values: Dict[str, int] = field(default_factory=dict)  # card.id → 计算点数

    @property
    def multiplier(self) -> int:
        return MULTIPLIERS[self.type]

    @property
    def label(self) -> str:
        return LABELS[self.type]

    def value_of(self, card: Card) -> int:
        return self.card_values[card.id]

    @property
    def base_sum(self) -> int:
        return sum(self.value_of(c) for c in self.base)

    @property
    def points(self) -> int:
        """尾牌点数和的个位"""
        return sum(self.value_of(c) for c in self.final2) % 10

    @property
    def hero_name(self) -> str:
        name = HERO_NAMES[self.type]
        if name:
            return name
        return "牛牛" if self.points == 0 else f"牛{self.points}"

    def to_dict(self) -> dict:
        """序列化为前端/命令行可用的 dict"""
        return {
            "type": self.type.value,
            "multiplier": self.multiplier,
            "label": self.label,
            "hero_name": self.hero_name,
            "points": self.points,
            "base": [c.id for c in self.base],
            "final2": [c.id for c in self.final2],
            "card_values": dict(self.card_values),
        }

    def __repr__(self) -> str:
        base = " ".join(c.display for c in self.base)
        final2 = " ".join(c.display for c in self.final2)
        return f"[{self.type.value} x{self.multiplier}] {base} | {final2}"
