"""牌型评估器 - 穷举分组 × 取值方案，选出倍数最高的结果"""

from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple

from .card import Card, Rank, Suit
from .combinations import Split, generate_splits
from .hand_type import HandType, EvaluationResult, MULTIPLIERS
from .values import ValueMap, enumerate_assignments, resolve_base_value


HAND_SIZE = 5


@dataclass(frozen=True)
class _Candidate:
    """一个有效底牌的候选结果"""
    type: HandType
    points: int
    split: Split
    values: ValueMap

    @property
    def multiplier(self) -> int:
        return MULTIPLIERS[self.type]


# ============================================================
#  辅助函数
# ============================================================

def is_face_card(card: Card) -> bool:
    return card.is_face


def is_ace_of_spades(card: Card) -> bool:
    return card.rank == Rank.ACE and card.suit == Suit.SPADES


def is_valid_base(base: Sequence[Card], values: ValueMap) -> bool:
    """底牌三张点数和为10的倍数"""
    return sum(values[c] for c in base) % 10 == 0


def score_final2(final2: Tuple[Card, Card], values: ValueMap) -> HandType:
    """
    按优先级判定尾牌类别（命中即止）：
    公牌+黑桃A > 同点数对子 > 点数和为10的倍数 > 无加成
    """
    a, b = final2

    if (is_face_card(a) and is_ace_of_spades(b)) or (is_face_card(b) and is_ace_of_spades(a)):
        return HandType.FACE_ACE_SPADES

    # 对子看原始点数，3 和 6 永远不算对子
    if a.rank == b.rank:
        return HandType.PAIR

    if (values[a] + values[b]) % 10 == 0:
        return HandType.SUM_TEN

    return HandType.VALID_BASE_NO_BONUS


def _no_valid_base() -> EvaluationResult:
    return EvaluationResult(type=HandType.NO_VALID_BASE)


# ============================================================
#  穷举搜索
# ============================================================

def _candidates(cards: Sequence[Card]) -> Iterator[_Candidate]:
    """遍历所有取值方案 × 分组，产出每个有效底牌的候选"""
    splits = generate_splits(cards)
    for values in enumerate_assignments(cards):
        for split in splits:
            if not is_valid_base(split.base, values):
                continue
            a, b = split.final2
            yield _Candidate(
                type=score_final2(split.final2, values),
                points=(values[a] + values[b]) % 10,
                split=split,
                values=values,
            )


def _is_better(candidate: _Candidate, best: Optional[_Candidate]) -> bool:
    """倍数高者胜；倍数相同时尾牌点数高者胜；再相同保留先找到的"""
    if best is None:
        return True
    if candidate.multiplier != best.multiplier:
        return candidate.multiplier > best.multiplier
    return candidate.points > best.points


def evaluate_hand(cards: Sequence[Card]) -> EvaluationResult:
    """
    评估一手牌。
    非5张返回无牛；五张全是公牌直接判五公；
    否则穷举全部候选，按倍数、尾牌点数取最优。
    """
    cards = list(cards)
    if len(cards) != HAND_SIZE:
        return _no_valid_base()

    if all(is_face_card(c) for c in cards):
        return EvaluationResult(
            type=HandType.FIVE_FACE_CARDS,
            base=tuple(cards[:3]),
            final2=tuple(cards[3:]),
            card_values={c.id: resolve_base_value(c.rank) for c in cards},
        )

    best: Optional[_Candidate] = None
    for candidate in _candidates(cards):
        if _is_better(candidate, best):
            best = candidate

    if best is None:
        return _no_valid_base()

    return EvaluationResult(
        type=best.type,
        base=best.split.base,
        final2=best.split.final2,
        card_values={c.id: v for c, v in best.values.items()},
    )
