"""选牌状态 - 手动点选/扫描得到的一手牌（最多5张）"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from niuniu.engine.card import Card, create_deck
from niuniu.engine.evaluator import HAND_SIZE, evaluate_hand
from niuniu.engine.hand_type import EvaluationResult


@dataclass
class CardSelection:
    """当前选中的牌"""
    deck: List[Card] = field(default_factory=create_deck)
    selected: List[Card] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.selected)

    @property
    def remaining(self) -> int:
        """还差几张凑满一手"""
        return HAND_SIZE - self.count

    @property
    def is_complete(self) -> bool:
        return self.count == HAND_SIZE

    def is_selected(self, card: Card) -> bool:
        return card in self.selected

    def can_select(self, card: Card) -> bool:
        """已选满时，未选中的牌不可再点"""
        return self.is_selected(card) or not self.is_complete

    def toggle(self, card: Card) -> bool:
        """切换一张牌的选中状态，返回操作后是否选中"""
        if card in self.selected:
            self.selected.remove(card)
            return False
        if self.count < HAND_SIZE:
            self.selected.append(card)
            return True
        return False

    def clear(self) -> None:
        self.selected.clear()

    def select_cards(self, cards: Iterable[Card]) -> None:
        """整体替换选中的牌（如扫描结果），去重后最多保留5张"""
        chosen: List[Card] = []
        for card in cards:
            if card not in chosen:
                chosen.append(card)
            if len(chosen) == HAND_SIZE:
                break
        self.selected = chosen

    def ordered_cards(self) -> List[Card]:
        """按牌堆顺序排列选中的牌"""
        order = {c: i for i, c in enumerate(self.deck)}
        return sorted(self.selected, key=lambda c: order.get(c, len(order)))

    def result(self) -> Optional[EvaluationResult]:
        """未选满返回 None，选满则按牌堆顺序评估"""
        if not self.is_complete:
            return None
        return evaluate_hand(self.ordered_cards())

    def to_dict(self) -> dict:
        result = self.result()
        return {
            "selected": [c.id for c in self.ordered_cards()],
            "remaining": self.remaining,
            "result": result.to_dict() if result is not None else None,
        }
