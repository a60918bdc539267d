"""检测标签映射 - 把目标检测模型的类别下标转换为牌"""

from typing import Iterable, List, Optional

from niuniu.engine.card import Card, parse_card


# 扑克牌检测模型的52个类别标签（按字母序，点数+花色字母）
YOLO_LABELS = [
    "10C", "10D", "10H", "10S",
    "2C", "2D", "2H", "2S",
    "3C", "3D", "3H", "3S",
    "4C", "4D", "4H", "4S",
    "5C", "5D", "5H", "5S",
    "6C", "6D", "6H", "6S",
    "7C", "7D", "7H", "7S",
    "8C", "8D", "8H", "8S",
    "9C", "9D", "9H", "9S",
    "AC", "AD", "AH", "AS",
    "JC", "JD", "JH", "JS",
    "KC", "KD", "KH", "KS",
    "QC", "QD", "QH", "QS",
]


def label_to_card(label: str) -> Optional[Card]:
    """'10H' → ♥10；非法标签返回 None"""
    if "-" in label:
        return None
    return parse_card(label)


def dedupe_cards(cards: Iterable[Card], limit: Optional[int] = None) -> List[Card]:
    """去重并保持首次出现的顺序"""
    seen: List[Card] = []
    for card in cards:
        if card in seen:
            continue
        seen.append(card)
        if limit is not None and len(seen) >= limit:
            break
    return seen


def cards_from_detections(class_indices: Iterable[int], limit: Optional[int] = None) -> List[Card]:
    """
    检测结果（类别下标，按置信度排好序）→ 牌列表。
    跳过越界下标和无法解析的标签，同一张牌只保留一次。
    """
    cards: List[Card] = []
    for idx in class_indices:
        if not 0 <= idx < len(YOLO_LABELS):
            continue
        card = label_to_card(YOLO_LABELS[idx])
        if card is not None:
            cards.append(card)
    return dedupe_cards(cards, limit)
