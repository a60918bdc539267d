"""牌的定义 - 牛牛使用的52张扑克牌数据模型"""

from enum import Enum
from dataclasses import dataclass
from typing import List, Optional
import random


class Rank(str, Enum):
    """点数枚举（值即牌面文字）"""
    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"


class Suit(str, Enum):
    """花色枚举"""
    SPADES = "spades"
    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"


# 花色符号
SUIT_SYMBOLS = {
    Suit.SPADES: "♠",
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
}

# 公牌（J/Q/K）
FACE_RANKS = frozenset({Rank.JACK, Rank.QUEEN, Rank.KING})

# 点数排列顺序，A 最小
RANK_ORDER = {rank: i for i, rank in enumerate(Rank)}
SUIT_ORDER = {suit: i for i, suit in enumerate(Suit)}

# 识别标签中的花色字母
_SUIT_LETTERS = {"S": Suit.SPADES, "H": Suit.HEARTS, "D": Suit.DIAMONDS, "C": Suit.CLUBS}
_SUIT_BY_SYMBOL = {v: k for k, v in SUIT_SYMBOLS.items()}


@dataclass(frozen=True)
class Card:
    """一张扑克牌"""
    rank: Rank
    suit: Suit

    @property
    def id(self) -> str:
        """稳定标识，如 '10-hearts'"""
        return f"{self.rank.value}-{self.suit.value}"

    @property
    def display(self) -> str:
        return f"{SUIT_SYMBOLS[self.suit]}{self.rank.value}"

    @property
    def is_face(self) -> bool:
        return self.rank in FACE_RANKS

    @property
    def is_red(self) -> bool:
        return self.suit in (Suit.HEARTS, Suit.DIAMONDS)

    def __repr__(self) -> str:
        return self.display

    def __lt__(self, other: "Card") -> bool:
        return (RANK_ORDER[self.rank], SUIT_ORDER[self.suit]) < (
            RANK_ORDER[other.rank], SUIT_ORDER[other.suit]
        )


def create_deck() -> List[Card]:
    """创建一副52张标准扑克牌（按花色分组，组内 A..K）"""
    deck = [Card(rank=rank, suit=suit) for suit in Suit for rank in Rank]
    assert len(deck) == 52, f"牌数错误: {len(deck)}"
    return deck


def deal_hand(deck: Optional[List[Card]] = None, rng: Optional[random.Random] = None) -> List[Card]:
    """从牌堆中随机抽5张不重复的牌"""
    pool = create_deck() if deck is None else list(deck)
    rng = rng or random
    return rng.sample(pool, 5)


def sort_cards(cards: List[Card]) -> List[Card]:
    """按点数、花色排序（从小到大）"""
    return sorted(cards)


def _rank_from_text(text: str) -> Optional[Rank]:
    """点数文字 → Rank，大小写不敏感（'a' → Rank.ACE）"""
    try:
        return Rank(text.upper())
    except ValueError:
        return None


def parse_card(text: str) -> Optional[Card]:
    """
    解析单张牌文本，支持三种写法：
    - 标识: 'A-spades', '10-hearts'
    - 显示: '♠A', '♥10'（花色符号也可放在末尾，如 'A♠'）
    - 识别标签/简写: 'AS', '10h', 'qd'
    无法识别返回 None。
    """
    text = text.strip()
    if len(text) < 2:
        return None

    if "-" in text:
        rank_text, _, suit_text = text.partition("-")
        rank = _rank_from_text(rank_text)
        try:
            suit = Suit(suit_text.lower())
        except ValueError:
            return None
        return Card(rank, suit) if rank is not None else None

    if text[0] in _SUIT_BY_SYMBOL:
        rank = _rank_from_text(text[1:])
        return Card(rank, _SUIT_BY_SYMBOL[text[0]]) if rank is not None else None

    suit = _SUIT_BY_SYMBOL.get(text[-1]) or _SUIT_LETTERS.get(text[-1].upper())
    rank = _rank_from_text(text[:-1])
    if suit is None or rank is None:
        return None
    return Card(rank, suit)
