# 牌型评估引擎模块
from .card import Card, Rank, Suit, create_deck, deal_hand, parse_card, sort_cards
from .values import resolve_base_value, enumerate_assignments
from .combinations import Split, generate_splits
from .hand_type import HandType, EvaluationResult, MULTIPLIERS, LABELS
from .evaluator import evaluate_hand
