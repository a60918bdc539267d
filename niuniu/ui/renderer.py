"""终端可视化渲染器 - 在终端中展示一手牌的评估结果"""

from typing import List, Optional, Sequence

from niuniu.engine.card import Card
from niuniu.engine.evaluator import HAND_SIZE
from niuniu.engine.hand_type import HandType, EvaluationResult
from niuniu.engine.values import is_flexible


# 颜色常量 (ANSI)
RED = "\033[91m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
MAGENTA = "\033[95m"
CYAN = "\033[96m"
BOLD = "\033[1m"
DIM = "\033[2m"
RESET = "\033[0m"

# 倍数档位颜色
TIER_COLOR = {
    7: MAGENTA,
    5: RED,
    3: YELLOW,
    2: GREEN,
    1: CYAN,
    0: DIM,
}

# 不展示分组明细的类别
_NO_BREAKDOWN = {HandType.FIVE_FACE_CARDS, HandType.NO_VALID_BASE}


class TerminalRenderer:
    """终端可视化渲染器"""

    def __init__(self, color: bool = True):
        self.color = color

    def _paint(self, text: str, *styles: str) -> str:
        if not self.color or not styles:
            return text
        return f"{''.join(styles)}{text}{RESET}"

    # ============================================================
    #  牌面渲染
    # ============================================================

    def format_card(self, card: Card, value: Optional[int] = None) -> str:
        """单张牌；3/6 带上实际取值，如 ♥3→6"""
        text = card.display
        if value is not None and is_flexible(card.rank):
            text += f"→{value}"
        return self._paint(text, RED) if card.is_red else text

    def format_cards(self, cards: Sequence[Card], result: Optional[EvaluationResult] = None) -> str:
        parts = []
        for c in cards:
            value = result.value_of(c) if result is not None else None
            parts.append(self.format_card(c, value))
        return " ".join(parts)

    @staticmethod
    def separator(char: str = "─", width: int = 40) -> str:
        return char * width

    # ============================================================
    #  结果展示
    # ============================================================

    def render_placeholder(self, selected_count: int) -> str:
        """未选满一手时的提示"""
        missing = max(HAND_SIZE - selected_count, 0)
        plural = "s" if missing != 1 else ""
        return f"  🃏 {self._paint(f'Select {missing} more card{plural}', DIM)}"

    def render_result(self, result: EvaluationResult) -> str:
        """渲染评估结果（倍数徽章 + 类别 + 分组明细）"""
        color = TIER_COLOR.get(result.multiplier, DIM)
        badge = self._paint(f" {result.multiplier}x ", color, BOLD)
        lines = [
            f"  {badge} {result.label}",
            f"  {self._paint(result.hero_name, BOLD)}",
        ]

        if result.type not in _NO_BREAKDOWN:
            lines.append(f"  {self.separator()}")
            base = self.format_cards(result.base, result)
            lines.append(f"  Base    : {base}  = {result.base_sum}")
            final2 = self.format_cards(result.final2, result)
            lines.append(f"  Final 2 : {final2}")
        return "\n".join(lines)

    def render(self, result: Optional[EvaluationResult], selected_count: int) -> str:
        if selected_count < HAND_SIZE or result is None:
            return self.render_placeholder(selected_count)
        return self.render_result(result)

    def show(self, cards: List[Card], result: Optional[EvaluationResult]) -> None:
        """打印手牌与结果"""
        print(f"\n  手牌: {self.format_cards(cards)}")
        print(self.render(result, len(cards)))
        print()
