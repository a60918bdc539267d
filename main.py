"""牛牛计分 - 命令行入口"""

import argparse
import json
import logging
import random
from typing import List, Optional

from niuniu.engine.card import Card, deal_hand, parse_card
from niuniu.engine.evaluator import evaluate_hand
from niuniu.ui.renderer import TerminalRenderer


def parse_hand(texts: List[str]) -> Optional[List[Card]]:
    """解析命令行给出的牌（支持空格分隔的单个字符串），非法时返回 None"""
    cards: List[Card] = []
    for chunk in texts:
        for t in chunk.replace(",", " ").split():
            card = parse_card(t)
            if card is None:
                return None
            cards.append(card)
    return cards


def run_one_hand(cards: List[Card], renderer: TerminalRenderer, as_json: bool = False) -> None:
    """评估并输出一手牌"""
    result = evaluate_hand(cards)
    if as_json:
        payload = {"cards": [c.id for c in cards], "result": result.to_dict()}
        print(json.dumps(payload, ensure_ascii=False))
    else:
        renderer.show(cards, result)


def main(argv: Optional[List[str]] = None) -> None:
    """命令行入口"""
    parser = argparse.ArgumentParser(description="牛牛 (Niu Niu) 计分器")
    parser.add_argument("cards", nargs="*", help="手牌，如 A♠ 4♦ 5♣ J♠ Q♥ 或 AS 4D 5C JS QH")
    parser.add_argument("--cards", dest="card_string", default="", help="以一个字符串给出手牌")
    parser.add_argument("--random", action="store_true", help="随机发一手牌")
    parser.add_argument("--rounds", type=int, default=1, help="随机模式下的手数 (默认1)")
    parser.add_argument("--seed", type=int, default=None, help="随机种子")
    parser.add_argument("--json", action="store_true", help="以 JSON 输出")
    parser.add_argument("--no-color", action="store_true", help="关闭终端颜色")
    parser.add_argument("-v", "--verbose", action="store_true", help="输出调试日志")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    renderer = TerminalRenderer(color=not args.no_color)

    if args.random:
        rng = random.Random(args.seed)
        for i in range(args.rounds):
            if args.rounds > 1 and not args.json:
                print(f"{'=' * 40}\n  第 {i + 1}/{args.rounds} 手")
            run_one_hand(deal_hand(rng=rng), renderer, args.json)
        return

    texts = list(args.cards)
    if args.card_string:
        texts.append(args.card_string)
    if not texts:
        parser.error("请给出手牌，或使用 --random")

    cards = parse_hand(texts)
    if cards is None:
        parser.error(f"无法解析手牌: {' '.join(texts)}")
    if len(set(cards)) != len(cards):
        parser.error("手牌中有重复的牌")

    run_one_hand(cards, renderer, args.json)


if __name__ == "__main__":
    main()
