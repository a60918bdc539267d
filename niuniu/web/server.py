"""Web 后端服务 - 评估接口、识牌接口，以及实时选牌的 WebSocket"""

import json
import logging
from typing import List

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from pydantic import BaseModel

from niuniu.engine.card import Card, create_deck, parse_card
from niuniu.engine.evaluator import HAND_SIZE, evaluate_hand
from niuniu.game.selection import CardSelection
from niuniu.recognition.llm_recognizer import NoCardsDetectedError, create_recognizer_from_env

logger = logging.getLogger(__name__)


# ============================================================
#  请求体
# ============================================================

class EvaluateRequest(BaseModel):
    cards: List[str]


class RecognizeRequest(BaseModel):
    image: str                       # base64 编码的图片
    mime_type: str = "image/jpeg"


# ============================================================
#  序列化工具
# ============================================================

def card_to_dict(c: Card) -> dict:
    """将 Card 序列化为前端可用的 dict"""
    return {
        "id": c.id,
        "rank": c.rank.value,
        "suit": c.suit.value,
        "display": c.display,
    }


def parse_card_texts(texts: List[str]) -> List[Card]:
    """解析牌文本列表，非法或重复时抛 400"""
    cards: List[Card] = []
    for t in texts:
        card = parse_card(t)
        if card is None:
            raise HTTPException(status_code=400, detail=f"无法解析卡牌 '{t}'")
        if card in cards:
            raise HTTPException(status_code=400, detail=f"重复的卡牌 '{t}'")
        cards.append(card)
    return cards


# ============================================================
#  FastAPI 应用
# ============================================================

app = FastAPI(title="牛牛计分")
app.state.recognizer = create_recognizer_from_env()


@app.get("/api/deck")
async def get_deck():
    """返回整副牌"""
    return {"cards": [card_to_dict(c) for c in create_deck()]}


@app.post("/api/evaluate")
async def evaluate(req: EvaluateRequest):
    """评估一手牌（非5张返回无牛）"""
    cards = parse_card_texts(req.cards)
    return evaluate_hand(cards).to_dict()


@app.post("/api/recognize")
async def recognize(req: RecognizeRequest):
    """识别图片中的牌；恰好一手时附带评估结果，识牌器未配置返回 503"""
    recognizer = app.state.recognizer
    if not recognizer.enabled:
        raise HTTPException(status_code=503, detail="识牌服务未配置 (NIUNIU_VISION_API_KEY)")
    try:
        cards = await recognizer.recognize_cards(req.image, req.mime_type)
    except NoCardsDetectedError as e:
        raise HTTPException(status_code=422, detail=str(e))

    result = evaluate_hand(cards) if len(cards) == HAND_SIZE else None
    return {
        "cards": [card_to_dict(c) for c in cards],
        "result": result.to_dict() if result is not None else None,
    }


@app.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    """WebSocket 端点：每个连接维护一份选牌状态，每条指令回推最新结果"""
    await ws.accept()
    selection = CardSelection()
    try:
        while True:
            data = await ws.receive_text()
            try:
                msg = json.loads(data)
            except json.JSONDecodeError:
                await ws.send_text(json.dumps({"type": "error", "detail": "非法 JSON"}, ensure_ascii=False))
                continue

            error = _apply_action(selection, msg)
            if error:
                reply = {"type": "error", "detail": error}
            else:
                reply = {"type": "selection", **selection.to_dict()}
            await ws.send_text(json.dumps(reply, ensure_ascii=False))
    except WebSocketDisconnect:
        logger.info("WebSocket 连接断开")


def _apply_action(selection: CardSelection, msg: dict) -> str:
    """执行一条选牌指令，返回错误描述（成功时为空串）"""
    action = msg.get("action") if isinstance(msg, dict) else None

    if action == "clear":
        selection.clear()
        return ""

    if action == "toggle":
        card = parse_card(str(msg.get("card", "")))
        if card is None:
            return f"无法解析卡牌 '{msg.get('card')}'"
        selection.toggle(card)
        return ""

    if action == "select":
        texts = msg.get("cards", [])
        if not isinstance(texts, list):
            return "cards 字段必须是数组"
        cards = [parse_card(str(t)) for t in texts]
        if any(c is None for c in cards):
            return "存在无法解析的卡牌"
        selection.select_cards(cards)
        return ""

    if action == "state":
        return ""

    logger.warning("未知 action=%s", action)
    return f"未知 action '{action}'"
