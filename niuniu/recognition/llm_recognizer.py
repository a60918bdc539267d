"""视觉大模型识牌 - 把一张照片交给多模态 LLM，解析出牌面"""

import asyncio
import json
import logging
import os
from typing import List, Optional

from openai import AsyncOpenAI

from niuniu.engine.card import Card, parse_card
from niuniu.engine.evaluator import HAND_SIZE
from niuniu.recognition.labels import dedupe_cards

logger = logging.getLogger(__name__)

# 超时上限（秒）
RECOGNITION_TIMEOUT = 15

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4o-mini"

NO_CARDS_MESSAGE = "No cards detected. Make sure cards are clearly visible with good lighting."

RECOGNITION_PROMPT = """你是一个扑克牌识别助手。请识别图片中所有清晰可见的扑克牌（不含大小王）。

【牌面写法】点数 + 花色字母，例如 "AS"(黑桃A)、"10H"(红桃10)、"QD"(方块Q)、"7C"(梅花7)。
点数: A 2 3 4 5 6 7 8 9 10 J Q K；花色: S=黑桃 H=红桃 D=方块 C=梅花。

【输出格式】严格返回 JSON，不要输出其他内容：
{
  "cards": ["AS", "10H"]
}
看不清或没有牌时返回 {"cards": []}。"""


class NoCardsDetectedError(Exception):
    """图片中没有识别出任何牌"""

    def __init__(self, message: str = NO_CARDS_MESSAGE):
        super().__init__(message)


# ============================================================
#  JSON 响应解析
# ============================================================

def _extract_json(text: str) -> Optional[dict]:
    """从 LLM 返回文本中提取 JSON 对象（兼容 markdown 代码块包裹）"""
    text = text.strip()
    if text.startswith("```"):
        lines = [l for l in text.split("\n") if not l.strip().startswith("```")]
        text = "\n".join(lines).strip()
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        # 尝试截取第一个 { 到最后一个 }
        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end <= start:
            return None
        try:
            data = json.loads(text[start:end + 1])
        except json.JSONDecodeError:
            return None
    return data if isinstance(data, dict) else None


def parse_recognition_response(raw: str, limit: int = HAND_SIZE) -> List[Card]:
    """解析识牌响应，丢弃无法解析的牌文本，去重后最多保留 limit 张"""
    data = _extract_json(raw)
    if data is None:
        logger.warning("识牌响应 JSON 解析失败: %s", raw[:200])
        return []

    texts = data.get("cards", [])
    if not isinstance(texts, list):
        logger.warning("识牌响应 cards 字段不是数组")
        return []

    cards: List[Card] = []
    for t in texts:
        card = parse_card(str(t))
        if card is None:
            logger.warning("无法解析卡牌 '%s'", t)
            continue
        cards.append(card)
    return dedupe_cards(cards, limit)


# ============================================================
#  LlmCardRecognizer 类
# ============================================================

class LlmCardRecognizer:
    """基于多模态 LLM 的识牌器。未配置 API key 时不调用接口，只返回空结果。"""

    def __init__(
        self,
        api_key: str = "",
        base_url: str = DEFAULT_BASE_URL,
        model: str = DEFAULT_MODEL,
        timeout: float = RECOGNITION_TIMEOUT,
        client=None,
    ):
        self.model = model
        self.timeout = timeout

        if client is not None:
            self._client = client
        elif api_key:
            self._client = AsyncOpenAI(api_key=api_key, base_url=base_url)
        else:
            self._client = None
            logger.warning("LlmCardRecognizer: 未配置 API key，识牌功能不可用")

    @property
    def enabled(self) -> bool:
        return self._client is not None

    async def _call_llm(self, image_b64: str, mime_type: str) -> Optional[str]:
        """调用 LLM API，返回文本响应。超时或异常返回 None。"""
        if self._client is None:
            return None
        try:
            resp = await asyncio.wait_for(
                self._client.chat.completions.create(
                    model=self.model,
                    messages=[{
                        "role": "user",
                        "content": [
                            {"type": "text", "text": RECOGNITION_PROMPT},
                            {
                                "type": "image_url",
                                "image_url": {"url": f"data:{mime_type};base64,{image_b64}"},
                            },
                        ],
                    }],
                    temperature=0,
                    max_tokens=128,
                ),
                timeout=self.timeout,
            )
            content = resp.choices[0].message.content or ""
            logger.info("LlmCardRecognizer 响应: %s", content[:200])
            return content
        except asyncio.TimeoutError:
            logger.warning("LlmCardRecognizer: LLM 调用超时(%ss)", self.timeout)
            return None
        except Exception as e:
            logger.warning("LlmCardRecognizer: LLM 调用异常: %s", e)
            return None

    async def detect_cards(self, image_b64: str, mime_type: str = "image/jpeg") -> List[Card]:
        """识别图片中的牌，失败时返回空列表"""
        raw = await self._call_llm(image_b64, mime_type)
        if raw is None:
            return []
        return parse_recognition_response(raw)

    async def recognize_cards(self, image_b64: str, mime_type: str = "image/jpeg") -> List[Card]:
        """同 detect_cards，但一张牌都没识别到时抛出 NoCardsDetectedError"""
        cards = await self.detect_cards(image_b64, mime_type)
        if not cards:
            raise NoCardsDetectedError()
        return cards


# ============================================================
#  工厂函数：从环境变量创建识牌器
# ============================================================

def create_recognizer_from_env() -> LlmCardRecognizer:
    """根据环境变量创建识牌器。

    环境变量：
      NIUNIU_VISION_API_KEY / NIUNIU_VISION_BASE_URL / NIUNIU_VISION_MODEL
    未配置 API key 时识牌器处于禁用状态。
    """
    return LlmCardRecognizer(
        api_key=os.getenv("NIUNIU_VISION_API_KEY", ""),
        base_url=os.getenv("NIUNIU_VISION_BASE_URL", DEFAULT_BASE_URL),
        model=os.getenv("NIUNIU_VISION_MODEL", DEFAULT_MODEL),
    )
