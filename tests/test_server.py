"""Web 接口测试（FastAPI TestClient）"""

import pytest
from fastapi.testclient import TestClient

from niuniu.engine.card import Card, Rank, Suit
from niuniu.recognition.llm_recognizer import LlmCardRecognizer, NoCardsDetectedError
from niuniu.web.server import app


PAIR_IDS = ["J-spades", "Q-hearts", "K-diamonds", "7-clubs", "7-spades"]


class _StubRecognizer:
    """返回固定结果的识牌器"""

    enabled = True

    def __init__(self, cards):
        self.cards = cards

    async def recognize_cards(self, image_b64, mime_type="image/jpeg"):
        if not self.cards:
            raise NoCardsDetectedError()
        return self.cards


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def stub_recognizer():
    original = app.state.recognizer
    yield lambda cards: setattr(app.state, "recognizer", _StubRecognizer(cards))
    app.state.recognizer = original


# ============================================================
#  REST 接口
# ============================================================

class TestRest:

    def test_deck(self, client):
        resp = client.get("/api/deck")
        assert resp.status_code == 200
        cards = resp.json()["cards"]
        assert len(cards) == 52
        assert cards[0] == {"id": "A-spades", "rank": "A", "suit": "spades", "display": "♠A"}

    def test_evaluate_pair(self, client):
        resp = client.post("/api/evaluate", json={"cards": PAIR_IDS})
        assert resp.status_code == 200
        body = resp.json()
        assert body["type"] == "pair"
        assert body["multiplier"] == 3
        assert sorted(body["final2"]) == ["7-clubs", "7-spades"]
        assert body["card_values"]["J-spades"] == 10

    def test_evaluate_accepts_mixed_notation(self, client):
        resp = client.post("/api/evaluate", json={"cards": ["AH", "♦4", "5-clubs", "js", "QH"]})
        assert resp.status_code == 200
        assert resp.json()["type"] == "sum_ten"

    def test_evaluate_short_hand(self, client):
        resp = client.post("/api/evaluate", json={"cards": ["AH", "2H", "3H"]})
        assert resp.status_code == 200
        assert resp.json()["type"] == "no_valid_base"
        assert resp.json()["multiplier"] == 0

    def test_evaluate_unknown_card(self, client):
        resp = client.post("/api/evaluate", json={"cards": ["ZZ"]})
        assert resp.status_code == 400

    def test_evaluate_duplicate_card(self, client):
        resp = client.post("/api/evaluate", json={"cards": ["AS", "A-spades"]})
        assert resp.status_code == 400

    def test_recognize_five_cards(self, client, stub_recognizer):
        stub_recognizer([
            Card(Rank.JACK, Suit.SPADES), Card(Rank.QUEEN, Suit.HEARTS),
            Card(Rank.KING, Suit.DIAMONDS), Card(Rank.SEVEN, Suit.CLUBS),
            Card(Rank.SEVEN, Suit.SPADES),
        ])
        resp = client.post("/api/recognize", json={"image": "aGk="})
        assert resp.status_code == 200
        body = resp.json()
        assert len(body["cards"]) == 5
        assert body["result"]["type"] == "pair"

    def test_recognize_partial(self, client, stub_recognizer):
        stub_recognizer([Card(Rank.ACE, Suit.SPADES)])
        resp = client.post("/api/recognize", json={"image": "aGk="})
        assert resp.status_code == 200
        assert resp.json()["result"] is None

    def test_recognize_nothing(self, client, stub_recognizer):
        stub_recognizer([])
        resp = client.post("/api/recognize", json={"image": "aGk="})
        assert resp.status_code == 422
        assert "No cards detected" in resp.json()["detail"]

    def test_recognize_without_api_key(self, client):
        """识牌器未配置时返回 503，而不是“未识别到牌”"""
        original = app.state.recognizer
        app.state.recognizer = LlmCardRecognizer(api_key="")
        try:
            resp = client.post("/api/recognize", json={"image": "aGk="})
        finally:
            app.state.recognizer = original
        assert resp.status_code == 503
        assert "NIUNIU_VISION_API_KEY" in resp.json()["detail"]


# ============================================================
#  WebSocket 选牌
# ============================================================

class TestWebSocket:

    def test_toggle_until_complete(self, client):
        with client.websocket_connect("/ws") as ws:
            for i, card_id in enumerate(PAIR_IDS):
                ws.send_json({"action": "toggle", "card": card_id})
                msg = ws.receive_json()
                assert msg["type"] == "selection"
                assert msg["remaining"] == 4 - i
            assert msg["result"]["type"] == "pair"

            ws.send_json({"action": "toggle", "card": "7-spades"})
            msg = ws.receive_json()
            assert msg["remaining"] == 1
            assert msg["result"] is None

    def test_select_and_clear(self, client):
        with client.websocket_connect("/ws") as ws:
            ws.send_json({"action": "select", "cards": PAIR_IDS})
            assert ws.receive_json()["result"]["multiplier"] == 3
            ws.send_json({"action": "clear"})
            msg = ws.receive_json()
            assert msg["selected"] == []
            assert msg["remaining"] == 5

    def test_errors(self, client):
        with client.websocket_connect("/ws") as ws:
            ws.send_text("not json")
            assert ws.receive_json()["type"] == "error"
            ws.send_json({"action": "toggle", "card": "ZZ"})
            assert ws.receive_json()["type"] == "error"
            ws.send_json({"action": "dance"})
            assert ws.receive_json()["type"] == "error"
