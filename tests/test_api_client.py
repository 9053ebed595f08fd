"""Tests for the HTTP client and endpoint wrappers."""

import pytest
import requests

from flashdeck.api import get_api
from flashdeck.capture.media import MediaFile
from flashdeck.core.config import ApiConfig
from flashdeck.core.exceptions import ApiError, AuthError, ResponseFormatError

from conftest import FakeResponse, FakeSession, preview_payload

CONFIG = ApiConfig(base_url="http://backend.test/", timeout=5.0)


def make_api(*responses, token="tok"):
    session = FakeSession(*responses)
    return get_api(CONFIG, token_provider=lambda: token, session=session), session


def ok(data):
    return FakeResponse(200, {"success": True, "data": data})


class TestApiClient:
    """Tests for transport-level behavior."""

    def test_bearer_token(self):
        api, session = make_api(FakeResponse(200, []))
        api.decks.list_decks()
        call = session.calls[0]
        assert call["method"] == "GET"
        assert call["url"] == "http://backend.test/api/decks"
        assert call["headers"]["Authorization"] == "Bearer tok"
        assert call["timeout"] == 5.0

    def test_missing_token(self):
        """Test that no request is sent without a token."""
        api, session = make_api(FakeResponse(200, []), token=None)
        with pytest.raises(AuthError):
            api.decks.list_decks()
        assert session.calls == []

    def test_error_message_from_body(self):
        api, _ = make_api(FakeResponse(404, {"message": "Deck not found"}))
        with pytest.raises(ApiError) as exc_info:
            api.decks.get_deck("9")
        assert str(exc_info.value) == "Deck not found"
        assert exc_info.value.status_code == 404

    def test_error_message_fallback(self):
        api, _ = make_api(FakeResponse(500, text="boom"))
        with pytest.raises(ApiError) as exc_info:
            api.decks.get_deck("9")
        assert str(exc_info.value) == "Failed to fetch deck: 500 boom"

    def test_unauthorized(self):
        api, _ = make_api(FakeResponse(401, {"message": "Invalid token"}))
        with pytest.raises(AuthError):
            api.decks.list_decks()

    def test_transport_failure(self):
        api, _ = make_api(requests.ConnectionError("refused"))
        with pytest.raises(ApiError) as exc_info:
            api.decks.list_decks()
        assert "refused" in str(exc_info.value)

    def test_invalid_json(self):
        api, _ = make_api(FakeResponse(200, text="<html>"))
        with pytest.raises(ResponseFormatError):
            api.decks.list_decks()


class TestAiApi:
    """Tests for the AI endpoint wrappers."""

    def test_preview_from_prompt(self):
        api, session = make_api(ok(preview_payload()))
        preview = api.ai.generate_preview(prompt="photosynthesis", max_cards=20)
        assert preview.card_count == 3
        call = session.calls[0]
        assert call["url"].endswith("/api/cards/ai_preview")
        assert call["data"] == {"maxCards": "20", "prompt": "photosynthesis"}
        assert call["files"] is None
        assert "Content-Type" not in call["headers"]

    def test_preview_from_image(self):
        api, session = make_api(ok(preview_payload()))
        api.ai.generate_preview(image=MediaFile("a.png", "image/png", b"x"), max_cards=5)
        call = session.calls[0]
        assert call["files"] == {"image": ("a.png", b"x", "image/png")}
        assert "prompt" not in call["data"]

    def test_preview_unsuccessful_envelope(self):
        api, _ = make_api(FakeResponse(200, {"success": False, "message": "Model overloaded"}))
        with pytest.raises(ApiError) as exc_info:
            api.ai.generate_preview(prompt="x")
        assert str(exc_info.value) == "Model overloaded"

    def test_preview_missing_data(self):
        api, _ = make_api(FakeResponse(200, {"success": True}))
        with pytest.raises(ResponseFormatError):
            api.ai.generate_preview(prompt="x")

    def test_regenerate_json_body(self):
        api, session = make_api(ok(preview_payload()))
        api.ai.regenerate("sess-1", "harder")
        call = session.calls[0]
        assert call["json"] == {"sessionId": "sess-1", "feedback": "harder"}
        assert call["headers"]["Content-Type"] == "application/json"

    def test_confirm_returns_deck_id(self):
        api, session = make_api(ok({"deck": {"id": 42, "title": "Bio"}, "cards": []}))
        assert api.ai.confirm("sess-1") == "42"
        assert session.calls[0]["json"] == {"sessionId": "sess-1"}

    def test_confirm_missing_deck(self):
        api, _ = make_api(ok({"cards": []}))
        with pytest.raises(ResponseFormatError):
            api.ai.confirm("sess-1")

    def test_transcribe(self):
        api, session = make_api(FakeResponse(200, {"success": True, "data": {"text": "hello"}}))
        assert api.ai.transcribe(MediaFile("a.wav", "audio/wav", b"x")) == "hello"
        assert session.calls[0]["files"]["audio"][0] == "a.wav"

    def test_generate_deck_direct(self):
        api, session = make_api(ok({"deck": {"id": 7}, "cards": []}))
        assert api.ai.generate_deck(prompt="x", max_cards=3) == "7"
        data = session.calls[0]["data"]
        assert data["deckOption"] == "new"
        assert data["maxCards"] == "3"


class TestResources:
    """Tests for deck, card and study wrappers."""

    def test_list_cards_empty_body(self):
        api, _ = make_api(FakeResponse(200, text=""))
        assert api.cards.list_cards("12") == []

    def test_create_card(self):
        api, session = make_api(FakeResponse(201, {"id": 3, "deckId": 12, "front": "F", "back": "B"}))
        card = api.cards.create_card("12", "F", "B")
        assert card.id == "3"
        assert session.calls[0]["url"].endswith("/api/decks/12/cards")

    def test_delete_deck_no_content(self):
        api, session = make_api(FakeResponse(204))
        api.decks.delete_deck("12")
        assert session.calls[0]["method"] == "DELETE"

    def test_record_answer(self):
        api, session = make_api(FakeResponse(200, {
            "id": 1, "deckId": 12, "cardId": 3, "isCorrect": False, "studyTime": 4,
        }))
        record = api.study.record_answer("12", "3", is_correct=False, study_time=4)
        assert record.is_correct is False
        assert session.calls[0]["json"] == {"isCorrect": False, "studyTime": 4}
