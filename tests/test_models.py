"""Tests for core data models."""

import pytest

from flashdeck.core.exceptions import ResponseFormatError
from flashdeck.core.models import (
    AnswerRecord,
    Card,
    CardPreview,
    CardStatus,
    Deck,
    DeckStats,
    GenerationType,
    PreviewResponse,
)

from conftest import preview_payload


class TestPreviewResponse:
    """Tests for PreviewResponse decoding."""

    def test_from_dict(self):
        """Test decoding a full preview payload."""
        preview = PreviewResponse.from_dict(preview_payload(count=3))
        assert preview.session_id == "sess-1"
        assert preview.deck_title == "Photosynthesis"
        assert preview.card_count == 3
        assert preview.expires_at == "2026-10-18T12:00:00Z"

    def test_card_fields(self):
        """Test that card ids become strings and enums are parsed."""
        card = PreviewResponse.from_dict(preview_payload()).cards[0]
        assert card.id == "1"
        assert card.user_id == "7"
        assert card.front == "Question 1"
        assert card.generation_type == GenerationType.TEXT

    def test_cards_share_session(self):
        """Test that every card carries the response's session id."""
        preview = PreviewResponse.from_dict(preview_payload(session_id="abc"))
        assert all(c.session_id == "abc" for c in preview.cards)

    def test_missing_session_id(self):
        """Test that a payload without sessionId is rejected."""
        payload = preview_payload()
        del payload["sessionId"]
        with pytest.raises(ResponseFormatError) as exc_info:
            PreviewResponse.from_dict(payload)
        assert "sessionId" in str(exc_info.value)

    def test_cards_not_a_list(self):
        """Test that a non-list cards field is rejected."""
        payload = preview_payload()
        payload["cards"] = {"front": "x"}
        with pytest.raises(ResponseFormatError):
            PreviewResponse.from_dict(payload)

    def test_not_an_object(self):
        """Test that a non-object payload is rejected."""
        with pytest.raises(ResponseFormatError):
            PreviewResponse.from_dict(["nope"])

    def test_round_trip_through_dict(self):
        """Test that to_dict keeps the wire keys from_dict reads."""
        preview = PreviewResponse.from_dict(preview_payload())
        again = PreviewResponse.from_dict(preview.to_dict())
        assert again == preview


class TestCardPreview:
    """Tests for CardPreview decoding."""

    def test_unknown_generation_type(self):
        """Test that an unknown generation type is a format error."""
        data = preview_payload()["cards"][0]
        data["generationType"] = "video"
        with pytest.raises(ResponseFormatError) as exc_info:
            CardPreview.from_dict(data)
        assert "video" in str(exc_info.value)

    def test_optional_fields_default(self):
        """Test decoding with only the required fields."""
        card = CardPreview.from_dict({
            "id": 3,
            "sessionId": "s",
            "front": "F",
            "back": "B",
            "generationType": "image",
        })
        assert card.deck_title == ""
        assert card.user_id is None
        assert card.generation_type == GenerationType.IMAGE


class TestDeckAndCard:
    """Tests for persisted deck and card models."""

    def test_deck_from_dict(self):
        deck = Deck.from_dict({"id": 12, "title": "Biology", "userId": 7})
        assert deck.id == "12"
        assert deck.description == ""
        assert deck.user_id == "7"

    def test_deck_requires_title(self):
        with pytest.raises(ResponseFormatError):
            Deck.from_dict({"id": 12})

    def test_card_defaults(self):
        """Test that status defaults to new and review count to zero."""
        card = Card.from_dict({"id": 1, "deckId": 12, "front": "F", "back": "B"})
        assert card.deck_id == "12"
        assert card.status == CardStatus.NEW
        assert card.review_count == 0

    def test_card_status(self):
        card = Card.from_dict({
            "id": 1, "deckId": 12, "front": "F", "back": "B",
            "status": "mastered", "reviewCount": 4,
        })
        assert card.status == CardStatus.MASTERED
        assert card.review_count == 4


class TestStats:
    """Tests for DeckStats and AnswerRecord."""

    def test_non_numeric_field(self):
        """Test that a mistyped count is a format error, not a ValueError."""
        with pytest.raises(ResponseFormatError) as exc_info:
            DeckStats.from_dict({"deckId": 12, "totalCards": "many"})
        assert "totalCards" in str(exc_info.value)

    def test_non_numeric_review_count(self):
        with pytest.raises(ResponseFormatError):
            Card.from_dict({"id": 1, "deckId": 12, "front": "F", "back": "B", "reviewCount": "x"})

    def test_deck_stats(self):
        stats = DeckStats.from_dict({
            "deckId": 12,
            "totalCards": 10,
            "masteredCards": 4,
            "accuracyRate": 72.5,
            "studyStreak": 3,
        })
        assert stats.deck_id == "12"
        assert stats.mastered_cards == 4
        assert stats.accuracy_rate == 72.5
        assert stats.new_cards == 0
        assert stats.last_studied_at is None

    def test_answer_record(self):
        record = AnswerRecord.from_dict({
            "id": 5, "deckId": 12, "cardId": 3, "isCorrect": True, "studyTime": 8,
        })
        assert record.card_id == "3"
        assert record.is_correct is True
        assert record.study_time == 8
