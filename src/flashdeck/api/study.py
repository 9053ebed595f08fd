"""Study statistics and answer recording endpoints."""

from ..core.exceptions import ResponseFormatError
from ..core.models import AnswerRecord, DeckStats
from .base import ApiClient


class StudyApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def get_deck_stats(self, deck_id: str) -> DeckStats:
        path = f"/api/decks/{deck_id}/stats"
        result = self.client.get(path, "Failed to fetch deck stats")
        if result is None:
            raise ResponseFormatError("Empty response from server", endpoint=path)
        return DeckStats.from_dict(result)

    def record_answer(
        self,
        deck_id: str,
        card_id: str,
        is_correct: bool,
        study_time: int = 0,
    ) -> AnswerRecord:
        """Record one study outcome; ``study_time`` is in seconds."""
        path = f"/api/decks/{deck_id}/cards/{card_id}/answer"
        result = self.client.post(
            path,
            "Failed to record answer",
            json_body={"isCorrect": is_correct, "studyTime": study_time},
        )
        if result is None:
            raise ResponseFormatError("Empty response from server", endpoint=path)
        return AnswerRecord.from_dict(result)
