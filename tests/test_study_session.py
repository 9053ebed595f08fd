"""Tests for study sessions."""

import pytest

from flashdeck.core.exceptions import ApiError, AuthError, InvalidStateError
from flashdeck.core.models import Card
from flashdeck.study.session import StudyOutcome, StudySession


class FakeStudyApi:
    def __init__(self, error=None):
        self.error = error
        self.answers = []

    def record_answer(self, deck_id, card_id, is_correct, study_time=0):
        self.answers.append((deck_id, card_id, is_correct, study_time))
        if self.error:
            raise self.error


def make_cards(n=2):
    return [Card(id=str(i), deck_id="12", front=f"F{i}", back=f"B{i}") for i in range(1, n + 1)]


class TestStudySession:
    """Tests for StudySession."""

    def test_empty_deck(self):
        with pytest.raises(InvalidStateError):
            StudySession(FakeStudyApi(), "12", [])

    def test_must_flip_before_answer(self):
        session = StudySession(FakeStudyApi(), "12", make_cards())
        with pytest.raises(InvalidStateError):
            session.answer(StudyOutcome.CORRECT)

    def test_walkthrough(self):
        api = FakeStudyApi()
        session = StudySession(api, "12", make_cards())

        session.flip()
        session.answer(StudyOutcome.CORRECT)
        assert session.current_card.id == "2"
        assert not session.flipped

        session.flip()
        session.answer(StudyOutcome.DONT_KNOW)
        assert session.completed
        assert session.current_card is None

        assert [(a[1], a[2]) for a in api.answers] == [("1", True), ("2", False)]
        assert session.summary() == {
            "correct": 1, "incorrect": 0, "dont_know": 1, "total": 2, "failed_recordings": 0,
        }

    def test_no_answer_after_completion(self):
        session = StudySession(FakeStudyApi(), "12", make_cards(1))
        session.flip()
        session.answer(StudyOutcome.INCORRECT)
        with pytest.raises(InvalidStateError):
            session.answer(StudyOutcome.CORRECT)

    def test_recording_failure_moves_on(self):
        session = StudySession(FakeStudyApi(error=ApiError("down")), "12", make_cards())
        session.flip()
        session.answer(StudyOutcome.CORRECT)
        assert session.index == 1
        assert session.summary()["failed_recordings"] == 1

    def test_auth_failure_stops(self):
        session = StudySession(FakeStudyApi(error=AuthError("expired")), "12", make_cards())
        session.flip()
        with pytest.raises(AuthError):
            session.answer(StudyOutcome.CORRECT)
        assert session.index == 0

    def test_restart(self):
        session = StudySession(FakeStudyApi(), "12", make_cards(1))
        session.flip()
        session.answer(StudyOutcome.CORRECT)
        session.restart()
        assert not session.completed
        assert session.current_card.id == "1"
        assert session.summary()["correct"] == 0

    def test_progress(self):
        session = StudySession(FakeStudyApi(), "12", make_cards(4))
        assert session.progress == 0.25
