"""Walk-through study session over a deck's cards."""

import logging
import time
from enum import Enum
from typing import Optional

from ..core.exceptions import ApiError, AuthError, InvalidStateError
from ..core.models import Card

logger = logging.getLogger(__name__)


class StudyOutcome(Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    DONT_KNOW = "dont_know"


class StudySession:
    """Shows each card once, in order, and records the user's answers.

    Answers are sent to the backend, which owns status and scheduling.
    A recording failure is logged and the session moves on.
    """

    def __init__(self, study_api, deck_id: str, cards: list[Card]):
        if not cards:
            raise InvalidStateError("This deck has no cards to study")
        self.study_api = study_api
        self.deck_id = deck_id
        self.cards = cards
        self.restart()

    def restart(self) -> None:
        self.index = 0
        self.flipped = False
        self.completed = False
        self.results = {outcome: 0 for outcome in StudyOutcome}
        self.failed_recordings = 0
        self._shown_at = time.monotonic()

    @property
    def current_card(self) -> Optional[Card]:
        if self.completed:
            return None
        return self.cards[self.index]

    @property
    def progress(self) -> float:
        """Fraction of the deck reached, counting the current card."""
        return (self.index + 1) / len(self.cards)

    def flip(self) -> bool:
        self.flipped = not self.flipped
        return self.flipped

    def answer(self, outcome: StudyOutcome) -> None:
        """Record an outcome for the current card and advance."""
        if self.completed:
            raise InvalidStateError("Study session is already complete", state="completed")
        if not self.flipped:
            raise InvalidStateError("Reveal the answer before rating the card", state="front")

        card = self.current_card
        study_time = int(time.monotonic() - self._shown_at)
        try:
            self.study_api.record_answer(
                self.deck_id,
                card.id,
                is_correct=outcome is StudyOutcome.CORRECT,
                study_time=study_time,
            )
        except AuthError:
            raise
        except ApiError as e:
            self.failed_recordings += 1
            logger.warning(f"Failed to record answer for card {card.id}: {e}")

        self.results[outcome] += 1

        if self.index < len(self.cards) - 1:
            self.index += 1
            self.flipped = False
            self._shown_at = time.monotonic()
        else:
            self.completed = True

    def summary(self) -> dict:
        return {
            "correct": self.results[StudyOutcome.CORRECT],
            "incorrect": self.results[StudyOutcome.INCORRECT],
            "dont_know": self.results[StudyOutcome.DONT_KNOW],
            "total": len(self.cards),
            "failed_recordings": self.failed_recordings,
        }
