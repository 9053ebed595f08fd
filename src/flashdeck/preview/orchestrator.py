"""Bridge between input capture / review and the AI endpoints."""

import logging
from typing import Optional

from ..capture.media import MediaFile
from ..core.config import DEFAULT_MAX_CARDS, MAX_CARDS, MIN_CARDS
from ..core.exceptions import InputValidationError, ResponseFormatError
from ..core.models import PreviewResponse
from .store import PreviewStore

logger = logging.getLogger(__name__)


class PreviewOrchestrator:
    """Shapes preview requests, validates responses and keeps the store current.

    Args:
        ai_api: Object exposing ``generate_preview``, ``regenerate`` and
            ``confirm`` (normally ``flashdeck.api.AiApi``)
        store: Where the current preview is kept between steps
    """

    def __init__(self, ai_api, store: PreviewStore):
        self.ai_api = ai_api
        self.store = store

    def generate_preview(
        self,
        prompt: Optional[str] = None,
        image: Optional[MediaFile] = None,
        audio: Optional[MediaFile] = None,
        max_cards: int = DEFAULT_MAX_CARDS,
    ) -> PreviewResponse:
        """Generate a preview session from exactly one input.

        Returns:
            The new PreviewResponse, already stored

        Raises:
            InputValidationError: Not exactly one input, or max_cards out of range
            ApiError: Backend failure or malformed content
        """
        if prompt is not None and not prompt.strip():
            prompt = None

        provided = [x for x in (prompt, image, audio) if x is not None]
        if len(provided) != 1:
            raise InputValidationError(
                "Provide exactly one of a prompt, an image, or an audio clip"
            )
        if not MIN_CARDS <= max_cards <= MAX_CARDS:
            raise InputValidationError(
                f"max_cards must be between {MIN_CARDS} and {MAX_CARDS}", field="max_cards"
            )

        preview = self.ai_api.generate_preview(
            prompt=prompt.strip() if prompt else None,
            image=image,
            audio=audio,
            max_cards=max_cards,
        )
        self._check_preview(preview, max_cards)

        self.store.put(preview)
        logger.info(
            f"Preview session {preview.session_id}: {preview.card_count} cards "
            f"for '{preview.deck_title}'"
        )
        return preview

    def regenerate_with_feedback(self, session_id: str, feedback: str) -> PreviewResponse:
        """Replace a session's cards using feedback.

        Raises:
            InputValidationError: Feedback is empty after trimming
            ResponseFormatError: The backend answered for a different session
        """
        feedback = (feedback or "").strip()
        if not feedback:
            raise InputValidationError("Please enter feedback", field="feedback")

        preview = self.ai_api.regenerate(session_id, feedback)
        self._check_preview(preview)

        if preview.session_id != session_id:
            raise ResponseFormatError(
                f"Regenerated preview belongs to session {preview.session_id}, "
                f"expected {session_id}"
            )

        self.store.put(preview)
        logger.info(f"Regenerated session {session_id}: {preview.card_count} cards")
        return preview

    def confirm_preview(self, session_id: str) -> str:
        """Persist a session as a deck. Returns the new deck id.

        A session id must not be confirmed twice; the caller discards it
        after the first success.
        """
        deck_id = self.ai_api.confirm(session_id)
        logger.info(f"Confirmed session {session_id} as deck {deck_id}")
        return deck_id

    def _check_preview(self, preview: PreviewResponse, max_cards: int = None) -> None:
        if not preview.session_id:
            raise ResponseFormatError("Preview response has an empty session id")
        if not preview.cards:
            raise ResponseFormatError("No cards were generated")
        if max_cards is not None and preview.card_count > max_cards:
            logger.warning(
                f"Backend returned {preview.card_count} cards, more than the {max_cards} requested"
            )
