"""Review state machine for a preview session.

States::

    LOADING -> READY <-> REGENERATING
               READY  -> CONFIRMING -> DONE
               READY  -> ERROR (failed call) -> READY (acknowledged)

The session is UI-agnostic: the CLI and the textual app both drive it.
"""

import logging
from enum import Enum
from typing import Optional

from ..core.actions import RequestAction
from ..core.exceptions import (
    FlashdeckError,
    InputValidationError,
    InvalidStateError,
    MissingPreviewError,
)
from ..core.models import CardPreview, PreviewResponse
from .confirmation import finalize_preview
from .orchestrator import PreviewOrchestrator
from .store import PreviewStore

logger = logging.getLogger(__name__)

GENERATE_ROUTE = "generate"


class ReviewState(Enum):
    LOADING = "loading"
    READY = "ready"
    REGENERATING = "regenerating"
    CONFIRMING = "confirming"
    DONE = "done"
    ERROR = "error"


class ReviewSession:
    """Pages through a preview and drives regenerate / confirm."""

    def __init__(self, orchestrator: PreviewOrchestrator, store: PreviewStore):
        self.orchestrator = orchestrator
        self.store = store

        self.state = ReviewState.LOADING
        self.preview: Optional[PreviewResponse] = None
        self.index = 0
        self.flipped = False
        self.feedback = ""
        self.error: Optional[str] = None
        self.deck_id: Optional[str] = None

        self.regenerate_action = RequestAction("Regenerate")
        self.confirm_action = RequestAction("Confirm")

    # -- loading -------------------------------------------------------

    def load(self) -> PreviewResponse:
        """Read the stored preview.

        Raises:
            MissingPreviewError: Nothing stored; the caller should route back
                to the generate step
        """
        preview = self.store.get()
        if preview is None:
            raise MissingPreviewError(
                "No preview to review. Generate cards first.",
                redirect_to=GENERATE_ROUTE,
            )

        self.preview = preview
        self.index = 0
        self.flipped = False
        self.state = ReviewState.READY
        return preview

    # -- navigation ----------------------------------------------------

    @property
    def card_count(self) -> int:
        return self.preview.card_count if self.preview else 0

    @property
    def current_card(self) -> Optional[CardPreview]:
        if not self.preview or not self.preview.cards:
            return None
        return self.preview.cards[self.index]

    @property
    def current_face(self) -> str:
        card = self.current_card
        if card is None:
            return ""
        return card.back if self.flipped else card.front

    @property
    def position(self) -> str:
        return f"{self.index + 1} / {self.card_count}"

    @property
    def can_go_previous(self) -> bool:
        return self.index > 0

    @property
    def can_go_next(self) -> bool:
        return self.index < self.card_count - 1

    def previous(self) -> bool:
        """Move to the previous card. Returns False at the first card."""
        if not self.can_go_previous:
            return False
        self._set_index(self.index - 1)
        return True

    def next(self) -> bool:
        """Move to the next card. Returns False at the last card."""
        if not self.can_go_next:
            return False
        self._set_index(self.index + 1)
        return True

    def flip(self) -> bool:
        self.flipped = not self.flipped
        return self.flipped

    def _set_index(self, index: int) -> None:
        if index != self.index:
            self.flipped = False
        self.index = index

    # -- actions -------------------------------------------------------

    @property
    def can_regenerate(self) -> bool:
        return (
            self.state is ReviewState.READY
            and bool(self.feedback.strip())
            and self.regenerate_action.enabled
        )

    @property
    def can_confirm(self) -> bool:
        return (
            self.state is ReviewState.READY
            and self.preview is not None
            and self.confirm_action.enabled
        )

    def regenerate(self, feedback: Optional[str] = None) -> PreviewResponse:
        """Regenerate the cards with feedback.

        Empty feedback is rejected before any request. On success the view
        returns to the first card, front side up, and the feedback clears.
        """
        self.begin_regenerate(feedback)
        return self.finish_regenerate()

    def begin_regenerate(self, feedback: Optional[str] = None) -> None:
        """Validate and claim the session for a regenerate call.

        UIs that run the request on a worker call this on their own thread
        first, so no other action can start in between.
        """
        if feedback is not None:
            self.feedback = feedback
        if not self.feedback.strip():
            raise InputValidationError("Please enter feedback", field="feedback")
        self._require_ready("regenerate")
        self.state = ReviewState.REGENERATING

    def finish_regenerate(self) -> PreviewResponse:
        """Send the regenerate request claimed by ``begin_regenerate``."""
        self._require_state(ReviewState.REGENERATING, "regenerate")
        try:
            preview = self.regenerate_action.run(
                self.orchestrator.regenerate_with_feedback,
                self.preview.session_id,
                self.feedback,
            )
        except FlashdeckError as e:
            self._fail(e)
            raise

        self.preview = preview
        self.index = 0
        self.flipped = False
        self.feedback = ""
        self.state = ReviewState.READY
        return preview

    def confirm(self) -> str:
        """Persist the preview as a deck. Returns the new deck id."""
        self.begin_confirm()
        return self.finish_confirm()

    def begin_confirm(self) -> None:
        """Claim the session for a confirm call."""
        self._require_ready("confirm")
        self.state = ReviewState.CONFIRMING

    def finish_confirm(self) -> str:
        """Send the confirm request claimed by ``begin_confirm``."""
        self._require_state(ReviewState.CONFIRMING, "confirm")
        try:
            deck_id = self.confirm_action.run(
                finalize_preview,
                self.orchestrator,
                self.store,
                self.preview.session_id,
            )
        except FlashdeckError as e:
            self._fail(e)
            raise

        self.deck_id = deck_id
        self.state = ReviewState.DONE
        return deck_id

    def acknowledge_error(self) -> None:
        """Dismiss the current error and return to READY."""
        if self.state is not ReviewState.ERROR:
            return
        self.error = None
        self.state = ReviewState.READY

    def _require_ready(self, operation: str) -> None:
        self._require_state(ReviewState.READY, operation)

    def _require_state(self, state: ReviewState, operation: str) -> None:
        if self.state is not state or self.preview is None:
            raise InvalidStateError(
                f"Cannot {operation} while {self.state.value}", state=self.state.value
            )

    def _fail(self, error: FlashdeckError) -> None:
        logger.debug(f"Review action failed: {error}")
        self.error = str(error)
        self.state = ReviewState.ERROR
