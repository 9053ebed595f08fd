"""Turning a preview session into a persisted deck."""

import logging

from .orchestrator import PreviewOrchestrator
from .store import PreviewStore

logger = logging.getLogger(__name__)


def finalize_preview(
    orchestrator: PreviewOrchestrator,
    store: PreviewStore,
    session_id: str,
) -> str:
    """Confirm a preview session and drop the provisional state.

    The store is cleared only after the backend confirmed; on failure the
    preview stays available for another attempt.

    Returns:
        Id of the newly created deck
    """
    deck_id = orchestrator.confirm_preview(session_id)
    store.clear()
    logger.debug(f"Cleared preview state for session {session_id}")
    return deck_id
