"""AI preview workflow: store, orchestrator, review and confirmation."""

from .store import PreviewStore, PREVIEW_KEY
from .orchestrator import PreviewOrchestrator
from .confirmation import finalize_preview
from .review import ReviewSession, ReviewState, GENERATE_ROUTE

__all__ = [
    "PreviewStore",
    "PREVIEW_KEY",
    "PreviewOrchestrator",
    "finalize_preview",
    "ReviewSession",
    "ReviewState",
    "GENERATE_ROUTE",
]
