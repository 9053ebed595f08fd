"""Study sessions over persisted decks."""

from .session import StudySession, StudyOutcome

__all__ = ["StudySession", "StudyOutcome"]
