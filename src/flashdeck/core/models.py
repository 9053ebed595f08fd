"""Core data models mirroring the backend's JSON payloads.

Wire payloads use camelCase keys. Every model converts with ``from_dict`` /
``to_dict``; ``from_dict`` raises ResponseFormatError on missing or mistyped
fields so a bad payload never reaches the UI half-parsed.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .exceptions import ResponseFormatError


class GenerationType(Enum):
    """Input modality a preview card was generated from."""
    TEXT = "text"
    IMAGE = "image"
    AUDIO = "audio"


class CardStatus(Enum):
    """Learning status of a persisted card (server-owned)."""
    NEW = "new"
    LEARNING = "learning"
    MASTERED = "mastered"


def _require(data: Any, key: str, model: str) -> Any:
    if not isinstance(data, dict):
        raise ResponseFormatError(f"Expected an object for {model}, got {type(data).__name__}")
    if key not in data or data[key] is None:
        raise ResponseFormatError(f"{model} is missing '{key}'")
    return data[key]


def _id(value: Any) -> str:
    # Backend ids are numeric; the client only formats them into URLs.
    return str(value)


def _enum(enum_cls, value: Any, model: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise ResponseFormatError(f"{model} has unknown {enum_cls.__name__} '{value}'")


def _number(data: dict, key: str, model: str, cast=int):
    value = data.get(key)
    if value is None:
        return cast(0)
    try:
        return cast(value)
    except (TypeError, ValueError):
        raise ResponseFormatError(f"{model} has a non-numeric '{key}': {value!r}")


@dataclass
class CardPreview:
    """A provisional AI-generated card, not yet persisted."""
    id: str
    session_id: str
    front: str
    back: str
    generation_type: GenerationType

    deck_title: str = ""
    deck_description: str = ""
    original_prompt: str = ""
    user_id: Optional[str] = None

    expires_at: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "CardPreview":
        return cls(
            id=_id(_require(data, "id", "CardPreview")),
            session_id=_require(data, "sessionId", "CardPreview"),
            front=_require(data, "front", "CardPreview"),
            back=_require(data, "back", "CardPreview"),
            generation_type=_enum(
                GenerationType, _require(data, "generationType", "CardPreview"), "CardPreview"
            ),
            deck_title=data.get("deckTitle") or "",
            deck_description=data.get("deckDescription") or "",
            original_prompt=data.get("originalPrompt") or "",
            user_id=_id(data["userId"]) if data.get("userId") is not None else None,
            expires_at=data.get("expiresAt"),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "sessionId": self.session_id,
            "userId": self.user_id,
            "deckTitle": self.deck_title,
            "deckDescription": self.deck_description,
            "front": self.front,
            "back": self.back,
            "generationType": self.generation_type.value,
            "originalPrompt": self.original_prompt,
            "expiresAt": self.expires_at,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass
class PreviewResponse:
    """A preview session: the provisional deck plus its cards.

    ``session_id`` is the correlation key the backend uses for regenerate
    and confirm; it stays the same across regenerate cycles.
    """
    session_id: str
    deck_title: str
    deck_description: str
    cards: list[CardPreview] = field(default_factory=list)
    expires_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "PreviewResponse":
        cards = _require(data, "cards", "PreviewResponse")
        if not isinstance(cards, list):
            raise ResponseFormatError("PreviewResponse 'cards' must be a list")
        return cls(
            session_id=_require(data, "sessionId", "PreviewResponse"),
            deck_title=data.get("deckTitle") or "",
            deck_description=data.get("deckDescription") or "",
            cards=[CardPreview.from_dict(c) for c in cards],
            expires_at=data.get("expiresAt"),
        )

    def to_dict(self) -> dict:
        return {
            "sessionId": self.session_id,
            "deckTitle": self.deck_title,
            "deckDescription": self.deck_description,
            "cards": [c.to_dict() for c in self.cards],
            "expiresAt": self.expires_at,
        }

    @property
    def card_count(self) -> int:
        return len(self.cards)


@dataclass
class Deck:
    """A persisted deck owned by the current user."""
    id: str
    title: str
    description: str = ""
    user_id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Deck":
        return cls(
            id=_id(_require(data, "id", "Deck")),
            title=_require(data, "title", "Deck"),
            description=data.get("description") or "",
            user_id=_id(data["userId"]) if data.get("userId") is not None else None,
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "userId": self.user_id,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass
class Card:
    """A persisted card. ``status`` and ``review_count`` are server-owned."""
    id: str
    deck_id: str
    front: str
    back: str
    status: CardStatus = CardStatus.NEW
    review_count: int = 0
    last_review: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Card":
        return cls(
            id=_id(_require(data, "id", "Card")),
            deck_id=_id(_require(data, "deckId", "Card")),
            front=_require(data, "front", "Card"),
            back=_require(data, "back", "Card"),
            status=_enum(CardStatus, data.get("status") or "new", "Card"),
            review_count=_number(data, "reviewCount", "Card"),
            last_review=data.get("lastReview"),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "deckId": self.deck_id,
            "front": self.front,
            "back": self.back,
            "status": self.status.value,
            "reviewCount": self.review_count,
            "lastReview": self.last_review,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass
class DeckStats:
    """Aggregate study statistics for one deck."""
    deck_id: str
    total_cards: int = 0
    mastered_cards: int = 0
    learning_cards: int = 0
    new_cards: int = 0
    accuracy_rate: float = 0.0
    study_streak: int = 0
    total_study_time: int = 0       # seconds
    last_studied_at: Optional[str] = None
    progress_percent: float = 0.0

    @classmethod
    def from_dict(cls, data: dict) -> "DeckStats":
        return cls(
            deck_id=_id(_require(data, "deckId", "DeckStats")),
            total_cards=_number(data, "totalCards", "DeckStats"),
            mastered_cards=_number(data, "masteredCards", "DeckStats"),
            learning_cards=_number(data, "learningCards", "DeckStats"),
            new_cards=_number(data, "newCards", "DeckStats"),
            accuracy_rate=_number(data, "accuracyRate", "DeckStats", float),
            study_streak=_number(data, "studyStreak", "DeckStats"),
            total_study_time=_number(data, "totalStudyTime", "DeckStats"),
            last_studied_at=data.get("lastStudiedAt"),
            progress_percent=_number(data, "progressPercent", "DeckStats", float),
        )


@dataclass
class AnswerRecord:
    """One recorded study outcome."""
    id: str
    deck_id: str
    card_id: str
    is_correct: bool
    study_time: int = 0             # seconds
    user_id: Optional[str] = None
    answer_date: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "AnswerRecord":
        return cls(
            id=_id(_require(data, "id", "AnswerRecord")),
            deck_id=_id(_require(data, "deckId", "AnswerRecord")),
            card_id=_id(_require(data, "cardId", "AnswerRecord")),
            is_correct=bool(data.get("isCorrect")),
            study_time=_number(data, "studyTime", "AnswerRecord"),
            user_id=_id(data["userId"]) if data.get("userId") is not None else None,
            answer_date=data.get("answerDate"),
        )
