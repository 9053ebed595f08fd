"""Core models, configuration, and exceptions."""

from .models import (
    Card,
    CardPreview,
    CardStatus,
    Deck,
    DeckStats,
    AnswerRecord,
    GenerationType,
    PreviewResponse,
)
from .config import Config, load_config
from .actions import ActionStatus, RequestAction
from .exceptions import (
    FlashdeckError,
    InputValidationError,
    ApiError,
    ResponseFormatError,
    AuthError,
    MissingPreviewError,
    ActionInProgressError,
    InvalidStateError,
    RecordingError,
    StorageError,
    ConfigError,
)

__all__ = [
    "Card",
    "CardPreview",
    "CardStatus",
    "Deck",
    "DeckStats",
    "AnswerRecord",
    "GenerationType",
    "PreviewResponse",
    "Config",
    "load_config",
    "ActionStatus",
    "RequestAction",
    "FlashdeckError",
    "InputValidationError",
    "ApiError",
    "ResponseFormatError",
    "AuthError",
    "MissingPreviewError",
    "ActionInProgressError",
    "InvalidStateError",
    "RecordingError",
    "StorageError",
    "ConfigError",
]
