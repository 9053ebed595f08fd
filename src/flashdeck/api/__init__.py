"""Request/response wrappers for the flashcard backend."""

from typing import Optional

import requests

from .base import ApiClient, TokenProvider, unwrap_envelope
from .ai import AiApi
from .decks import DeckApi
from .cards import CardApi
from .study import StudyApi

from ..core.config import ApiConfig

__all__ = [
    "ApiClient",
    "TokenProvider",
    "unwrap_envelope",
    "AiApi",
    "DeckApi",
    "CardApi",
    "StudyApi",
    "FlashdeckApi",
    "get_api",
]


class FlashdeckApi:
    """All backend resources sharing one authenticated client."""

    def __init__(self, client: ApiClient):
        self.client = client
        self.ai = AiApi(client)
        self.decks = DeckApi(client)
        self.cards = CardApi(client)
        self.study = StudyApi(client)


def get_api(
    config: ApiConfig,
    token_provider: Optional[TokenProvider] = None,
    session: Optional[requests.Session] = None,
) -> FlashdeckApi:
    """Build the API facade from configuration.

    Args:
        config: API configuration
        token_provider: Callable returning the bearer token (defaults to config/env)
        session: Optional pre-built requests session

    Returns:
        FlashdeckApi instance
    """
    return FlashdeckApi(ApiClient(config, token_provider=token_provider, session=session))
