"""Deck CRUD endpoints."""

from ..core.exceptions import ResponseFormatError
from ..core.models import Deck
from .base import ApiClient


class DeckApi:
    """Wrappers for ``/api/decks``."""

    def __init__(self, client: ApiClient):
        self.client = client

    def list_decks(self) -> list[Deck]:
        result = self.client.get("/api/decks", "Failed to fetch decks")
        if not result:
            return []
        if not isinstance(result, list):
            raise ResponseFormatError("Expected a list of decks", endpoint="/api/decks")
        return [Deck.from_dict(d) for d in result]

    def get_deck(self, deck_id: str) -> Deck:
        path = f"/api/decks/{deck_id}"
        result = self.client.get(path, "Failed to fetch deck")
        if result is None:
            raise ResponseFormatError("Empty response from server", endpoint=path)
        return Deck.from_dict(result)

    def create_deck(self, title: str, description: str = "") -> Deck:
        result = self.client.post(
            "/api/decks",
            "Failed to create deck",
            json_body={"title": title, "description": description},
        )
        if result is None:
            raise ResponseFormatError("Empty response from server", endpoint="/api/decks")
        return Deck.from_dict(result)

    def update_deck(self, deck_id: str, title: str, description: str) -> Deck:
        path = f"/api/decks/{deck_id}"
        result = self.client.put(
            path,
            "Failed to update deck",
            json_body={"title": title, "description": description},
        )
        if result is None:
            raise ResponseFormatError("Empty response from server", endpoint=path)
        return Deck.from_dict(result)

    def delete_deck(self, deck_id: str) -> None:
        self.client.delete(f"/api/decks/{deck_id}", "Failed to delete deck")
