"""Card CRUD endpoints."""

from ..core.exceptions import ResponseFormatError
from ..core.models import Card
from .base import ApiClient


class CardApi:
    """Wrappers for ``/api/decks/:id/cards`` and ``/api/cards/:id``."""

    def __init__(self, client: ApiClient):
        self.client = client

    def list_cards(self, deck_id: str) -> list[Card]:
        """Cards of a deck. An empty body means the deck has no cards."""
        path = f"/api/decks/{deck_id}/cards"
        result = self.client.get(path, "Failed to fetch cards for deck")
        if not result:
            return []
        if not isinstance(result, list):
            raise ResponseFormatError("Expected a list of cards", endpoint=path)
        return [Card.from_dict(c) for c in result]

    def create_card(self, deck_id: str, front: str, back: str) -> Card:
        path = f"/api/decks/{deck_id}/cards"
        result = self.client.post(
            path,
            "Failed to create card",
            json_body={"front": front, "back": back},
        )
        if result is None:
            raise ResponseFormatError("Empty response from server", endpoint=path)
        return Card.from_dict(result)

    def update_card(self, card_id: str, front: str, back: str) -> Card:
        path = f"/api/cards/{card_id}"
        result = self.client.put(
            path,
            "Failed to update card",
            json_body={"front": front, "back": back},
        )
        if result is None:
            raise ResponseFormatError("Empty response from server", endpoint=path)
        return Card.from_dict(result)

    def delete_card(self, card_id: str) -> None:
        # DELETE returns no content
        self.client.delete(f"/api/cards/{card_id}", "Failed to delete card")
