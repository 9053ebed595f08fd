"""AI generation endpoints: transcription, preview, regenerate, confirm."""

import logging
from typing import Optional

from ..capture.media import MediaFile
from ..core.exceptions import InputValidationError, ResponseFormatError
from ..core.models import PreviewResponse
from .base import ApiClient, unwrap_envelope

logger = logging.getLogger(__name__)

TRANSCRIBE_PATH = "/api/audio/transcribe"
PREVIEW_PATH = "/api/cards/ai_preview"
REGENERATE_PATH = "/api/cards/ai_regenerate"
CONFIRM_PATH = "/api/cards/ai_confirm"
GENERATE_PATH = "/api/cards/ai_generate"


def _deck_id_from(data: dict, endpoint: str) -> str:
    deck = data.get("deck") if isinstance(data, dict) else None
    if not isinstance(deck, dict) or deck.get("id") is None:
        raise ResponseFormatError("Response is missing the created deck id", endpoint=endpoint)
    return str(deck["id"])


class AiApi:
    """Request/response wrappers for the AI endpoints.

    No business logic lives here beyond shaping requests and decoding
    responses; see ``flashdeck.preview`` for the workflow.
    """

    def __init__(self, client: ApiClient):
        self.client = client

    def transcribe(self, audio: MediaFile) -> str:
        """Transcribe an audio clip to text."""
        result = self.client.post(
            TRANSCRIBE_PATH,
            "Failed to transcribe audio",
            files={"audio": audio.as_upload()},
        )
        if result is None:
            raise ResponseFormatError("Empty response from server", endpoint=TRANSCRIBE_PATH)

        try:
            return result["data"]["text"]
        except (KeyError, TypeError):
            raise ResponseFormatError(
                "Transcription response is missing 'data.text'", endpoint=TRANSCRIBE_PATH
            )

    def generate_preview(
        self,
        prompt: Optional[str] = None,
        image: Optional[MediaFile] = None,
        audio: Optional[MediaFile] = None,
        max_cards: int = 20,
    ) -> PreviewResponse:
        """Request a provisional card set. Image wins over audio, audio over prompt."""
        data = {"maxCards": str(max_cards)}
        files = None

        if image is not None:
            files = {"image": image.as_upload()}
        elif audio is not None:
            files = {"audio": audio.as_upload()}
        elif prompt:
            data["prompt"] = prompt
        else:
            raise InputValidationError("A prompt, image, or audio clip is required")

        result = self.client.post(
            PREVIEW_PATH,
            "Failed to generate preview",
            data=data,
            files=files,
        )
        payload = unwrap_envelope(result, "Failed to generate preview", PREVIEW_PATH)
        return PreviewResponse.from_dict(payload)

    def regenerate(self, session_id: str, feedback: str) -> PreviewResponse:
        """Regenerate a preview session's cards using feedback."""
        result = self.client.post(
            REGENERATE_PATH,
            "Failed to regenerate cards",
            json_body={"sessionId": session_id, "feedback": feedback},
        )
        payload = unwrap_envelope(result, "Failed to regenerate cards", REGENERATE_PATH)
        return PreviewResponse.from_dict(payload)

    def confirm(self, session_id: str) -> str:
        """Turn a preview session into a persisted deck. Returns the deck id."""
        result = self.client.post(
            CONFIRM_PATH,
            "Failed to confirm preview",
            json_body={"sessionId": session_id},
        )
        payload = unwrap_envelope(result, "Failed to confirm preview", CONFIRM_PATH)
        return _deck_id_from(payload, CONFIRM_PATH)

    def generate_deck(
        self,
        prompt: Optional[str] = None,
        image: Optional[MediaFile] = None,
        max_cards: int = 20,
    ) -> str:
        """Generate and persist a new deck in one step, skipping the preview."""
        data = {"deckOption": "new", "deckId": "", "maxCards": str(max_cards)}
        files = None

        if image is not None:
            files = {"image": image.as_upload()}
        elif prompt:
            data["prompt"] = prompt
        else:
            raise InputValidationError("A prompt or image is required")

        result = self.client.post(
            GENERATE_PATH,
            "Failed to generate cards",
            data=data,
            files=files,
        )
        payload = unwrap_envelope(result, "Failed to generate cards", GENERATE_PATH)
        return _deck_id_from(payload, GENERATE_PATH)
