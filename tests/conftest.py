"""Shared fixtures: canned backend payloads and fake transports."""

import json

import pytest

from flashdeck.core.models import PreviewResponse
from flashdeck.preview.store import PreviewStore


def preview_payload(session_id="sess-1", count=3, title="Photosynthesis"):
    """A preview body as the backend sends it inside ``data``."""
    return {
        "sessionId": session_id,
        "deckTitle": title,
        "deckDescription": "Light and dark reactions",
        "expiresAt": "2026-10-18T12:00:00Z",
        "cards": [
            {
                "id": i + 1,
                "sessionId": session_id,
                "userId": 7,
                "deckTitle": title,
                "deckDescription": "Light and dark reactions",
                "front": f"Question {i + 1}",
                "back": f"Answer {i + 1}",
                "generationType": "text",
                "originalPrompt": "photosynthesis",
                "expiresAt": "2026-10-18T12:00:00Z",
            }
            for i in range(count)
        ],
    }


class FakeResponse:
    """Just enough of ``requests.Response`` for ApiClient."""

    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        if text is None:
            text = "" if body is None else json.dumps(body)
        self.text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 400


class FakeSession:
    """Records requests and replays queued responses in order."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def queue(self, response):
        self.responses.append(response)

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeAiApi:
    """Stand-in for AiApi with scripted results."""

    def __init__(self):
        self.preview = PreviewResponse.from_dict(preview_payload())
        self.regenerated = PreviewResponse.from_dict(
            preview_payload(count=2, title="Photosynthesis, harder")
        )
        self.deck_id = "42"
        self.transcript = "the krebs cycle"
        self.error = None
        self.calls = []

    def _call(self, name, *args, **kwargs):
        self.calls.append((name, args, kwargs))
        if self.error is not None:
            raise self.error

    def transcribe(self, media):
        self._call("transcribe", media)
        return self.transcript

    def generate_preview(self, **kwargs):
        self._call("generate_preview", **kwargs)
        return self.preview

    def regenerate(self, session_id, feedback):
        self._call("regenerate", session_id, feedback)
        return self.regenerated

    def confirm(self, session_id):
        self._call("confirm", session_id)
        return self.deck_id


@pytest.fixture
def sample_preview():
    return PreviewResponse.from_dict(preview_payload())


@pytest.fixture
def store(tmp_path):
    return PreviewStore(str(tmp_path / "sessions"))


@pytest.fixture
def fake_ai():
    return FakeAiApi()
