"""The generate form: collects one input and requests a preview."""

import logging
from typing import Optional

from ..core.actions import RequestAction
from ..core.config import DEFAULT_MAX_CARDS
from ..core.exceptions import FlashdeckError, InputValidationError
from ..core.models import PreviewResponse
from .input_state import (
    AudioAttached,
    CaptureInput,
    EmptyInput,
    ImageAttached,
    TextPrompt,
)
from .media import MediaFile, MediaKind, validate_media

logger = logging.getLogger(__name__)


class GenerateForm:
    """Input capture for AI generation.

    Holds exactly one of: nothing, a text prompt, an image, or an audio
    clip. Validation failures are recorded in ``error`` and raised; they
    never change the held input.

    Args:
        orchestrator: PreviewOrchestrator used on submit
        transcriber: Object with ``transcribe(MediaFile) -> str`` (AiApi)
        max_cards: Card cap sent with every preview request
    """

    def __init__(self, orchestrator, transcriber, max_cards: int = DEFAULT_MAX_CARDS):
        self.orchestrator = orchestrator
        self.transcriber = transcriber
        self.max_cards = max_cards

        self.input: CaptureInput = EmptyInput()
        self.error: Optional[str] = None
        self.recording = False

        self.transcribe_action = RequestAction("Transcription")
        self.generate_action = RequestAction("Preview generation")

    # -- state queries -------------------------------------------------

    @property
    def busy(self) -> bool:
        return self.recording or self.transcribe_action.pending or self.generate_action.pending

    @property
    def prompt(self) -> str:
        return self.input.text if isinstance(self.input, TextPrompt) else ""

    @property
    def text_enabled(self) -> bool:
        """Free text is disabled while media is attached."""
        return not self.busy and not isinstance(self.input, (ImageAttached, AudioAttached))

    @property
    def media_enabled(self) -> bool:
        """Attachments are disabled while a prompt is typed."""
        return not self.busy and not self.prompt.strip()

    @property
    def can_submit(self) -> bool:
        if self.busy:
            return False
        if isinstance(self.input, TextPrompt):
            return bool(self.input.text.strip())
        return isinstance(self.input, (ImageAttached, AudioAttached))

    # -- editing -------------------------------------------------------

    def set_prompt(self, text: str) -> None:
        if isinstance(self.input, (ImageAttached, AudioAttached)):
            self._reject("Remove the attached file before typing a prompt", field="prompt")
        self.input = TextPrompt(text) if text.strip() else EmptyInput()
        self.error = None

    def select_image(self, media: MediaFile) -> None:
        self._check_media_allowed(AudioAttached, "image")
        self._validate(media, MediaKind.IMAGE)
        self.input = ImageAttached(media)
        self.error = None

    def select_audio(self, media: MediaFile) -> None:
        self._check_media_allowed(ImageAttached, "audio")
        self._validate(media, MediaKind.AUDIO)
        self.input = AudioAttached(media)
        self.error = None

    def clear_image(self) -> None:
        if isinstance(self.input, ImageAttached):
            self.input = EmptyInput()

    def clear_audio(self) -> None:
        if isinstance(self.input, AudioAttached):
            self.input = EmptyInput()

    def clear(self) -> None:
        self.input = EmptyInput()
        self.error = None

    # -- audio ---------------------------------------------------------

    def record_audio(self, recorder) -> str:
        """Record from the microphone and put the transcript into the prompt.

        The recorder holds the device only while recording. If transcription
        fails the recording is discarded and the form is left empty.

        Returns:
            The transcribed text
        """
        if not isinstance(self.input, EmptyInput):
            self._reject("Clear the current input before recording", field="audio")

        self.error = None
        self.recording = True
        try:
            media = recorder.record()
        except FlashdeckError as e:
            self.error = str(e)
            raise
        finally:
            self.recording = False

        self.input = AudioAttached(media)
        try:
            text = self._transcribe(media)
        except FlashdeckError:
            self.input = EmptyInput()
            raise

        self.input = TextPrompt(text)
        return text

    def transcribe_attached_audio(self) -> str:
        """Transcribe an uploaded clip into the prompt.

        On failure the clip stays attached so the user can retry.
        """
        if not isinstance(self.input, AudioAttached):
            self._reject("No audio attached", field="audio")

        text = self._transcribe(self.input.media)
        self.input = TextPrompt(text)
        return text

    def _transcribe(self, media: MediaFile) -> str:
        try:
            text = self.transcribe_action.run(self.transcriber.transcribe, media)
        except FlashdeckError as e:
            self.error = str(e)
            raise
        logger.info(f"Transcribed {media.name} ({len(text)} chars)")
        return text

    # -- submit --------------------------------------------------------

    def submit(self) -> Optional[PreviewResponse]:
        """Request a preview for the held input.

        An attached audio clip is transcribed first and nothing is generated;
        submit again once the transcript is in the prompt.

        Returns:
            The stored PreviewResponse, or None after a transcription step
        """
        self.error = None

        if isinstance(self.input, AudioAttached):
            self.transcribe_attached_audio()
            return None

        if isinstance(self.input, ImageAttached):
            kwargs = {"image": self.input.media}
        elif isinstance(self.input, TextPrompt) and self.input.text.strip():
            kwargs = {"prompt": self.input.text.strip()}
        else:
            self._reject("Enter a prompt or select an image", field="prompt")

        try:
            return self.generate_action.run(
                self.orchestrator.generate_preview,
                max_cards=self.max_cards,
                **kwargs,
            )
        except FlashdeckError as e:
            self.error = str(e)
            raise

    # -- helpers -------------------------------------------------------

    def _check_media_allowed(self, conflicting: type, kind: str) -> None:
        if self.prompt.strip():
            self._reject(f"Clear the prompt before attaching an {kind}", field=kind)
        if isinstance(self.input, conflicting):
            self._reject(f"Remove the attached file before attaching an {kind}", field=kind)

    def _validate(self, media: MediaFile, kind: MediaKind) -> None:
        try:
            validate_media(media, kind)
        except InputValidationError as e:
            self.error = str(e)
            raise

    def _reject(self, message: str, field: str = None) -> None:
        self.error = message
        raise InputValidationError(message, field=field)
