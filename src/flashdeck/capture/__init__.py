"""Input capture: prompt, image and audio attachments."""

from .media import MediaFile, MediaKind, MEDIA_LIMITS, validate_media
from .input_state import (
    CaptureInput,
    EmptyInput,
    TextPrompt,
    ImageAttached,
    AudioAttached,
)
from .recorder import MicrophoneRecorder
from .form import GenerateForm

__all__ = [
    "MediaFile",
    "MediaKind",
    "MEDIA_LIMITS",
    "validate_media",
    "CaptureInput",
    "EmptyInput",
    "TextPrompt",
    "ImageAttached",
    "AudioAttached",
    "MicrophoneRecorder",
    "GenerateForm",
]
