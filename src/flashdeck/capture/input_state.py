"""What the generate form currently holds.

Text, image and audio are mutually exclusive, so the form holds exactly one
of these variants instead of several independent flags.
"""

from dataclasses import dataclass
from typing import Union

from .media import MediaFile


@dataclass(frozen=True)
class EmptyInput:
    pass


@dataclass(frozen=True)
class TextPrompt:
    text: str


@dataclass(frozen=True)
class ImageAttached:
    media: MediaFile


@dataclass(frozen=True)
class AudioAttached:
    media: MediaFile


CaptureInput = Union[EmptyInput, TextPrompt, ImageAttached, AudioAttached]


def describe(capture: CaptureInput) -> str:
    """Short human-readable summary for status lines."""
    if isinstance(capture, TextPrompt):
        text = capture.text.strip()
        return f'prompt "{text[:40]}{"..." if len(text) > 40 else ""}"'
    if isinstance(capture, ImageAttached):
        return f"image {capture.media.name}"
    if isinstance(capture, AudioAttached):
        return f"audio {capture.media.name}"
    return "nothing"
