"""Media attachments and their upload limits."""

import mimetypes
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..core.exceptions import InputValidationError


class MediaKind(Enum):
    IMAGE = "image"
    AUDIO = "audio"


MEDIA_LIMITS = {
    MediaKind.IMAGE: {
        "max_size": 20 * 1024 * 1024,
        "types": ("image/png", "image/jpeg", "image/webp", "image/heic", "image/heif"),
    },
    MediaKind.AUDIO: {
        "max_size": 50 * 1024 * 1024,
        "types": ("audio/wav", "audio/mp3", "audio/aiff", "audio/aac", "audio/ogg", "audio/flac"),
    },
}

# The backend expects these spellings; mimetypes would give e.g. audio/mpeg for .mp3
EXTENSION_MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".webp": "image/webp",
    ".heic": "image/heic",
    ".heif": "image/heif",
    ".wav": "audio/wav",
    ".mp3": "audio/mp3",
    ".aif": "audio/aiff",
    ".aiff": "audio/aiff",
    ".aac": "audio/aac",
    ".ogg": "audio/ogg",
    ".flac": "audio/flac",
}


@dataclass(frozen=True)
class MediaFile:
    """An in-memory file ready for multipart upload."""
    name: str
    mime_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path: str, mime_type: str = None) -> "MediaFile":
        """Read a file from disk, inferring its MIME type from the extension."""
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        if mime_type is None:
            mime_type = EXTENSION_MIME_TYPES.get(file_path.suffix.lower())
        if mime_type is None:
            mime_type = mimetypes.guess_type(file_path.name)[0] or "application/octet-stream"

        return cls(name=file_path.name, mime_type=mime_type, data=file_path.read_bytes())

    def as_upload(self) -> tuple:
        """Tuple in the shape ``requests`` expects for ``files=``."""
        return (self.name, self.data, self.mime_type)


def validate_media(media: MediaFile, kind: MediaKind) -> None:
    """Check size and type limits for an attachment.

    Raises:
        InputValidationError: If the file is too large or of an unsupported type
    """
    limit = MEDIA_LIMITS[kind]

    if media.size > limit["max_size"]:
        max_mb = limit["max_size"] // (1024 * 1024)
        raise InputValidationError(
            f"File is too large (max {max_mb}MB)", field=kind.value
        )

    if media.mime_type not in limit["types"]:
        raise InputValidationError(
            f"Unsupported file type: {media.mime_type}", field=kind.value
        )
