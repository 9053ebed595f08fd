"""Client-held provisional preview state.

Exactly one preview session is kept at a time. The generate step writes it,
the review step reads it back without another round trip, regenerate
replaces it wholesale and confirm clears it.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from ..core.exceptions import FlashdeckError, StorageError
from ..core.models import PreviewResponse

logger = logging.getLogger(__name__)

PREVIEW_KEY = "ai-preview-data"


class PreviewStore:
    """File-backed single-slot store for the current PreviewResponse.

    The slot is one JSON file in ``session_dir``. A payload that fails to
    parse is treated as absent and removed.
    """

    def __init__(self, session_dir: str, key: str = PREVIEW_KEY):
        self.session_dir = Path(session_dir)
        self.key = key

    @property
    def path(self) -> Path:
        return self.session_dir / f"{self.key}.json"

    def put(self, preview: PreviewResponse) -> None:
        """Store a preview, replacing any previous one atomically."""
        tmp_path = None
        try:
            self.session_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.session_dir, suffix=".tmp")
            with os.fdopen(fd, "w") as f:
                json.dump(preview.to_dict(), f)
            os.replace(tmp_path, self.path)
            tmp_path = None
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Failed to store preview: {e}")
        finally:
            if tmp_path is not None:
                Path(tmp_path).unlink(missing_ok=True)

        logger.debug(f"Stored preview session {preview.session_id}")

    def get(self) -> Optional[PreviewResponse]:
        """Return the stored preview, or None if absent or unreadable."""
        if not self.path.exists():
            return None

        try:
            with open(self.path) as f:
                data = json.load(f)
            return PreviewResponse.from_dict(data)

        except (json.JSONDecodeError, FlashdeckError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Invalid stored preview, discarding: {e}")
            self.clear()
            return None

    def clear(self) -> None:
        """Remove the stored preview if there is one."""
        self.path.unlink(missing_ok=True)
