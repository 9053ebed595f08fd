"""Live audio capture from the microphone.

Uses the ``speech_recognition`` package (with PyAudio) to open the default
input device, listen for one utterance and return it as WAV bytes. The
device is opened as a context manager so it is released as soon as the
recording stops, whatever happens afterwards.
"""

import logging

from ..core.config import RecordingConfig
from ..core.exceptions import RecordingError
from .media import MediaFile

logger = logging.getLogger(__name__)

RECORDING_NAME = "recording.wav"
RECORDING_MIME = "audio/wav"


class MicrophoneRecorder:
    """Records one utterance from a microphone.

    Requires: pip install flashdeck[audio]
    """

    def __init__(self, config: RecordingConfig = None):
        self.config = config or RecordingConfig()

    def _get_sr(self):
        """Lazy-load speech_recognition."""
        try:
            import speech_recognition as sr
        except ImportError:
            raise RecordingError(
                "speech_recognition not installed. Install with: pip install flashdeck[audio]"
            )
        return sr

    def record(self) -> MediaFile:
        """Record until the speaker pauses or the phrase limit is hit.

        Raises:
            RecordingError: No microphone, access denied, or nothing heard
        """
        sr = self._get_sr()
        recognizer = sr.Recognizer()

        try:
            with sr.Microphone(device_index=self.config.device_index) as source:
                logger.debug("Microphone opened")
                recognizer.adjust_for_ambient_noise(source, duration=0.5)
                audio = recognizer.listen(
                    source,
                    timeout=self.config.timeout,
                    phrase_time_limit=self.config.phrase_time_limit,
                )
        except sr.WaitTimeoutError:
            raise RecordingError("No speech detected before the timeout")
        except AttributeError as e:
            # speech_recognition reports a missing PyAudio this way
            raise RecordingError(f"Microphone support unavailable: {e}")
        except OSError as e:
            raise RecordingError(f"Microphone access was denied: {e}")

        logger.debug("Microphone released")
        return MediaFile(
            name=RECORDING_NAME,
            mime_type=RECORDING_MIME,
            data=audio.get_wav_data(),
        )
