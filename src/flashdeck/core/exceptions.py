"""Custom exceptions for Flashdeck."""


class FlashdeckError(Exception):
    """Base exception for all Flashdeck errors."""
    pass


class InputValidationError(FlashdeckError):
    """User input rejected before any request is sent."""

    def __init__(self, message: str, field: str = None):
        self.field = field
        super().__init__(message)


class ApiError(FlashdeckError):
    """Error reported by (or while talking to) the backend."""

    def __init__(
        self,
        message: str,
        status_code: int = None,
        endpoint: str = None,
    ):
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class ResponseFormatError(ApiError):
    """Backend answered with empty or malformed content."""
    pass


class AuthError(ApiError):
    """No usable bearer token, or the backend rejected it."""
    pass


class MissingPreviewError(FlashdeckError):
    """No provisional preview is stored for review."""

    def __init__(self, message: str, redirect_to: str = "generate"):
        self.redirect_to = redirect_to
        super().__init__(message)


class ActionInProgressError(FlashdeckError):
    """An action was started while the same action is still pending."""

    def __init__(self, message: str, action: str = None):
        self.action = action
        super().__init__(message)


class InvalidStateError(FlashdeckError):
    """Operation not allowed in the current session state."""

    def __init__(self, message: str, state: str = None):
        self.state = state
        super().__init__(message)


class RecordingError(FlashdeckError):
    """Error while capturing audio from the microphone."""
    pass


class StorageError(FlashdeckError):
    """Error with the local preview store."""
    pass


class ConfigError(FlashdeckError):
    """Error in configuration."""

    def __init__(self, message: str, config_key: str = None):
        self.config_key = config_key
        super().__init__(message)
