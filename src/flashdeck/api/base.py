"""HTTP client shared by all backend resources."""

import json
import logging
from typing import Any, Callable, Optional

import requests

from ..core.config import ApiConfig
from ..core.exceptions import ApiError, AuthError, ResponseFormatError

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Optional[str]]


class ApiClient:
    """Thin wrapper around a ``requests.Session``.

    Every call carries ``Authorization: Bearer <token>``. The token comes
    from ``token_provider`` (defaults to the configured token or the
    FLASHDECK_API_TOKEN environment variable). A missing token is fatal for
    the call and is not retried.

    Error handling follows one rule for every endpoint: a ``{"message": ...}``
    body becomes the error text, anything else is reported as
    ``"<default>: <status> <body>"``.
    """

    def __init__(
        self,
        config: ApiConfig,
        token_provider: Optional[TokenProvider] = None,
        session: Optional[requests.Session] = None,
    ):
        self.config = config
        self.token_provider = token_provider or config.get_token
        self.session = session or requests.Session()

    @property
    def base_url(self) -> str:
        return self.config.base_url.rstrip("/")

    def _auth_headers(self) -> dict:
        token = self.token_provider()
        if not token:
            raise AuthError(
                "Not signed in: no API token available. "
                "Set FLASHDECK_API_TOKEN or api.token in the config file."
            )
        return {"Authorization": f"Bearer {token}"}

    def request(
        self,
        method: str,
        path: str,
        error_message: str,
        json_body: Optional[dict] = None,
        data: Optional[dict] = None,
        files: Optional[dict] = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Args:
            method: HTTP method
            path: Path below the base URL, e.g. ``/api/decks``
            error_message: Default message for failures of this call
            json_body: JSON payload
            data: Form fields (multipart when ``files`` is given)
            files: Multipart files as ``{field: (name, bytes, mime)}``

        Returns:
            Decoded JSON, or None for an empty body

        Raises:
            AuthError: No token, or the backend answered 401
            ApiError: Transport failure or non-2xx status
            ResponseFormatError: Body is not valid JSON
        """
        headers = self._auth_headers()
        url = f"{self.base_url}{path}"

        # requests sets the multipart boundary itself; only JSON needs a content type
        if json_body is not None:
            headers["Content-Type"] = "application/json"

        logger.debug(f"{method} {url}")

        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                json=json_body,
                data=data,
                files=files,
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            raise ApiError(f"{error_message}: {e}", endpoint=path)

        if not response.ok:
            raise self._error_from_response(response, error_message, path)

        text = response.text
        if not text:
            return None

        try:
            return json.loads(text)
        except json.JSONDecodeError:
            logger.warning(f"Invalid JSON from {path}: {text[:200]}")
            raise ResponseFormatError(
                "Invalid JSON response from server",
                status_code=response.status_code,
                endpoint=path,
            )

    def _error_from_response(
        self, response: requests.Response, error_message: str, path: str
    ) -> ApiError:
        text = response.text or ""
        message = None
        try:
            body = json.loads(text)
            if isinstance(body, dict):
                message = body.get("message") or body.get("error")
        except json.JSONDecodeError:
            pass

        if not message:
            message = f"{error_message}: {response.status_code} {text}".strip()

        error_cls = AuthError if response.status_code == 401 else ApiError
        return error_cls(message, status_code=response.status_code, endpoint=path)

    def get(self, path: str, error_message: str) -> Any:
        return self.request("GET", path, error_message)

    def post(self, path: str, error_message: str, **kwargs) -> Any:
        return self.request("POST", path, error_message, **kwargs)

    def put(self, path: str, error_message: str, **kwargs) -> Any:
        return self.request("PUT", path, error_message, **kwargs)

    def delete(self, path: str, error_message: str) -> None:
        self.request("DELETE", path, error_message)


def unwrap_envelope(result: Any, error_message: str, endpoint: str = None) -> Any:
    """Return ``data`` from a ``{"success": ..., "data": ...}`` envelope.

    Raises:
        ResponseFormatError: Empty body or not an envelope
        ApiError: ``success`` is false
    """
    if result is None:
        raise ResponseFormatError("Empty response from server", endpoint=endpoint)
    if not isinstance(result, dict):
        raise ResponseFormatError("Unexpected response from server", endpoint=endpoint)
    if not result.get("success"):
        raise ApiError(result.get("message") or error_message, endpoint=endpoint)
    if result.get("data") is None:
        raise ResponseFormatError("Response is missing 'data'", endpoint=endpoint)
    return result["data"]
