"""
Core HTTP client for the Dilovod API.

Handles authentication, the request envelope, response parsing, and error classification.
"""

import http.client
import json
import logging
import os
import urllib.error
import urllib.request
from enum import Enum
from typing import Any

from dilovod_cli.core.types import Envelope

logger = logging.getLogger(__name__)

# Configuration
DEFAULT_BASE_URL = "https://api.dilovod.ua"
DEFAULT_TIMEOUT = 30

UNKNOWN_ERROR_MESSAGE = "Unknown API error"
MISSING_RESULT_MESSAGE = "API response does not contain expected result field"


class ErrorKind(str, Enum):
    """Where in the request/response exchange an API call failed."""

    DECODE_FAILURE = "decode_failure"
    REMOTE_ERROR = "remote_error"
    MISSING_RESULT = "missing_result"
    TRANSPORT_ERROR = "transport_error"


class CLIError(Exception):
    """Base error class for CLI errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        result: dict[str, Any] = {"error": self.message}
        if self.details:
            result["details"] = self.details
        return result


class APIError(CLIError):
    """
    A failed API call.

    Every failure of ``APIClient.request`` surfaces as this one type; ``kind``
    tells them apart. ``code`` is the numeric code of the underlying failure
    (HTTP status or errno, 0 when there is none) and ``api_error_code`` is the
    code the remote put in its ``error`` object, if any. For transport failures
    the original exception is chained and available as ``cause``.
    """

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        code: int = 0,
        api_error_code: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.kind = kind
        self.code = code
        self.api_error_code = api_error_code

    @property
    def cause(self) -> BaseException | None:
        """The exception this error was raised from, if any."""
        return self.__cause__

    def has_api_error_code(self) -> bool:
        """Check if the remote supplied an error code."""
        return self.api_error_code is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        result = super().to_dict()
        result["kind"] = self.kind.value
        if self.code:
            result["code"] = self.code
        if self.api_error_code is not None:
            result["api_error_code"] = self.api_error_code
        return result


class ValidationError(CLIError):
    """Validation error for local input/config issues (not API errors)."""


class APIClient:
    """
    Low-level HTTP client for the Dilovod API.

    Every call goes through ``request``: one POST of a JSON envelope
    ``{action, params, key}`` to the base URL, one JSON response carrying
    either ``result`` or ``error``. Nothing is retried or cached.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        """
        Initialize the API client.

        Args:
            api_key: Dilovod API key (or DILOVOD_API_KEY env var)
            base_url: API base URL (or DILOVOD_BASE_URL env var)
            timeout: Request timeout in seconds

        """
        if api_key is None:
            api_key = os.environ.get("DILOVOD_API_KEY") or None
        self._api_key = api_key
        self._base_url = (base_url or os.environ.get("DILOVOD_BASE_URL") or DEFAULT_BASE_URL).rstrip("/")
        self._timeout = timeout
        self._headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    @property
    def api_key(self) -> str | None:
        return self._api_key

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> int:
        return self._timeout

    def _ensure_api_key(self) -> str:
        """Ensure API key is configured."""
        if self._api_key is None:
            raise ValidationError("DILOVOD_API_KEY environment variable not set")
        return self._api_key

    def build_envelope(self, action: str, params: dict[str, Any]) -> Envelope:
        """Wrap an action and its params together with the API key."""
        return Envelope(action=action, params=params, key=self._ensure_api_key())

    def request(self, action: str, params: dict[str, Any]) -> Any:
        """
        Execute a remote action and return its result.

        Args:
            action: Remote action name (e.g., getObject, saveObject)
            params: Action parameters, sent as-is

        Returns:
            The ``result`` field of the response, untouched

        Raises:
            APIError: On transport, decoding, or remote errors, or a missing result
            ValidationError: If no API key is configured

        """
        envelope = self.build_envelope(action, params)
        logger.debug("Dilovod request: action=%s params=%s", action, list(params))

        raw = self._send(envelope)
        return self._parse_response(raw)

    def _send(self, envelope: Envelope) -> bytes:
        """POST the envelope and return the raw response body."""
        req = urllib.request.Request(
            self._base_url,
            data=envelope.to_json(),
            headers=self._headers,
            method="POST",
        )

        try:
            with urllib.request.urlopen(req, timeout=self._timeout) as response:
                return response.read()

        except urllib.error.HTTPError as e:
            details = {}
            try:
                body = e.read().decode("utf-8", errors="replace")
            except OSError:
                body = ""
            if body:
                details["body"] = body
            logger.debug("Dilovod transport error: HTTP %s", e.code)
            raise APIError(
                f"HTTP error: {e}",
                kind=ErrorKind.TRANSPORT_ERROR,
                code=e.code,
                details=details,
            ) from e

        except urllib.error.URLError as e:
            logger.debug("Dilovod transport error: %s", e.reason)
            raise APIError(
                f"HTTP error: {e.reason}",
                kind=ErrorKind.TRANSPORT_ERROR,
                code=getattr(e.reason, "errno", None) or 0,
            ) from e

        except TimeoutError as e:
            logger.debug("Dilovod request timed out after %s seconds", self._timeout)
            raise APIError(
                f"HTTP error: {e} (timed out after {self._timeout} seconds)",
                kind=ErrorKind.TRANSPORT_ERROR,
                code=e.errno or 0,
            ) from e

        except http.client.HTTPException as e:
            # Malformed status line, truncated body; not OSError subclasses
            logger.debug("Dilovod transport error: %r", e)
            raise APIError(
                f"HTTP error: {e}",
                kind=ErrorKind.TRANSPORT_ERROR,
            ) from e

        except OSError as e:
            logger.debug("Dilovod transport error: %s", e)
            raise APIError(
                f"HTTP error: {e}",
                kind=ErrorKind.TRANSPORT_ERROR,
                code=e.errno or 0,
            ) from e

    def _parse_response(self, raw: bytes) -> Any:
        """Decode a response body and extract its result, or raise the matching APIError."""
        try:
            data = json.loads(raw)
        except ValueError as e:
            # JSONDecodeError, or UnicodeDecodeError for non-UTF bodies
            logger.debug("Dilovod response is not valid JSON: %s", e)
            raise APIError(
                f"Failed to decode API response: {e}",
                kind=ErrorKind.DECODE_FAILURE,
            ) from e

        if not isinstance(data, dict):
            logger.debug("Dilovod response is not an object: %s", type(data).__name__)
            raise APIError(MISSING_RESULT_MESSAGE, kind=ErrorKind.MISSING_RESULT)

        error_field = data.get("error")
        if error_field is not None:
            # Only {"error": {"message": "...", "code": "..."}} carries a message; other shapes stay in details
            message = None
            error_code = None
            if isinstance(error_field, dict):
                message = error_field.get("message")
                error_code = error_field.get("code")
            if message is None:
                message = UNKNOWN_ERROR_MESSAGE
            api_error_code = str(error_code) if error_code is not None else None
            logger.debug("Dilovod remote error: %s (code=%s)", message, api_error_code)
            raise APIError(
                str(message),
                kind=ErrorKind.REMOTE_ERROR,
                api_error_code=api_error_code,
                details={"error": error_field},
            )

        result = data.get("result")
        if result is None:
            logger.debug("Dilovod response has no result field")
            raise APIError(MISSING_RESULT_MESSAGE, kind=ErrorKind.MISSING_RESULT)

        return result
