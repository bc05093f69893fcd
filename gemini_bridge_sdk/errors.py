"""
Transport error types and error mapping utilities.

Every failure a transport reports is a TransportError, built from an
httpx response or exception by ErrorMapper so status codes, response
bodies and retryability are recorded the same way across transports.
"""

from typing import Any, Dict, Optional

import httpx


class TransportError(Exception):
    """
    Base exception for transport-related errors.

    Attributes:
        message: Error message
        transport: Transport name
        status_code: HTTP status code if applicable
        is_retryable: Whether a retry could succeed (advisory, never acted on)
        original_error: The original exception if wrapped
    """

    def __init__(
        self,
        message: str,
        transport: str = "rest",
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.transport = transport
        self.status_code = status_code
        self.is_retryable = False
        self.original_error: Optional[BaseException] = None


class ApiConnectionError(TransportError, ConnectionError):
    """The connectivity check made by ``connect`` failed."""


class GenerationError(TransportError):
    """A streaming generation request failed."""

    def __init__(
        self,
        message: str,
        transport: str = "rest",
        status_code: Optional[int] = None,
        body: str = "",
    ):
        super().__init__(message, transport=transport, status_code=status_code)
        self.body = body


class DecodeError(TransportError):
    """A single stream line could not be decoded."""

    def __init__(self, message: str, line: str = ""):
        super().__init__(message)
        self.line = line


class ErrorMapper:
    """Maps httpx responses and exceptions to TransportError instances."""

    RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}

    @staticmethod
    def is_retryable(error: BaseException) -> bool:
        status_code = getattr(error, "status_code", None)
        if status_code is not None and status_code in ErrorMapper.RETRYABLE_STATUS_CODES:
            return True

        if isinstance(error, (httpx.TimeoutException, httpx.ConnectError)):
            return True

        message = str(error).lower()
        return any(phrase in message for phrase in ("rate limit", "too many requests", "quota exceeded"))

    @staticmethod
    def connection_failed(
        response: Optional[httpx.Response] = None,
        error: Optional[BaseException] = None,
        transport: str = "rest",
    ) -> ApiConnectionError:
        """
        Build the error raised when the connectivity check fails.

        Args:
            response: Non-success response from the validation endpoint
            error: Network-level exception if no response was received

        Returns:
            ApiConnectionError with status and cause attached
        """
        if response is not None:
            message = f"API connection failed: {response.status_code} {response.reason_phrase}".rstrip()
            mapped = ApiConnectionError(message, transport=transport, status_code=response.status_code)
        else:
            message = f"API connection failed: {error}"
            mapped = ApiConnectionError(message, transport=transport)
            mapped.original_error = error

        mapped.is_retryable = ErrorMapper.is_retryable(error or mapped)
        return mapped

    @staticmethod
    def generation_failed(
        status_code: Optional[int] = None,
        reason: str = "",
        body: str = "",
        error: Optional[BaseException] = None,
        transport: str = "rest",
    ) -> GenerationError:
        """
        Build the error reported when a generation request fails.

        Args:
            status_code: HTTP status of the failed response
            reason: HTTP reason phrase
            body: Response body text
            error: Network-level exception if no response was received

        Returns:
            GenerationError carrying status and body
        """
        if error is not None:
            mapped = GenerationError(f"API request failed: {error}", transport=transport)
            mapped.original_error = error
        else:
            message = f"API request failed: {status_code} {reason} - {body}"
            mapped = GenerationError(message, transport=transport, status_code=status_code, body=body)

        mapped.is_retryable = ErrorMapper.is_retryable(error or mapped)
        return mapped

    @staticmethod
    def get_error_classification(error: TransportError) -> Dict[str, Any]:
        """Summarise an error as structured log fields."""
        return {
            "status_code": error.status_code,
            "is_retryable": error.is_retryable,
            "category": ErrorMapper._categorize_error(error),
            "cause": type(error.original_error).__name__ if error.original_error else None,
        }

    @staticmethod
    def _categorize_error(error: TransportError) -> str:
        if error.status_code:
            if error.status_code in (401, 403):
                return "authentication"
            if error.status_code == 429:
                return "rate_limit"
            if error.status_code >= 500:
                return "server_error"
            if error.status_code >= 400:
                return "client_error"

        if isinstance(error.original_error, httpx.TimeoutException):
            return "timeout"
        if isinstance(error.original_error, httpx.TransportError):
            return "network"
        if isinstance(error, DecodeError):
            return "decode"

        return "unknown"
