"""
Custom exceptions for the read-only Reddit client.

Every error raised by this package derives from RedditAPIError so callers
can catch the whole family with a single except clause. Nothing in this
package retries: errors surface to the immediate caller, which owns any
retry or backoff policy.
"""

from enum import Enum
from typing import Optional


class RedditAPIError(Exception):
    """
    Base exception for all Reddit API related errors.

    Use this for catching any error raised by the client.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        """
        Initialize RedditAPIError.

        Args:
            message: Error description
            status_code: Optional HTTP status code from Reddit API
        """
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ValidationError(RedditAPIError):
    """
    Raised when caller-supplied input is invalid.

    This occurs when:
    - Credentials (client id, secret, user agent) are empty
    - Subreddit or author name is empty
    - A sort, age or region value is not one of the known values

    This is a caller bug and should never be retried.

    Example:
        >>> raise ValidationError("must not be empty", field="subreddit")
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        """
        Initialize ValidationError.

        Args:
            message: Error description
            field: Optional field name that failed validation
        """
        self.field = field

        if field:
            message = f"{field}: {message}"

        super().__init__(message)


class AuthErrorReason(str, Enum):
    """Why a token could not be obtained."""

    REQUEST_FAILED = "request_failed"
    BAD_STATUS = "bad_status"
    UNEXPECTED_CONTENT_TYPE = "unexpected_content_type"
    MALFORMED_PAYLOAD = "malformed_payload"
    MISSING_ACCESS_TOKEN = "missing_access_token"
    NO_REFRESH_TOKEN = "no_refresh_token"


class AuthError(RedditAPIError):
    """
    Raised when the identity endpoint does not yield a usable token.

    This occurs when:
    - The token endpoint rejects the credentials (non-2xx status)
    - The token response is not JSON, cannot be parsed or lacks access_token
    - A refresh is needed but no refresh token was ever issued

    The last case (reason NO_REFRESH_TOKEN) is terminal for the session:
    the client must be rebuilt, or login() called again, to recover.

    Example:
        >>> raise AuthError("token expired", reason=AuthErrorReason.NO_REFRESH_TOKEN)
    """

    def __init__(
        self,
        message: str = "Reddit authentication failed",
        reason: AuthErrorReason = AuthErrorReason.BAD_STATUS,
        status_code: Optional[int] = None,
    ) -> None:
        """
        Initialize AuthError.

        Args:
            message: Error description
            reason: Machine-readable failure category
            status_code: HTTP status returned by the token endpoint, if any
        """
        self.reason = reason
        super().__init__(message, status_code=status_code)


class HTTPError(RedditAPIError):
    """
    Raised when the content endpoint answers with a non-2xx status.

    Example:
        >>> raise HTTPError(503, "Service Unavailable")
    """

    def __init__(self, status_code: int, message: Optional[str] = None) -> None:
        """
        Initialize HTTPError.

        Args:
            status_code: HTTP status code returned by Reddit
            message: Optional error description
        """
        if message is None:
            message = f"Reddit API returned status {status_code}"

        super().__init__(message, status_code=status_code)


class DecodeErrorReason(str, Enum):
    """Why a content response could not be decoded."""

    UNEXPECTED_CONTENT_TYPE = "unexpected_content_type"
    TRANSPORT_FAILURE = "transport_failure"
    MALFORMED_PAYLOAD = "malformed_payload"


class DecodeError(RedditAPIError):
    """
    Raised when a content response cannot be turned into JSON.

    This occurs when:
    - Content-Type is missing, unparsable or not application/json
    - The connection fails or the compressed body cannot be read
    - The body exceeds the 1 MiB cap or is not valid JSON

    Oversized bodies are rejected, never silently truncated.

    Example:
        >>> raise DecodeError("text/html", reason=DecodeErrorReason.UNEXPECTED_CONTENT_TYPE)
    """

    def __init__(
        self,
        message: str,
        reason: DecodeErrorReason = DecodeErrorReason.MALFORMED_PAYLOAD,
    ) -> None:
        """
        Initialize DecodeError.

        Args:
            message: Error description
            reason: Machine-readable failure category
        """
        self.reason = reason
        super().__init__(message)

    def __str__(self) -> str:
        """Return error message with the failure category."""
        return f"{self.message} ({self.reason.value})"
