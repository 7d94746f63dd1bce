"""
Unit tests for the client's exception hierarchy.
"""

import pytest

from readonly_reddit.reddit.exceptions import (
    AuthError,
    AuthErrorReason,
    DecodeError,
    DecodeErrorReason,
    HTTPError,
    RedditAPIError,
    ValidationError,
)


class TestRedditAPIError:
    """Test base RedditAPIError exception."""

    def test_basic_initialization(self):
        """Test basic error initialization."""
        error = RedditAPIError("Test error")
        assert str(error) == "Test error"
        assert error.message == "Test error"
        assert error.status_code is None

    def test_with_status_code(self):
        """Test error with status code."""
        error = RedditAPIError("Test error", status_code=500)
        assert error.status_code == 500


class TestValidationError:
    """Test ValidationError exception."""

    def test_field_prefixes_message(self):
        error = ValidationError("must not be empty", field="subreddit")
        assert str(error) == "subreddit: must not be empty"
        assert error.field == "subreddit"

    def test_without_field(self):
        error = ValidationError("bad input")
        assert str(error) == "bad input"
        assert error.field is None


class TestAuthError:
    """Test AuthError exception."""

    def test_default_message_and_reason(self):
        error = AuthError()
        assert "authentication failed" in str(error).lower()
        assert error.reason is AuthErrorReason.BAD_STATUS

    def test_no_refresh_token_reason(self):
        error = AuthError("expired", reason=AuthErrorReason.NO_REFRESH_TOKEN)
        assert error.reason is AuthErrorReason.NO_REFRESH_TOKEN
        assert error.status_code is None

    def test_carries_status_code(self):
        error = AuthError("rejected", status_code=401)
        assert error.status_code == 401


class TestHTTPError:
    """Test HTTPError exception."""

    def test_default_message(self):
        error = HTTPError(503)
        assert error.status_code == 503
        assert "503" in str(error)

    def test_custom_message(self):
        error = HTTPError(404, "not found")
        assert str(error) == "not found"


class TestDecodeError:
    """Test DecodeError exception."""

    def test_str_includes_reason(self):
        error = DecodeError(
            "unknown response content type: text/html",
            reason=DecodeErrorReason.UNEXPECTED_CONTENT_TYPE,
        )
        assert str(error) == (
            "unknown response content type: text/html (unexpected_content_type)"
        )

    def test_default_reason(self):
        assert DecodeError("bad json").reason is DecodeErrorReason.MALFORMED_PAYLOAD


@pytest.mark.parametrize(
    "error",
    [
        ValidationError("x"),
        AuthError("x"),
        HTTPError(500),
        DecodeError("x"),
    ],
)
def test_all_errors_inherit_from_base(error):
    """Every client error can be caught as RedditAPIError."""
    assert isinstance(error, RedditAPIError)
    assert isinstance(error, Exception)
