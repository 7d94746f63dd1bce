"""
Unit tests for AuthSession.

The HTTP session is a mock; the token endpoint responses are real
requests.Response objects built by the conftest factories.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
import requests

from readonly_reddit.reddit.auth import (
    TOKEN_URL,
    AuthSession,
    Credentials,
    TokenState,
)
from readonly_reddit.reddit.exceptions import (
    AuthError,
    AuthErrorReason,
    ValidationError,
)
from readonly_reddit.reddit.http import MAX_BODY_BYTES


class MutableClock:
    def __init__(self) -> None:
        self.now = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock():
    return MutableClock()


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session())


@pytest.fixture
def credentials():
    return Credentials("test_client_id", "test:secret", "test-agent/1.0")


@pytest.fixture
def auth(credentials, session, clock):
    return AuthSession(credentials, session=session, clock=clock)


class TestCredentials:
    """Test credential validation."""

    @pytest.mark.parametrize("field", ["client_id", "client_secret", "user_agent"])
    def test_empty_field_rejected(self, field):
        values = {"client_id": "id", "client_secret": "secret", "user_agent": "ua"}
        values[field] = ""

        with pytest.raises(ValidationError) as exc_info:
            Credentials(**values)

        assert exc_info.value.field == field

    def test_repr_hides_secret(self):
        creds = Credentials("abcdefghijkl", "topsecret", "ua")
        assert "topsecret" not in repr(creds)
        assert "abcdefgh..." in repr(creds)


class TestLogin:
    """Test the client-credentials grant."""

    def test_login_stores_token(self, auth, session, clock, token_response_factory):
        session.post.return_value = token_response_factory(
            access_token="tok-1", expires_in=3600
        )

        auth.login()

        token = auth.store.token
        assert token.access_token == "tok-1"
        assert token.token_type == "bearer"
        assert token.expiry == clock.now + timedelta(seconds=3600)
        assert token.refresh_token is None
        assert auth.state is TokenState.VALID

    def test_login_request_shape(self, auth, session, token_response_factory):
        session.post.return_value = token_response_factory()

        auth.login()

        args, kwargs = session.post.call_args
        assert args[0] == TOKEN_URL
        assert kwargs["data"] == {"grant_type": "client_credentials"}
        # Credentials are URL-escaped before Basic auth
        assert kwargs["auth"] == ("test_client_id", "test%3Asecret")
        assert kwargs["headers"] == {
            "Accept": "*/*",
            "Connection": "keep-alive",
            "Content-Type": "application/x-www-form-urlencoded",
            "User-Agent": "test-agent/1.0",
        }

    def test_login_captures_edgebucket_cookie(self, auth, session, token_response_factory):
        session.post.return_value = token_response_factory(cookie="bucket-42")

        auth.login()

        assert auth.store.cookie.name == "edgebucket"
        assert auth.store.cookie.value == "bucket-42"

    def test_login_ignores_other_cookies(self, auth, session, response_factory):
        session.post.return_value = response_factory(
            payload={"access_token": "t", "expires_in": 60},
            cookies={"session_tracker": "abc"},
        )

        auth.login()

        assert auth.store.cookie is None

    def test_401_raises_auth_error(self, auth, session, response_factory):
        session.post.return_value = response_factory(
            status=401, payload={"message": "Unauthorized"}, reason="Unauthorized"
        )

        with pytest.raises(AuthError) as exc_info:
            auth.login()

        assert exc_info.value.reason is AuthErrorReason.BAD_STATUS
        assert exc_info.value.status_code == 401
        assert auth.state is TokenState.UNAUTHENTICATED

    def test_non_json_content_type(self, auth, session, response_factory):
        session.post.return_value = response_factory(
            body=b"<html></html>", content_type="text/html", compress=False
        )

        with pytest.raises(AuthError) as exc_info:
            auth.login()

        assert exc_info.value.reason is AuthErrorReason.UNEXPECTED_CONTENT_TYPE

    def test_missing_content_type(self, auth, session, response_factory):
        session.post.return_value = response_factory(payload={}, content_type=None)

        with pytest.raises(AuthError) as exc_info:
            auth.login()

        assert exc_info.value.reason is AuthErrorReason.UNEXPECTED_CONTENT_TYPE

    def test_unparsable_body(self, auth, session, response_factory):
        session.post.return_value = response_factory(body=b"{not json", compress=False)

        with pytest.raises(AuthError) as exc_info:
            auth.login()

        assert exc_info.value.reason is AuthErrorReason.MALFORMED_PAYLOAD

    def test_oversized_body(self, auth, session, response_factory):
        session.post.return_value = response_factory(
            body=b" " * (MAX_BODY_BYTES + 1), compress=False
        )

        with pytest.raises(AuthError) as exc_info:
            auth.login()

        assert exc_info.value.reason is AuthErrorReason.MALFORMED_PAYLOAD

    def test_missing_access_token(self, auth, session, response_factory):
        session.post.return_value = response_factory(
            payload={"error": "invalid_grant"}, compress=False
        )

        with pytest.raises(AuthError) as exc_info:
            auth.login()

        assert exc_info.value.reason is AuthErrorReason.MISSING_ACCESS_TOKEN
        assert auth.store.token is None

    def test_connection_error(self, auth, session):
        session.post.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(AuthError) as exc_info:
            auth.login()

        assert exc_info.value.reason is AuthErrorReason.REQUEST_FAILED
        assert isinstance(exc_info.value.__cause__, requests.ConnectionError)


class TestRefresh:
    """Test the refresh-token grant."""

    def test_refresh_without_refresh_token_skips_network(
        self, auth, session, token_response_factory
    ):
        session.post.return_value = token_response_factory()
        auth.login()
        session.post.reset_mock()

        with pytest.raises(AuthError) as exc_info:
            auth.refresh()

        assert exc_info.value.reason is AuthErrorReason.NO_REFRESH_TOKEN
        session.post.assert_not_called()
        assert auth.state is TokenState.UNREFRESHABLE

    def test_refresh_before_login_skips_network(self, auth, session):
        with pytest.raises(AuthError) as exc_info:
            auth.refresh()

        assert exc_info.value.reason is AuthErrorReason.NO_REFRESH_TOKEN
        session.post.assert_not_called()

    def test_refresh_sends_refresh_grant(self, auth, session, token_response_factory):
        session.post.side_effect = [
            token_response_factory(access_token="tok-1", refresh_token="r-1"),
            token_response_factory(access_token="tok-2", refresh_token="r-2"),
        ]
        auth.login()

        auth.refresh()

        _, kwargs = session.post.call_args
        assert kwargs["data"] == {
            "grant_type": "refresh_token",
            "refresh_token": "r-1",
        }
        assert auth.store.token.access_token == "tok-2"
        assert auth.store.refresh_token == "r-2"

    def test_refresh_keeps_previous_refresh_token_when_omitted(
        self, auth, session, token_response_factory
    ):
        session.post.side_effect = [
            token_response_factory(access_token="tok-1", refresh_token="r-1"),
            token_response_factory(access_token="tok-2"),
        ]
        auth.login()

        auth.refresh()

        assert auth.store.token.access_token == "tok-2"
        assert auth.store.refresh_token == "r-1"

    def test_refresh_replaces_cookie(self, auth, session, token_response_factory):
        session.post.side_effect = [
            token_response_factory(refresh_token="r-1", cookie="first"),
            token_response_factory(),
        ]
        auth.login()
        assert auth.store.cookie.value == "first"

        auth.refresh()

        assert auth.store.cookie is None


class TestEnsureValid:
    """Test the read-before-use token guard."""

    def test_valid_token_is_left_alone(self, auth, session, token_response_factory):
        session.post.return_value = token_response_factory(expires_in=3600)
        auth.login()
        session.post.reset_mock()

        auth.ensure_valid()

        session.post.assert_not_called()

    def test_one_refresh_per_expiry_crossing(
        self, auth, session, clock, token_response_factory
    ):
        session.post.side_effect = [
            token_response_factory(access_token="tok-1", refresh_token="r-1", expires_in=60),
            token_response_factory(access_token="tok-2", expires_in=60),
        ]
        auth.login()

        clock.advance(56)
        assert auth.state is TokenState.EXPIRING

        for _ in range(10):
            auth.ensure_valid()

        assert session.post.call_count == 2
        assert auth.store.token.access_token == "tok-2"
        assert auth.state is TokenState.VALID

    def test_expiring_without_refresh_token_becomes_unrefreshable(
        self, auth, session, clock, token_response_factory
    ):
        session.post.return_value = token_response_factory(expires_in=60)
        auth.login()
        clock.advance(60)
        session.post.reset_mock()

        with pytest.raises(AuthError) as first:
            auth.ensure_valid()
        with pytest.raises(AuthError) as second:
            auth.ensure_valid()

        assert first.value.reason is AuthErrorReason.NO_REFRESH_TOKEN
        assert second.value.reason is AuthErrorReason.NO_REFRESH_TOKEN
        assert auth.state is TokenState.UNREFRESHABLE
        session.post.assert_not_called()

    def test_login_recovers_unrefreshable_session(
        self, auth, session, clock, token_response_factory
    ):
        session.post.side_effect = lambda *a, **kw: token_response_factory(expires_in=60)
        auth.login()
        clock.advance(60)
        with pytest.raises(AuthError):
            auth.ensure_valid()

        auth.login()

        assert auth.state is TokenState.VALID
        auth.ensure_valid()

    def test_unauthenticated_session_logs_in(self, auth, session, token_response_factory):
        session.post.return_value = token_response_factory(access_token="lazy")

        auth.ensure_valid()

        assert auth.store.token.access_token == "lazy"
        _, kwargs = session.post.call_args
        assert kwargs["data"] == {"grant_type": "client_credentials"}


class TestAuthorizationHeader:
    def test_bearer_header(self, auth, session, token_response_factory):
        session.post.return_value = token_response_factory(access_token="tok-9")
        auth.login()

        assert auth.authorization_header() == "bearer tok-9"

    def test_header_before_login(self, auth):
        with pytest.raises(AuthError) as exc_info:
            auth.authorization_header()

        assert exc_info.value.reason is AuthErrorReason.MISSING_ACCESS_TOKEN
