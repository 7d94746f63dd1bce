"""
OAuth2 session management for Reddit's identity endpoint.

AuthSession performs the application-only client-credentials grant and
the refresh-token grant, and keeps the resulting token in a TokenStore.
Tokens are checked on use rather than refreshed on a timer: every API
request calls ensure_valid() right before it is sent.

Token lifecycle:

    UNAUTHENTICATED --login()--> VALID --time--> EXPIRING
    EXPIRING --refresh()--> VALID
    EXPIRING --refresh() without refresh token--> UNREFRESHABLE (terminal)
"""

import json
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple
from urllib.parse import quote_plus

import requests
import structlog

from readonly_reddit.reddit.exceptions import (
    AuthError,
    AuthErrorReason,
    ValidationError,
)
from readonly_reddit.reddit.http import (
    BodyReadError,
    detach_cookie_jar,
    media_type,
    read_body,
)
from readonly_reddit.reddit.token_store import (
    SessionCookie,
    Token,
    TokenStore,
    utcnow,
)

logger = structlog.get_logger(__name__)

TOKEN_URL = "https://www.reddit.com/api/v1/access_token"

# Cookie set by the token endpoint that Reddit expects back on API calls
SESSION_COOKIE_NAME = "edgebucket"

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class Credentials:
    """
    Application credentials for the client-credentials grant.

    Raises:
        ValidationError: If any field is empty
    """

    client_id: str
    client_secret: str
    user_agent: str

    def __post_init__(self) -> None:
        for field in ("client_id", "client_secret", "user_agent"):
            if not getattr(self, field):
                raise ValidationError("must not be empty", field=field)

    def __repr__(self) -> str:
        return (
            f"Credentials(client_id='{self.client_id[:8]}...', "
            f"client_secret='***', user_agent={self.user_agent!r})"
        )


class TokenState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    VALID = "valid"
    EXPIRING = "expiring"
    UNREFRESHABLE = "unrefreshable"


class AuthSession:
    """
    Obtain and refresh OAuth tokens for one client instance.

    Not thread-safe: callers sharing a session across threads must guard
    ensure_valid() and the request that follows with their own lock.

    Example:
        >>> auth = AuthSession(Credentials("id", "secret", "my-app/1.0"))
        >>> auth.login()
        >>> auth.ensure_valid()
        >>> auth.store.token.access_token
        '...'
    """

    def __init__(
        self,
        credentials: Credentials,
        session: Optional[requests.Session] = None,
        token_url: str = TOKEN_URL,
        timeout: float = DEFAULT_TIMEOUT,
        clock: Callable[[], datetime] = utcnow,
        logger: Any = logger,
    ) -> None:
        """
        Initialize AuthSession without contacting the network.

        Args:
            credentials: Validated application credentials
            session: HTTP session to reuse (a new one is created if omitted);
                its cookie jar is emptied and disabled
            token_url: Identity endpoint URL
            timeout: Per-request timeout in seconds
            clock: Returns the current UTC time
            logger: Bound structlog logger
        """
        self.credentials = credentials
        self.session = session if session is not None else requests.Session()
        # The token store is the only source of cookies sent to Reddit
        detach_cookie_jar(self.session)
        self.token_url = token_url
        self.timeout = timeout
        self.store = TokenStore()
        self.logger = logger
        self._clock = clock
        self._unrefreshable = False

    @property
    def state(self) -> TokenState:
        """Current position in the token lifecycle."""
        if self._unrefreshable:
            return TokenState.UNREFRESHABLE
        token = self.store.token
        if token is None:
            return TokenState.UNAUTHENTICATED
        if token.is_expiring(self._clock()):
            return TokenState.EXPIRING
        return TokenState.VALID

    def login(self) -> None:
        """
        Perform a client-credentials grant and store the result.

        Raises:
            AuthError: If the token endpoint does not yield an access token
        """
        token, cookie = self._retrieve_token({"grant_type": "client_credentials"})
        self.store.replace(token, cookie)
        self._unrefreshable = False

    def refresh(self) -> None:
        """
        Perform a refresh-token grant using the stored refresh token.

        Raises:
            AuthError: With reason NO_REFRESH_TOKEN (without any network
                call) when no refresh token is stored, or any other reason
                if the grant fails
        """
        refresh_token = self.store.refresh_token
        if not refresh_token:
            self._unrefreshable = True
            self.logger.error("token_unrefreshable")
            raise AuthError(
                "oauth2: token expired and refresh token is not set",
                reason=AuthErrorReason.NO_REFRESH_TOKEN,
            )

        token, cookie = self._retrieve_token(
            {"grant_type": "refresh_token", "refresh_token": refresh_token}
        )
        self.store.replace(token, cookie)

    def ensure_valid(self) -> None:
        """
        Make sure a usable token is stored before an API request.

        Logs in when no token was ever obtained and refreshes when the
        stored token is within the safety margin of expiry.

        Raises:
            AuthError: If the session is unrefreshable or a grant fails
        """
        state = self.state
        if state is TokenState.VALID:
            return
        if state is TokenState.UNREFRESHABLE:
            raise AuthError(
                "oauth2: session cannot be refreshed, login again",
                reason=AuthErrorReason.NO_REFRESH_TOKEN,
            )
        if state is TokenState.UNAUTHENTICATED:
            self.login()
            return

        self.logger.debug("token_expiring", expiry=self.store.token.expiry.isoformat())
        self.refresh()

    def authorization_header(self) -> str:
        token = self.store.token
        if token is None:
            raise AuthError(
                "no access token, login first",
                reason=AuthErrorReason.MISSING_ACCESS_TOKEN,
            )
        return f"bearer {token.access_token}"

    def _retrieve_token(
        self, form: Dict[str, str]
    ) -> Tuple[Token, Optional[SessionCookie]]:
        """
        POST a grant to the identity endpoint and decode the response.

        Args:
            form: Form fields of the grant

        Returns:
            New token and the session cookie, if the server set one

        Raises:
            AuthError: On transport failure, non-2xx status, non-JSON
                response, unparsable or oversized body, or missing
                access_token
        """
        headers = {
            "Accept": "*/*",
            "Connection": "keep-alive",
            "Content-Type": "application/x-www-form-urlencoded",
            "User-Agent": self.credentials.user_agent,
        }
        auth = (
            quote_plus(self.credentials.client_id),
            quote_plus(self.credentials.client_secret),
        )

        self.logger.debug("token_request", grant_type=form["grant_type"])

        try:
            response = self.session.post(
                self.token_url,
                data=form,
                auth=auth,
                headers=headers,
                timeout=self.timeout,
                stream=True,
            )
        except requests.RequestException as e:
            self.logger.error("token_request_failed", error=str(e))
            raise AuthError(
                f"oauth2: cannot fetch token: {e}",
                reason=AuthErrorReason.REQUEST_FAILED,
            ) from e

        try:
            payload = self._decode(response)
        finally:
            response.close()

        received_at = self._clock()
        access_token = payload.get("access_token") or ""
        if not access_token:
            raise AuthError(
                "oauth2: server response missing access_token",
                reason=AuthErrorReason.MISSING_ACCESS_TOKEN,
            )

        try:
            expires_in = int(payload.get("expires_in") or 0)
        except (TypeError, ValueError) as e:
            raise AuthError(
                f"oauth2: invalid expires_in: {payload.get('expires_in')!r}",
                reason=AuthErrorReason.MALFORMED_PAYLOAD,
            ) from e

        token = Token(
            access_token=access_token,
            token_type=payload.get("token_type") or "",
            expiry=received_at + timedelta(seconds=expires_in),
            # Servers omit refresh_token to mean "unchanged"
            refresh_token=payload.get("refresh_token") or form.get("refresh_token"),
        )

        cookie = None
        value = response.cookies.get(SESSION_COOKIE_NAME)
        if value is not None:
            cookie = SessionCookie(name=SESSION_COOKIE_NAME, value=value)

        self.logger.debug(
            "token_acquired",
            token_type=token.token_type,
            expiry=token.expiry.isoformat(),
            refreshable=token.refresh_token is not None,
            session_cookie=cookie is not None,
        )

        return token, cookie

    def _decode(self, response: requests.Response) -> Dict[str, Any]:
        status = response.status_code
        if status < 200 or status > 299:
            self.logger.error("token_request_rejected", status_code=status)
            raise AuthError(
                f"oauth2: cannot fetch token, status: {status} {response.reason or ''}".rstrip(),
                reason=AuthErrorReason.BAD_STATUS,
                status_code=status,
            )

        content_type = media_type(response)
        if content_type != "application/json":
            raise AuthError(
                f"unknown response content type: {content_type}",
                reason=AuthErrorReason.UNEXPECTED_CONTENT_TYPE,
                status_code=status,
            )

        try:
            body = read_body(response)
            payload = json.loads(body)
        except (BodyReadError, ValueError) as e:
            raise AuthError(
                f"oauth2: cannot parse token response: {e}",
                reason=AuthErrorReason.MALFORMED_PAYLOAD,
                status_code=status,
            ) from e

        if not isinstance(payload, dict):
            raise AuthError(
                "oauth2: token response is not a JSON object",
                reason=AuthErrorReason.MALFORMED_PAYLOAD,
                status_code=status,
            )

        return payload
