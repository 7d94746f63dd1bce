"""
OAuth token and session cookie storage.

A TokenStore holds exactly one Token and at most one SessionCookie. Both
are immutable values; a (re)authentication replaces them together, so a
reader never sees a half-updated token.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

# Refresh this long before the server-side expiry
SAFETY_MARGIN = timedelta(seconds=5)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Token:
    """
    OAuth2 bearer token as issued by the identity endpoint.

    Attributes:
        access_token: Bearer credential sent on every API call
        token_type: Token type reported by the server (normally "bearer")
        expiry: Instant after which the server rejects the token
        refresh_token: Token used for the refresh grant, if one was issued
    """

    access_token: str
    token_type: str
    expiry: datetime
    refresh_token: Optional[str] = None

    def is_expiring(self, now: Optional[datetime] = None) -> bool:
        """
        Check whether the token is within the safety margin of expiry.

        Args:
            now: Reference instant (default: current UTC time)

        Returns:
            True when ``now + SAFETY_MARGIN >= expiry``
        """
        if now is None:
            now = utcnow()
        return now + SAFETY_MARGIN >= self.expiry


@dataclass(frozen=True)
class SessionCookie:
    """Cookie captured from the token response and echoed on API calls."""

    name: str
    value: str


class TokenStore:
    """
    Current token and session cookie for one client instance.

    Example:
        >>> store = TokenStore()
        >>> store.is_valid()
        False
        >>> store.replace(token, cookie)
        >>> store.is_valid()
        True
    """

    def __init__(self) -> None:
        self._token: Optional[Token] = None
        self._cookie: Optional[SessionCookie] = None

    @property
    def token(self) -> Optional[Token]:
        return self._token

    @property
    def cookie(self) -> Optional[SessionCookie]:
        return self._cookie

    @property
    def refresh_token(self) -> Optional[str]:
        if self._token is None:
            return None
        return self._token.refresh_token

    def replace(self, token: Token, cookie: Optional[SessionCookie]) -> None:
        """Swap in a new token and cookie as a single unit."""
        self._token = token
        self._cookie = cookie

    def clear(self) -> None:
        self._token = None
        self._cookie = None

    def is_valid(self, now: Optional[datetime] = None) -> bool:
        """
        Check whether a token is present and not about to expire.

        Args:
            now: Reference instant (default: current UTC time)

        Returns:
            True if a token exists and is outside the safety margin
        """
        return self._token is not None and not self._token.is_expiring(now)
