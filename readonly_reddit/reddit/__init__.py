"""
Reddit API integration layer.

This module provides the read-only listing client including:
- ReadOnlyRedditClient: public listing operations
- AuthSession / TokenStore: OAuth2 token lifecycle
- Transport: signed, validated GET requests
- Throttle: minimum interval between requests
- Paginator: cursor-following page iteration
- Custom exception hierarchy for error handling

Example:
    >>> from readonly_reddit.reddit import ReadOnlyRedditClient
    >>> client = ReadOnlyRedditClient(client_id, client_secret, user_agent)
    >>> posts = client.all_submissions_to("python", "top", "week", total=150)
"""

from readonly_reddit.reddit.auth import (
    AuthSession,
    Credentials,
    TokenState,
)
from readonly_reddit.reddit.client import ReadOnlyRedditClient
from readonly_reddit.reddit.exceptions import (
    AuthError,
    AuthErrorReason,
    DecodeError,
    DecodeErrorReason,
    HTTPError,
    RedditAPIError,
    ValidationError,
)
from readonly_reddit.reddit.paginator import Paginator
from readonly_reddit.reddit.throttle import Throttle
from readonly_reddit.reddit.token_store import SessionCookie, Token, TokenStore
from readonly_reddit.reddit.transport import Transport

__all__ = [
    # Client
    "ReadOnlyRedditClient",
    # Authentication
    "AuthSession",
    "Credentials",
    "TokenState",
    "SessionCookie",
    "Token",
    "TokenStore",
    # Request pipeline
    "Transport",
    "Throttle",
    "Paginator",
    # Exceptions
    "RedditAPIError",
    "ValidationError",
    "AuthError",
    "AuthErrorReason",
    "HTTPError",
    "DecodeError",
    "DecodeErrorReason",
]
