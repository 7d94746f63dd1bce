"""Read-only client for Reddit's OAuth listing API."""

from readonly_reddit.models import (
    AgeSort,
    ListingOptions,
    PopularitySort,
    Region,
    SliceInfo,
    Submission,
)
from readonly_reddit.reddit import (
    AuthError,
    DecodeError,
    HTTPError,
    ReadOnlyRedditClient,
    RedditAPIError,
    ValidationError,
)
from readonly_reddit.config import Settings, get_settings

__version__ = "1.0.0"

__all__ = [
    "ReadOnlyRedditClient",
    "AgeSort",
    "ListingOptions",
    "PopularitySort",
    "Region",
    "SliceInfo",
    "Submission",
    "RedditAPIError",
    "ValidationError",
    "AuthError",
    "HTTPError",
    "DecodeError",
    "Settings",
    "get_settings",
]
