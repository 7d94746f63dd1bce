"""
Shared fixtures for building canned Reddit responses.

Responses are real requests.Response objects backed by an in-memory
stream, so the client's streaming, gzip and size-cap code paths run
exactly as they do against the live API.
"""

import gzip
import io
import json
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import MagicMock

import pytest
import requests


def make_response(
    status: int = 200,
    payload: Any = None,
    body: Optional[bytes] = None,
    content_type: Optional[str] = "application/json; charset=UTF-8",
    compress: bool = True,
    cookies: Optional[Dict[str, str]] = None,
    reason: str = "OK",
) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.reason = reason
    if content_type is not None:
        response.headers["Content-Type"] = content_type

    if body is None:
        body = json.dumps(payload if payload is not None else {}).encode("utf-8")
    if compress:
        body = gzip.compress(body)
    response.raw = io.BytesIO(body)

    for name, value in (cookies or {}).items():
        response.cookies.set(name, value)

    return response


def make_token_response(
    access_token: str = "access-1",
    expires_in: int = 3600,
    refresh_token: Optional[str] = None,
    cookie: Optional[str] = None,
    **kwargs: Any,
) -> requests.Response:
    payload: Dict[str, Any] = {
        "access_token": access_token,
        "token_type": "bearer",
        "expires_in": expires_in,
        "scope": "*",
    }
    if refresh_token is not None:
        payload["refresh_token"] = refresh_token

    cookies = {"edgebucket": cookie} if cookie is not None else None
    return make_response(payload=payload, compress=False, cookies=cookies, **kwargs)


def make_post(index: int, subreddit: str = "golang", author: str = "someuser") -> Dict[str, Any]:
    post_id = f"p{index}"
    return {
        "id": post_id,
        "name": f"t3_{post_id}",
        "title": f"Post {index}",
        "author": author,
        "subreddit": subreddit,
        "subreddit_name_prefixed": f"r/{subreddit}",
        "permalink": f"/r/{subreddit}/comments/{post_id}/post_{index}/",
        "url": f"https://example.com/{post_id}",
        "score": 100 - index,
        "ups": 100 - index,
        "upvote_ratio": 0.97,
        "num_comments": index,
        "created_utc": 1700000000.0 + index,
        "edited": False,
        "over_18": False,
        "is_self": True,
        "selftext": "body",
        "link_flair_text": None,
        "distinguished": None,
        "all_awardings": [],
    }


def make_listing(
    posts: List[Dict[str, Any]],
    after: Optional[str] = None,
    before: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "kind": "Listing",
        "data": {
            "dist": len(posts),
            "modhash": "",
            "children": [{"kind": "t3", "data": post} for post in posts],
            "after": after,
            "before": before,
        },
    }


@pytest.fixture
def response_factory() -> Callable[..., requests.Response]:
    return make_response


@pytest.fixture
def token_response_factory() -> Callable[..., requests.Response]:
    return make_token_response


@pytest.fixture
def post_factory() -> Callable[..., Dict[str, Any]]:
    return make_post


@pytest.fixture
def listing_factory() -> Callable[..., Dict[str, Any]]:
    return make_listing


@pytest.fixture
def http_session() -> MagicMock:
    """Mock HTTP session whose token endpoint always succeeds."""
    session = MagicMock(spec=requests.Session())
    session.post.side_effect = lambda *args, **kwargs: make_token_response()
    return session
