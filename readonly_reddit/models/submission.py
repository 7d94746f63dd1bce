"""
Pydantic model for a Reddit submission (kind ``t3``).

A Submission is a point-in-time snapshot of a post as returned inside a
listing envelope. Field names match the remote JSON keys; keys Reddit adds
later are ignored and keys it omits fall back to defaults.
"""
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict


class Submission(BaseModel):
    """
    Immutable record of a single post.

    Example:
        >>> post = Submission.model_validate({"id": "abc", "title": "Hello"})
        >>> post.fullname
        't3_abc'
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    # Identity
    id: str = ""
    name: str = ""
    permalink: str = ""
    url: str = ""
    domain: str = ""

    # Authorship
    author: str = ""
    author_fullname: Optional[str] = None
    author_flair_text: Optional[str] = None
    author_flair_css_class: Optional[str] = None
    author_premium: Optional[bool] = None
    author_patreon_flair: Optional[bool] = None
    is_original_content: bool = False

    # Subreddit
    subreddit: str = ""
    subreddit_id: str = ""
    subreddit_name_prefixed: str = ""
    subreddit_type: str = ""
    subreddit_subscribers: int = 0

    # Content
    title: str = ""
    selftext: str = ""
    selftext_html: Optional[str] = None
    thumbnail: str = ""
    thumbnail_height: Optional[int] = None
    thumbnail_width: Optional[int] = None
    post_hint: Optional[str] = None
    link_flair_text: Optional[str] = None
    link_flair_css_class: Optional[str] = None
    link_flair_type: Optional[str] = None
    is_self: bool = False
    is_video: bool = False
    is_reddit_media_domain: bool = False
    is_meta: bool = False
    is_crosspostable: bool = False
    media_only: bool = False

    # Engagement
    score: int = 0
    ups: int = 0
    downs: int = 0
    upvote_ratio: float = 0.0
    num_comments: int = 0
    num_crossposts: int = 0
    gilded: int = 0
    total_awards_received: int = 0
    view_count: Optional[int] = None

    # Timestamps (epoch seconds)
    created: float = 0.0
    created_utc: float = 0.0
    edited: Union[bool, float] = False

    # Moderation and visibility
    over_18: bool = False
    spoiler: bool = False
    stickied: bool = False
    pinned: bool = False
    locked: bool = False
    archived: bool = False
    hidden: bool = False
    quarantine: bool = False
    contest_mode: bool = False
    hide_score: bool = False
    can_gild: bool = False
    can_mod_post: bool = False
    send_replies: bool = False
    no_follow: bool = False
    distinguished: Optional[str] = None
    removed_by_category: Optional[str] = None
    suggested_sort: Optional[str] = None
    whitelist_status: Optional[str] = None
    parent_whitelist_status: Optional[str] = None
    wls: Optional[int] = None
    pwls: Optional[int] = None

    # Client-side state (always default for app-only tokens)
    clicked: bool = False
    visited: bool = False
    saved: bool = False
    likes: Optional[bool] = None

    @property
    def fullname(self) -> str:
        """Reddit fullname (``t3_<id>``), usable as an ``after`` cursor."""
        return self.name or f"t3_{self.id}"
