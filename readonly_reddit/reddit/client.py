"""
Read-only Reddit client for submission listings.

ReadOnlyRedditClient is the public entry point. It owns one HTTP session,
one AuthSession and one Throttle; nothing is shared between instances.
Construction logs in eagerly, so a client that exists holds a token.

Example:
    >>> client = ReadOnlyRedditClient("id", "secret", "my-app/1.0 (by u/me)")
    >>> posts, cursor = client.submissions_to(
    ...     "python", PopularitySort.TOP, AgeSort.WEEK, ListingOptions(limit=5)
    ... )
    >>> everything = client.all_submissions_of("spez", "new", "all", total=250)
"""

from typing import (
    TYPE_CHECKING,
    Any,
    Iterator,
    List,
    Mapping,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
)
from urllib.parse import quote

import requests
from pydantic import ValidationError as PydanticValidationError

from readonly_reddit.models.enums import AgeSort, PopularitySort
from readonly_reddit.models.listing import (
    MAX_PAGE_LIMIT,
    Listing,
    ListingOptions,
    SliceInfo,
)
from readonly_reddit.models.submission import Submission
from readonly_reddit.reddit.auth import (
    DEFAULT_TIMEOUT,
    TOKEN_URL,
    AuthSession,
    Credentials,
)
from readonly_reddit.reddit.exceptions import (
    AuthError,
    DecodeError,
    DecodeErrorReason,
    ValidationError,
)
from readonly_reddit.reddit.paginator import Page, Paginator
from readonly_reddit.reddit.throttle import Throttle
from readonly_reddit.reddit.transport import Transport
from readonly_reddit.utils.logger import get_logger, setup_logging

if TYPE_CHECKING:
    from readonly_reddit.config import Settings

QUERY_URL = "https://oauth.reddit.com"

E = TypeVar("E", PopularitySort, AgeSort)

SortLike = Union[PopularitySort, str]
AgeLike = Union[AgeSort, str]


def _coerce(enum_cls: Type[E], value: Union[E, str], field: str) -> E:
    """Map a member or its string value onto ``enum_cls``."""
    try:
        return enum_cls(value)
    except ValueError as e:
        allowed = ", ".join(repr(member.value) for member in enum_cls)
        raise ValidationError(
            f"unknown value {value!r} (expected one of {allowed})", field=field
        ) from e


class ReadOnlyRedditClient:
    """
    OAuth, application-only session with Reddit.

    All calls are synchronous and blocking. An instance is not safe for
    concurrent use: either give each worker its own client or wrap calls
    in a lock.

    Attributes:
        credentials: Application credentials
        auth: Token lifecycle manager
        throttle: Minimum-interval gate between requests
        transport: Signed GET executor
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        user_agent: str,
        *,
        throttle_interval: Optional[float] = None,
        timeout: float = DEFAULT_TIMEOUT,
        token_url: str = TOKEN_URL,
        api_url: str = QUERY_URL,
        extra_headers: Optional[Mapping[str, str]] = None,
        session: Optional[requests.Session] = None,
        logger: Any = None,
    ) -> None:
        """
        Initialize the client and log in.

        Args:
            client_id: OAuth application id
            client_secret: OAuth application secret
            user_agent: Descriptive User-Agent, as Reddit's API rules require
            throttle_interval: Seconds between requests (None/0 disables)
            timeout: Per-request timeout in seconds
            token_url: Identity endpoint URL
            api_url: Content API base URL
            extra_headers: Headers added to every content request
            session: HTTP session to reuse (created if omitted)
            logger: structlog logger (module logger if omitted)

        Raises:
            ValidationError: If a credential is empty (before any request)
            AuthError: If the initial login fails
        """
        self.credentials = Credentials(client_id, client_secret, user_agent)
        self.api_url = api_url.rstrip("/")
        self.logger = logger if logger is not None else get_logger(__name__)
        self._owns_session = session is None

        self.throttle = Throttle(throttle_interval)
        self.auth = AuthSession(
            self.credentials,
            session=session,
            token_url=token_url,
            timeout=timeout,
        )
        self.transport = Transport(
            self.auth,
            self.throttle,
            timeout=timeout,
            extra_headers=extra_headers,
        )
        self._paginate_to = Paginator(self.submissions_to)
        self._paginate_of = Paginator(self.submissions_of)
        self.set_logger(self.logger)

        self.logger.info(
            "initializing_reddit_client",
            user_agent=user_agent,
            client_id=f"{client_id[:8]}...",
        )

        try:
            self.auth.login()
        except AuthError as e:
            self.logger.error("reddit_login_failed", error=str(e), reason=e.reason.value)
            self.close()
            raise

        self.logger.info(
            "reddit_client_initialized",
            throttle_seconds=self.throttle.interval,
        )

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        configure_logging: bool = False,
        **kwargs: Any,
    ) -> "ReadOnlyRedditClient":
        """
        Build a client from loaded Settings.

        Args:
            settings: Loaded settings
            configure_logging: Also call setup_logging(settings.log_level);
                meant for scripts that own the process
            **kwargs: Overrides passed to the constructor

        Example:
            >>> client = ReadOnlyRedditClient.from_settings(
            ...     get_settings(), configure_logging=True
            ... )
        """
        if configure_logging:
            setup_logging(settings.log_level)
        kwargs.setdefault("throttle_interval", settings.throttle_seconds)
        kwargs.setdefault("timeout", settings.timeout_seconds)
        return cls(
            settings.reddit_client_id,
            settings.reddit_client_secret,
            settings.user_agent,
            **kwargs,
        )

    def set_logger(self, logger: Any) -> None:
        """Route this client's log events to ``logger``."""
        self.logger = logger
        self.auth.logger = logger
        self.transport.logger = logger
        self.throttle.logger = logger
        self._paginate_to.logger = logger
        self._paginate_of.logger = logger

    def set_throttle(self, interval: Optional[float]) -> None:
        """
        Set the minimum interval between requests.

        Args:
            interval: Seconds between requests; 0 or None disables throttling

        Raises:
            ValueError: If interval is negative
        """
        self.throttle.set_interval(interval)

    def close(self) -> None:
        """Release the HTTP session if this client created it."""
        if self._owns_session:
            self.auth.session.close()

    def __enter__(self) -> "ReadOnlyRedditClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def submissions_to(
        self,
        subreddit: str,
        sort: SortLike = PopularitySort.DEFAULT,
        age: AgeLike = AgeSort.DAY,
        options: Optional[ListingOptions] = None,
    ) -> Tuple[List[Submission], SliceInfo]:
        """
        Fetch one page of submissions to a subreddit.

        Args:
            subreddit: Subreddit name without the r/ prefix
            sort: Popularity sort ("" for the subreddit's default)
            age: Age window
            options: Listing options (limit, cursors, region, ...)

        Returns:
            Submissions of the page and its cursor pair

        Raises:
            ValidationError: If subreddit is empty or sort/age unknown
            AuthError, HTTPError, DecodeError: See Transport.get()
        """
        if not subreddit:
            raise ValidationError("cannot be null nor empty", field="subreddit")

        sort = _coerce(PopularitySort, sort, "sort")
        age = _coerce(AgeSort, age, "age")
        options = options or ListingOptions()

        params = options.to_query()
        params["t"] = age.value
        params["raw_json"] = "1"

        path = f"/r/{quote(subreddit, safe='')}"
        if sort.value:
            path = f"{path}/{sort.value}"

        return self._fetch_listing(path, params)

    def submissions_of(
        self,
        author: str,
        sort: SortLike = PopularitySort.DEFAULT,
        age: AgeLike = AgeSort.ALL,
        options: Optional[ListingOptions] = None,
    ) -> Tuple[List[Submission], SliceInfo]:
        """
        Fetch one page of submissions by an author.

        Args:
            author: Username without the u/ prefix
            sort: Popularity sort ("" for the default)
            age: Age window
            options: Listing options (limit, cursors, ...)

        Returns:
            Submissions of the page and its cursor pair

        Raises:
            ValidationError: If author is empty or sort/age unknown
            AuthError, HTTPError, DecodeError: See Transport.get()
        """
        if not author:
            raise ValidationError("cannot be null nor empty", field="author")

        sort = _coerce(PopularitySort, sort, "sort")
        age = _coerce(AgeSort, age, "age")
        options = options or ListingOptions()

        if options.limit > MAX_PAGE_LIMIT:
            # Advisory only; the server decides how many children it returns
            self.logger.warning(
                "listing_limit_above_max",
                limit=options.limit,
                max_limit=MAX_PAGE_LIMIT,
                message="use after/before to paginate beyond 100 results",
            )

        params = options.to_query()
        if sort.value:
            params["sort"] = sort.value
        params["t"] = age.value
        params["raw_json"] = "1"

        return self._fetch_listing(f"/user/{quote(author, safe='')}/submitted", params)

    def all_submissions_to(
        self,
        subreddit: str,
        sort: SortLike,
        age: AgeLike,
        total: int,
    ) -> List[Submission]:
        """Fetch up to ``total`` submissions to a subreddit across pages."""
        return self._paginate_to.collect(subreddit, sort, age, total)

    def all_submissions_of(
        self,
        author: str,
        sort: SortLike,
        age: AgeLike,
        total: int,
    ) -> List[Submission]:
        """Fetch up to ``total`` submissions by an author across pages."""
        return self._paginate_of.collect(author, sort, age, total)

    def iter_submissions_to(
        self,
        subreddit: str,
        sort: SortLike,
        age: AgeLike,
        after: str = "",
    ) -> Iterator[Page]:
        """Lazily yield pages of a subreddit listing, starting at ``after``."""
        return self._paginate_to.iter_pages(subreddit, sort, age, after)

    def iter_submissions_of(
        self,
        author: str,
        sort: SortLike,
        age: AgeLike,
        after: str = "",
    ) -> Iterator[Page]:
        """Lazily yield pages of an author's submissions, starting at ``after``."""
        return self._paginate_of.iter_pages(author, sort, age, after)

    def _fetch_listing(
        self, path: str, params: Mapping[str, str]
    ) -> Tuple[List[Submission], SliceInfo]:
        payload = self.transport.get_json(f"{self.api_url}{path}", params)

        try:
            listing = Listing.model_validate(payload)
        except PydanticValidationError as e:
            raise DecodeError(
                f"unexpected listing payload from {path}: {e.error_count()} errors",
                reason=DecodeErrorReason.MALFORMED_PAYLOAD,
            ) from e

        submissions = listing.submissions()
        self.logger.debug(
            "listing_fetched",
            path=path,
            results_count=len(submissions),
            after=listing.data.after,
            before=listing.data.before,
        )
        return submissions, listing.slice_info()
