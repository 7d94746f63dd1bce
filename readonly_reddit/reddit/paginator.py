"""
Cursor-based pagination over single-page listing fetches.

A page fetcher answers one bounded request with ``(submissions, cursor)``.
The Paginator follows the ``after`` cursor lazily, so a caller that only
wants a prefix of a listing never pulls more pages than it consumes.

Listings are live: items inserted or removed ahead of the cursor between
two page fetches show up as duplicates or gaps. That is inherent to
cursor pagination and not corrected here.
"""

from typing import Any, Callable, Iterator, List, Tuple

import structlog

from readonly_reddit.models.enums import AgeSort, PopularitySort
from readonly_reddit.models.listing import MAX_PAGE_LIMIT, ListingOptions, SliceInfo
from readonly_reddit.models.submission import Submission
from readonly_reddit.reddit.exceptions import ValidationError

logger = structlog.get_logger(__name__)

Page = Tuple[List[Submission], SliceInfo]
PageFetcher = Callable[[str, PopularitySort, AgeSort, ListingOptions], Page]

DEFAULT_PAGE_SIZE = MAX_PAGE_LIMIT


class Paginator:
    """
    Turn a single-page fetcher into a lazy sequence of pages.

    Example:
        >>> paginator = Paginator(client.submissions_to)
        >>> for posts, cursor in paginator.iter_pages("python", sort, age):
        ...     handle(posts)
        >>> first_250 = paginator.collect("python", sort, age, total=250)
    """

    def __init__(
        self,
        fetch_page: PageFetcher,
        page_size: int = DEFAULT_PAGE_SIZE,
        logger: Any = logger,
    ) -> None:
        if page_size < 1 or page_size > MAX_PAGE_LIMIT:
            raise ValueError(f"page_size must be between 1 and {MAX_PAGE_LIMIT}")

        self.fetch_page = fetch_page
        self.page_size = page_size
        self.logger = logger

    def iter_pages(
        self,
        subject: str,
        sort: PopularitySort,
        age: AgeSort,
        after: str = "",
    ) -> Iterator[Page]:
        """
        Yield pages following the ``after`` cursor.

        Iteration ends at the first empty page or when the server stops
        returning an ``after`` cursor. To resume later, pass the last
        cursor seen as ``after``.

        Args:
            subject: Subreddit or author name
            sort: Popularity sort
            age: Age window
            after: Cursor to start from ("" starts at the top)

        Yields:
            (submissions, cursor) per non-empty page
        """
        page_number = 0
        while True:
            submissions, slice_info = self.fetch_page(
                subject,
                sort,
                age,
                ListingOptions(after=after, limit=self.page_size),
            )
            page_number += 1

            self.logger.debug(
                "page_fetched",
                subject=subject,
                page=page_number,
                results_count=len(submissions),
                after=slice_info.after,
            )

            if not submissions:
                return

            yield submissions, slice_info

            if not slice_info.after:
                return
            after = slice_info.after

    def iter_submissions(
        self,
        subject: str,
        sort: PopularitySort,
        age: AgeSort,
        after: str = "",
    ) -> Iterator[Submission]:
        """Yield submissions one at a time across pages."""
        for submissions, _ in self.iter_pages(subject, sort, age, after):
            yield from submissions

    def collect(
        self,
        subject: str,
        sort: PopularitySort,
        age: AgeSort,
        total: int,
    ) -> List[Submission]:
        """
        Fetch up to ``total`` submissions.

        A total that fits in one page costs exactly one request with
        ``limit=total``. Larger totals are fetched in full pages until the
        total is reached or the listing runs out, and the result is cut to
        ``total``. Falling short of ``total`` is not an error.

        Args:
            subject: Subreddit or author name
            sort: Popularity sort
            age: Age window
            total: Number of submissions wanted (at least 1)

        Returns:
            Collected submissions in listing order

        Raises:
            ValidationError: If total is less than 1
        """
        if total < 1:
            raise ValidationError("must be at least 1", field="total")

        if total <= self.page_size:
            submissions, _ = self.fetch_page(
                subject, sort, age, ListingOptions(limit=total)
            )
            return submissions

        results: List[Submission] = []
        for submissions, _ in self.iter_pages(subject, sort, age):
            results.extend(submissions)
            if len(results) >= total:
                break
        del results[total:]

        self.logger.info(
            "pagination_completed",
            subject=subject,
            requested=total,
            results_count=len(results),
        )
        return results
