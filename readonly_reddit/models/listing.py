"""
Pydantic models for listing queries and the listing envelope.

Reddit wraps every listing as::

    {"kind": "Listing",
     "data": {"dist": 5, "after": "t3_abc", "before": null,
              "children": [{"kind": "t3", "data": {...}}, ...]}}

ListingOptions is what callers pass in; Listing is what comes back.
"""
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from readonly_reddit.models.enums import Region
from readonly_reddit.models.submission import Submission

# Reddit never returns more than this many children per page
MAX_PAGE_LIMIT = 100


class ListingOptions(BaseModel):
    """
    Per-call listing options.

    Only fields that are set end up in the query string. ``after`` and
    ``before`` are mutually exclusive; sending both is the caller's call.
    """

    model_config = ConfigDict(frozen=True)

    region: Optional[Region] = Field(
        None,
        description="Restrict hot results to a geography",
    )
    limit: int = Field(
        0,
        ge=0,
        description="Max items per page (server default 25 when 0, cap 100)",
    )
    after: str = Field(
        "",
        description="Fullname of the item after which to resume",
    )
    before: str = Field(
        "",
        description="Fullname of the item before which to resume",
    )
    count: int = Field(
        0,
        ge=0,
        description="Number of items already seen (affects numbering only)",
    )
    show: Optional[Literal["all"]] = Field(
        None,
        description='"all" disables vote-based filtering',
    )

    def to_query(self) -> Dict[str, str]:
        """
        Build query parameters for the set options.

        Returns:
            Mapping of query parameter name to string value
        """
        params: Dict[str, str] = {}
        if self.region is not None:
            params["q"] = self.region.value
        if self.limit:
            params["limit"] = str(self.limit)
        if self.after:
            params["after"] = self.after
        if self.before:
            params["before"] = self.before
        if self.count:
            params["count"] = str(self.count)
        if self.show:
            params["show"] = self.show
        return params


class SliceInfo(BaseModel):
    """Cursor pair returned alongside a page; empty string when absent."""

    model_config = ConfigDict(frozen=True)

    before: str = ""
    after: str = ""


class ListingChild(BaseModel):
    model_config = ConfigDict(extra="ignore")

    kind: str = "t3"
    data: Submission


class ListingData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    dist: Optional[int] = None
    children: List[ListingChild] = Field(default_factory=list)
    after: str = ""
    before: str = ""

    @field_validator("after", "before", mode="before")
    @classmethod
    def null_cursor_to_empty(cls, v: Any) -> Any:
        """Reddit sends null for a missing cursor."""
        return "" if v is None else v


class Listing(BaseModel):
    """
    Listing envelope as returned by the content endpoint.

    Example:
        >>> listing = Listing.model_validate(payload)
        >>> posts, cursor = listing.submissions(), listing.slice_info()
    """

    model_config = ConfigDict(extra="ignore")

    kind: str = "Listing"
    data: ListingData = Field(default_factory=ListingData)

    def submissions(self) -> List[Submission]:
        return [child.data for child in self.data.children]

    def slice_info(self) -> SliceInfo:
        return SliceInfo(before=self.data.before, after=self.data.after)
