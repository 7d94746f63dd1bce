"""Typed models for listing queries, envelopes and submissions."""

from readonly_reddit.models.enums import AgeSort, PopularitySort, Region
from readonly_reddit.models.listing import (
    MAX_PAGE_LIMIT,
    Listing,
    ListingOptions,
    SliceInfo,
)
from readonly_reddit.models.submission import Submission

__all__ = [
    "AgeSort",
    "PopularitySort",
    "Region",
    "MAX_PAGE_LIMIT",
    "Listing",
    "ListingOptions",
    "SliceInfo",
    "Submission",
]
