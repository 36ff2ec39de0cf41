"""Filter, sort and paginate a listing snapshot in one pass.

Aggregate statistics are always computed from the full filtered set, never from a
single page, so counts like "top picks among results" stay correct across pages.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from curation.config import DEFAULT_PAGINATION
from curation.data_models import Listing
from curation.filters import FilterCriteria, active_filter_count, apply_filters
from curation.pagination import PageMetadata, PaginationOptions, paginate
from curation.sorting import SortOptions, default_sort, sort_listings
from curation.tiers import classify

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListingQuery:
    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    sort: SortOptions = field(default_factory=default_sort)
    page: int = DEFAULT_PAGINATION.page
    page_size: int = DEFAULT_PAGINATION.page_size


@dataclass(frozen=True)
class ListingStats:
    total: int
    top_picks: int
    good_buys: int
    caution: int
    total_value: float
    average_price: float
    active_filters: int


@dataclass(frozen=True)
class QueryResult:
    data: list[Listing]
    all_filtered: list[Listing]
    pagination: PageMetadata
    active_filters: int
    stats: ListingStats


def compute_stats(listings: Sequence[Listing], active_filters: int = 0) -> ListingStats:
    tiers = [classify(v.priority_score) for v in listings]
    total_value = float(sum(v.price for v in listings))
    return ListingStats(
        total=len(listings),
        top_picks=tiers.count("top_pick"),
        good_buys=tiers.count("good_buy"),
        caution=tiers.count("caution"),
        total_value=total_value,
        average_price=total_value / len(listings) if listings else 0.0,
        active_filters=active_filters,
    )


def run_query(listings: Sequence[Listing], query: ListingQuery) -> QueryResult:
    filtered = apply_filters(listings, query.criteria)
    ordered = sort_listings(filtered, query.sort)
    page = paginate(ordered, PaginationOptions(page=query.page, page_size=query.page_size))
    active = active_filter_count(query.criteria)

    logger.debug(
        "run_query: %d listings -> %d filtered, page %d/%d (%s %s)",
        len(listings),
        len(ordered),
        page.pagination.current_page,
        page.pagination.total_pages,
        query.sort.field,
        query.sort.order,
    )
    return QueryResult(
        data=page.data,
        all_filtered=ordered,
        pagination=page.pagination,
        active_filters=active,
        stats=compute_stats(ordered, active_filters=active),
    )


def find_by_vin(listings: Sequence[Listing], vin: str) -> Optional[Listing]:
    for listing in listings:
        if listing.matches_vin(vin):
            return listing
    return None
