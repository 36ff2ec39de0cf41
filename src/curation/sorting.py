from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Sequence

from curation.config import DEFAULT_SORT
from curation.data_models import SORT_FIELDS, SORT_ORDERS, Listing, require_choice
from curation.errors import UnknownSortFieldError
from curation.tiers import classify, tier_rank


_SORT_LABELS = {
    "priority": "Priority Score",
    "quality_tier": "Quality Tier",
    "price": "Price",
    "mileage": "Mileage",
    "year": "Year",
    "make": "Make",
    "model": "Model",
    "date": "Date Added",
}

_SINGLE_KEYS: dict[str, Callable[[Listing], Any]] = {
    "priority": lambda v: v.priority_score,
    "price": lambda v: v.price,
    "mileage": lambda v: v.mileage,
    "year": lambda v: v.year,
    "make": lambda v: v.make,
    "model": lambda v: v.model,
    "date": lambda v: v.created_at,
}


@dataclass(frozen=True)
class SortOptions:
    field: str = DEFAULT_SORT.field
    order: str = DEFAULT_SORT.order

    @classmethod
    def parse(cls, field: str | None, order: str | None) -> "SortOptions":
        field = field or DEFAULT_SORT.field
        order = order or DEFAULT_SORT.order
        if field not in SORT_FIELDS:
            raise UnknownSortFieldError(field)
        require_choice("sort order", order, SORT_ORDERS)
        return cls(field=field, order=order)


def default_sort() -> SortOptions:
    return SortOptions(field=DEFAULT_SORT.field, order=DEFAULT_SORT.order)


def toggle_order(order: str) -> str:
    require_choice("sort order", order, SORT_ORDERS)
    return "desc" if order == "asc" else "asc"


def sort_label(field: str) -> str:
    if field not in SORT_FIELDS:
        raise UnknownSortFieldError(field)
    return _SORT_LABELS[field]


def _tier_key(descending: bool) -> Callable[[Listing], tuple[int, int]]:
    # Within a tier the higher score comes first for either direction.
    if descending:
        return lambda v: (tier_rank(classify(v.priority_score)), -v.priority_score)
    return lambda v: (-tier_rank(classify(v.priority_score)), -v.priority_score)


def sort_listings(listings: Sequence[Listing], sort: SortOptions) -> list[Listing]:
    """Return a new list ordered by ``sort``.

    ``desc`` on ``quality_tier`` puts top picks first. Equal keys keep their input order.
    """
    if sort.field not in SORT_FIELDS:
        raise UnknownSortFieldError(sort.field)
    require_choice("sort order", sort.order, SORT_ORDERS)
    descending = sort.order == "desc"

    if sort.field == "quality_tier":
        return sorted(listings, key=_tier_key(descending))
    return sorted(listings, key=_SINGLE_KEYS[sort.field], reverse=descending)
