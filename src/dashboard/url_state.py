"""Shareable query-string form of a listing query.

Only non-default values are written, so the default view has an empty query string.
"""

from __future__ import annotations

import logging
from dataclasses import fields
from typing import Any, Mapping
from urllib.parse import parse_qsl, urlencode

from curation.config import DEFAULT_PAGINATION, DEFAULT_SORT
from curation.errors import UnknownEnumValueError, UnknownSortFieldError
from curation.filters import FilterCriteria
from curation.query import ListingQuery
from curation.sorting import SortOptions, default_sort

logger = logging.getLogger(__name__)

_PARAM_NAMES = {
    "make": "make",
    "model": "model",
    "year_min": "yearMin",
    "year_max": "yearMax",
    "price_min": "priceMin",
    "price_max": "priceMax",
    "mileage_max": "mileageMax",
    "mileage_rating": "mileageRating",
    "quality_tier": "qualityTier",
    "review_status": "reviewStatus",
    "search": "search",
}


def _format_number(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _parse_positive_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def encode_query(query: ListingQuery, default_page_size: int = DEFAULT_PAGINATION.page_size) -> str:
    params: list[tuple[str, str]] = []
    for f in fields(FilterCriteria):
        if query.criteria.is_active(f.name):
            params.append((_PARAM_NAMES[f.name], _format_number(getattr(query.criteria, f.name))))

    if query.sort.field != DEFAULT_SORT.field:
        params.append(("sortField", query.sort.field))
    if query.sort.order != DEFAULT_SORT.order:
        params.append(("sortOrder", query.sort.order))
    if query.page > DEFAULT_PAGINATION.page:
        params.append(("page", str(query.page)))
    if query.page_size != default_page_size:
        params.append(("pageSize", str(query.page_size)))
    return urlencode(params)


def parse_sort(field: str | None, order: str | None) -> SortOptions:
    """Validated sort options; an unknown field or order falls back to the default sort."""
    try:
        return SortOptions.parse(field, order)
    except (UnknownSortFieldError, UnknownEnumValueError) as exc:
        logger.warning("%s, using default sort", exc)
        return default_sort()


def query_from_params(params: Mapping[str, Any], default_page_size: int = DEFAULT_PAGINATION.page_size) -> ListingQuery:
    return ListingQuery(
        criteria=FilterCriteria.from_mapping(params),
        sort=parse_sort(params.get("sortField"), params.get("sortOrder")),
        page=_parse_positive_int(params.get("page"), DEFAULT_PAGINATION.page),
        page_size=_parse_positive_int(params.get("pageSize"), default_page_size),
    )


def decode_query(query_string: str, default_page_size: int = DEFAULT_PAGINATION.page_size) -> ListingQuery:
    return query_from_params(dict(parse_qsl(query_string.lstrip("?"))), default_page_size=default_page_size)
