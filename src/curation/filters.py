from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from curation.data_models import (
    MILEAGE_RATINGS,
    QUALITY_TIERS,
    REVIEW_STATUSES,
    Listing,
    require_choice,
)
from curation.errors import UnknownEnumValueError
from curation.tiers import classify

logger = logging.getLogger(__name__)

ALL = "all"

_UNIQUE_FIELDS: tuple[str, ...] = ("make", "model")

# camelCase names used by query strings and the dashboard.
_ALIASES = {
    "yearMin": "year_min",
    "yearMax": "year_max",
    "priceMin": "price_min",
    "priceMax": "price_max",
    "mileageMax": "mileage_max",
    "mileageRating": "mileage_rating",
    "qualityTier": "quality_tier",
    "reviewStatus": "review_status",
}


def _is_inactive(name: str, value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        # Free-text search has no "all" sentinel; only a blank query is inactive.
        return value.strip() == "" or (value == ALL and name != "search")
    return False


def _normalize_review_status(value: str) -> str:
    # The dashboard has historically sent the hyphenated spelling.
    return value.replace("-", "_")


@dataclass(frozen=True)
class FilterCriteria:
    make: Optional[str] = None
    model: Optional[str] = None
    year_min: Optional[int] = None
    year_max: Optional[int] = None
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    mileage_max: Optional[int] = None
    mileage_rating: Optional[str] = None
    quality_tier: Optional[str] = None
    review_status: Optional[str] = None
    search: Optional[str] = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "FilterCriteria":
        """Build criteria from raw UI or query-string values.

        ``"all"`` (except for ``search``), empty strings and unparseable numbers become ``None``; enumerated
        values are validated and raise :class:`UnknownEnumValueError` when unknown.
        """
        values: dict[str, Any] = {}
        for key, value in raw.items():
            name = _ALIASES.get(key, key)
            if name in _FIELD_PARSERS and not _is_inactive(name, value):
                values[name] = value

        parsed: dict[str, Any] = {}
        for name, value in values.items():
            result = _FIELD_PARSERS[name](value)
            if result is not None:
                parsed[name] = result
        return cls(**parsed)

    def is_active(self, name: str) -> bool:
        return not _is_inactive(name, getattr(self, name))

    def active_fields(self) -> list[str]:
        return [f.name for f in fields(self) if self.is_active(f.name)]


def _parse_int(value: Any) -> Optional[int]:
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


def _parse_float(value: Any) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _parse_str(value: Any) -> Optional[str]:
    return str(value)


_FIELD_PARSERS: dict[str, Callable[[Any], Any]] = {
    "make": _parse_str,
    "model": _parse_str,
    "year_min": _parse_int,
    "year_max": _parse_int,
    "price_min": _parse_float,
    "price_max": _parse_float,
    "mileage_max": _parse_int,
    "mileage_rating": lambda v: require_choice("mileage rating", str(v), MILEAGE_RATINGS),
    "quality_tier": lambda v: require_choice("quality tier", str(v), QUALITY_TIERS),
    "review_status": lambda v: require_choice(
        "review status", _normalize_review_status(str(v)), REVIEW_STATUSES
    ),
    "search": _parse_str,
}


def _search_matches(listing: Listing, needle: str) -> bool:
    return (
        needle in listing.vin.lower()
        or needle in listing.make.lower()
        or needle in listing.model.lower()
        or needle in str(listing.year)
    )


def _predicates(criteria: FilterCriteria) -> list[tuple[str, Callable[[Listing], bool]]]:
    preds: list[tuple[str, Callable[[Listing], bool]]] = []
    if criteria.is_active("make"):
        preds.append(("make", lambda v: v.make == criteria.make))
    if criteria.is_active("model"):
        preds.append(("model", lambda v: v.model == criteria.model))
    if criteria.is_active("year_min"):
        preds.append(("year_min", lambda v: v.year >= criteria.year_min))
    if criteria.is_active("year_max"):
        preds.append(("year_max", lambda v: v.year <= criteria.year_max))
    if criteria.is_active("price_min"):
        preds.append(("price_min", lambda v: v.price >= criteria.price_min))
    if criteria.is_active("price_max"):
        preds.append(("price_max", lambda v: v.price <= criteria.price_max))
    if criteria.is_active("mileage_max"):
        preds.append(("mileage_max", lambda v: v.mileage <= criteria.mileage_max))
    if criteria.is_active("mileage_rating"):
        preds.append(("mileage_rating", lambda v: v.mileage_rating == criteria.mileage_rating))
    if criteria.is_active("quality_tier"):
        tier = require_choice("quality tier", criteria.quality_tier, QUALITY_TIERS)
        preds.append(("quality_tier", lambda v: classify(v.priority_score) == tier))
    if criteria.is_active("review_status"):
        status = require_choice(
            "review status", _normalize_review_status(criteria.review_status), REVIEW_STATUSES
        )
        wanted = status == "reviewed"
        preds.append(("review_status", lambda v: v.reviewed_by_user is wanted))
    if criteria.is_active("search"):
        needle = criteria.search.strip().lower()
        preds.append(("search", lambda v: _search_matches(v, needle)))
    return preds


def apply_filters(listings: Sequence[Listing], criteria: FilterCriteria) -> list[Listing]:
    """Narrow ``listings`` to those matching every active criterion.

    Relative order is preserved and the input is never modified.
    """
    filtered = list(listings)
    for name, predicate in _predicates(criteria):
        if not filtered:
            break
        before = len(filtered)
        filtered = [v for v in filtered if predicate(v)]
        logger.debug("filter %s: %d -> %d", name, before, len(filtered))
    return filtered


def active_filter_count(criteria: FilterCriteria) -> int:
    return len(criteria.active_fields())


def unique_values(listings: Iterable[Listing], field: str) -> list[str]:
    if field not in _UNIQUE_FIELDS:
        raise UnknownEnumValueError("unique-value field", field, _UNIQUE_FIELDS)
    return sorted({getattr(v, field) for v in listings})


def filter_options(listings: Sequence[Listing]) -> dict[str, list[Any]]:
    return {
        "makes": unique_values(listings, "make"),
        "models": unique_values(listings, "model"),
        "years": sorted({v.year for v in listings}, reverse=True),
    }
