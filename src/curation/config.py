from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TierThresholds:
    top_pick_min: int = 80
    good_buy_min: int = 65


@dataclass(frozen=True)
class PaginationDefaults:
    page: int = 1
    page_size: int = 25
    page_size_options: tuple[int, ...] = (10, 25, 50, 100)
    max_visible_pages: int = 5


@dataclass(frozen=True)
class SortDefaults:
    field: str = "priority"
    order: str = "desc"


@dataclass(frozen=True)
class MileageRatingThresholds:
    excellent_max_per_year: int = 10_000
    good_max_per_year: int = 13_000
    acceptable_max_per_year: int = 15_000


@dataclass(frozen=True)
class ValidationLimits:
    vin_length: int = 17
    year_min: int = 2000
    price_min: float = 1_000.0
    price_max: float = 1_000_000.0
    mileage_min: int = 0
    mileage_max: int = 500_000


DEFAULT_THRESHOLDS = TierThresholds()
DEFAULT_PAGINATION = PaginationDefaults()
DEFAULT_SORT = SortDefaults()
DEFAULT_MILEAGE_RATINGS = MileageRatingThresholds()
DEFAULT_LIMITS = ValidationLimits()
