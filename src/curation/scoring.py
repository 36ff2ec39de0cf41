from __future__ import annotations

import re

from curation.config import (
    DEFAULT_LIMITS,
    DEFAULT_MILEAGE_RATINGS,
    MileageRatingThresholds,
    ValidationLimits,
)

# Letters I, O and Q never appear in a VIN.
_VIN_PATTERN = re.compile(r"^[A-HJ-NPR-Z0-9]{17}$", re.IGNORECASE)


def mileage_per_year(mileage: int, year: int, reference_year: int) -> float:
    age = max(1, reference_year - year)
    return mileage / age


def mileage_rating(per_year: float, thresholds: MileageRatingThresholds = DEFAULT_MILEAGE_RATINGS) -> str:
    if per_year <= thresholds.excellent_max_per_year:
        return "excellent"
    if per_year <= thresholds.good_max_per_year:
        return "good"
    if per_year <= thresholds.acceptable_max_per_year:
        return "acceptable"
    return "high"


def is_valid_vin(vin: str, limits: ValidationLimits = DEFAULT_LIMITS) -> bool:
    return len(vin) == limits.vin_length and bool(_VIN_PATTERN.match(vin))


def is_valid_year(year: int, current_year: int, limits: ValidationLimits = DEFAULT_LIMITS) -> bool:
    # Next year's models go on sale during the current year.
    return limits.year_min <= year <= current_year + 1


def is_valid_price(price: float, limits: ValidationLimits = DEFAULT_LIMITS) -> bool:
    return limits.price_min <= price <= limits.price_max


def is_valid_mileage(mileage: int, limits: ValidationLimits = DEFAULT_LIMITS) -> bool:
    return limits.mileage_min <= mileage <= limits.mileage_max
