from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal, Optional

from curation.errors import UnknownEnumValueError


QualityTier = Literal["top_pick", "good_buy", "caution"]
MileageRating = Literal["excellent", "good", "acceptable", "high"]
ReviewStatus = Literal["reviewed", "not_reviewed"]
SortField = Literal["priority", "quality_tier", "price", "mileage", "year", "make", "model", "date"]
SortOrder = Literal["asc", "desc"]

QUALITY_TIERS: tuple[str, ...] = ("top_pick", "good_buy", "caution")
MILEAGE_RATINGS: tuple[str, ...] = ("excellent", "good", "acceptable", "high")
REVIEW_STATUSES: tuple[str, ...] = ("reviewed", "not_reviewed")
SORT_FIELDS: tuple[str, ...] = ("priority", "quality_tier", "price", "mileage", "year", "make", "model", "date")
SORT_ORDERS: tuple[str, ...] = ("asc", "desc")


def require_choice(kind: str, value: str, allowed: tuple[str, ...]) -> str:
    if value not in allowed:
        raise UnknownEnumValueError(kind, value, allowed)
    return value


@dataclass(frozen=True)
class Listing:
    vin: str
    make: str
    model: str
    year: int
    price: float
    mileage: int
    title_status: str
    accident_count: int
    owner_count: int
    current_location: str
    distance_miles: float
    priority_score: int
    created_at: datetime
    mileage_rating: Optional[str] = None
    id: str = ""
    body_type: Optional[str] = None
    dealer_name: Optional[str] = None
    source_url: str = ""
    reviewed_by_user: bool = False
    user_rating: Optional[int] = None
    user_notes: Optional[str] = None

    @property
    def quality_tier(self) -> str:
        from curation.tiers import classify

        return classify(self.priority_score)

    def matches_vin(self, vin: str) -> bool:
        return self.vin.lower() == vin.strip().lower()
