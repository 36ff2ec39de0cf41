from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Optional

import pandas as pd

from curation.data_models import Listing
from curation.query import ListingQuery, QueryResult, find_by_vin, run_query
from curation.scoring import is_valid_vin, mileage_per_year, mileage_rating

logger = logging.getLogger(__name__)

SAMPLE_LISTINGS_PATH = Path(__file__).resolve().parent / "data" / "sample_listings.json"

REQUIRED_COLUMNS: tuple[str, ...] = (
    "vin",
    "make",
    "model",
    "year",
    "price",
    "mileage",
    "priority_score",
)

_INT_COLUMNS = ("year", "mileage", "accident_count", "owner_count", "priority_score")
_FLOAT_COLUMNS = ("price", "distance_miles")

_DEFAULTS: dict[str, Any] = {
    "title_status": "clean",
    "accident_count": 0,
    "owner_count": 1,
    "current_location": "",
    "distance_miles": 0.0,
    "reviewed_by_user": False,
}


def read_frame(path: Path) -> pd.DataFrame:
    if path.suffix.lower() == ".csv":
        return pd.read_csv(path)
    return pd.read_json(path, orient="records", convert_dates=False)


def _clean(value: Any) -> Any:
    if value is None:
        return None
    if not isinstance(value, (list, dict)) and pd.isna(value):
        return None
    return value


def _optional_int(value: Any) -> Optional[int]:
    value = _clean(value)
    return None if value is None else int(value)


def _optional_str(value: Any) -> Optional[str]:
    value = _clean(value)
    return None if value is None else str(value)


def listings_from_frame(frame: pd.DataFrame, loaded_at: Optional[datetime] = None) -> tuple[Listing, ...]:
    missing = [c for c in REQUIRED_COLUMNS if c not in frame.columns]
    if missing:
        raise ValueError(f"Listing export is missing column(s): {', '.join(missing)}")

    loaded_at = loaded_at or datetime.now(timezone.utc)
    frame = frame.copy()
    for col, default in _DEFAULTS.items():
        if col not in frame.columns:
            frame[col] = default
        else:
            frame[col] = frame[col].fillna(default)
    for col in _INT_COLUMNS:
        frame[col] = pd.to_numeric(frame[col], errors="raise").astype(int)
    for col in _FLOAT_COLUMNS:
        frame[col] = pd.to_numeric(frame[col], errors="raise").astype(float)
    derived = [
        mileage_rating(mileage_per_year(m, y, loaded_at.year))
        for m, y in zip(frame["mileage"], frame["year"], strict=False)
    ]
    if "mileage_rating" not in frame.columns:
        frame["mileage_rating"] = derived
    else:
        frame["mileage_rating"] = frame["mileage_rating"].astype(object).where(
            frame["mileage_rating"].notna(), pd.Series(derived, index=frame.index, dtype=object)
        )
    if "created_at" in frame.columns:
        frame["created_at"] = pd.to_datetime(frame["created_at"], utc=True)
    else:
        frame["created_at"] = pd.Timestamp(loaded_at)

    listings: list[Listing] = []
    for idx, row in enumerate(frame.to_dict(orient="records")):
        created_at = row["created_at"]
        created_at = loaded_at if pd.isna(created_at) else created_at.to_pydatetime()
        listings.append(
            Listing(
                id=str(_clean(row.get("id")) or idx),
                vin=str(row["vin"]),
                make=str(row["make"]),
                model=str(row["model"]),
                year=int(row["year"]),
                price=float(row["price"]),
                mileage=int(row["mileage"]),
                mileage_rating=_optional_str(row.get("mileage_rating")),
                title_status=str(row["title_status"]),
                accident_count=int(row["accident_count"]),
                owner_count=int(row["owner_count"]),
                current_location=str(row["current_location"]),
                distance_miles=float(row["distance_miles"]),
                priority_score=int(row["priority_score"]),
                created_at=created_at,
                body_type=_optional_str(row.get("body_type")),
                dealer_name=_optional_str(row.get("dealer_name")),
                source_url=_optional_str(row.get("source_url")) or "",
                reviewed_by_user=bool(row["reviewed_by_user"]),
                user_rating=_optional_int(row.get("user_rating")),
                user_notes=_optional_str(row.get("user_notes")),
            )
        )
    invalid = [v.vin for v in listings if not is_valid_vin(v.vin)]
    if invalid:
        logger.warning("%d listing(s) carry a malformed VIN", len(invalid), extra={"extra_data": {"vins": invalid[:10]}})
    return tuple(listings)


@dataclass(frozen=True)
class ListingSnapshot:
    """Immutable listing collection served by the dashboard."""

    listings: tuple[Listing, ...]
    source: str

    @classmethod
    def from_listings(cls, listings: Iterable[Listing], source: str = "memory") -> "ListingSnapshot":
        return cls(listings=tuple(listings), source=source)

    @classmethod
    def sample(cls) -> "ListingSnapshot":
        return cls(listings=listings_from_frame(read_frame(SAMPLE_LISTINGS_PATH)), source="sample")

    @classmethod
    def load(cls, path: str | Path | None = None) -> "ListingSnapshot":
        if not path:
            logger.info("No listing export configured, using sample dataset")
            return cls.sample()

        path = Path(path)
        try:
            listings = listings_from_frame(read_frame(path))
        except (OSError, ValueError):
            logger.warning("Listing export %s unavailable, using sample dataset", path, exc_info=True)
            return cls.sample()

        logger.info("Loaded %d listings from %s", len(listings), path)
        return cls(listings=listings, source=str(path))

    def __len__(self) -> int:
        return len(self.listings)

    def query(self, query: ListingQuery) -> QueryResult:
        return run_query(self.listings, query)

    def find(self, vin: str) -> Optional[Listing]:
        return find_by_vin(self.listings, vin)
