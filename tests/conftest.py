from datetime import datetime, timedelta, timezone

import pytest

from curation.data_models import Listing

_BASE_TIME = datetime(2025, 9, 1, 12, 0, tzinfo=timezone.utc)


def build_listing(**overrides) -> Listing:
    seq = overrides.pop("seq", 0)
    defaults = {
        "id": str(seq),
        "vin": f"4T1K61AK0MU{seq:06d}",
        "make": "Toyota",
        "model": "RAV4",
        "year": 2021,
        "price": 18000.0,
        "mileage": 30000,
        "mileage_rating": "excellent",
        "title_status": "clean",
        "accident_count": 0,
        "owner_count": 1,
        "current_location": "Austin, TX",
        "distance_miles": 25.0,
        "priority_score": 75,
        "created_at": _BASE_TIME + timedelta(days=seq),
    }
    defaults.update(overrides)
    return Listing(**defaults)


@pytest.fixture
def make_listing():
    return build_listing


@pytest.fixture
def scored_listings():
    return [build_listing(seq=i, priority_score=s) for i, s in enumerate([90, 82, 70, 60, 40])]
