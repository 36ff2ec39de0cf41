from __future__ import annotations

import logging
from dataclasses import asdict, replace
from datetime import datetime
from typing import Any, Optional, Union

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from curation.data_models import Listing
from curation.errors import InvalidPageSizeError, QueryError
from curation.filters import filter_options
from curation.pagination import get_page_numbers
from curation.query import ListingQuery, ListingStats, QueryResult
from curation.tiers import tier_label
from dashboard.logging_config import configure_logging, correlation_id, get_correlation_id, new_correlation_id
from dashboard.settings import ServiceSettings
from dashboard.snapshot import ListingSnapshot
from dashboard.url_state import encode_query, query_from_params

logger = logging.getLogger(__name__)


# ── Response Models ─────────────────────────────────────────────────

class ListingOut(BaseModel):
    id: str
    vin: str
    make: str
    model: str
    year: int
    body_type: Optional[str] = None
    price: float
    mileage: int
    mileage_rating: Optional[str] = None
    title_status: str
    accident_count: int
    owner_count: int
    current_location: str
    distance_miles: float
    dealer_name: Optional[str] = None
    priority_score: int
    quality_tier: str
    quality_tier_label: str
    source_url: str
    reviewed_by_user: bool
    user_rating: Optional[int] = None
    user_notes: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_listing(cls, listing: Listing) -> "ListingOut":
        tier = listing.quality_tier
        return cls(**asdict(listing), quality_tier=tier, quality_tier_label=tier_label(tier))


class PaginationOut(BaseModel):
    current_page: int
    page_size: int
    total_items: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool
    start_index: int
    end_index: int


class StatsOut(BaseModel):
    total: int
    top_picks: int
    good_buys: int
    caution: int
    total_value: float
    average_price: float
    active_filters: int


class SortOut(BaseModel):
    field: str
    order: str


class ListingsResponse(BaseModel):
    data: list[ListingOut]
    pagination: PaginationOut
    page_numbers: list[Union[int, str]]
    stats: StatsOut
    sort: SortOut
    active_filters: int
    query_string: str


class FilterOptionsResponse(BaseModel):
    makes: list[str]
    models: list[str]
    years: list[int]


class HealthResponse(BaseModel):
    status: str
    listings: int
    source: str


def _stats_out(stats: ListingStats) -> StatsOut:
    return StatsOut(**asdict(stats))


def _listings_response(
    result: QueryResult, query: ListingQuery, max_visible: int, default_page_size: int
) -> ListingsResponse:
    meta = result.pagination
    return ListingsResponse(
        data=[ListingOut.from_listing(v) for v in result.data],
        pagination=PaginationOut(**asdict(meta)),
        page_numbers=get_page_numbers(meta.current_page, meta.total_pages, max_visible),
        stats=_stats_out(result.stats),
        sort=SortOut(field=query.sort.field, order=query.sort.order),
        active_filters=result.active_filters,
        query_string=encode_query(query, default_page_size=default_page_size),
    )


# ── App Factory ─────────────────────────────────────────────────────

def create_app(snapshot: ListingSnapshot | None = None) -> FastAPI:
    settings = ServiceSettings()
    configure_logging(level=settings.log_level, fmt=settings.log_format)

    if snapshot is None:
        snapshot = ListingSnapshot.load(settings.listings_path)

    app = FastAPI(title="Curated Listings API", version="0.1.0")
    app.state.snapshot = snapshot

    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next: Any) -> Response:
        cid = request.headers.get("X-Correlation-ID") or new_correlation_id()
        correlation_id.set(cid)
        response = await call_next(request)
        response.headers["X-Correlation-ID"] = cid
        return response

    @app.exception_handler(QueryError)
    async def query_error_handler(request: Request, exc: QueryError) -> JSONResponse:
        code = 422 if isinstance(exc, InvalidPageSizeError) else 400
        cid = get_correlation_id()
        logger.warning(
            "Rejected listing query: %s",
            exc,
            extra={"extra_data": {"path": request.url.path, "query": str(request.query_params)}},
        )
        return JSONResponse(status_code=code, content={"detail": str(exc), "correlation_id": cid})

    # ── Listings ────────────────────────────────────────────────────

    @app.get("/listings", response_model=ListingsResponse)
    async def list_listings(request: Request) -> ListingsResponse:
        query = query_from_params(request.query_params, default_page_size=settings.default_page_size)
        if query.page_size > settings.max_page_size:
            logger.info("pageSize %d capped at %d", query.page_size, settings.max_page_size)
            query = replace(query, page_size=settings.max_page_size)
        result = app.state.snapshot.query(query)
        return _listings_response(result, query, settings.max_visible_pages, settings.default_page_size)

    @app.get("/listings/{vin}", response_model=ListingOut)
    async def get_listing(vin: str) -> ListingOut:
        listing = app.state.snapshot.find(vin)
        if listing is None:
            raise HTTPException(status_code=404, detail="Listing not found")
        return ListingOut.from_listing(listing)

    @app.get("/filters/options", response_model=FilterOptionsResponse)
    async def get_filter_options() -> FilterOptionsResponse:
        return FilterOptionsResponse(**filter_options(app.state.snapshot.listings))

    # ── Health ──────────────────────────────────────────────────────

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", listings=len(app.state.snapshot), source=app.state.snapshot.source)

    return app


app = create_app()
