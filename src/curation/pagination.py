from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar, Union

from curation.config import DEFAULT_PAGINATION
from curation.errors import InvalidPageSizeError

T = TypeVar("T")

ELLIPSIS = "ellipsis"

PageNumber = Union[int, str]


@dataclass(frozen=True)
class PaginationOptions:
    page: int = DEFAULT_PAGINATION.page
    page_size: int = DEFAULT_PAGINATION.page_size


@dataclass(frozen=True)
class PageMetadata:
    current_page: int
    page_size: int
    total_items: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool
    start_index: int
    end_index: int


@dataclass(frozen=True)
class Page(Generic[T]):
    data: list[T]
    pagination: PageMetadata


def paginate(items: Sequence[T], options: PaginationOptions) -> Page[T]:
    """Slice ``items`` into the requested page.

    Pages outside ``[1, total_pages]`` are clamped rather than rejected.
    """
    page_size = options.page_size
    if page_size <= 0:
        raise InvalidPageSizeError(page_size)

    total_items = len(items)
    total_pages = math.ceil(total_items / page_size)
    current_page = max(1, min(options.page, max(1, total_pages)))

    start_index = (current_page - 1) * page_size
    end_index = min(start_index + page_size, total_items)

    return Page(
        data=list(items[start_index:end_index]),
        pagination=PageMetadata(
            current_page=current_page,
            page_size=page_size,
            total_items=total_items,
            total_pages=total_pages,
            has_next_page=current_page < total_pages,
            has_previous_page=current_page > 1,
            start_index=start_index,
            end_index=end_index,
        ),
    )


def get_page_numbers(
    current_page: int,
    total_pages: int,
    max_visible: int = DEFAULT_PAGINATION.max_visible_pages,
) -> list[PageNumber]:
    """Page numbers for a pagination control, e.g. ``[1, "ellipsis", 4, 5, 6, "ellipsis", 10]``."""
    max_visible = max(1, max_visible)
    if total_pages <= max_visible:
        return list(range(1, total_pages + 1))

    half = max_visible // 2
    current_page = max(1, min(current_page, total_pages))

    start = max(2, current_page - half)
    end = min(total_pages - 1, current_page + half)
    if current_page <= half + 1:
        end = min(total_pages - 1, max_visible - 1)
    if current_page >= total_pages - half:
        start = max(2, total_pages - max_visible + 2)

    pages: list[PageNumber] = [1]
    if start > 2:
        pages.append(ELLIPSIS)
    pages.extend(range(start, end + 1))
    if end < total_pages - 1:
        pages.append(ELLIPSIS)
    pages.append(total_pages)
    return pages


def page_size_options() -> tuple[int, ...]:
    return DEFAULT_PAGINATION.page_size_options


def default_options() -> PaginationOptions:
    return PaginationOptions(page=DEFAULT_PAGINATION.page, page_size=DEFAULT_PAGINATION.page_size)
