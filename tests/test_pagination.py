import pytest

from curation.errors import InvalidPageSizeError
from curation.pagination import (
    PaginationOptions,
    default_options,
    get_page_numbers,
    page_size_options,
    paginate,
)


def test_second_page_of_fifteen():
    page = paginate(list(range(15)), PaginationOptions(page=2, page_size=10))
    assert page.data == list(range(10, 15))
    meta = page.pagination
    assert meta.total_pages == 2
    assert meta.has_next_page is False
    assert meta.has_previous_page is True
    assert (meta.start_index, meta.end_index) == (10, 15)


def test_first_page_metadata():
    meta = paginate(list(range(15)), PaginationOptions(page=1, page_size=10)).pagination
    assert meta.current_page == 1
    assert meta.total_items == 15
    assert meta.has_next_page is True
    assert meta.has_previous_page is False


def test_page_past_end_clamps_to_last():
    items = list(range(25))
    last = paginate(items, PaginationOptions(page=3, page_size=10))
    beyond = paginate(items, PaginationOptions(page=999999, page_size=10))
    assert beyond.data == last.data == [20, 21, 22, 23, 24]
    assert beyond.pagination.current_page == 3


@pytest.mark.parametrize("page", [0, -4])
def test_page_below_one_clamps_to_first(page):
    result = paginate(list(range(5)), PaginationOptions(page=page, page_size=2))
    assert result.pagination.current_page == 1
    assert result.data == [0, 1]


def test_empty_collection():
    result = paginate([], PaginationOptions(page=4, page_size=10))
    assert result.data == []
    meta = result.pagination
    assert meta.total_pages == 0
    assert meta.current_page == 1
    assert meta.has_next_page is False
    assert meta.has_previous_page is False


@pytest.mark.parametrize("size", [0, -1])
def test_invalid_page_size(size):
    with pytest.raises(InvalidPageSizeError):
        paginate([1, 2, 3], PaginationOptions(page=1, page_size=size))


@pytest.mark.parametrize("count,size", [(0, 3), (1, 3), (9, 3), (10, 3), (23, 25), (101, 10)])
def test_pages_cover_every_item_once(count, size):
    items = list(range(count))
    total_pages = paginate(items, PaginationOptions(1, size)).pagination.total_pages
    rebuilt = []
    for p in range(1, total_pages + 1):
        rebuilt.extend(paginate(items, PaginationOptions(p, size)).data)
    assert rebuilt == items


def test_page_numbers_small_total_has_no_ellipsis():
    assert get_page_numbers(2, 4, 5) == [1, 2, 3, 4]
    assert get_page_numbers(1, 0, 5) == []


def test_page_numbers_middle():
    pages = get_page_numbers(5, 10, 5)
    assert pages == [1, "ellipsis", 3, 4, 5, 6, 7, "ellipsis", 10]


def test_page_numbers_near_edges():
    assert get_page_numbers(1, 10, 5) == [1, 2, 3, 4, "ellipsis", 10]
    assert get_page_numbers(2, 10, 5) == [1, 2, 3, 4, "ellipsis", 10]
    assert get_page_numbers(10, 10, 5) == [1, "ellipsis", 7, 8, 9, 10]
    assert get_page_numbers(9, 10, 5) == [1, "ellipsis", 7, 8, 9, 10]


@pytest.mark.parametrize("current", range(1, 21))
def test_page_numbers_always_include_current_and_ends(current):
    pages = get_page_numbers(current, 20, 7)
    assert pages[0] == 1
    assert pages[-1] == 20
    assert current in pages
    numbers = [p for p in pages if p != "ellipsis"]
    assert numbers == sorted(set(numbers))
    for a, b in zip(pages, pages[1:]):
        if a != "ellipsis" and b != "ellipsis":
            assert b == a + 1


@pytest.mark.parametrize("max_visible", [0, -3])
def test_page_numbers_non_positive_window(max_visible):
    pages = get_page_numbers(4, 10, max_visible)
    assert pages == [1, "ellipsis", 4, "ellipsis", 10]
    assert get_page_numbers(1, 1, max_visible) == [1]


def test_defaults():
    assert page_size_options() == (10, 25, 50, 100)
    assert default_options() == PaginationOptions(page=1, page_size=25)
