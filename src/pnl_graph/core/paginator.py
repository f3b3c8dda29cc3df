import math
from typing import Sequence, TypeVar

from pnl_graph.models.page import Page

T = TypeVar('T')

DEFAULT_PAGE_SIZE = 100


def count_pages(item_count: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    if page_size <= 0:
        raise ValueError(f"Page size must be positive, got {page_size}")
    return math.ceil(item_count / page_size)


def last_page(item_count: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    """Page to show after the granularity changes or data is (re)loaded"""
    return max(count_pages(item_count, page_size) - 1, 0)


def paginate(
    items: Sequence[T],
    requested_page: int,
    page_size: int = DEFAULT_PAGE_SIZE
) -> Page:
    """
    Slice a series into fixed-size pages for bar chart display.

    The requested page is clamped to the valid range. An empty series has zero
    pages and no current page.
    """
    total_pages = count_pages(len(items), page_size)
    if total_pages == 0:
        return Page(items=[], total_pages=0, current_page=None)

    current_page = min(max(0, requested_page), total_pages - 1)
    start = current_page * page_size
    return Page(
        items=list(items[start:start + page_size]),
        total_pages=total_pages,
        current_page=current_page
    )
