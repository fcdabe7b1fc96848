# ABOUTME: Pagination for the weather table.
# ABOUTME: Slices series rows into pages and computes the compact window of page links.

import math
from typing import Sequence, TypeVar

from pydantic import BaseModel

T = TypeVar("T")

PAGE_SIZE_CHOICES = (5, 10, 15, 20, 50)
DEFAULT_PAGE_SIZE = 10
MAX_VISIBLE_PAGES = 5


class Page(BaseModel):
    """One page of rows plus the navigation state around it."""

    rows: list
    page: int
    page_size: int
    total_pages: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def total_pages(count: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return math.ceil(count / page_size)


def clamp_page(page: int, pages: int) -> int:
    """Keep a page number inside [1, pages]; page 1 is always valid."""
    return min(max(page, 1), max(pages, 1))


def paginate(rows: Sequence[T], page: int, page_size: int) -> Page:
    """Return the rows for `page`, clamping it into the valid range first."""
    pages = total_pages(len(rows), page_size)
    page = clamp_page(page, pages)
    start = (page - 1) * page_size
    return Page(rows=list(rows[start : start + page_size]), page=page, page_size=page_size, total_pages=pages)


def page_window(page: int, pages: int) -> list[int | None]:
    """Page numbers to show as links, with None marking an ellipsis.

    At most five numbered links: the first and last page are always reachable and
    the current page keeps its neighbours visible.
    """
    if pages <= MAX_VISIBLE_PAGES:
        return list(range(1, pages + 1))
    if page <= 3:
        return [1, 2, 3, 4, None, pages]
    if page >= pages - 2:
        return [1, None, *range(pages - 3, pages + 1)]
    return [1, None, page - 1, page, page + 1, None, pages]
