"""Pagination Math — page/pageSize to skip/limit and response metadata.

Invariants:
    - page >= 1; page_size in [1, max_page_size]
    - skip = (page - 1) * page_size
    - total_pages uses ceiling division; 0 items -> 0 pages
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PageRequest:
    page: int
    page_size: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size


def clamp_page_request(
    page: int | None, page_size: int | None,
    default_page_size: int, max_page_size: int,
) -> PageRequest:
    """Normalize raw query values; out-of-range values fall back to defaults."""
    safe_page = page if page and page >= 1 else 1
    if not page_size or page_size < 1:
        safe_size = default_page_size
    else:
        safe_size = min(page_size, max_page_size)
    return PageRequest(page=safe_page, page_size=safe_size)


def total_pages(total_items: int, page_size: int) -> int:
    if total_items <= 0 or page_size <= 0:
        return 0
    return (total_items + page_size - 1) // page_size


def pagination_meta(request: PageRequest, total_items: int) -> dict:
    return {
        "page": request.page,
        "pageSize": request.page_size,
        "totalItems": total_items,
        "totalPages": total_pages(total_items, request.page_size),
    }
