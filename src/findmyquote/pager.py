"""Paging of quote search results across conversation turns.

The pager holds no state of its own. ``start_search`` builds a fresh
cursor from a lookup; ``continue_paging`` takes the caller's cursor and
returns the advanced one alongside the page to render. Persisting the
cursor between turns is the dispatcher's job.
"""

from __future__ import annotations

from typing import Callable, Optional

from findmyquote.backends.quodb import search_quotes
from findmyquote.models import Page, PageKind, PagingCursor, ResultItem

PAGE_SIZE = 1

Lookup = Callable[[str], list[ResultItem]]


def _check_page_size(page_size: int) -> None:
    if page_size < 1:
        raise ValueError(f"page_size must be at least 1, got {page_size}")


def _emit(cursor: PagingCursor, page_size: int) -> tuple[Page, PagingCursor]:
    """Take up to ``page_size`` items from the cursor, never padding."""
    start = cursor.next_index
    items = cursor.results[start:start + page_size]
    advanced = cursor.advance(len(items))
    page = Page(
        kind=PageKind.RESULTS,
        items=items,
        has_more=not advanced.is_exhausted,
        start_index=start,
        phrase=cursor.phrase,
    )
    return page, advanced


def start_search(
    phrase: str,
    *,
    lookup: Lookup = search_quotes,
    page_size: int = PAGE_SIZE,
) -> tuple[Page, Optional[PagingCursor]]:
    """Run a new search and return its first page.

    Any previous cursor is discarded by the caller. When nothing matches,
    the returned cursor is None.
    """
    _check_page_size(page_size)
    phrase = phrase.strip()
    if not phrase:
        raise ValueError("phrase must not be empty")

    results = tuple(lookup(phrase))
    if not results:
        return Page(kind=PageKind.NO_RESULTS, phrase=phrase), None

    return _emit(PagingCursor(results=results, next_index=0, phrase=phrase), page_size)


def continue_paging(
    cursor: Optional[PagingCursor],
    *,
    page_size: int = PAGE_SIZE,
) -> tuple[Page, Optional[PagingCursor]]:
    """Return the next page of the current search."""
    _check_page_size(page_size)
    if cursor is None:
        return Page(kind=PageKind.NO_ACTIVE_SEARCH), None
    if cursor.is_exhausted:
        return Page(kind=PageKind.ALL_CONSUMED, phrase=cursor.phrase), cursor
    return _emit(cursor, page_size)
