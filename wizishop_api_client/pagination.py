"""
Assembly of paginated WiziShop list results.

List endpoints answer with one page at a time::

    {"results": [...], "page": 1, "pages": 3}

:func:`assemble_results` walks such pages in order and concatenates
their items.  It performs no I/O itself: the caller provides a
function fetching one page and a function extracting the items of a
page, which keeps it independent from the transport and easy to test.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, TypedDict, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Number of items requested per page when walking a whole collection.
PAGE_SIZE = 100


class ResultPage(TypedDict, total=False):
    """Decoded body of one page of a list endpoint."""

    results: List[Any]
    page: int
    pages: int


def read_total_pages(page: ResultPage) -> int:
    """Read the total page count reported by the server."""
    return int(page.get("pages") or 0)


def extract_results(page: ResultPage) -> List[Any]:
    return page.get("results") or []


def assemble_results(
    fetch_page: Callable[[int], Any],
    extract_items: Callable[[Any], Iterable[T]],
    total_pages: Callable[[Any], int] = read_total_pages,
) -> List[T]:
    """Fetch every page of a collection and concatenate their items.

    Parameters
    ----------
    fetch_page : callable
        Called with a 1-based page number; returns the decoded page.
        Exceptions it raises propagate unchanged, so a failure on any
        page aborts the walk without a partial result.
    extract_items : callable
        Returns the items contained in a decoded page.
    total_pages : callable, optional
        Returns the page count of a decoded page.  Reads the ``pages``
        field by default.

    Returns
    -------
    list
        Items in page order, then in the order the server returned
        them within each page.  An empty page returns an empty list,
        even if earlier pages held items.
    """
    current_page = 1
    results: List[T] = []

    while True:
        result_page = fetch_page(current_page)

        if not result_page:
            logger.debug("Page %d is empty, returning no results", current_page)
            return []

        results.extend(extract_items(result_page))
        current_page += 1

        if current_page > total_pages(result_page):
            break

    logger.debug("Assembled %d results from %d page(s)", len(results), current_page - 1)
    return results
