"""Listing request builder.

Maps the raw listing inputs to exactly one remote request shape.
"""

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

from catalogsync.domain.state_machines import QueryKind, QueryMode

DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class ListingRequest:
    """A remote listing request.

    Attributes:
        mode: Query mode the request belongs to.
        path: Endpoint path relative to the API base URL.
        params: Query parameters.
        offset: Pagination offset; always 0 for search requests.
    """

    mode: QueryMode
    path: str
    params: dict[str, Any] = field(default_factory=dict)
    offset: int = 0


def build_listing_request(
    text: str,
    category: str,
    offset: int = 0,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> ListingRequest:
    """Build the listing request for the given inputs.

    Search text dominates the category filter, which dominates the
    unfiltered listing. Search requests ignore both the category and the
    offset: the search endpoint returns its own bounded result set.

    Args:
        text: Free-text search input.
        category: Selected category, empty for all products.
        offset: Number of items already retrieved for this mode.
        page_size: Items per page.

    Returns:
        The single request the inputs select.
    """
    mode = QueryMode.from_inputs(text, category)

    if mode.kind is QueryKind.SEARCH:
        return ListingRequest(
            mode=mode,
            path="/products/search",
            params={"q": mode.value},
        )

    params = {"limit": page_size, "skip": offset}
    if mode.kind is QueryKind.CATEGORY:
        return ListingRequest(
            mode=mode,
            path=f"/products/category/{quote(mode.value, safe='')}",
            params=params,
            offset=offset,
        )

    return ListingRequest(mode=mode, path="/products", params=params, offset=offset)
