"""Catalog view state.

Listing request building, the catalog state store and its reducers,
the infinite-scroll trigger, and the local-only favorites/session stores.
"""

from catalogsync.catalog.local_stores import FavoritesStore, SessionStore
from catalogsync.catalog.pagination import PaginationTrigger
from catalogsync.catalog.query_builder import ListingRequest, build_listing_request
from catalogsync.catalog.store import (
    INITIAL_STATE,
    CatalogState,
    CatalogStore,
    DeleteFulfilled,
    FetchFulfilled,
    FetchPending,
    FetchRejected,
    Reset,
    UpdateCommitted,
)

__all__ = [
    # Query builder
    "ListingRequest",
    "build_listing_request",
    # Store
    "INITIAL_STATE",
    "CatalogState",
    "CatalogStore",
    "DeleteFulfilled",
    "FetchFulfilled",
    "FetchPending",
    "FetchRejected",
    "Reset",
    "UpdateCommitted",
    # Pagination
    "PaginationTrigger",
    # Local stores
    "FavoritesStore",
    "SessionStore",
]
