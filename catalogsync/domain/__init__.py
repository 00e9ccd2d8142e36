"""Domain layer - catalog models, query modes, fetch status, exceptions.

- **Models**: Product payloads and user-supplied drafts/updates (pydantic)
- **State Machines**: FetchStatus lifecycle and the QueryMode tagged union
- **Exceptions**: Domain-specific errors

Example usage:
    from catalogsync.domain import QueryMode

    mode = QueryMode.from_inputs(text="", category="laptops")
    assert mode.is_filtered
"""

from catalogsync.domain.exceptions import (
    DomainError,
    InvalidSessionError,
    InvalidStatusTransitionError,
    MalformedPayloadError,
)
from catalogsync.domain.models import (
    Product,
    ProductDraft,
    ProductPage,
    ProductUpdate,
    normalize_categories,
    normalize_category,
)
from catalogsync.domain.state_machines import FetchStatus, QueryKind, QueryMode

__all__ = [
    # Exceptions
    "DomainError",
    "InvalidSessionError",
    "InvalidStatusTransitionError",
    "MalformedPayloadError",
    # Models
    "Product",
    "ProductDraft",
    "ProductPage",
    "ProductUpdate",
    "normalize_categories",
    "normalize_category",
    # State machines
    "FetchStatus",
    "QueryKind",
    "QueryMode",
]
