"""State machines for the catalog view.

``FetchStatus`` is the request lifecycle of the listing; ``QueryMode`` is
the tagged union deciding which endpoint and pagination rules apply.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Self


# ============================================================================
# Fetch Status State Machine
# ============================================================================


class FetchStatus(str, Enum):
    """Listing request lifecycle.

    State diagram:
        IDLE ──────► LOADING ◄──────────┐
                      │    │            │
              fulfill │    │ reject     │ fetch
                      ▼    ▼            │
               SUCCEEDED  FAILED ───────┤
                   │                    │
                   └────────────────────┘

    Any state may return to IDLE through a catalog reset.
    """

    IDLE = "idle"
    LOADING = "loading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    def can_transition_to(self, target: "FetchStatus") -> bool:
        """Check if transition to target state is valid.

        Args:
            target: Target state to transition to.

        Returns:
            True if transition is valid.
        """
        return target in _FETCH_TRANSITIONS.get(self, set())

    def allowed_transitions(self) -> list["FetchStatus"]:
        """Get list of valid target states."""
        return list(_FETCH_TRANSITIONS.get(self, set()))

    def is_settled(self) -> bool:
        """Check if no listing request is outstanding.

        Returns:
            True unless a request is loading.
        """
        return self is not FetchStatus.LOADING


# A fetch may be reissued while loading (new mode or page), so LOADING -> LOADING is valid
_FETCH_TRANSITIONS: dict[FetchStatus, set[FetchStatus]] = {
    FetchStatus.IDLE: {FetchStatus.LOADING},
    FetchStatus.LOADING: {FetchStatus.LOADING, FetchStatus.SUCCEEDED, FetchStatus.FAILED},
    FetchStatus.SUCCEEDED: {FetchStatus.LOADING},
    FetchStatus.FAILED: {FetchStatus.LOADING},
}


# ============================================================================
# Query Mode
# ============================================================================


class QueryKind(str, Enum):
    """Discriminator of ``QueryMode``."""

    UNFILTERED = "unfiltered"
    SEARCH = "search"
    CATEGORY = "category"


@dataclass(frozen=True)
class QueryMode:
    """Active query of the listing.

    Exactly one of ``Unfiltered``, ``Search(text)`` or ``Category(name)``.
    Build instances through the classmethods or ``from_inputs`` so that the
    value is only ever set for the kinds that carry one.
    """

    kind: QueryKind = QueryKind.UNFILTERED
    value: str = ""

    @classmethod
    def unfiltered(cls) -> Self:
        return cls()

    @classmethod
    def search(cls, text: str) -> Self:
        return cls(kind=QueryKind.SEARCH, value=text)

    @classmethod
    def category(cls, name: str) -> Self:
        return cls(kind=QueryKind.CATEGORY, value=name)

    @classmethod
    def from_inputs(cls, text: str, category: str) -> Self:
        """Resolve the raw UI inputs into a mode.

        Search text dominates the category, which dominates the
        unfiltered listing.

        Args:
            text: Free-text search input.
            category: Selected category, empty for all products.

        Returns:
            The mode the inputs select.
        """
        text = text.strip()
        category = category.strip()
        if text:
            return cls.search(text)
        if category:
            return cls.category(category)
        return cls.unfiltered()

    @property
    def is_search(self) -> bool:
        return self.kind is QueryKind.SEARCH

    @property
    def is_filtered(self) -> bool:
        return self.kind is QueryKind.CATEGORY

    @property
    def is_paginated(self) -> bool:
        """Search results arrive as one bounded set; other modes page."""
        return not self.is_search

    def __str__(self) -> str:
        if self.kind is QueryKind.UNFILTERED:
            return self.kind.value
        return f"{self.kind.value}({self.value})"
