"""Infinite-scroll pagination trigger."""

from typing import Protocol

import structlog

from catalogsync.catalog.store import CatalogStore

logger = structlog.get_logger()


class PageAdvancer(Protocol):
    """Anything that can fetch the next page of the current mode."""

    def advance_page(self) -> bool: ...


class PaginationTrigger:
    """Turns "near the end of the list" signals into page requests.

    A signal is acted on only while no listing request is loading, the
    remote has reported more items, and the listing is not a search.
    """

    def __init__(self, store: CatalogStore, advancer: PageAdvancer) -> None:
        self.store = store
        self.advancer = advancer

    def can_advance(self) -> bool:
        """Check the preconditions for requesting another page."""
        state = self.store.state
        return (
            state.status.is_settled()
            and state.has_more
            and not state.is_search
        )

    def notify_near_end(self) -> bool:
        """Handle a proximity signal from the presentation layer.

        Returns:
            True if a page request was scheduled.
        """
        if not self.can_advance():
            return False
        requested = self.advancer.advance_page()
        if requested:
            logger.debug("Requested next page", item_count=len(self.store.state.items))
        return requested
