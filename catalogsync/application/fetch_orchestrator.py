"""Fetch orchestration.

Decides when a listing request is issued and which store transition
precedes it. Query changes are debounced through a cancellable timer;
page advances are issued immediately. Responses belonging to a superseded
query are discarded before they reach the store.
"""

import asyncio
import itertools
from dataclasses import dataclass

import structlog

from catalogsync.catalog.query_builder import (
    DEFAULT_PAGE_SIZE,
    ListingRequest,
    build_listing_request,
)
from catalogsync.catalog.store import (
    CatalogStore,
    FetchFulfilled,
    FetchPending,
    FetchRejected,
)
from catalogsync.domain.exceptions import MalformedPayloadError
from catalogsync.domain.models import ProductPage
from catalogsync.domain.state_machines import FetchStatus, QueryMode
from catalogsync.infrastructure.catalog_client import CatalogAPIClient

logger = structlog.get_logger()

DEFAULT_DEBOUNCE_SECONDS = 0.5


@dataclass(frozen=True)
class FetchIntent:
    """A scheduled listing fetch.

    Attributes:
        text: Search input at scheduling time.
        category: Category input at scheduling time.
        offset: Pagination offset to fetch.
        generation: Query generation the intent belongs to.
    """

    text: str
    category: str
    offset: int
    generation: int


class FetchOrchestrator:
    """Sequences listing requests for one catalog store.

    The orchestrator keeps the committed ``(text, category)`` pair and
    the pagination offset. A change to the pair is a mode change: the
    offset resets to 0, the query generation advances, and the fetch is
    scheduled after the debounce window. Outcomes of fetches from an older
    generation are dropped.
    """

    def __init__(
        self,
        store: CatalogStore,
        client: CatalogAPIClient,
        page_size: int = DEFAULT_PAGE_SIZE,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            store: Catalog store receiving fetch transitions.
            client: Remote catalog client.
            page_size: Items per page.
            debounce_seconds: Quiet window applied to query changes.
        """
        self.store = store
        self.client = client
        self.page_size = page_size
        self.debounce_seconds = debounce_seconds

        self._text = ""
        self._category = ""
        self._offset = 0
        self._generation = 0
        self._request_ids = itertools.count(1)

        self._timer: asyncio.TimerHandle | None = None
        self._scheduled: FetchIntent | None = None
        self._in_flight: dict[asyncio.Task[None], FetchIntent] = {}

    # =========================================================================
    # Inputs
    # =========================================================================

    @property
    def text(self) -> str:
        return self._text

    @property
    def category(self) -> str:
        return self._category

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def mode(self) -> QueryMode:
        """Mode selected by the committed inputs."""
        return QueryMode.from_inputs(self._text, self._category)

    def set_query(self, text: str, category: str) -> bool:
        """Commit new listing inputs.

        Args:
            text: Free-text search input.
            category: Selected category, empty for all products.

        Returns:
            True if the inputs changed and a fetch was scheduled.
        """
        if (text, category) == (self._text, self._category):
            return False

        self._text = text
        self._category = category
        self._offset = 0
        self._generation += 1

        logger.info(
            "Listing query changed",
            mode=str(self.mode),
            generation=self._generation,
        )
        self._schedule(self.debounce_seconds)
        return True

    def set_search_text(self, text: str) -> bool:
        return self.set_query(text, self._category)

    def set_category(self, category: str) -> bool:
        """Select a category; choosing a category clears the search text."""
        return self.set_query("", category)

    def start(self) -> None:
        """Issue the first page for the committed inputs immediately."""
        self._schedule(0)

    def refresh(self) -> None:
        """Re-issue the fetch at the current offset immediately."""
        self._schedule(0)

    def advance_page(self) -> bool:
        """Fetch the next page of the current mode.

        A failed fetch is retried at its own offset instead of skipping
        past it. While nothing has been fetched for the current query
        (before ``start`` or after a reset) the first page is fetched.
        Requests while a fetch is scheduled or in flight for the current
        generation are coalesced.

        Returns:
            True if a fetch was scheduled.
        """
        if not self.mode.is_paginated:
            return False
        if self._has_pending_fetch():
            logger.debug("Coalesced page request", offset=self._offset)
            return False

        status = self.store.state.status
        if status is FetchStatus.IDLE:
            self._offset = 0
        elif status is not FetchStatus.FAILED:
            self._offset += self.page_size
        self._schedule(0)
        return True

    def invalidate(self) -> None:
        """Forget the current query and make outstanding fetches inert."""
        self._cancel_timer()
        self._text = ""
        self._category = ""
        self._offset = 0
        self._generation += 1

    # =========================================================================
    # Scheduling
    # =========================================================================

    def _has_pending_fetch(self) -> bool:
        if self._timer is not None:
            return True
        return any(i.generation == self._generation for i in self._in_flight.values())

    def _cancel_timer(self) -> None:
        if self._timer is not None and self._scheduled is not None:
            self._timer.cancel()
            logger.debug(
                "Cancelled pending fetch",
                offset=self._scheduled.offset,
                generation=self._scheduled.generation,
            )
        self._timer = None
        self._scheduled = None

    def _schedule(self, delay: float) -> None:
        """Replace any pending timer with one firing after ``delay`` seconds."""
        self._cancel_timer()
        intent = FetchIntent(
            text=self._text,
            category=self._category,
            offset=self._offset,
            generation=self._generation,
        )
        loop = asyncio.get_running_loop()
        self._scheduled = intent
        self._timer = loop.call_later(delay, self._issue, intent)

    def _issue(self, intent: FetchIntent) -> None:
        """Timer callback: start the fetch task for ``intent``."""
        self._timer = None
        self._scheduled = None
        task = asyncio.get_running_loop().create_task(self._fetch(intent))
        self._in_flight[task] = intent
        task.add_done_callback(self._forget)

    def _forget(self, task: asyncio.Task[None]) -> None:
        self._in_flight.pop(task, None)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Listing fetch task crashed", error=str(task.exception()))

    async def _fetch(self, intent: FetchIntent) -> None:
        request = build_listing_request(
            intent.text,
            intent.category,
            intent.offset,
            page_size=self.page_size,
        )
        request_id = next(self._request_ids)
        self.store.dispatch(
            FetchPending(offset=request.offset, mode=request.mode, request_id=request_id)
        )

        logger.info(
            "Issuing listing request",
            mode=str(request.mode),
            offset=request.offset,
            request_id=request_id,
        )
        response = await self.client.fetch_listing(request.path, request.params)

        if intent.generation != self._generation:
            logger.debug(
                "Discarding listing response for superseded query",
                mode=str(request.mode),
                generation=intent.generation,
                current_generation=self._generation,
            )
            return

        if not response.success:
            self._reject(request, request_id, response.error_message or "Failed to fetch products")
            return

        try:
            page = ProductPage.from_api_response(response.data)
        except MalformedPayloadError as e:
            self._reject(request, request_id, e.message)
            return

        self.store.dispatch(FetchFulfilled(page=page, mode=request.mode, request_id=request_id))

    def _reject(self, request: ListingRequest, request_id: int, message: str) -> None:
        logger.warning(
            "Listing request failed",
            mode=str(request.mode),
            offset=request.offset,
            error=message,
        )
        self.store.dispatch(FetchRejected(message=message, mode=request.mode, request_id=request_id))

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def wait_until_settled(self) -> None:
        """Wait until no fetch is scheduled or in flight."""
        loop = asyncio.get_running_loop()
        while self._timer is not None or self._in_flight:
            if self._in_flight:
                await asyncio.wait(set(self._in_flight))
            elif self._timer is not None:
                await asyncio.sleep(max(0.0, self._timer.when() - loop.time()))
            # let a just-fired timer callback create its task
            await asyncio.sleep(0)

    async def aclose(self) -> None:
        """Cancel the pending timer and wait for in-flight fetches."""
        self._cancel_timer()
        if self._in_flight:
            await asyncio.wait(set(self._in_flight))
