"""Catalog store.

Holds the accumulated listing as an immutable ``CatalogState`` snapshot and
applies events to it through pure reducers. ``CatalogStore.dispatch`` is the
only way to change the state; observers are notified after every transition
that produces a new snapshot.
"""

from dataclasses import dataclass, replace
from typing import Callable

import structlog

from catalogsync.domain.exceptions import InvalidStatusTransitionError
from catalogsync.domain.models import Product, ProductPage
from catalogsync.domain.state_machines import FetchStatus, QueryMode

logger = structlog.get_logger()


# ============================================================================
# State
# ============================================================================


@dataclass(frozen=True)
class CatalogState:
    """Snapshot of the local catalog view.

    Attributes:
        items: Products in arrival order, unique by id.
        status: Listing request lifecycle status.
        error: Last listing failure message.
        has_more: Whether the remote reported more items for the mode.
        mode: Query mode that produced ``items``.
        offset: Offset of the most recent fetch.
        request_id: Identifier of the most recent fetch intent.
    """

    items: tuple[Product, ...] = ()
    status: FetchStatus = FetchStatus.IDLE
    error: str | None = None
    has_more: bool = True
    mode: QueryMode = QueryMode()
    offset: int = 0
    request_id: int | None = None

    @property
    def is_search(self) -> bool:
        return self.mode.is_search

    @property
    def is_filtered(self) -> bool:
        return self.mode.is_filtered

    @property
    def item_ids(self) -> list[int]:
        return [p.id for p in self.items]

    def find(self, product_id: int) -> Product | None:
        """Get a listed product by ID.

        Args:
            product_id: Product identifier.

        Returns:
            The product if it is in the listing.
        """
        for product in self.items:
            if product.id == product_id:
                return product
        return None


INITIAL_STATE = CatalogState()


# ============================================================================
# Events
# ============================================================================


@dataclass(frozen=True)
class FetchPending:
    """A listing request is about to be issued."""

    offset: int
    mode: QueryMode
    request_id: int


@dataclass(frozen=True)
class FetchFulfilled:
    """A listing request succeeded."""

    page: ProductPage
    mode: QueryMode
    request_id: int


@dataclass(frozen=True)
class FetchRejected:
    """A listing request failed."""

    message: str
    mode: QueryMode
    request_id: int


@dataclass(frozen=True)
class DeleteFulfilled:
    """The remote confirmed a product deletion."""

    product_id: int


@dataclass(frozen=True)
class UpdateCommitted:
    """A product edit committed locally."""

    product: Product


@dataclass(frozen=True)
class Reset:
    """Return the catalog to its initial state."""


CatalogEvent = FetchPending | FetchFulfilled | FetchRejected | DeleteFulfilled | UpdateCommitted | Reset


# ============================================================================
# Reducers
# ============================================================================


def is_still_relevant(state: CatalogState, event: FetchFulfilled | FetchRejected) -> bool:
    """Check that a fetch outcome belongs to the request the state waits for.

    Outcomes of superseded requests (a later fetch was issued, the mode
    changed, or the catalog was reset) must not touch the state.
    """
    return (
        state.status is FetchStatus.LOADING
        and event.request_id == state.request_id
        and event.mode == state.mode
    )


def fetch_pending(state: CatalogState, event: FetchPending) -> CatalogState:
    if event.offset == 0:
        return replace(
            state,
            items=(),
            status=FetchStatus.LOADING,
            error=None,
            has_more=True,
            mode=event.mode,
            offset=0,
            request_id=event.request_id,
        )
    return replace(
        state,
        status=FetchStatus.LOADING,
        error=None,
        offset=event.offset,
        request_id=event.request_id,
    )


def fetch_fulfilled(state: CatalogState, event: FetchFulfilled) -> CatalogState:
    """Merge a page into the listing.

    Products already listed keep their first-seen position; repeats from
    the page are dropped.
    """
    if not is_still_relevant(state, event):
        return state

    seen = {p.id for p in state.items}
    merged = list(state.items)
    for product in event.page.products:
        if product.id in seen:
            continue
        seen.add(product.id)
        merged.append(product)

    return replace(
        state,
        items=tuple(merged),
        status=FetchStatus.SUCCEEDED,
        has_more=len(merged) < event.page.total,
    )


def fetch_rejected(state: CatalogState, event: FetchRejected) -> CatalogState:
    if not is_still_relevant(state, event):
        return state
    return replace(state, status=FetchStatus.FAILED, error=event.message)


def delete_fulfilled(state: CatalogState, event: DeleteFulfilled) -> CatalogState:
    remaining = tuple(p for p in state.items if p.id != event.product_id)
    if len(remaining) == len(state.items):
        return state
    return replace(state, items=remaining)


def update_committed(state: CatalogState, event: UpdateCommitted) -> CatalogState:
    updated = event.product
    if state.find(updated.id) is None:
        return state
    return replace(
        state,
        items=tuple(updated if p.id == updated.id else p for p in state.items),
    )


def reduce(state: CatalogState, event: CatalogEvent) -> CatalogState:
    """Apply one event to the state.

    Args:
        state: Current snapshot.
        event: Event to apply.

    Returns:
        The next snapshot (``state`` itself when the event is a no-op).
    """
    match event:
        case FetchPending():
            return fetch_pending(state, event)
        case FetchFulfilled():
            return fetch_fulfilled(state, event)
        case FetchRejected():
            return fetch_rejected(state, event)
        case DeleteFulfilled():
            return delete_fulfilled(state, event)
        case UpdateCommitted():
            return update_committed(state, event)
        case Reset():
            return INITIAL_STATE
    raise TypeError(f"Unknown catalog event: {event!r}")


# ============================================================================
# Store
# ============================================================================


StateListener = Callable[[CatalogState], None]


class CatalogStore:
    """Owner of the catalog state.

    Example usage:
        store = CatalogStore()
        unsubscribe = store.subscribe(render)
        store.dispatch(DeleteFulfilled(product_id=3))
    """

    def __init__(self, initial: CatalogState = INITIAL_STATE) -> None:
        self._state = initial
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> CatalogState:
        """Current read-only snapshot."""
        return self._state

    def dispatch(self, event: CatalogEvent) -> CatalogState:
        """Apply an event and notify listeners if the state changed.

        Args:
            event: Event to apply.

        Returns:
            The resulting snapshot.

        Raises:
            InvalidStatusTransitionError: If the event would move the status
                along a transition the fetch lifecycle does not allow.
        """
        previous = self._state
        current = reduce(previous, event)

        # Reset may return to IDLE from any status
        if (
            not isinstance(event, Reset)
            and current.status is not previous.status
            and not previous.status.can_transition_to(current.status)
        ):
            raise InvalidStatusTransitionError(
                current_status=previous.status.value,
                target_status=current.status.value,
                allowed_transitions=[s.value for s in previous.status.allowed_transitions()],
            )

        if current is previous:
            if isinstance(event, (FetchFulfilled, FetchRejected)):
                logger.debug(
                    "Dropped stale listing outcome",
                    event=type(event).__name__,
                    event_mode=str(event.mode),
                    current_mode=str(previous.mode),
                    request_id=event.request_id,
                    current_request_id=previous.request_id,
                )
            return current

        self._state = current
        for listener in list(self._listeners):
            listener(current)
        return current

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener called with every new snapshot.

        Args:
            listener: Callable receiving the new state.

        Returns:
            Callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
