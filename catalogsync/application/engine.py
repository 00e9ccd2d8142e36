"""Catalog engine facade.

Wires the store, fetch orchestrator, pagination trigger, and mutation
gateway around one remote client, and exposes the operations the
presentation layer may call. The presentation layer reads ``state`` (or
subscribes to it) and never mutates it directly.

Example usage:
    engine = CatalogEngine.from_settings()
    engine.start()
    await engine.wait_until_settled()

    engine.set_category("smartphones")
    await engine.wait_until_settled()
    engine.request_next_page()
"""

from collections.abc import Callable

import structlog

from catalogsync.application.fetch_orchestrator import (
    DEFAULT_DEBOUNCE_SECONDS,
    FetchOrchestrator,
)
from catalogsync.application.mutation_gateway import MutationGateway, MutationResult
from catalogsync.catalog.local_stores import FavoritesStore, SessionStore
from catalogsync.catalog.pagination import PaginationTrigger
from catalogsync.catalog.query_builder import DEFAULT_PAGE_SIZE
from catalogsync.catalog.store import CatalogState, CatalogStore, Reset
from catalogsync.domain.models import (
    Product,
    ProductDraft,
    ProductUpdate,
    normalize_categories,
)
from catalogsync.infrastructure.catalog_client import CatalogAPIClient
from catalogsync.infrastructure.config import Settings, settings as default_settings
from catalogsync.infrastructure.logging_config import configure_logging

logger = structlog.get_logger()


class CatalogEngine:
    """Client-side catalog synchronization engine."""

    def __init__(
        self,
        client: CatalogAPIClient,
        store: CatalogStore | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        """Initialize the engine.

        Args:
            client: Remote catalog client.
            store: Catalog store; a fresh one is created when omitted.
            page_size: Items per listing page.
            debounce_seconds: Quiet window applied to query changes.
        """
        self.client = client
        self.store = store or CatalogStore()
        self.orchestrator = FetchOrchestrator(
            self.store,
            client,
            page_size=page_size,
            debounce_seconds=debounce_seconds,
        )
        self.trigger = PaginationTrigger(self.store, self.orchestrator)
        self.gateway = MutationGateway(self.store, client)
        self.favorites = FavoritesStore()
        self.session = SessionStore(on_logout=self.favorites.clear)

    @classmethod
    def from_settings(cls, config: Settings | None = None) -> "CatalogEngine":
        """Build an engine, its client, and logging from settings.

        Args:
            config: Settings to use; the environment-loaded ones by default.

        Returns:
            Configured CatalogEngine.
        """
        config = config or default_settings
        configure_logging(config.log_level, json_logs=config.log_json)
        client = CatalogAPIClient(base_url=config.api_url, timeout=config.api_timeout)
        return cls(
            client,
            page_size=config.page_size,
            debounce_seconds=config.search_debounce_seconds,
        )

    # =========================================================================
    # Observation
    # =========================================================================

    @property
    def state(self) -> CatalogState:
        return self.store.state

    def subscribe(self, listener: Callable[[CatalogState], None]) -> Callable[[], None]:
        return self.store.subscribe(listener)

    # =========================================================================
    # Listing
    # =========================================================================

    def start(self) -> None:
        """Load the first page for the current inputs."""
        self.orchestrator.start()

    def set_search_text(self, text: str) -> bool:
        return self.orchestrator.set_search_text(text)

    def set_category(self, category: str) -> bool:
        return self.orchestrator.set_category(category)

    def request_next_page(self) -> bool:
        """Signal that the user scrolled near the end of the list."""
        return self.trigger.notify_near_end()

    def refresh(self) -> None:
        self.orchestrator.refresh()

    def reset_catalog(self) -> None:
        """Return the listing to its initial state and drop pending fetches."""
        self.orchestrator.invalidate()
        self.store.dispatch(Reset())
        logger.info("Catalog reset")

    async def load_categories(self) -> list[str]:
        """Load the category names for a category picker.

        Returns:
            Normalized category names; empty if the remote call failed.
        """
        response = await self.client.get_categories()
        if not response.success:
            logger.warning("Failed to fetch categories", error=response.error_message)
            return []
        return normalize_categories(response.data)

    # =========================================================================
    # Mutations
    # =========================================================================

    async def get_product(self, product_id: int) -> MutationResult:
        return await self.gateway.get_product(product_id)

    async def create_product(self, draft: ProductDraft) -> MutationResult:
        return await self.gateway.create_product(draft)

    async def update_product(self, product: Product, changes: ProductUpdate) -> MutationResult:
        result = await self.gateway.update_product(product, changes)
        if result.product is not None:
            self.favorites.replace(result.product)
        return result

    async def delete_product(self, product_id: int) -> MutationResult:
        result = await self.gateway.delete_product(product_id)
        if result.success:
            self.favorites.remove(product_id)
        return result

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def wait_until_settled(self) -> None:
        await self.orchestrator.wait_until_settled()

    async def aclose(self) -> None:
        """Stop scheduling fetches and close the HTTP client."""
        await self.orchestrator.aclose()
        await self.client.close()
