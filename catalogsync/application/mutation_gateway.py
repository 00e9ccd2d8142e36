"""Product mutation gateway.

Wraps create, update, and delete against the remote catalog and decides
which store transition each outcome produces:

- update is local-first: the edit is committed to the store whatever the
  remote answers, and a remote failure becomes a non-fatal notice;
- delete needs remote confirmation before the row leaves the listing;
- create needs remote success, since only the remote can assign an id.
"""

from dataclasses import dataclass

import structlog

from catalogsync.catalog.store import CatalogStore, DeleteFulfilled, UpdateCommitted
from catalogsync.domain.exceptions import MalformedPayloadError
from catalogsync.domain.models import Product, ProductDraft, ProductUpdate
from catalogsync.infrastructure.catalog_client import CatalogAPIClient

logger = structlog.get_logger()


@dataclass
class MutationResult:
    """Outcome of a gateway operation as seen by the caller.

    Attributes:
        success: Whether the operation took effect.
        product: Resulting product (created, updated, or loaded).
        product_id: Identifier of the product the operation targeted.
        message: Failure message when ``success`` is False.
        notice: Non-fatal remark, e.g. a tolerated remote update failure.
    """

    success: bool
    product: Product | None = None
    product_id: int | None = None
    message: str | None = None
    notice: str | None = None


class MutationGateway:
    """Applies product mutations to the remote catalog and the local store."""

    def __init__(self, store: CatalogStore, client: CatalogAPIClient) -> None:
        """Initialize the gateway.

        Args:
            store: Catalog store receiving committed mutations.
            client: Remote catalog client.
        """
        self.store = store
        self.client = client

    async def get_product(self, product_id: int) -> MutationResult:
        """Load a single product, e.g. to prefill an edit form.

        Args:
            product_id: Product identifier.

        Returns:
            MutationResult carrying the product, or the failure message.
        """
        response = await self.client.get_product(product_id)
        if not response.success:
            return MutationResult(
                success=False,
                product_id=product_id,
                message=response.error_message or "Failed to load product details",
            )

        try:
            product = Product.from_api_response(response.data)
        except MalformedPayloadError as e:
            return MutationResult(success=False, product_id=product_id, message=e.message)
        return MutationResult(success=True, product=product, product_id=product.id)

    async def create_product(self, draft: ProductDraft) -> MutationResult:
        """Create a product remotely.

        The product echoed by the remote, including server-assigned fields,
        is the canonical result. Nothing is committed locally.

        Args:
            draft: User-supplied product fields.

        Returns:
            MutationResult with the created product, or the failure message.
        """
        response = await self.client.create_product(draft.model_dump())
        if not response.success:
            message = response.error_message or "Unable to create product"
            logger.warning("Product create failed", title=draft.title, error=message)
            return MutationResult(success=False, message=message)

        try:
            created = Product.from_api_response(response.data)
        except MalformedPayloadError as e:
            logger.warning("Product create returned malformed payload", error=e.message)
            return MutationResult(success=False, message=e.message)

        logger.info("Product created", product_id=created.id, title=created.title)
        return MutationResult(success=True, product=created, product_id=created.id)

    async def update_product(
        self,
        product: Product,
        changes: ProductUpdate,
    ) -> MutationResult:
        """Update a product, committing locally regardless of the remote.

        Args:
            product: Product as currently shown to the user.
            changes: Fields the user edited.

        Returns:
            Successful MutationResult with the updated product; carries a
            notice when the remote write failed.
        """
        updated = product.with_changes(changes)

        response = await self.client.update_product(product.id, changes.changed_fields())
        notice = None
        if not response.success:
            notice = (
                f"Remote update failed ({response.error_message}); "
                "the change was applied locally only"
            )
            logger.warning(
                "Remote product update failed, committing locally",
                product_id=product.id,
                error=response.error_message,
            )

        self.store.dispatch(UpdateCommitted(product=updated))
        logger.info("Product update committed", product_id=product.id, remote_ok=response.success)
        return MutationResult(
            success=True,
            product=updated,
            product_id=product.id,
            notice=notice,
        )

    async def delete_product(self, product_id: int) -> MutationResult:
        """Delete a product once the remote confirms it.

        Args:
            product_id: Product identifier.

        Returns:
            MutationResult; on failure the listing is left unchanged.
        """
        listed = self.store.state.find(product_id)

        response = await self.client.delete_product(product_id)
        if not response.success:
            message = response.error_message or "Failed to delete product"
            logger.warning("Product delete failed", product_id=product_id, error=message)
            return MutationResult(success=False, product=listed, product_id=product_id, message=message)

        self.store.dispatch(DeleteFulfilled(product_id=product_id))
        logger.info("Product deleted", product_id=product_id)
        return MutationResult(success=True, product=listed, product_id=product_id)
