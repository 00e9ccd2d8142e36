"""Pytest configuration and fixtures for catalog engine tests."""

import asyncio
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from catalogsync.catalog.store import CatalogStore
from catalogsync.domain.models import Product, ProductPage
from catalogsync.infrastructure.catalog_client import APIError, APIResponse, CatalogAPIClient


@pytest.fixture
def mock_client() -> MagicMock:
    """Create a mock catalog API client."""
    client = MagicMock(spec=CatalogAPIClient)

    # Make all methods async
    client.fetch_listing = AsyncMock()
    client.get_categories = AsyncMock()
    client.get_product = AsyncMock()
    client.create_product = AsyncMock()
    client.update_product = AsyncMock()
    client.delete_product = AsyncMock()
    client.close = AsyncMock()

    return client


@pytest.fixture
def store() -> CatalogStore:
    """Create an empty catalog store."""
    return CatalogStore()


def make_product(product_id: int, **fields: Any) -> Product:
    """Create a product with sensible defaults."""
    data = {
        "id": product_id,
        "title": f"Product {product_id}",
        "description": f"Description of product {product_id}",
        "price": 10.0 + product_id,
        "stock": 5,
        "brand": "Acme",
        "category": "beauty",
    }
    data.update(fields)
    return Product.model_validate(data)


def make_page_data(ids: list[int], total: int, skip: int = 0, limit: int = 10) -> dict[str, Any]:
    """Create a listing response body."""
    return {
        "products": [make_product(i).model_dump() for i in ids],
        "total": total,
        "skip": skip,
        "limit": limit,
    }


def make_page(ids: list[int], total: int, skip: int = 0) -> ProductPage:
    """Create a parsed listing page."""
    return ProductPage.model_validate(make_page_data(ids, total, skip=skip))


def make_success_response(data: Any) -> APIResponse:
    """Create a successful API response."""
    return APIResponse(success=True, data=data)


def make_error_response(
    error_code: str,
    message: str,
    status_code: int = 400,
) -> APIResponse:
    """Create an error API response."""
    return APIResponse(
        success=False,
        error=APIError(
            error_code=error_code,
            message=message,
            status_code=status_code,
        ),
    )


async def wait_for_calls(mock: AsyncMock, count: int, timeout: float = 1.0) -> None:
    """Wait until an async mock has been awaited ``count`` times."""
    async with asyncio.timeout(timeout):
        while mock.await_count < count:
            await asyncio.sleep(0.001)
