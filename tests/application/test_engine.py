"""Tests for the catalog engine facade."""

import asyncio
from unittest.mock import MagicMock

import pytest

from catalogsync.application.engine import CatalogEngine
from catalogsync.application.fetch_orchestrator import DEFAULT_DEBOUNCE_SECONDS
from catalogsync.catalog.query_builder import DEFAULT_PAGE_SIZE
from catalogsync.catalog.store import CatalogState
from catalogsync.domain.models import ProductUpdate
from catalogsync.domain.state_machines import FetchStatus
from catalogsync.infrastructure.catalog_client import CatalogAPIClient
from catalogsync.infrastructure.config import Settings
from tests.conftest import (
    make_error_response,
    make_page_data,
    make_product,
    make_success_response,
    wait_for_calls,
)


@pytest.fixture
def engine(mock_client: MagicMock) -> CatalogEngine:
    return CatalogEngine(mock_client, page_size=10, debounce_seconds=0.01)


class TestEngineConstruction:
    """Tests for building the engine."""

    def test_from_settings(self) -> None:
        config = Settings(
            api_url="http://catalog.test/",
            api_timeout=5.0,
            page_size=20,
            search_debounce_seconds=0.2,
            log_json=False,
        )

        engine = CatalogEngine.from_settings(config)

        assert isinstance(engine.client, CatalogAPIClient)
        assert engine.client.base_url == "http://catalog.test"
        assert engine.client.timeout == 5.0
        assert engine.orchestrator.page_size == 20
        assert engine.orchestrator.debounce_seconds == 0.2
        assert engine.state.status is FetchStatus.IDLE

    def test_default_paging_and_debounce(self, mock_client: MagicMock) -> None:
        engine = CatalogEngine(mock_client)

        assert engine.orchestrator.page_size == DEFAULT_PAGE_SIZE
        assert engine.orchestrator.debounce_seconds == DEFAULT_DEBOUNCE_SECONDS


class TestEngineListing:
    """Tests for the listing operations."""

    @pytest.mark.asyncio
    async def test_scroll_through_pages(self, engine: CatalogEngine, mock_client: MagicMock) -> None:
        """Initial load followed by a scroll-triggered page."""
        mock_client.fetch_listing.side_effect = [
            make_success_response(make_page_data([1, 2], total=25)),
            make_success_response(make_page_data([2, 3], total=25, skip=10)),
        ]
        states: list[CatalogState] = []
        engine.subscribe(states.append)

        engine.start()
        await engine.wait_until_settled()
        assert engine.request_next_page() is True
        await engine.wait_until_settled()

        assert engine.state.item_ids == [1, 2, 3]
        assert [s.status for s in states] == [
            FetchStatus.LOADING,
            FetchStatus.SUCCEEDED,
            FetchStatus.LOADING,
            FetchStatus.SUCCEEDED,
        ]

    @pytest.mark.asyncio
    async def test_next_page_ignored_while_loading(
        self, engine: CatalogEngine, mock_client: MagicMock
    ) -> None:
        gate = asyncio.Event()

        async def fetch_listing(path, params=None):
            await gate.wait()
            return make_success_response(make_page_data([1], total=25))

        mock_client.fetch_listing.side_effect = fetch_listing

        engine.start()
        await wait_for_calls(mock_client.fetch_listing, 1)
        assert engine.request_next_page() is False

        gate.set()
        await engine.wait_until_settled()
        assert mock_client.fetch_listing.await_count == 1

    @pytest.mark.asyncio
    async def test_search_then_category(self, engine: CatalogEngine, mock_client: MagicMock) -> None:
        mock_client.fetch_listing.side_effect = [
            make_success_response(make_page_data([9], total=1)),
            make_success_response(make_page_data([4, 5], total=12)),
        ]

        engine.set_search_text("phone")
        await engine.wait_until_settled()
        assert engine.state.is_search
        assert engine.request_next_page() is False

        engine.set_category("smartphones")
        await engine.wait_until_settled()

        assert engine.state.is_filtered
        assert not engine.state.is_search
        assert engine.state.item_ids == [4, 5]

    @pytest.mark.asyncio
    async def test_reset_catalog(self, engine: CatalogEngine, mock_client: MagicMock) -> None:
        """reset returns to the initial state and forgets the query."""
        gate = asyncio.Event()
        calls = 0

        async def fetch_listing(path, params=None):
            nonlocal calls
            calls += 1
            if calls == 2:
                await gate.wait()
            return make_success_response(make_page_data([1, 2], total=25))

        mock_client.fetch_listing.side_effect = fetch_listing

        engine.set_category("beauty")
        await engine.wait_until_settled()
        engine.request_next_page()
        await wait_for_calls(mock_client.fetch_listing, 2)

        engine.reset_catalog()
        gate.set()
        await engine.wait_until_settled()

        assert engine.state.items == ()
        assert engine.state.status is FetchStatus.IDLE
        assert engine.state.has_more is True
        assert engine.orchestrator.category == ""
        assert engine.orchestrator.offset == 0

    @pytest.mark.asyncio
    async def test_next_page_after_reset_loads_first_page(
        self, engine: CatalogEngine, mock_client: MagicMock
    ) -> None:
        """After a reset the listing restarts at offset 0."""
        mock_client.fetch_listing.return_value = make_success_response(make_page_data([1, 2], total=25))

        engine.start()
        await engine.wait_until_settled()
        engine.reset_catalog()

        assert engine.request_next_page() is True
        await engine.wait_until_settled()

        assert mock_client.fetch_listing.await_count == 2
        assert mock_client.fetch_listing.await_args.args == ("/products", {"limit": 10, "skip": 0})
        assert engine.state.item_ids == [1, 2]
        assert engine.state.offset == 0

    @pytest.mark.asyncio
    async def test_next_page_before_start_loads_first_page(
        self, engine: CatalogEngine, mock_client: MagicMock
    ) -> None:
        mock_client.fetch_listing.return_value = make_success_response(make_page_data([1, 2], total=25))

        assert engine.request_next_page() is True
        await engine.wait_until_settled()

        mock_client.fetch_listing.assert_awaited_once_with("/products", {"limit": 10, "skip": 0})
        assert engine.state.item_ids == [1, 2]

    @pytest.mark.asyncio
    async def test_load_categories(self, engine: CatalogEngine, mock_client: MagicMock) -> None:
        mock_client.get_categories.return_value = make_success_response(
            [{"slug": "beauty", "name": "Beauty"}, "fragrances", {"name": "Furniture"}]
        )

        assert await engine.load_categories() == ["beauty", "fragrances", "Furniture"]

    @pytest.mark.asyncio
    async def test_load_categories_failure(self, engine: CatalogEngine, mock_client: MagicMock) -> None:
        mock_client.get_categories.return_value = make_error_response("TIMEOUT", "timed out", 504)

        assert await engine.load_categories() == []


class TestEngineMutations:
    """Tests for mutations and their favorites side effects."""

    @pytest.mark.asyncio
    async def test_delete_also_drops_favorite(self, engine: CatalogEngine, mock_client: MagicMock) -> None:
        mock_client.fetch_listing.return_value = make_success_response(make_page_data([1, 2], total=2))
        mock_client.delete_product.return_value = make_success_response({"id": 1, "isDeleted": True})
        engine.start()
        await engine.wait_until_settled()
        engine.favorites.toggle(engine.state.find(1))

        result = await engine.delete_product(1)

        assert result.success is True
        assert engine.state.item_ids == [2]
        assert not engine.favorites.is_favorite(1)

    @pytest.mark.asyncio
    async def test_failed_delete_keeps_favorite(self, engine: CatalogEngine, mock_client: MagicMock) -> None:
        mock_client.fetch_listing.return_value = make_success_response(make_page_data([1], total=1))
        mock_client.delete_product.return_value = make_error_response("HTTP_404", "not found", 404)
        engine.start()
        await engine.wait_until_settled()
        engine.favorites.toggle(engine.state.find(1))

        result = await engine.delete_product(1)

        assert result.success is False
        assert engine.state.item_ids == [1]
        assert engine.favorites.is_favorite(1)

    @pytest.mark.asyncio
    async def test_update_refreshes_favorite(self, engine: CatalogEngine, mock_client: MagicMock) -> None:
        mock_client.fetch_listing.return_value = make_success_response(make_page_data([1], total=1))
        mock_client.update_product.return_value = make_error_response("HTTP_404", "not found", 404)
        engine.start()
        await engine.wait_until_settled()
        engine.favorites.toggle(engine.state.find(1))

        result = await engine.update_product(engine.state.find(1), ProductUpdate(title="Edited"))

        assert result.notice is not None
        assert engine.state.find(1).title == "Edited"
        assert engine.favorites.items[0].title == "Edited"

    def test_logout_clears_favorites(self, engine: CatalogEngine) -> None:
        engine.session.login("emily")
        engine.favorites.toggle(make_product(1))
        engine.session.logout()

        assert engine.favorites.items == []


class TestEngineLifecycle:
    """Tests for shutdown."""

    @pytest.mark.asyncio
    async def test_aclose_closes_client(self, engine: CatalogEngine, mock_client: MagicMock) -> None:
        engine.set_category("beauty")
        await engine.aclose()

        mock_client.close.assert_awaited_once()
        mock_client.fetch_listing.assert_not_awaited()
