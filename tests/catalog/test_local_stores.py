"""Tests for local-only favorites and session stores."""

import pytest

from catalogsync.catalog.local_stores import FavoritesStore, SessionStore
from catalogsync.domain.exceptions import InvalidSessionError
from tests.conftest import make_product


class TestFavoritesStore:
    """Tests for FavoritesStore."""

    def test_toggle_adds_then_removes(self) -> None:
        favorites = FavoritesStore()
        product = make_product(1)

        assert favorites.toggle(product) is True
        assert favorites.is_favorite(1)
        assert favorites.toggle(product) is False
        assert not favorites.is_favorite(1)

    def test_items_keep_insertion_order(self) -> None:
        favorites = FavoritesStore()
        for product_id in (3, 1, 2):
            favorites.toggle(make_product(product_id))

        assert [p.id for p in favorites.items] == [3, 1, 2]

    def test_replace_only_touches_existing(self) -> None:
        """replace refreshes a favorite but never adds one."""
        favorites = FavoritesStore()
        favorites.toggle(make_product(1))

        favorites.replace(make_product(1, title="Edited"))
        favorites.replace(make_product(2))

        assert [p.title for p in favorites.items] == ["Edited"]

    def test_remove_missing_is_noop(self) -> None:
        favorites = FavoritesStore()
        favorites.remove(42)
        assert favorites.items == []

    def test_clear(self) -> None:
        favorites = FavoritesStore()
        favorites.toggle(make_product(1))
        favorites.clear()
        assert favorites.items == []


class TestSessionStore:
    """Tests for SessionStore."""

    def test_login_logout(self) -> None:
        session = SessionStore()
        assert not session.is_authenticated

        session.login(" emily ")
        assert session.is_authenticated
        assert session.username == "emily"

        session.logout()
        assert not session.is_authenticated
        assert session.username is None

    def test_blank_username_rejected(self) -> None:
        session = SessionStore()
        with pytest.raises(InvalidSessionError):
            session.login("   ")
        assert not session.is_authenticated

    def test_logout_runs_hook_once(self) -> None:
        """The logout hook only fires when a session ends."""
        calls: list[str] = []
        session = SessionStore(on_logout=lambda: calls.append("out"))

        session.logout()
        session.login("emily")
        session.logout()

        assert calls == ["out"]
