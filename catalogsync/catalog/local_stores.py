"""Local-only stores.

Session-scoped collections that never talk to the remote catalog:
the user's favorites and the signed-in flag.
"""

from collections.abc import Callable

import structlog

from catalogsync.domain.exceptions import InvalidSessionError
from catalogsync.domain.models import Product

logger = structlog.get_logger()


class FavoritesStore:
    """Ordered set of favorite products, keyed by product id."""

    def __init__(self) -> None:
        self._items: dict[int, Product] = {}

    @property
    def items(self) -> list[Product]:
        """Favorites in the order they were added."""
        return list(self._items.values())

    def is_favorite(self, product_id: int) -> bool:
        return product_id in self._items

    def toggle(self, product: Product) -> bool:
        """Add the product, or remove it if it is already a favorite.

        Args:
            product: Product to toggle.

        Returns:
            True if the product is a favorite afterwards.
        """
        if product.id in self._items:
            del self._items[product.id]
            return False
        self._items[product.id] = product
        return True

    def remove(self, product_id: int) -> None:
        self._items.pop(product_id, None)

    def replace(self, product: Product) -> None:
        """Refresh a stored favorite after a local edit."""
        if product.id in self._items:
            self._items[product.id] = product

    def clear(self) -> None:
        self._items.clear()


class SessionStore:
    """Signed-in flag for the current user."""

    def __init__(self, on_logout: Callable[[], None] | None = None) -> None:
        self._username: str | None = None
        self._on_logout = on_logout

    @property
    def username(self) -> str | None:
        return self._username

    @property
    def is_authenticated(self) -> bool:
        return self._username is not None

    def login(self, username: str) -> None:
        """Start a session.

        Args:
            username: Name of the user signing in.

        Raises:
            InvalidSessionError: If the username is blank.
        """
        username = username.strip()
        if not username:
            raise InvalidSessionError("username is required")
        self._username = username
        logger.info("Session started", username=username)

    def logout(self) -> None:
        if self._username is None:
            return
        logger.info("Session ended", username=self._username)
        self._username = None
        if self._on_logout is not None:
            self._on_logout()
