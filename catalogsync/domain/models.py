"""Catalog data models.

Pydantic models for the payloads exchanged with the remote catalog API.
The engine only interprets ``Product.id`` and ``Product.category``; every
other attribute is carried through untouched, including extended fields
the remote adds (kept as model extras).
"""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from catalogsync.domain.exceptions import MalformedPayloadError


class Product(BaseModel):
    """A product as reported by the remote catalog."""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: int = Field(..., description="Remote-assigned product identifier")
    title: str = Field(default="", description="Product title")
    description: str = Field(default="", description="Product description")
    price: float = Field(default=0.0, description="Unit price")
    stock: int = Field(default=0, description="Units in stock")
    brand: str = Field(default="", description="Brand name")
    category: str = Field(default="", description="Category slug")
    rating: float = Field(default=0.0, description="Average rating")
    thumbnail: str = Field(default="", description="Thumbnail image URL")
    images: list[str] = Field(default_factory=list, description="Image URLs")

    @classmethod
    def from_api_response(cls, data: Any) -> Self:
        """Parse a single product payload.

        Args:
            data: Decoded JSON body.

        Returns:
            Product instance.

        Raises:
            MalformedPayloadError: If the payload is not a valid product.
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise MalformedPayloadError("Product", str(e)) from e

    def with_changes(self, changes: "ProductUpdate") -> Self:
        """Return a copy with the set fields of ``changes`` applied."""
        return self.model_copy(update=changes.changed_fields())


class ProductDraft(BaseModel):
    """User-supplied fields for a product that does not exist yet."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, description="Product title")
    description: str = Field(default="", description="Product description")
    price: float = Field(default=0.0, ge=0, description="Unit price")
    stock: int = Field(default=0, ge=0, description="Units in stock")
    brand: str = Field(default="", description="Brand name")
    category: str = Field(default="", description="Category slug")


class ProductUpdate(BaseModel):
    """Partial set of editable product fields.

    Only fields explicitly set by the caller are sent to the remote and
    applied locally.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    stock: int | None = Field(default=None, ge=0)
    brand: str | None = None
    category: str | None = None

    def changed_fields(self) -> dict[str, Any]:
        """Get the fields the caller set.

        Returns:
            Mapping of field name to new value.
        """
        return self.model_dump(exclude_unset=True)


class ProductPage(BaseModel):
    """One page of a listing response."""

    products: list[Product] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
    skip: int = Field(default=0, ge=0)
    limit: int = Field(default=0, ge=0)

    @classmethod
    def from_api_response(cls, data: Any) -> Self:
        """Parse a listing payload.

        Args:
            data: Decoded JSON body.

        Returns:
            ProductPage instance.

        Raises:
            MalformedPayloadError: If the payload is not a listing page.
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise MalformedPayloadError("ProductPage", str(e)) from e


def normalize_category(raw: Any) -> str:
    """Normalize one entry of the categories payload to a plain string.

    The remote has shipped both plain strings and objects carrying
    ``slug``/``name``. Prefer ``slug``, then ``name``, then ``str(raw)``.
    """
    if isinstance(raw, str):
        return raw
    if isinstance(raw, dict):
        return str(raw.get("slug") or raw.get("name") or raw)
    return str(raw)


def normalize_categories(data: Any) -> list[str]:
    """Normalize a categories payload; anything but a list yields ``[]``."""
    if not isinstance(data, list):
        return []
    return [normalize_category(entry) for entry in data]
