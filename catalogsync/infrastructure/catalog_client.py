"""Remote catalog API client.

Thin HTTP client for the REST-ish product catalog. Transport failures and
error statuses are reported as ``APIResponse`` values rather than raised,
so callers only ever deal with a success flag and a normalized message.
"""

from dataclasses import dataclass, field
from typing import Any

import httpx
import structlog

logger = structlog.get_logger()


@dataclass
class APIError:
    """Represents an API error response."""

    error_code: str
    message: str
    status_code: int
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class APIResponse:
    """Represents an API response."""

    success: bool
    data: dict[str, Any] | list[Any] | None = None
    error: APIError | None = None

    @property
    def error_message(self) -> str:
        """Get the failure message, or an empty string on success."""
        if self.error is None:
            return ""
        return self.error.message


class CatalogAPIClient:
    """HTTP client for the remote product catalog.

    Provides the listing, category, and product CRUD endpoints the
    engine consumes.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the API client.

        Args:
            base_url: Catalog API base URL.
            timeout: Request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> APIResponse:
        """Make an API request.

        Args:
            method: HTTP method.
            path: API endpoint path.
            json: Request body as JSON.
            params: Query parameters.

        Returns:
            APIResponse with success status and data or error.
        """
        client = await self._get_client()

        # Filter out None params
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        try:
            logger.debug(
                "Making API request",
                method=method,
                path=path,
                params=params,
                has_body=json is not None,
            )

            response = await client.request(
                method=method,
                url=path,
                json=json,
                params=params,
            )

            if response.status_code >= 400:
                error_data = _decode_error_body(response)
                return APIResponse(
                    success=False,
                    error=APIError(
                        error_code=error_data.get("error_code", f"HTTP_{response.status_code}"),
                        message=error_data.get(
                            "message",
                            f"Request failed with status {response.status_code}",
                        ),
                        status_code=response.status_code,
                        details=error_data.get("details", {}),
                    ),
                )

            # Handle empty responses (204 No Content)
            if response.status_code == 204:
                return APIResponse(success=True, data=None)

            return APIResponse(success=True, data=response.json())

        except httpx.TimeoutException as e:
            logger.error("API request timeout", path=path, error=str(e))
            return APIResponse(
                success=False,
                error=APIError(
                    error_code="TIMEOUT",
                    message=f"Request timed out: {path}",
                    status_code=504,
                ),
            )
        except httpx.RequestError as e:
            logger.error("API request failed", path=path, error=str(e))
            return APIResponse(
                success=False,
                error=APIError(
                    error_code="REQUEST_ERROR",
                    message=f"Request failed: {str(e)}",
                    status_code=500,
                ),
            )
        except ValueError as e:
            logger.error("API response is not JSON", path=path, error=str(e))
            return APIResponse(
                success=False,
                error=APIError(
                    error_code="INVALID_RESPONSE",
                    message=f"Invalid response body: {path}",
                    status_code=502,
                ),
            )
        except Exception as e:
            logger.exception("Unexpected API error", path=path)
            return APIResponse(
                success=False,
                error=APIError(
                    error_code="INTERNAL_ERROR",
                    message=f"Internal error: {str(e)}",
                    status_code=500,
                ),
            )

    # =========================================================================
    # Listing Endpoints
    # =========================================================================

    async def fetch_listing(
        self,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> APIResponse:
        """Fetch one listing page.

        The query builder decides the endpoint (``/products``,
        ``/products/category/{name}`` or ``/products/search``).

        Args:
            path: Listing endpoint path.
            params: Query parameters (``limit``/``skip`` or ``q``).

        Returns:
            APIResponse with a ``{products, total, skip, limit}`` body.
        """
        return await self._request(method="GET", path=path, params=params)

    async def get_categories(self) -> APIResponse:
        """Get the category list.

        Returns:
            APIResponse with a list of strings or ``{slug, name}`` objects.
        """
        return await self._request(method="GET", path="/products/categories")

    # =========================================================================
    # Product Endpoints
    # =========================================================================

    async def get_product(self, product_id: int) -> APIResponse:
        """Get a product by ID.

        Args:
            product_id: Product identifier.

        Returns:
            APIResponse with product data.
        """
        return await self._request(method="GET", path=f"/products/{product_id}")

    async def create_product(self, fields: dict[str, Any]) -> APIResponse:
        """Create a product.

        Args:
            fields: Product fields to create.

        Returns:
            APIResponse with the created product as echoed by the remote.
        """
        return await self._request(method="POST", path="/products/add", json=fields)

    async def update_product(
        self,
        product_id: int,
        fields: dict[str, Any],
    ) -> APIResponse:
        """Partially update a product.

        Args:
            product_id: Product identifier.
            fields: Changed fields only.

        Returns:
            APIResponse with updated product data.
        """
        return await self._request(
            method="PATCH",
            path=f"/products/{product_id}",
            json=fields,
        )

    async def delete_product(self, product_id: int) -> APIResponse:
        """Delete a product.

        Args:
            product_id: Product identifier.

        Returns:
            APIResponse; the body is not required.
        """
        return await self._request(method="DELETE", path=f"/products/{product_id}")


def _decode_error_body(response: httpx.Response) -> dict[str, Any]:
    """Decode an error body, tolerating empty or non-JSON payloads."""
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
