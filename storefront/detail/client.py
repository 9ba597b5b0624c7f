"""Async client for the catalog HTTP API."""

import httpx
from typing import Optional, Any
from pydantic import ValidationError

from ..catalog.models import ProductView, RecommendationView
from ..config import client_config


class CatalogClientError(Exception):
    """Raised when the catalog API cannot be reached or answers with an error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class CatalogClient:
    """Client for the storefront catalog API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or client_config.base_url
        self.timeout = timeout if timeout is not None else client_config.timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def start(self):
        """Initialize the HTTP client."""
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        if not self._client:
            raise RuntimeError("Client not started. Use 'async with' or call start() first.")
        return self._client

    async def _get(self, path: str, params: Optional[dict] = None) -> Any:
        """GET a JSON document, translating failures into CatalogClientError."""
        try:
            response = await self.client.get(path, params=params)
        except httpx.HTTPError as e:
            raise CatalogClientError(f"Request to {path} failed: {e}") from e

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = None
            message = body.get("error") if isinstance(body, dict) else None
            raise CatalogClientError(
                message or f"{path} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise CatalogClientError(f"{path} returned invalid JSON") from e

    async def list_products(self, category: Optional[str] = None) -> list[ProductView]:
        """
        List products of one category, or of every category.

        Args:
            category: Category name; None lists all categories

        Returns:
            Products in API order
        """
        params = {"category": category} if category else None
        data = await self._get("/api/products", params=params)
        return self._parse_list(data, ProductView)

    async def get_product(self, category: str, product_id: str) -> ProductView:
        """Get a single product; a missing product raises with status 404."""
        data = await self._get(f"/api/products/{category}/{product_id}")
        try:
            return ProductView.model_validate(data)
        except ValidationError as e:
            raise CatalogClientError(f"Malformed product payload: {e}") from e

    async def get_recommendations(
        self, category: str, product_id: str
    ) -> list[RecommendationView]:
        """Get the recommendations of a product (empty when there are none)."""
        data = await self._get(f"/api/products/{category}/{product_id}/recommendations")
        return self._parse_list(data, RecommendationView)

    @staticmethod
    def _parse_list(data: Any, model):
        if not isinstance(data, list):
            return []
        try:
            return [model.model_validate(item) for item in data]
        except ValidationError as e:
            raise CatalogClientError(f"Malformed {model.__name__} payload: {e}") from e
