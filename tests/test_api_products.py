"""Tests for products API endpoints."""

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.exc import OperationalError

from storefront.api.main import create_app
from storefront.api.routers.products import get_catalog_service
from storefront.catalog.service import CatalogService

INVALID_CATEGORY = {"error": "Invalid category. Must be one of: cars, jumia"}


@pytest.fixture
def app(seeded_engine):
    """Create test app over the seeded database."""
    app = create_app()
    service = CatalogService(seeded_engine)
    app.dependency_overrides[get_catalog_service] = lambda: service
    return app


@pytest.fixture
async def client(app):
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class BrokenService:
    """Service whose every query fails like a lost database connection."""

    async def _fail(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("database is gone"))

    list_products = get_product = list_all_products = list_recommendations = _fail


@pytest.fixture
async def broken_client():
    app = create_app()
    app.dependency_overrides[get_catalog_service] = BrokenService
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.mark.asyncio
async def test_list_category(client):
    """Test GET /api/products/{category}."""
    response = await client.get("/api/products/jumia")

    assert response.status_code == 200
    data = response.json()
    assert [p["id"] for p in data] == ["44", "42", "43"]
    assert data[1]["imageUrl"].startswith("https://")
    assert data[1]["reviewsRating"] == 4.5


@pytest.mark.asyncio
async def test_list_category_invalid(client):
    """Test 400 for an unknown category."""
    response = await client.get("/api/products/boats")

    assert response.status_code == 400
    assert response.json() == INVALID_CATEGORY


@pytest.mark.asyncio
async def test_get_product(client):
    """Test GET /api/products/{category}/{id}."""
    response = await client.get("/api/products/cars/1")

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == "1"
    assert data["name"] == "Toyota Corolla"
    assert data["sellerName"] == "Auto Dakar"
    assert data["category"] == "cars"
    assert data["discount"] is None


@pytest.mark.asyncio
async def test_get_product_not_found(client):
    """Test 404 for non-existent product."""
    response = await client.get("/api/products/cars/999")

    assert response.status_code == 404
    assert response.json() == {"error": "Product not found"}


@pytest.mark.asyncio
async def test_get_product_invalid_category(client):
    """Test 400 wins over the lookup."""
    response = await client.get("/api/products/boats/1")

    assert response.status_code == 400
    assert response.json() == INVALID_CATEGORY


@pytest.mark.asyncio
async def test_recommendations(client):
    """Test GET /api/products/{category}/{id}/recommendations."""
    response = await client.get("/api/products/cars/1/recommendations")

    assert response.status_code == 200
    data = response.json()
    assert [r["id"] for r in data] == ["3", "2", "4"]
    assert data[0]["recommendationMeta"] == {"support": 0.2, "confidence": 0.9, "lift": 2.0}
    assert data[2]["recommendationMeta"]["support"] is None


@pytest.mark.asyncio
async def test_recommendations_empty(client):
    """Test a product without edges returns an empty list."""
    response = await client.get("/api/products/jumia/44/recommendations")

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_recommendations_invalid_category(client):
    response = await client.get("/api/products/boats/1/recommendations")

    assert response.status_code == 400
    assert response.json() == INVALID_CATEGORY


@pytest.mark.asyncio
async def test_list_all_products(client):
    """Test GET /api/products without a filter."""
    response = await client.get("/api/products")

    assert response.status_code == 200
    categories = [p["category"] for p in response.json()]
    assert categories == ["cars"] * 4 + ["jumia"] * 3


@pytest.mark.asyncio
async def test_list_all_products_with_filter(client):
    """Test GET /api/products?category=..."""
    filtered = await client.get("/api/products", params={"category": "cars"})
    direct = await client.get("/api/products/cars")

    assert filtered.status_code == 200
    assert filtered.json() == direct.json()


@pytest.mark.asyncio
async def test_list_all_products_invalid_filter(client):
    response = await client.get("/api/products", params={"category": "boats"})

    assert response.status_code == 400
    assert response.json() == INVALID_CATEGORY


@pytest.mark.asyncio
@pytest.mark.parametrize("path,message", [
    ("/api/products", "Failed to fetch products"),
    ("/api/products/cars", "Failed to fetch products"),
    ("/api/products/cars/1", "Failed to fetch product"),
    ("/api/products/cars/1/recommendations", "Failed to fetch recommendations"),
])
async def test_database_failure_returns_500(broken_client, path, message):
    """Test infra errors surface as a generic 500."""
    response = await broken_client.get(path)

    assert response.status_code == 500
    assert response.json() == {"error": message}


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}
