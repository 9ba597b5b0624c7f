"""API endpoints for querying products and their recommendations."""

from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from ...catalog.categories import CategoryDescriptor, UnknownCategoryError, get_category
from ...catalog.models import ProductView, RecommendationView
from ...catalog.service import CatalogService
from ...database import get_engine
from ...utils.logging import get_logger

router = APIRouter()
logger = get_logger(__name__)

# Global engine (initialized on startup)
_engine = None


def get_catalog_service() -> CatalogService:
    """Dependency to get catalog service."""
    global _engine
    if _engine is None:
        _engine = get_engine()
    return CatalogService(_engine)


def resolve_category(category: str) -> CategoryDescriptor:
    """Dependency resolving the `category` path parameter to its descriptor."""
    try:
        return get_category(category)
    except UnknownCategoryError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("", response_model=list[ProductView])
async def list_all_products(
    category: Optional[str] = Query(None, description="Restrict to one category"),
    service: CatalogService = Depends(get_catalog_service),
):
    """
    List products across categories.

    - category: optional category filter; without it every category is
      listed, in registration order
    """
    descriptor = resolve_category(category) if category else None

    try:
        if descriptor is not None:
            return await service.list_products(descriptor)
        return await service.list_all_products()
    except Exception:
        logger.exception("Error fetching all products", category=category)
        raise HTTPException(status_code=500, detail="Failed to fetch products")


@router.get("/{category}", response_model=list[ProductView])
async def list_products(
    descriptor: CategoryDescriptor = Depends(resolve_category),
    service: CatalogService = Depends(get_catalog_service),
):
    """List every product of a category in its default order."""
    try:
        return await service.list_products(descriptor)
    except Exception:
        logger.exception("Error fetching products", category=descriptor.name)
        raise HTTPException(status_code=500, detail="Failed to fetch products")


@router.get("/{category}/{product_id}/recommendations", response_model=list[RecommendationView])
async def list_recommendations(
    product_id: str,
    descriptor: CategoryDescriptor = Depends(resolve_category),
    service: CatalogService = Depends(get_catalog_service),
):
    """Precomputed recommendations for a product, strongest first."""
    try:
        return await service.list_recommendations(descriptor, product_id)
    except Exception:
        logger.exception(
            "Error fetching recommendations", category=descriptor.name, product_id=product_id
        )
        raise HTTPException(status_code=500, detail="Failed to fetch recommendations")


@router.get("/{category}/{product_id}", response_model=ProductView)
async def get_product(
    product_id: str,
    descriptor: CategoryDescriptor = Depends(resolve_category),
    service: CatalogService = Depends(get_catalog_service),
):
    """
    Get product by ID.

    - category: registered category name
    - product_id: source primary key
    """
    try:
        product = await service.get_product(descriptor, product_id)
    except Exception:
        logger.exception("Error fetching product", category=descriptor.name, product_id=product_id)
        raise HTTPException(status_code=500, detail="Failed to fetch product")

    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    return product
