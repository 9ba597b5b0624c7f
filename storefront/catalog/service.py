"""Catalog and recommendation service layer."""

import asyncio
import math
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncEngine

from ..database import get_session
from ..utils.logging import get_logger
from .categories import CATEGORIES, CategoryDescriptor
from .models import ProductView, RecommendationMeta, RecommendationView
from .queries import build_query, build_batch_query, build_edge_query

logger = get_logger(__name__)


def _to_metric(value: Any) -> Optional[float]:
    """Cast an edge statistic to float, None when absent or not numeric."""
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


class CatalogService:
    """Read-only queries over the category tables and their recommendation edges."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    async def list_products(self, descriptor: CategoryDescriptor) -> list[ProductView]:
        """List every product of a category in its default order."""
        async with get_session(self.engine) as session:
            result = await session.execute(build_query(descriptor))
            return [descriptor.project(row) for row in result.mappings()]

    async def get_product(
        self, descriptor: CategoryDescriptor, product_id: str
    ) -> Optional[ProductView]:
        """Get a single product by primary key, None if it does not exist."""
        async with get_session(self.engine) as session:
            result = await session.execute(build_query(descriptor, product_id))
            row = result.mappings().first()

            if row is None:
                return None

            return descriptor.project(row)

    async def list_all_products(self) -> list[ProductView]:
        """List every category, concatenated in registration order."""
        listings = await asyncio.gather(
            *[self.list_products(descriptor) for descriptor in CATEGORIES.values()]
        )
        return [product for listing in listings for product in listing]

    async def list_recommendations(
        self, descriptor: CategoryDescriptor, product_id: str
    ) -> list[RecommendationView]:
        """
        Resolve the precomputed recommendations of a product.

        Edges are read in confidence/lift order, then their targets are
        fetched with one batched lookup and joined back in edge order.
        Edges pointing at products that no longer exist are dropped.
        """
        recommendations = descriptor.recommendations
        if recommendations is None:
            return []

        async with get_session(self.engine) as session:
            edge_result = await session.execute(build_edge_query(recommendations, product_id))
            edges = edge_result.mappings().all()

            if not edges:
                return []

            # dict keeps first-seen order
            target_ids = list(dict.fromkeys(str(edge["recommended_id"]) for edge in edges))

            product_result = await session.execute(build_batch_query(descriptor, target_ids))
            rows_by_id = {str(row["source_id"]): row for row in product_result.mappings()}

        results = []
        for edge in edges:
            row = rows_by_id.get(str(edge["recommended_id"]))
            if row is None:
                logger.debug(
                    "Dropping dangling recommendation",
                    category=descriptor.name,
                    product_id=product_id,
                    recommended_id=edge["recommended_id"],
                )
                continue

            product = descriptor.project(row)
            results.append(RecommendationView(
                **product.model_dump(),
                recommendation_meta=RecommendationMeta(
                    support=_to_metric(edge["support"]),
                    confidence=_to_metric(edge["confidence"]),
                    lift=_to_metric(edge["lift"]),
                ),
            ))

        return results
