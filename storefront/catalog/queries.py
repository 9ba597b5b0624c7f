"""SELECT builders for category descriptors."""

from typing import Iterable, Optional

from sqlalchemy import Select, select

from .categories import CategoryDescriptor, RecommendationDescriptor


def build_query(descriptor: CategoryDescriptor, product_id: Optional[str] = None) -> Select:
    """
    Build the product query for a category.

    With an id the query is filtered on the primary key; otherwise the
    whole table is returned in the category's default order.
    """
    query = select(*descriptor.selected_columns)

    if product_id is not None:
        return query.where(descriptor.primary_key == product_id)
    if descriptor.order_by:
        query = query.order_by(*descriptor.order_by)
    return query


def build_batch_query(descriptor: CategoryDescriptor, product_ids: Iterable[str]) -> Select:
    """Build a single primary-key IN lookup for several products."""
    return select(*descriptor.selected_columns).where(
        descriptor.primary_key.in_(list(product_ids))
    )


def build_edge_query(recommendations: RecommendationDescriptor, product_id: str) -> Select:
    """Build the ordered, limited recommendation-edge query for one product."""
    table = recommendations.table
    return (
        select(
            table.c[recommendations.target_column].label("recommended_id"),
            table.c.support,
            table.c.confidence,
            table.c.lift,
        )
        .where(table.c[recommendations.source_column] == product_id)
        .order_by(*recommendations.ordering)
        .limit(recommendations.effective_limit)
    )
