"""Category registry.

Each supported category is described once by a `CategoryDescriptor` that
bundles its table metadata, projection and recommendation settings. Handlers
resolve a descriptor by name and never branch on the category themselves.
"""

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from sqlalchemy import Column, Table
from sqlalchemy.sql.elements import ColumnElement

from .models import (
    CarORM, JumiaProductORM, CarRecommendationORM, JumiaRecommendationORM,
    ProductView,
)
from .projections import (
    project_car, project_jumia, CAR_PLACEHOLDER_IMAGE, PRODUCT_PLACEHOLDER_IMAGE,
)

DEFAULT_RECOMMENDATION_LIMIT = 6


class UnknownCategoryError(ValueError):
    """Raised when a category name is not registered."""

    def __init__(self, category: str):
        self.category = category
        super().__init__(
            f"Invalid category. Must be one of: {', '.join(VALID_CATEGORIES)}"
        )


@dataclass(frozen=True, eq=False)
class RecommendationDescriptor:
    """Where and how to read precomputed recommendation edges."""

    table: Table
    source_column: str = "product_id"
    target_column: str = "recommended_id"
    order_by: Optional[list[ColumnElement]] = None
    limit: Optional[int] = None

    @property
    def effective_limit(self) -> int:
        return self.limit or DEFAULT_RECOMMENDATION_LIMIT

    @property
    def ordering(self) -> list[ColumnElement]:
        if self.order_by:
            return list(self.order_by)
        return [self.table.c.confidence.desc(), self.table.c.lift.desc()]


@dataclass(frozen=True, eq=False)
class CategoryDescriptor:
    """Static description of one product category."""

    name: str
    table: Table
    id_column: str
    columns: list[ColumnElement]
    order_by: list[ColumnElement]
    project: Callable[[Mapping[str, Any]], ProductView]
    placeholder_image: str
    recommendations: Optional[RecommendationDescriptor] = None
    recommendation_title: str = "Recommended For You"
    # Upstream edges for some sources contain duplicates; the detail page
    # collapses them client-side.
    dedupe_recommendations: bool = False
    # Show the edge confidence on recommendation cards
    show_confidence: bool = False

    @property
    def primary_key(self) -> Column:
        return self.table.c[self.id_column]

    @property
    def selected_columns(self) -> list[ColumnElement]:
        """Primary key as `source_id` followed by the attribute columns."""
        return [self.primary_key.label("source_id"), *self.columns]


_cars = CarORM.__table__
_jumia = JumiaProductORM.__table__
_car_recs = CarRecommendationORM.__table__
_jumia_recs = JumiaRecommendationORM.__table__


CATEGORIES: dict[str, CategoryDescriptor] = {
    "cars": CategoryDescriptor(
        name="cars",
        table=_cars,
        id_column="coin_afrique_id",
        columns=[
            CarORM.brand,
            CarORM.model,
            CarORM.seller_name,
            CarORM.location,
            CarORM.price.label("price"),
            CarORM.image_url,
            CarORM.year,
        ],
        order_by=[CarORM.brand.asc(), CarORM.model.asc()],
        project=project_car,
        placeholder_image=CAR_PLACEHOLDER_IMAGE,
        recommendations=RecommendationDescriptor(
            table=_car_recs,
            order_by=[CarRecommendationORM.confidence.desc(), CarRecommendationORM.lift.desc()],
            limit=8,
        ),
        show_confidence=True,
    ),
    "jumia": CategoryDescriptor(
        name="jumia",
        table=_jumia,
        id_column="jumia_product_id",
        columns=[
            JumiaProductORM.brand_name,
            JumiaProductORM.product_name,
            JumiaProductORM.price.label("price"),
            JumiaProductORM.discount,
            JumiaProductORM.reviews_rating,
            JumiaProductORM.reviews_count,
            JumiaProductORM.image_url,
        ],
        order_by=[JumiaProductORM.brand_name.asc(), JumiaProductORM.product_name.asc()],
        project=project_jumia,
        placeholder_image=PRODUCT_PLACEHOLDER_IMAGE,
        recommendations=RecommendationDescriptor(
            table=_jumia_recs,
            order_by=[JumiaRecommendationORM.confidence.desc(), JumiaRecommendationORM.lift.desc()],
            limit=8,
        ),
        recommendation_title="Users Also Bought With",
        dedupe_recommendations=True,
    ),
}

VALID_CATEGORIES: list[str] = list(CATEGORIES)


def get_category(name: str) -> CategoryDescriptor:
    """Look up a registered category, raising UnknownCategoryError."""
    try:
        return CATEGORIES[name]
    except KeyError:
        raise UnknownCategoryError(name) from None
