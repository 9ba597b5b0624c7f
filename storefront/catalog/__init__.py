"""Category-aware product catalog and recommendation lookups."""

from .categories import CATEGORIES, VALID_CATEGORIES, UnknownCategoryError, get_category
from .models import ProductView, RecommendationMeta, RecommendationView

__all__ = [
    "CATEGORIES",
    "VALID_CATEGORIES",
    "ProductView",
    "RecommendationMeta",
    "RecommendationView",
    "UnknownCategoryError",
    "get_category",
]
