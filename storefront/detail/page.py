"""Product detail page assembly."""

import asyncio
import math
from enum import Enum
from typing import Optional

from ..catalog.categories import CATEGORIES
from ..catalog.models import ProductView, RecommendationMeta, RecommendationView
from ..utils.logging import get_logger
from .client import CatalogClient, CatalogClientError
from .history import Favorites, RecentlyViewed, StoredProduct
from .store import LocalStore

logger = get_logger(__name__)

LOAD_ERROR_MESSAGE = "Unable to load this product right now."
EMPTY_RECOMMENDATIONS_MESSAGE = "No recommendation data available for this item yet."
DEFAULT_RECOMMENDATION_TITLE = "Recommended For You"

# (attribute, label) in display order
ATTRIBUTE_LABELS = [
    ("brand", "Brand"),
    ("storage", "Storage"),
    ("color", "Color"),
    ("screen_size", "Screen"),
    ("battery", "Battery"),
    ("engine", "Engine"),
    ("range", "Range"),
    ("acceleration", "Acceleration"),
    ("model", "Model"),
    ("year", "Year"),
    ("location", "Location"),
    ("seller_name", "Vendor"),
    ("discount", "Discount"),
    ("reviews_rating", "Rating"),
    ("reviews_count", "Reviews"),
]


class PageState(str, Enum):
    """Detail page lifecycle."""
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


def dedupe_recommendations(items: list[RecommendationView]) -> list[RecommendationView]:
    """Keep the first item per id, falling back to name and price."""
    seen = set()
    unique = []
    for item in items:
        key = item.id or f"{item.name}-{item.price}"
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique


def format_price(price: float) -> str:
    if float(price).is_integer():
        return f"FCFA {price:,.0f}"
    return f"FCFA {price:,.2f}"


def confidence_label(meta: Optional[RecommendationMeta]) -> Optional[str]:
    """'85% match' for probabilities, '1.25 confidence' for larger scores."""
    if meta is None or meta.confidence is None or not math.isfinite(meta.confidence):
        return None
    if meta.confidence <= 1:
        return f"{round(meta.confidence * 100)}% match"
    return f"{meta.confidence:.2f} confidence"


class ProductPage:
    """
    Detail view of one product.

    `load()` fetches the product and its recommendations concurrently and
    only exposes them once both have arrived. Once `close()` has been called,
    results of a load still in flight are discarded.
    """

    def __init__(
        self,
        client: CatalogClient,
        store: LocalStore,
        category: str,
        product_id: str,
    ):
        self.client = client
        self.category = category
        self.product_id = str(product_id)
        self.recently_viewed_list = RecentlyViewed(store)
        self.favorites = Favorites(store)

        descriptor = CATEGORIES.get(category)
        self._dedupe = bool(descriptor and descriptor.dedupe_recommendations)
        self.recommendation_title = (
            descriptor.recommendation_title if descriptor else DEFAULT_RECOMMENDATION_TITLE
        )
        self.show_confidence = bool(descriptor and descriptor.show_confidence)

        self.state = PageState.LOADING
        self.error: Optional[str] = None
        self.product: Optional[ProductView] = None
        self.recommendations: list[RecommendationView] = []
        self.recently_viewed: list[StoredProduct] = []
        self.is_favorite = False
        self._mounted = True

    def close(self) -> None:
        """Detach the page; late results are ignored from now on."""
        self._mounted = False

    async def load(self) -> "ProductPage":
        self.state = PageState.LOADING
        self.error = None
        try:
            self.recently_viewed = await self.recently_viewed_list.items()
        except OSError as e:
            logger.error("Failed to read recently viewed list", error=str(e))
            self.recently_viewed = []

        results = await asyncio.gather(
            self.client.get_product(self.category, self.product_id),
            self.client.get_recommendations(self.category, self.product_id),
            return_exceptions=True,
        )
        if not self._mounted:
            return self

        for result in results:
            if isinstance(result, CatalogClientError):
                logger.error(
                    "Failed to fetch product or recommendations",
                    category=self.category,
                    product_id=self.product_id,
                    error=str(result),
                )
                self.error = LOAD_ERROR_MESSAGE
                self.product = None
                self.recommendations = []
                self.state = PageState.ERROR
                return self
            if isinstance(result, BaseException):
                raise result

        product, recommendations = results
        self.product = product
        self.recommendations = (
            dedupe_recommendations(recommendations) if self._dedupe else recommendations
        )

        entry = self._entry()
        try:
            self.recently_viewed = await self.recently_viewed_list.record(entry)
        except OSError as e:
            logger.error("Failed to store recently viewed item", error=str(e))
        try:
            self.is_favorite = await self.favorites.contains(entry.id, self.category)
        except OSError as e:
            logger.error("Failed to read favorites list", error=str(e))
            self.is_favorite = False
        self.state = PageState.READY
        return self

    def _entry(self) -> StoredProduct:
        entry = StoredProduct.from_view(self.product, self.category)
        if not entry.id:
            entry.id = self.product_id
        return entry

    async def toggle_favorite(self) -> bool:
        """Save or unsave the displayed product."""
        if self.product is None:
            return False
        try:
            self.is_favorite = await self.favorites.toggle(self._entry())
        except OSError as e:
            logger.error("Failed to update favorites list", error=str(e))
        return self.is_favorite

    @property
    def recently_viewed_to_show(self) -> list[StoredProduct]:
        """Recently viewed products other than the one on display."""
        current = (self.product.id if self.product else self.product_id, self.category)
        return [item for item in self.recently_viewed if item.key != current]

    def render(self) -> str:
        """Plain-text rendering of the page."""
        if self.state == PageState.LOADING:
            return "Loading product details..."
        if self.state == PageState.ERROR or self.product is None:
            return self.error or "Product not found."

        product = self.product
        lines = [
            product.name,
            product.description,
            f"{format_price(product.price)}    [{'Saved' if self.is_favorite else 'Save'}]",
            "",
        ]
        for attr, label in ATTRIBUTE_LABELS:
            value = getattr(product, attr)
            if value:
                lines.append(f"{label}: {value}")

        lines += ["", self.recommendation_title]
        if not self.recommendations:
            lines.append(f"  {EMPTY_RECOMMENDATIONS_MESSAGE}")
        for item in self.recommendations:
            lines.append(f"  - {self._card(item)}")

        recent = self.recently_viewed_to_show
        if recent:
            lines += ["", "Recently Viewed"]
            for item in recent:
                lines.append(f"  - {self._card(item)}")

        return "\n".join(lines)

    def _card(self, item) -> str:
        text = item.name
        if item.price > 0:
            text += f" ({format_price(item.price)})"
        meta = getattr(item, "recommendation_meta", None)
        label = confidence_label(meta) if self.show_confidence else None
        if label:
            text += f" [{label}]"
        return text
