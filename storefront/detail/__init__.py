"""Client-side product detail view: API client, local history and favorites."""

from .client import CatalogClient, CatalogClientError
from .history import Favorites, RecentlyViewed, StoredProduct
from .page import PageState, ProductPage
from .store import LocalStore

__all__ = [
    "CatalogClient",
    "CatalogClientError",
    "Favorites",
    "LocalStore",
    "PageState",
    "ProductPage",
    "RecentlyViewed",
    "StoredProduct",
]
