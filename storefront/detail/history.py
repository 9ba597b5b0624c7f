"""Recently-viewed and favorites lists kept in the local store."""

from typing import Optional
from pydantic import BaseModel, Field, ValidationError
from pydantic.alias_generators import to_camel

from ..catalog.models import ProductView
from ..config import client_config
from ..utils.logging import get_logger
from .store import LocalStore

logger = get_logger(__name__)


class StoredProduct(BaseModel):
    """Compact product snapshot persisted on the client."""
    id: str
    category: str
    name: str
    price: float = Field(0, ge=0)
    image_url: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @classmethod
    def from_view(cls, product: ProductView, category: str) -> "StoredProduct":
        return cls(
            id=str(product.id),
            category=category,
            name=product.name,
            price=product.price or 0,
            image_url=product.image_url,
        )

    @property
    def key(self) -> tuple[str, str]:
        return (self.id, self.category)


class _ProductList:
    """Capped, most-recent-first list of products stored under one key."""

    storage_key: str = ""

    def __init__(self, store: LocalStore, limit: int):
        self.store = store
        self.limit = limit

    async def items(self) -> list[StoredProduct]:
        raw = await self.store.get_list(self.storage_key)
        try:
            return [StoredProduct.model_validate(item) for item in raw]
        except ValidationError as e:
            logger.warning("Resetting unreadable list", key=self.storage_key, error=str(e))
            await self.store.clear(self.storage_key)
            return []

    async def _save(self, entries: list[StoredProduct]) -> list[StoredProduct]:
        entries = entries[: self.limit]
        await self.store.set(
            self.storage_key, [entry.model_dump(by_alias=True) for entry in entries]
        )
        return entries

    async def contains(self, product_id: str, category: str) -> bool:
        key = (str(product_id), category)
        return any(entry.key == key for entry in await self.items())


class RecentlyViewed(_ProductList):
    """The last products opened, without duplicates."""

    storage_key = "recentlyViewed"

    def __init__(self, store: LocalStore, limit: Optional[int] = None):
        super().__init__(store, limit or client_config.recently_viewed_limit)

    async def record(self, entry: StoredProduct) -> list[StoredProduct]:
        """Move or insert a product at the front of the list."""
        others = [item for item in await self.items() if item.key != entry.key]
        return await self._save([entry, *others])


class Favorites(_ProductList):
    """Products the user saved."""

    storage_key = "favoriteProducts"

    def __init__(self, store: LocalStore, limit: Optional[int] = None):
        super().__init__(store, limit or client_config.favorites_limit)

    async def toggle(self, entry: StoredProduct) -> bool:
        """Add the product at the front, or remove it if already saved.

        Returns whether the product is a favorite afterwards.
        """
        stored = await self.items()
        remaining = [item for item in stored if item.key != entry.key]

        if len(remaining) != len(stored):
            await self._save(remaining)
            return False

        await self._save([entry, *stored])
        return True
