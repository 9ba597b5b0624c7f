"""JSON-file key-value store for client-local state."""

import json
from pathlib import Path
from typing import Any, Optional

import aiofiles

from ..config import client_config
from ..utils.logging import get_logger

logger = get_logger(__name__)


class LocalStore:
    """
    Persistent key-value store backed by a single JSON file.

    Unreadable state never propagates: a corrupt file is reset to an empty
    document and a key holding a value of the wrong shape is cleared.
    Concurrent writers are last-writer-wins.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path or client_config.store_path)

    async def _load(self) -> dict:
        if not self.path.exists():
            return {}

        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                raw = await f.read()
            data = json.loads(raw) if raw.strip() else {}
        except (OSError, ValueError) as e:
            # ValueError covers both UnicodeDecodeError and JSONDecodeError
            logger.warning("Resetting corrupt local store", path=str(self.path), error=str(e))
            await self._reset()
            return {}

        if not isinstance(data, dict):
            logger.warning("Resetting local store with unexpected root", path=str(self.path))
            await self._reset()
            return {}

        return data

    async def _reset(self) -> None:
        try:
            await self._dump({})
        except OSError as e:
            logger.error("Could not reset local store", path=str(self.path), error=str(e))

    async def _dump(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(self.path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(data, indent=2, ensure_ascii=False))

    async def get(self, key: str, default: Any = None) -> Any:
        """Get a stored value."""
        data = await self._load()
        return data.get(key, default)

    async def get_list(self, key: str) -> list:
        """Get a stored list; anything else is treated as corrupt and cleared."""
        value = await self.get(key)
        if value is None:
            return []
        if not isinstance(value, list):
            logger.warning("Clearing non-list value", key=key)
            await self.clear(key)
            return []
        return value

    async def set(self, key: str, value: Any) -> None:
        """Store a JSON-serialisable value."""
        data = await self._load()
        data[key] = value
        await self._dump(data)

    async def clear(self, key: Optional[str] = None) -> None:
        """Remove one key, or everything when no key is given."""
        if key is None:
            await self._dump({})
            return

        data = await self._load()
        if key in data:
            del data[key]
            await self._dump(data)
