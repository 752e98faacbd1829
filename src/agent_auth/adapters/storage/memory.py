from __future__ import annotations

from typing import Dict, Optional

from ...domain.ports import StorageAdapter


class MemoryStorageAdapter(StorageAdapter):
    """Process-local storage; the default for tests and short-lived agents."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._storage: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._storage.get(key)

    async def set(self, key: str, value: str) -> None:
        self._storage[key] = value

    async def delete(self, key: str) -> None:
        self._storage.pop(key, None)
