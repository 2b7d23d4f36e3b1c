from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class StorePort(ABC):
    """PostgREST-style resource store (stories, story_comments, profiles, ...)."""

    @abstractmethod
    async def select(
        self, resource: str, params: Optional[Dict[str, str]] = None
    ) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    async def insert(
        self, resource: str, rows: List[Dict[str, Any]]
    ) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    async def update(
        self, resource: str, filters: Dict[str, str], patch: Dict[str, Any]
    ) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    async def upsert(
        self, resource: str, rows: List[Dict[str, Any]], on_conflict: str
    ) -> List[Dict[str, Any]]:
        """Insert or merge rows on the unique columns named by ``on_conflict``."""
        pass

    @abstractmethod
    async def check_health(self) -> bool:
        pass

    @abstractmethod
    async def close(self) -> None:
        pass
