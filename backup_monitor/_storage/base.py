"""Read-only object storage capability used by the health evaluator."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class ObjectHead:
    """Metadata returned by a HEAD probe."""

    key: str
    size: int


class BaseObjectStorage(ABC):
    """Abstract list/get/head interface over a blob store with prefix listing.

    Implementations return ``None`` for keys that do not exist. Any other
    failure may raise; callers decide how to treat it.
    """

    @abstractmethod
    async def list_prefixes(self, prefix: str, delimiter: str = "/") -> List[str]:
        """List immediate child prefixes under ``prefix``.

        Args:
            prefix: Parent prefix, e.g. ``daily/``
            delimiter: Path separator used to group keys

        Returns:
            Child prefixes including the trailing delimiter, e.g. ``daily/20260122/``
        """

    @abstractmethod
    async def get(self, key: str) -> Optional[bytes]:
        """Return the object body, or None if absent."""

    @abstractmethod
    async def head(self, key: str) -> Optional[ObjectHead]:
        """Return object metadata without reading the body, or None if absent."""

    async def close(self) -> None:
        """Release any underlying client resources."""
