"""In-memory object storage for tests and local development."""

from typing import Dict, List, Optional, Union

from .base import BaseObjectStorage, ObjectHead


class InMemoryObjectStorage(BaseObjectStorage):
    """Dict-backed blob store with S3-style delimiter listing."""

    def __init__(self, objects: Optional[Dict[str, Union[bytes, str]]] = None):
        self._objects: Dict[str, bytes] = {}
        for key, body in (objects or {}).items():
            self.put(key, body)

    def put(self, key: str, body: Union[bytes, str]) -> None:
        """Store an object. Only used to seed fixtures; the monitor never writes."""
        self._objects[key] = body.encode("utf-8") if isinstance(body, str) else body

    def remove(self, key: str) -> None:
        self._objects.pop(key, None)

    def keys(self) -> List[str]:
        return sorted(self._objects)

    async def list_prefixes(self, prefix: str, delimiter: str = "/") -> List[str]:
        prefixes = set()
        for key in self._objects:
            if not key.startswith(prefix):
                continue
            rest = key[len(prefix):]
            if delimiter in rest:
                prefixes.add(prefix + rest.split(delimiter, 1)[0] + delimiter)
        return sorted(prefixes)

    async def get(self, key: str) -> Optional[bytes]:
        return self._objects.get(key)

    async def head(self, key: str) -> Optional[ObjectHead]:
        body = self._objects.get(key)
        if body is None:
            return None
        return ObjectHead(key=key, size=len(body))
