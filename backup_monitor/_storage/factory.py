"""Storage factory for centralized backend creation."""

from typing import Callable, Dict, Type

from ..config import StorageConfig
from .base import BaseObjectStorage


class StorageFactory:
    """Factory for creating object storage backends with validation and registration."""

    _backends: Dict[str, Callable[[], Type[BaseObjectStorage]]] = {}

    ALLOWED_BACKENDS = {"s3", "memory"}

    @classmethod
    def register(cls, name: str, backend_loader: Callable[[], Type[BaseObjectStorage]]) -> None:
        """Register an object storage backend.

        Args:
            name: Backend name (must be in ALLOWED_BACKENDS)
            backend_loader: Function that returns the storage class

        Raises:
            ValueError: If backend name not in allowed list
        """
        if name not in cls.ALLOWED_BACKENDS:
            raise ValueError(f"Backend {name} not in allowed storage backends: {cls.ALLOWED_BACKENDS}")
        cls._backends[name] = backend_loader

    @classmethod
    def create(cls, config: StorageConfig) -> BaseObjectStorage:
        """Create a storage instance for ``config.backend``.

        Raises:
            ValueError: If the backend is unknown
        """
        if config.backend not in cls._backends:
            raise ValueError(
                f"Unknown storage backend: {config.backend}. Available: {sorted(cls._backends)}"
            )
        backend_class = cls._backends[config.backend]()
        if config.backend == "memory":
            return backend_class()
        return backend_class(config)


def _get_s3_storage():
    """Lazy loader for the S3 backend so aioboto3 is only imported when used."""
    from .s3 import S3ObjectStorage
    return S3ObjectStorage


def _get_memory_storage():
    from .memory import InMemoryObjectStorage
    return InMemoryObjectStorage


def _register_backends():
    """Register all built-in storage backends."""
    StorageFactory.register("s3", _get_s3_storage)
    StorageFactory.register("memory", _get_memory_storage)


_register_backends()
