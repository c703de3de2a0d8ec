"""Object storage backends."""

from .base import BaseObjectStorage, ObjectHead
from .factory import StorageFactory, _register_backends
from .memory import InMemoryObjectStorage


def __getattr__(name):
    """Lazy import of the S3 backend."""
    if name == "S3ObjectStorage":
        from .s3 import S3ObjectStorage
        return S3ObjectStorage
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


__all__ = [
    "BaseObjectStorage",
    "ObjectHead",
    "InMemoryObjectStorage",
    "S3ObjectStorage",
    "StorageFactory",
    "_register_backends",
]
