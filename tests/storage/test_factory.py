"""Tests for the storage factory pattern."""

import pytest
from unittest.mock import Mock, patch
from backup_monitor._storage.factory import StorageFactory, _register_backends
from backup_monitor._storage import BaseObjectStorage, InMemoryObjectStorage
from backup_monitor.config import StorageConfig


class TestStorageFactory:
    """Test suite for StorageFactory."""

    def setup_method(self):
        """Reset factory state before each test."""
        StorageFactory._backends = {}

    def teardown_method(self):
        StorageFactory._backends = {}
        _register_backends()

    def test_register_backend(self):
        """Verify backend registration works."""
        mock_backend = Mock(spec=BaseObjectStorage)

        StorageFactory.register("memory", mock_backend)
        assert StorageFactory._backends["memory"] == mock_backend

    def test_register_backend_not_allowed(self):
        """Verify registration fails for non-allowed backends."""
        with pytest.raises(ValueError, match="Backend gcs not in allowed storage backends"):
            StorageFactory.register("gcs", Mock())

    def test_create_unregistered_backend(self):
        """Verify creating a backend that was never registered fails."""
        with pytest.raises(ValueError, match="Unknown storage backend: memory"):
            StorageFactory.create(StorageConfig(backend="memory"))

    def test_create_memory_backend(self):
        _register_backends()

        storage = StorageFactory.create(StorageConfig(backend="memory"))

        assert isinstance(storage, InMemoryObjectStorage)

    def test_create_s3_backend_lazy(self):
        """Verify the S3 backend is loaded on demand and receives the config."""
        _register_backends()
        config = StorageConfig(backend="s3", bucket="backups")

        with patch("backup_monitor._storage.s3.S3ObjectStorage") as mock_s3:
            storage = StorageFactory.create(config)

        mock_s3.assert_called_once_with(config)
        assert storage is mock_s3.return_value
