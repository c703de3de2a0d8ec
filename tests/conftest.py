"""Global pytest configuration and fixtures."""

import pytest
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Import fixtures from backup fixtures to make them globally available
from tests.backup.fixtures import (
    storage,
    healthy_storage,
)

# Re-export fixtures for global use
__all__ = [
    "storage",
    "healthy_storage",
]
