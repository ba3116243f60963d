"""Mock providers for testing."""

from .notification import MockNotificationProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockNotificationProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
