"""Mock providers for testing."""

from .persistence import MockPersistenceProvider
from .telegram import MockTelegramProvider
from .webengage import MockWebEngageProvider
from .container import build_test_container

__all__ = [
    "MockPersistenceProvider",
    "MockTelegramProvider",
    "MockWebEngageProvider",
    "build_test_container",
]
