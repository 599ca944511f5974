"""Infrastructure providers."""

# Import bases
from .persistence import PersistenceProvider
from .telegram import TelegramProvider
from .webengage import WebEngageProvider

# Import implementations (needed for __subclasses__())
from .persistence import ProdPersistenceProvider  # noqa: F401
from .telegram import ProdTelegramProvider  # noqa: F401
from .webengage import ProdWebEngageProvider  # noqa: F401

__all__ = [
    "PersistenceProvider",
    "ProdPersistenceProvider",
    "ProdTelegramProvider",
    "ProdWebEngageProvider",
    "TelegramProvider",
    "WebEngageProvider",
]
