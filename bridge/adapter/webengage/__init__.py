"""WebEngage event adapter."""

from .client import (
    MockWebEngageEmitter,
    RealWebEngageEmitter,
    WebEngageEmitter,
)

__all__ = ["WebEngageEmitter", "RealWebEngageEmitter", "MockWebEngageEmitter"]
