"""WebEngage infrastructure providers."""

from dishka import Scope, provide

from bridge.adapter.webengage.client import RealWebEngageEmitter, WebEngageEmitter
from bridge.config import WebEngageSettings
from bridge.util.di.base import ProviderBase


class WebEngageProvider(ProviderBase):
    """WebEngage component base."""

    __mock_component__ = "webengage"


class ProdWebEngageProvider(WebEngageProvider):
    """Production WebEngage provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_webengage_emitter(
        self, webengage_settings: WebEngageSettings
    ) -> WebEngageEmitter:
        """Provide the events API emitter."""
        return RealWebEngageEmitter(
            license_code=webengage_settings.license_code,
            api_key=webengage_settings.api_key,
            api_base_url=webengage_settings.api_base_url,
            timeout=webengage_settings.timeout_seconds,
        )
