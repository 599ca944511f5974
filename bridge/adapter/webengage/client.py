"""WebEngage REST events client."""

from typing import Any

import httpx
import logfire

from bridge.adapter.error import EmissionError
from bridge.domain.service.event_emitter import EventEmitter


class WebEngageEmitter(EventEmitter):
    """Base class for WebEngage emitters.

    Provides type distinction for dependency injection.
    """

    pass


class RealWebEngageEmitter(WebEngageEmitter):
    """Posts custom events to the WebEngage accounts events endpoint."""

    def __init__(
        self,
        license_code: str,
        api_key: str,
        api_base_url: str = "https://api.webengage.com",
        timeout: float = 30.0,
    ) -> None:
        """Initialize WebEngage emitter.

        Args:
            license_code: WebEngage account license code
            api_key: REST API key (sent as a bearer token)
            api_base_url: API base URL (differs per data center)
            timeout: Request timeout in seconds
        """
        self.license_code = license_code
        self.api_key = api_key
        self.api_base_url = api_base_url.rstrip("/")
        self.timeout = timeout

    @property
    def events_url(self) -> str:
        """URL of the events endpoint for this account."""
        return f"{self.api_base_url}/v1/accounts/{self.license_code}/events"

    async def emit(
        self, subject_id: str, event_name: str, event_data: dict[str, Any]
    ) -> bool:
        """Send one event, logging instead of raising on failure.

        Args:
            subject_id: WebEngage user id
            event_name: Custom event name
            event_data: Event attributes

        Returns:
            True if WebEngage accepted the event
        """
        with logfire.span(
            "webengage.emit", event_name=event_name, subject_id=subject_id
        ):
            try:
                await self._post_event(subject_id, event_name, event_data)
            except EmissionError as e:
                logfire.error(
                    "WebEngage event failed",
                    event_name=event_name,
                    subject_id=subject_id,
                    error=str(e),
                )
                return False

            logfire.info(
                "WebEngage event sent", event_name=event_name, subject_id=subject_id
            )
            return True

    async def _post_event(
        self, subject_id: str, event_name: str, event_data: dict[str, Any]
    ) -> None:
        """POST the event.

        Raises:
            EmissionError: On transport error or non-2xx response
        """
        body = {"userId": subject_id, "eventName": event_name, "eventData": event_data}
        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.events_url,
                    json=body,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            raise EmissionError(f"HTTP error sending event: {e}")

        if not response.is_success:
            raise EmissionError(
                f"WebEngage returned {response.status_code}: {response.text[:500]}"
            )


class MockWebEngageEmitter(WebEngageEmitter):
    """Mock emitter for testing.

    Records every event. Set fail to make emit report failure, or raise_with
    to make it raise.
    """

    def __init__(self) -> None:
        """Initialize mock emitter."""
        self.events: list[dict[str, Any]] = []
        self.fail = False
        self.raise_with: Exception | None = None

    async def emit(
        self, subject_id: str, event_name: str, event_data: dict[str, Any]
    ) -> bool:
        """Record the event.

        Args:
            subject_id: WebEngage user id
            event_name: Custom event name
            event_data: Event attributes

        Returns:
            False if fail is set, True otherwise
        """
        if self.raise_with is not None:
            raise self.raise_with
        if self.fail:
            return False
        self.events.append(
            {"userId": subject_id, "eventName": event_name, "eventData": event_data}
        )
        return True

    def named(self, event_name: str) -> list[dict[str, Any]]:
        """Recorded events with the given name."""
        return [e for e in self.events if e["eventName"] == event_name]
