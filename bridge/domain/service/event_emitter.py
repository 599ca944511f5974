"""Engagement event emission.

Event delivery sits outside the consistency boundary of issuance and join
matching: a lost event is logged, never surfaced to the caller and never
retried.
"""

import asyncio
from typing import Any, Callable

import logfire


class EventEmitter:
    """Generic interface for the engagement platform's event API."""

    async def emit(
        self, subject_id: str, event_name: str, event_data: dict[str, Any]
    ) -> bool:
        """Send one custom event for a user.

        Implementations log failures and return False instead of raising.

        Args:
            subject_id: Engagement platform user id
            event_name: Custom event name
            event_data: Event attributes

        Returns:
            True if the platform accepted the event
        """
        raise NotImplementedError


ErrorLogger = Callable[[BaseException, str], None]


def log_emission_error(error: BaseException, event_name: str) -> None:
    """Default error callback for detached emissions."""
    logfire.error(
        "Event emission task failed",
        event_name=event_name,
        error=str(error),
        error_type=type(error).__name__,
    )


class EventDispatcher:
    """Runs event emission off the response path.

    dispatch() schedules the emit as a background task and returns at once.
    Exceptions escaping the emitter are handed to the error callback. Tasks
    are referenced until done so they are not garbage collected mid-flight.
    """

    def __init__(
        self,
        emitter: EventEmitter,
        await_delivery: bool = False,
        on_error: ErrorLogger = log_emission_error,
    ) -> None:
        """Initialize dispatcher.

        Args:
            emitter: Event emitter to call
            await_delivery: Await each emit inline instead of detaching it
            on_error: Callback for exceptions raised by the emitter
        """
        self.emitter = emitter
        self.await_delivery = await_delivery
        self.on_error = on_error
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        """Number of emissions still in flight."""
        return len(self._tasks)

    async def dispatch(
        self, subject_id: str, event_name: str, event_data: dict[str, Any]
    ) -> None:
        """Emit an event without blocking the caller.

        Args:
            subject_id: Engagement platform user id
            event_name: Custom event name
            event_data: Event attributes
        """
        if self.await_delivery:
            try:
                await self.emitter.emit(subject_id, event_name, event_data)
            except Exception as e:
                self.on_error(e, event_name)
            return

        task = asyncio.create_task(
            self.emitter.emit(subject_id, event_name, event_data),
            name=event_name,
        )
        self._tasks.add(task)
        task.add_done_callback(self._on_done)

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logfire.warn("Event emission cancelled", event_name=task.get_name())
            return
        error = task.exception()
        if error is not None:
            self.on_error(error, task.get_name())

    async def drain(self) -> None:
        """Wait for all in-flight emissions to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
