"""FastAPI application."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI
import logfire

from bridge.domain.service import EventDispatcher
from bridge.interface.api.routes import health, invites, telegram
from bridge.util.di.container import create_container, setup_di
from bridge.util.observability import (
    instrument_fastapi,
    instrument_httpx,
)


@asynccontextmanager
async def lifespan(app_instance: FastAPI) -> AsyncIterator[None]:
    """Flush pending event emissions and close the container on shutdown."""
    yield
    container: AsyncContainer = app_instance.state.dishka_container
    dispatcher = await container.get(EventDispatcher)
    if dispatcher.pending:
        logfire.info("Draining pending events", pending=dispatcher.pending)
    await dispatcher.drain()
    await container.close()


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use (production container when omitted)
    """
    # Logfire must be configured before instrumentation
    instrument_httpx()

    app_instance = FastAPI(
        title="Telegram Join Bridge",
        description="Issues single-use Telegram invite links for store purchases and reports joins to WebEngage",
        version="0.1.0",
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    # Settings are loaded from environment automatically
    setup_di(app_instance, container or create_container())

    app_instance.include_router(health.router)
    app_instance.include_router(invites.router)
    app_instance.include_router(telegram.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
app = create_app()
