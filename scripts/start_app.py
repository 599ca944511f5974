#!/usr/bin/env python3
"""Start the bridge with Logfire error tracking for startup errors."""

import sys
import logfire
import uvicorn

from bridge.config import Settings
from bridge.util.logging import setup_logging
from bridge.util.observability import configure_logfire, report_missing_credentials


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    # Configure Logfire early to catch startup errors
    configure_logfire(settings)
    setup_logging(settings)

    # Missing secrets are reported, not fatal: /healthz must still answer
    report_missing_credentials(settings)

    try:
        logfire.info("Starting join bridge", port=settings.port)

        uvicorn.run(
            "bridge.interface.api.app:app",
            host=settings.host,
            port=settings.port,
            log_level="info",
        )

        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
