"""Logging configuration for the application."""

import logging
import sys

from bridge.config import Settings


def setup_logging(settings: Settings) -> None:
    """Configure application logging.

    Sets up stdlib logging with appropriate levels based on environment.
    Structured events go through Logfire; this covers third-party loggers
    (uvicorn, httpx, sqlalchemy) that write to the stdlib root logger.

    Args:
        settings: Application settings
    """
    if settings.debug:
        level = logging.DEBUG
    else:
        level = logging.INFO

    # Configure root logger
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Override any existing configuration
    )

    # Set third-party loggers to WARNING to reduce noise
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    # Our application loggers stay at the configured level
    logging.getLogger("bridge").setLevel(level)

    logger = logging.getLogger(__name__)
    logger.info(
        f"Logging configured: environment={settings.environment}, level={logging.getLevelName(level)}"
    )


def redact_link(invite_link: str | None) -> str:
    """Shorten an invite link for log output.

    Invite links are bearer credentials, so only a prefix is logged.

    Args:
        invite_link: Full invite link

    Returns:
        First 16 characters followed by an ellipsis
    """
    if not invite_link:
        return ""
    return invite_link[:16] + "..."
