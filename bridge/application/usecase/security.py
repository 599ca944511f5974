"""Shared-secret checks for inbound calls."""

import secrets

from bridge.domain.error import AuthError


def require_secret(provided: str | None, expected: str | None) -> None:
    """Compare a presented secret with the configured one.

    Args:
        provided: Secret from the request header
        expected: Configured secret

    Raises:
        AuthError: If either is missing or they differ
    """
    if not provided or not expected:
        raise AuthError()
    if not secrets.compare_digest(provided.encode("utf-8"), expected.encode("utf-8")):
        raise AuthError()
