"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Missing or malformed input."""

    pass


class AuthError(DomainError):
    """Raised when a shared secret does not match."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)
