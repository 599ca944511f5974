"""Interface layer errors."""


class InterfaceError(Exception):
    """Base interface error."""

    pass


class MalformedBodyError(InterfaceError):
    """Request body is not valid JSON."""

    pass
