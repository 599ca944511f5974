"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """External provider error."""

    pass


class EmissionError(AdapterError):
    """Engagement event could not be delivered."""

    pass


class StoreError(AdapterError):
    """Durable state operation failed."""

    pass
