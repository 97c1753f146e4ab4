"""Domain exceptions."""


class ContextVaultError(Exception):
    """Base exception for contextvault."""

    pass


class NotFound(ContextVaultError):
    """Requested resource was not found."""

    pass


class ValidationError(ContextVaultError):
    """Validation failed for input data."""

    pass


class StoreError(ContextVaultError):
    """Chunk store is unreachable or rejected the operation."""

    pass
