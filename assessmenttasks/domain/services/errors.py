"""Exceptions shared by the domain services."""


class PersistenceError(Exception):
    """Raised when the underlying store rejects a read or a write."""
