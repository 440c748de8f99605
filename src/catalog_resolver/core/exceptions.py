"""Custom exceptions for the catalog resolver."""

from __future__ import annotations


class ResolverError(Exception):
    """Base exception for resolution operations."""

    pass


class ConfigurationError(ResolverError):
    """Raised when the dictionary or catalog cannot be loaded at startup.

    The engine refuses to resolve queries until a later ``initialize()``
    succeeds.
    """

    pass


class CatalogStoreError(ResolverError):
    """Raised by catalog store backends when a lookup fails."""

    def __init__(self, table: str, message: str = ""):
        self.table = table
        super().__init__(message or f"Catalog store error on table '{table}'")


class PartialResultError(ResolverError):
    """Raised when every generator of the active plan failed.

    A single failing generator never raises; the engine marks its
    result as degraded instead.
    """

    def __init__(self, failures: dict[str, BaseException], message: str = ""):
        self.failures = failures
        super().__init__(
            message or f"All candidate generators failed: {sorted(failures)}"
        )
