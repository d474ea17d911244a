"""Exception types raised by the mint indexer."""

from __future__ import annotations


class MintIndexerError(Exception):
    """Base class for mint indexer failures."""


class DataUnavailable(MintIndexerError):
    """Raised when the backing store cannot answer a query."""


class MalformedInput(MintIndexerError, ValueError):
    """Raised when a mint descriptor or raw numeric input is invalid."""


class CollectionNotFound(MintIndexerError, LookupError):
    """Raised when an order is built for a collection the store does not know."""
