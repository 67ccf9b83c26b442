"""Custom exceptions for the index system."""


class LhStoreError(Exception):
    """Base exception for index and data file errors."""
    pass


class StorageIOError(LhStoreError):
    """Raised when a file cannot be opened, read, written, seeked or truncated."""
    pass


class TruncatedRecordError(LhStoreError):
    """Raised when fewer bytes are available than a record needs."""
    pass


class MalformedKeyError(LhStoreError, ValueError):
    """Raised when an interactive key is not a non-negative integer."""
    pass


class InvalidEntryError(LhStoreError, ValueError):
    """Raised when a key or offset cannot be stored in an index slot."""
    pass


class IndexReadOnlyError(LhStoreError):
    """Raised when a write is attempted on a read-only or finalized index."""
    pass


class IndexOverflowError(LhStoreError):
    """Raised when a full bucket can no longer be separated by splitting."""
    pass
