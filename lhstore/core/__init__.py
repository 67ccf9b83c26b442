from .exceptions import (
    LhStoreError,
    StorageIOError,
    TruncatedRecordError,
    MalformedKeyError,
    InvalidEntryError,
    IndexReadOnlyError,
    IndexOverflowError,
)

__all__ = [
    "LhStoreError",
    "StorageIOError",
    "TruncatedRecordError",
    "MalformedKeyError",
    "InvalidEntryError",
    "IndexReadOnlyError",
    "IndexOverflowError",
]
