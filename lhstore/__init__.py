"""
lhstore: key-based lookup of fixed-length records through a
disk-resident linear-hashing index.
"""
from .config import IndexConfig, DEFAULT_CONFIG
from .core.exceptions import (
    LhStoreError,
    StorageIOError,
    TruncatedRecordError,
    MalformedKeyError,
    InvalidEntryError,
    IndexReadOnlyError,
    IndexOverflowError,
)
from .core.record import FieldWidths, SolarRecord, RecordCodec
from .storage.data_file import DataFile, DataFileHeader, DataFileWriter
from .storage.index import IndexEntry, LinearHashIndex, IndexBuilder, BuildSummary
from .query import IndexQueryService, QueryResult, parse_key

__version__ = "0.1.0"

__all__ = [
    "IndexConfig",
    "DEFAULT_CONFIG",
    "LhStoreError",
    "StorageIOError",
    "TruncatedRecordError",
    "MalformedKeyError",
    "InvalidEntryError",
    "IndexReadOnlyError",
    "IndexOverflowError",
    "FieldWidths",
    "SolarRecord",
    "RecordCodec",
    "DataFile",
    "DataFileHeader",
    "DataFileWriter",
    "IndexEntry",
    "LinearHashIndex",
    "IndexBuilder",
    "BuildSummary",
    "IndexQueryService",
    "QueryResult",
    "parse_key",
]
