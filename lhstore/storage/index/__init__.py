from .index_entry import IndexEntry
from .linear_hash_index import LinearHashIndex
from .index_builder import IndexBuilder, BuildSummary

__all__ = ["IndexEntry", "LinearHashIndex", "IndexBuilder", "BuildSummary"]
