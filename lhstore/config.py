"""Configuration management."""
from dataclasses import dataclass


@dataclass(frozen=True)
class IndexConfig:
    """
    Settings shared by the index builder, the query service and the CLI.

    The bucket capacity is not recorded in the index file, so a query
    process must be configured with the same value the builder used.
    """

    bucket_capacity: int = 20  # Blocking factor: slots per bucket
    index_file_name: str = "lhl.idx"  # Default index file written by `build`
    bucket_cache_size: int = 256  # Buckets kept by the query service

    def __post_init__(self):
        if self.bucket_capacity <= 0:
            raise ValueError(
                f"Bucket capacity must be positive, got {self.bucket_capacity}")
        if self.bucket_cache_size <= 0:
            raise ValueError(
                f"Bucket cache size must be positive, got {self.bucket_cache_size}")


DEFAULT_CONFIG = IndexConfig()
