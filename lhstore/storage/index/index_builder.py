import logging
from dataclasses import dataclass
from pathlib import Path

from ...config import IndexConfig, DEFAULT_CONFIG
from ..data_file import DataFile
from .linear_hash_index import LinearHashIndex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildSummary:
    index_path: str
    num_records: int
    level: int
    num_buckets: int
    num_splits: int
    bucket_capacity: int


class IndexBuilder:
    """
    One-shot batch construction of an index over a data file.

    The data file is scanned in storage order and each record contributes
    one ``(key, offset)`` pair. Offsets come from the header arithmetic,
    ``HEADER_SIZE + i * record_length``, never from a file cursor. Only the
    key bytes of each record are read.
    """

    def __init__(self, config: IndexConfig = DEFAULT_CONFIG):
        self.config = config

    def build(self, data_path, index_path=None) -> BuildSummary:
        """
        Build a fresh index for ``data_path``, replacing ``index_path``.

        Args:
            data_path: Fixed-length record file with a DataFileHeader
            index_path: Output file, ``config.index_file_name`` by default

        Returns:
            BuildSummary describing the finished index

        Raises:
            StorageIOError: If either file cannot be read or written
        """
        if index_path is None:
            index_path = self.config.index_file_name
        index_path = str(Path(index_path))

        with DataFile(data_path) as data_file:
            logger.info("Indexing %d records of %d bytes from %s",
                        data_file.record_count, data_file.record_length, data_path)

            with LinearHashIndex.create(index_path, self.config.bucket_capacity) as index:
                for key, offset in data_file.iter_keys():
                    index.insert(key, offset)
                index.finalize()

                summary = BuildSummary(
                    index_path=index_path,
                    num_records=data_file.record_count,
                    level=index.level,
                    num_buckets=index.num_buckets,
                    num_splits=index.num_splits,
                    bucket_capacity=index.bucket_capacity,
                )

        logger.info("Wrote %s: level %d, %d buckets after %d splits",
                    summary.index_path, summary.level, summary.num_buckets, summary.num_splits)
        return summary
