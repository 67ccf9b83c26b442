import logging
from dataclasses import dataclass
from typing import Optional

from ..config import IndexConfig, DEFAULT_CONFIG
from ..core.exceptions import MalformedKeyError
from ..core.record import SolarRecord
from ..storage.data_file import DataFile
from ..storage.index import LinearHashIndex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryResult:
    """Outcome of one point query. Absence is a result, not an error."""
    key: int
    offset: Optional[int] = None
    record: Optional[SolarRecord] = None

    @property
    def found(self) -> bool:
        return self.record is not None


def parse_key(text: str) -> int:
    """
    Parse an interactive key.

    Raises:
        MalformedKeyError: If ``text`` is not a non-negative decimal integer
    """
    stripped = text.strip()
    if not stripped or not stripped.isascii() or not stripped.isdigit():
        raise MalformedKeyError(f"Not a valid key: {text!r}")
    return int(stripped)


class IndexQueryService:
    """
    Read-only point lookups against a finished index and its data file.

    Both files are opened once, read-only. Each query costs one bucket
    scan (possibly served from the bucket cache) and, on a hit, one record
    read.
    """

    def __init__(self, index_path, data_path, config: IndexConfig = DEFAULT_CONFIG):
        self.config = config
        self.index = LinearHashIndex.open(index_path, config.bucket_capacity,
                                          cache_size=config.bucket_cache_size)
        try:
            self.data_file = DataFile(data_path)
        except BaseException:
            self.index.close()
            raise

        logger.info("Serving %d records from %s with %s",
                    self.data_file.record_count, data_path, self.index)

    @property
    def record_count(self) -> int:
        return self.data_file.record_count

    def query(self, key: int) -> QueryResult:
        """
        Look up ``key`` and materialize its record.

        Raises:
            StorageIOError: If either file cannot be read
            TruncatedRecordError: If the data file ends inside the record
        """
        offset = self.index.lookup(key)
        if offset is None:
            logger.debug("Key %d not found", key)
            return QueryResult(key)

        record = self.data_file.read_record(offset)
        return QueryResult(key, offset, record)

    def close(self) -> None:
        try:
            self.index.close()
        finally:
            self.data_file.close()

    def __enter__(self) -> 'IndexQueryService':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
