"""
Fixed-length record data files.

Layout::

    record_count : int32   \
    name_width   : int32    |  16-byte header, big-endian
    cod_width    : int32    |
    state_width  : int32   /
    record_count records of RecordCodec.record_length(widths) bytes each

Record ``i`` starts at ``HEADER_SIZE + i * record_length``.
"""
import logging
import struct
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

from ..core.exceptions import StorageIOError
from ..core.record import FieldWidths, RecordCodec, SolarRecord
from .disk import DiskManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DataFileHeader:
    record_count: int
    widths: FieldWidths

    FORMAT = '!iiii'
    SIZE = struct.calcsize(FORMAT)

    def serialize(self) -> bytes:
        return struct.pack(self.FORMAT, self.record_count,
                           self.widths.name, self.widths.cod, self.widths.state)

    @classmethod
    def deserialize(cls, data: bytes) -> 'DataFileHeader':
        if len(data) < cls.SIZE:
            raise StorageIOError(
                f"Data file header needs {cls.SIZE} bytes, got {len(data)}")
        count, name, cod, state = struct.unpack(cls.FORMAT, data[:cls.SIZE])
        if count < 0 or min(name, cod, state) < 0:
            raise StorageIOError(
                f"Invalid data file header: count={count}, widths=({name}, {cod}, {state})")
        return cls(count, FieldWidths(name, cod, state))

    @property
    def record_length(self) -> int:
        return RecordCodec.record_length(self.widths)


class DataFile:
    """
    Read-only view of a fixed-length record file.

    The header is read once on open; every offset is derived from it.
    """

    KEY_FORMAT = '!i'
    KEY_SIZE = struct.calcsize(KEY_FORMAT)

    def __init__(self, file_path):
        self.file_path = file_path
        self.disk = DiskManager(file_path, DiskManager.READ_ONLY)
        try:
            self.header = DataFileHeader.deserialize(
                self.disk.read_at(0, DataFileHeader.SIZE))
        except BaseException:
            self.disk.close()
            raise
        self.record_length = self.header.record_length

    @property
    def widths(self) -> FieldWidths:
        return self.header.widths

    @property
    def record_count(self) -> int:
        return self.header.record_count

    def offset_of(self, index: int) -> int:
        """Byte offset of record ``index``."""
        if not (0 <= index < self.record_count):
            raise IndexError(
                f"Record index {index} out of range [0, {self.record_count})")
        return DataFileHeader.SIZE + index * self.record_length

    def read_key(self, index: int) -> int:
        offset = self.offset_of(index)
        data = self.disk.read_exact(offset, self.KEY_SIZE)
        return struct.unpack(self.KEY_FORMAT, data)[0]

    def read_record(self, offset: int) -> SolarRecord:
        return RecordCodec.read_from(self.disk, offset, self.widths)

    def iter_keys(self) -> Iterator[Tuple[int, int]]:
        """Yield ``(key, offset)`` for every record, in storage order."""
        for i in range(self.record_count):
            yield self.read_key(i), self.offset_of(i)

    def iter_records(self) -> Iterator[SolarRecord]:
        for i in range(self.record_count):
            yield self.read_record(self.offset_of(i))

    def close(self) -> None:
        self.disk.close()

    def __enter__(self) -> 'DataFile':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class DataFileWriter:
    """Writes a batch of records as a fresh fixed-length data file."""

    @staticmethod
    def write(file_path, records: Iterable[SolarRecord], sort: bool = True) -> DataFileHeader:
        """
        Write ``records`` to ``file_path``, replacing any existing file.

        Text widths are fitted to the longest value of each field. Records
        are sorted by key unless ``sort`` is False.
        """
        batch: List[SolarRecord] = list(records)
        if sort:
            batch.sort(key=lambda record: record.eia_id)

        header = DataFileHeader(len(batch), FieldWidths.fit(batch))
        with DiskManager(file_path, DiskManager.CREATE) as disk:
            disk.write_at(0, header.serialize())
            offset = DataFileHeader.SIZE
            for record in batch:
                offset = RecordCodec.write_to(disk, offset, record, header.widths)
            disk.flush()

        logger.info("Wrote %d records to %s (record length %d)",
                    header.record_count, file_path, header.record_length)
        return header
