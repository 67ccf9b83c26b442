import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional

from ...core.exceptions import StorageIOError

logger = logging.getLogger(__name__)


@dataclass
class DiskManagerStats:
    reads: int = 0
    writes: int = 0
    bytes_read: int = 0
    bytes_written: int = 0
    truncations: int = 0


class DiskManager:
    """
    Positioned byte I/O on a single file.

    Every OSError raised by the underlying file object is re-raised as
    StorageIOError naming the file and the operation, so callers only
    ever deal with the storage error taxonomy. Instances are context
    managers and close the handle on every exit path.
    """

    READ_ONLY = "rb"
    CREATE = "w+b"

    def __init__(self, file_path, mode: str = READ_ONLY):
        if mode not in (self.READ_ONLY, self.CREATE):
            raise ValueError(f"Unsupported file mode: {mode}")

        self.file_path = Path(file_path)
        self.mode = mode
        self.stats = DiskManagerStats()
        self._file: Optional[BinaryIO] = None

        try:
            if mode == self.CREATE:
                self.file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self.file_path, mode)
        except (IOError, OSError) as e:
            raise StorageIOError(f"Could not open file {self.file_path}: {e}") from e

        logger.debug("Opened %s (%s)", self.file_path, mode)

    @property
    def read_only(self) -> bool:
        return self.mode == self.READ_ONLY

    @property
    def closed(self) -> bool:
        return self._file is None

    def _handle(self) -> BinaryIO:
        if self._file is None:
            raise StorageIOError(f"File {self.file_path} is closed")
        return self._file

    def read_at(self, offset: int, size: int) -> bytes:
        """
        Read up to ``size`` bytes starting at ``offset``.

        A short result means end of file was reached; deciding whether that
        is an error is up to the caller.
        """
        f = self._handle()
        try:
            f.seek(offset)
            data = f.read(size)
        except (IOError, OSError) as e:
            raise StorageIOError(
                f"Failed to read {size} bytes at {offset} from {self.file_path}: {e}") from e

        self.stats.reads += 1
        self.stats.bytes_read += len(data)
        return data

    def read_exact(self, offset: int, size: int) -> bytes:
        """Read exactly ``size`` bytes or raise StorageIOError."""
        data = self.read_at(offset, size)
        if len(data) != size:
            raise StorageIOError(
                f"Unexpected end of file in {self.file_path}: wanted {size} bytes "
                f"at {offset}, got {len(data)}")
        return data

    def write_at(self, offset: int, data: bytes) -> None:
        f = self._handle()
        if self.read_only:
            raise StorageIOError(f"File {self.file_path} is open read-only")
        try:
            f.seek(offset)
            f.write(data)
        except (IOError, OSError) as e:
            raise StorageIOError(
                f"Failed to write {len(data)} bytes at {offset} to {self.file_path}: {e}") from e

        self.stats.writes += 1
        self.stats.bytes_written += len(data)

    def append(self, data: bytes) -> int:
        """Write ``data`` at the current end of file and return where it landed."""
        offset = self.size()
        self.write_at(offset, data)
        return offset

    def size(self) -> int:
        f = self._handle()
        try:
            return f.seek(0, os.SEEK_END)
        except (IOError, OSError) as e:
            raise StorageIOError(f"Failed to seek in {self.file_path}: {e}") from e

    def truncate(self, size: int) -> None:
        f = self._handle()
        if self.read_only:
            raise StorageIOError(f"File {self.file_path} is open read-only")
        try:
            f.truncate(size)
        except (IOError, OSError) as e:
            raise StorageIOError(
                f"Failed to truncate {self.file_path} to {size} bytes: {e}") from e

        self.stats.truncations += 1

    def flush(self) -> None:
        f = self._handle()
        try:
            f.flush()
            if not self.read_only:
                os.fsync(f.fileno())
        except (IOError, OSError) as e:
            raise StorageIOError(f"Failed to flush {self.file_path}: {e}") from e

    def close(self) -> None:
        if self._file is None:
            return
        f, self._file = self._file, None
        try:
            f.close()
        except (IOError, OSError) as e:
            raise StorageIOError(f"Could not close file {self.file_path}: {e}") from e
        logger.debug("Closed %s", self.file_path)

    def __enter__(self) -> 'DiskManager':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
