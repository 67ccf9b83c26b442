"""
Disk-resident linear hashing.

The index file is an array of ``num_buckets`` buckets, each holding
``bucket_capacity`` 8-byte slots (see IndexEntry). A key lives in bucket
``key mod 2 ** (level + 1)``. When an insert finds its bucket full the
table splits: the level goes up by one, the bucket count doubles, and
every entry is re-addressed under the new level. Once a build is complete
the level is appended as a trailing int32 so readers can rebuild the
address function without replaying the inserts.

Buckets always fill front to back and are rewritten compactly on a split,
so a lookup may stop at the first empty slot of a bucket.
"""
import logging
import struct
from typing import Iterator, List, Optional

from cachetools import LRUCache

from ...core.exceptions import (
    StorageIOError,
    IndexReadOnlyError,
    IndexOverflowError,
)
from ..disk import DiskManager
from .index_entry import IndexEntry, EMPTY_SLOT_BYTES

logger = logging.getLogger(__name__)


class LinearHashIndex:
    """
    Linear-hashing index from int32 keys to int32 data file offsets.

    Instances are created through ``create`` (fresh, writable) or ``open``
    (finished, read-only) and own their file handle; use them as context
    managers so the file is closed on every exit path.
    """

    DEFAULT_BUCKET_CAPACITY = 20
    INITIAL_LEVEL = 0
    LEVEL_FORMAT = '!i'
    LEVEL_SIZE = struct.calcsize(LEVEL_FORMAT)

    # Keys are at most 2**31 - 1, so at level 30 the address function is the
    # identity and a full bucket holds copies of a single key.
    MAX_LEVEL = 30

    # Buckets written per call when preallocating a region.
    _INIT_CHUNK_BUCKETS = 256

    def __init__(self, disk: DiskManager, bucket_capacity: int, level: int,
                 read_only: bool, cache_size: Optional[int] = None):
        if bucket_capacity <= 0:
            raise ValueError(f"Bucket capacity must be positive, got {bucket_capacity}")
        if not (0 <= level <= self.MAX_LEVEL):
            raise ValueError(f"Level {level} out of range [0, {self.MAX_LEVEL}]")

        self.disk = disk
        self.bucket_capacity = bucket_capacity
        self.level = level
        self.num_buckets = 1 << (level + 1)
        self.read_only = read_only
        self.num_splits = 0

        # Only an immutable table may cache buckets.
        self._cache: Optional[LRUCache] = None
        if read_only and cache_size:
            self._cache = LRUCache(maxsize=cache_size)
        self.cache_hits = 0
        self.cache_misses = 0

    @classmethod
    def create(cls, file_path, bucket_capacity: int = DEFAULT_BUCKET_CAPACITY) -> 'LinearHashIndex':
        """
        Create an empty index at ``file_path``, replacing any existing file.

        The new table has level 0 and two buckets of empty slots.
        """
        disk = DiskManager(file_path, DiskManager.CREATE)
        try:
            index = cls(disk, bucket_capacity, cls.INITIAL_LEVEL, read_only=False)
            index._init_buckets(0, index.num_buckets)
        except BaseException:
            disk.close()
            raise

        logger.debug("Created index %s with %d buckets of %d slots",
                     file_path, index.num_buckets, bucket_capacity)
        return index

    @classmethod
    def open(cls, file_path, bucket_capacity: int = DEFAULT_BUCKET_CAPACITY,
             cache_size: Optional[int] = None) -> 'LinearHashIndex':
        """
        Open a finished index read-only.

        The level is read from the trailing marker; the bucket count follows
        from it. The file length must match exactly, which also catches a
        mismatched ``bucket_capacity``.

        Raises:
            StorageIOError: If the file cannot be read or has the wrong shape
        """
        disk = DiskManager(file_path, DiskManager.READ_ONLY)
        try:
            size = disk.size()
            if size < cls.LEVEL_SIZE:
                raise StorageIOError(f"Index file {file_path} has no level marker")

            level = struct.unpack(cls.LEVEL_FORMAT,
                                  disk.read_exact(size - cls.LEVEL_SIZE, cls.LEVEL_SIZE))[0]
            if not (0 <= level <= cls.MAX_LEVEL):
                raise StorageIOError(f"Index file {file_path} has invalid level {level}")

            index = cls(disk, bucket_capacity, level, read_only=True, cache_size=cache_size)
            expected = index.num_buckets * index.bucket_bytes + cls.LEVEL_SIZE
            if size != expected:
                raise StorageIOError(
                    f"Index file {file_path} is {size} bytes, expected {expected} for "
                    f"{index.num_buckets} buckets of {bucket_capacity} slots")
        except BaseException:
            disk.close()
            raise

        logger.debug("Opened index %s: level %d, %d buckets", file_path, level, index.num_buckets)
        return index

    @property
    def bucket_bytes(self) -> int:
        return self.bucket_capacity * IndexEntry.SLOT_SIZE

    def bucket_of(self, key: int) -> int:
        """
        Bucket address of ``key`` under the current level.

        Never cache the result across inserts: a split changes it.
        """
        return key % (1 << (self.level + 1))

    def insert(self, key: int, offset: int) -> int:
        """
        Store ``(key, offset)`` in the first empty slot of the key's bucket.

        A full bucket splits the table and the insert is retried, as many
        times as needed. Returns the bucket the entry landed in.

        Raises:
            InvalidEntryError: If key or offset is negative or not an int32
            IndexReadOnlyError: If the index is read-only or finalized
            IndexOverflowError: If the bucket is full of ``key`` or cannot be
                split any further
        """
        self._check_writable()
        entry = IndexEntry.of(key, offset)

        while True:
            bucket = self.bucket_of(entry.key)
            slot = self._find_free_slot(bucket)
            if slot is not None:
                position = self._bucket_position(bucket) + slot * IndexEntry.SLOT_SIZE
                self.disk.write_at(position, entry.serialize())
                return bucket

            if self._holds_only(bucket, entry.key):
                raise IndexOverflowError(
                    f"Bucket {bucket} is full of key {entry.key}: "
                    f"more than {self.bucket_capacity} entries share one key")

            logger.debug("Bucket %d full at level %d while inserting key %d",
                         bucket, self.level, entry.key)
            self._split()

    def lookup(self, key: int) -> Optional[int]:
        """
        Return the data file offset stored for ``key``, or None if absent.

        Only the key's bucket is scanned, stopping at the first empty slot.
        """
        if key < 0:
            return None

        raw = self._read_bucket_raw(self.bucket_of(key))
        for slot_key, slot_offset in struct.iter_unpack(IndexEntry.FORMAT, raw):
            if slot_key == IndexEntry.EMPTY_VALUE:
                return None
            if slot_key == key:
                return slot_offset
        return None

    def bucket(self, bucket: int) -> List[IndexEntry]:
        """All slots of ``bucket``, empty ones included."""
        if not (0 <= bucket < self.num_buckets):
            raise IndexError(f"Bucket {bucket} out of range [0, {self.num_buckets})")
        raw = self._read_bucket_raw(bucket)
        return [IndexEntry(k, o) for k, o in struct.iter_unpack(IndexEntry.FORMAT, raw)]

    def entries(self) -> Iterator[IndexEntry]:
        """Yield every stored entry in bucket order."""
        for bucket in range(self.num_buckets):
            for entry in self.bucket(bucket):
                if not entry.is_empty():
                    yield entry

    def bucket_loads(self) -> List[int]:
        """Number of stored entries per bucket."""
        return [sum(1 for e in self.bucket(b) if not e.is_empty())
                for b in range(self.num_buckets)]

    def finalize(self) -> None:
        """
        Append the trailing level marker and make the index read-only.

        Called once, after the last insert of a build.
        """
        self._check_writable()
        self.disk.append(struct.pack(self.LEVEL_FORMAT, self.level))
        self.disk.flush()
        self.read_only = True
        logger.debug("Finalized index %s at level %d", self.disk.file_path, self.level)

    def get_statistics(self) -> dict:
        """Get statistics about the index."""
        loads = self.bucket_loads()
        num_entries = sum(loads)
        return {
            'num_entries': num_entries,
            'num_buckets': self.num_buckets,
            'level': self.level,
            'bucket_capacity': self.bucket_capacity,
            'num_splits': self.num_splits,
            'max_bucket_load': max(loads) if loads else 0,
            'empty_buckets': loads.count(0),
            'load_factor': num_entries / (self.num_buckets * self.bucket_capacity),
            'cache_hits': self.cache_hits,
            'cache_misses': self.cache_misses,
        }

    def close(self) -> None:
        self.disk.close()

    def __enter__(self) -> 'LinearHashIndex':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _split(self) -> None:
        """
        Grow the table by one level.

        The bucket count doubles by appending ``old`` empty buckets. Under
        the new level every entry of old bucket ``b`` maps to either ``b`` or
        ``b + old``; movers are written to the new bucket and the stayers
        are compacted to the front of ``b``. The file is then cut to exactly
        ``num_buckets`` buckets.
        """
        if self.level >= self.MAX_LEVEL:
            raise IndexOverflowError(
                f"Cannot split beyond level {self.MAX_LEVEL}: "
                f"a bucket of {self.bucket_capacity} slots holds a single repeated key")

        old_buckets = self.num_buckets
        self.level += 1
        self.num_buckets = old_buckets * 2
        self._init_buckets(old_buckets, old_buckets)

        moved = 0
        for bucket in range(old_buckets):
            stay: List[IndexEntry] = []
            move: List[IndexEntry] = []
            for entry in self.bucket(bucket):
                if entry.is_empty():
                    continue
                if self.bucket_of(entry.key) == bucket:
                    stay.append(entry)
                else:
                    move.append(entry)

            if not move:
                continue
            self._write_bucket(bucket + old_buckets, move)
            self._write_bucket(bucket, stay)
            moved += len(move)

        self.disk.truncate(self.num_buckets * self.bucket_bytes)
        self.num_splits += 1
        logger.info("Split index %s: level %d, %d buckets, %d entries moved",
                    self.disk.file_path, self.level, self.num_buckets, moved)

    def _find_free_slot(self, bucket: int) -> Optional[int]:
        raw = self._read_bucket_raw(bucket)
        for slot, (slot_key, _) in enumerate(struct.iter_unpack(IndexEntry.FORMAT, raw)):
            if slot_key == IndexEntry.EMPTY_VALUE:
                return slot
        return None

    def _holds_only(self, bucket: int, key: int) -> bool:
        """True if every slot of ``bucket`` holds ``key``; no split can separate them."""
        raw = self._read_bucket_raw(bucket)
        return all(slot_key == key for slot_key, _ in struct.iter_unpack(IndexEntry.FORMAT, raw))

    def _write_bucket(self, bucket: int, entries: List[IndexEntry]) -> None:
        if len(entries) > self.bucket_capacity:
            raise ValueError(
                f"{len(entries)} entries do not fit in a bucket of {self.bucket_capacity}")
        data = b''.join(e.serialize() for e in entries)
        data += EMPTY_SLOT_BYTES * (self.bucket_capacity - len(entries))
        self.disk.write_at(self._bucket_position(bucket), data)

    def _init_buckets(self, first_bucket: int, count: int) -> None:
        """Write ``count`` empty buckets starting at ``first_bucket``."""
        empty_bucket = EMPTY_SLOT_BYTES * self.bucket_capacity
        written = 0
        while written < count:
            chunk = min(self._INIT_CHUNK_BUCKETS, count - written)
            self.disk.write_at(self._bucket_position(first_bucket + written),
                               empty_bucket * chunk)
            written += chunk

    def _bucket_position(self, bucket: int) -> int:
        return bucket * self.bucket_bytes

    def _read_bucket_raw(self, bucket: int) -> bytes:
        if self._cache is not None:
            cached = self._cache.get(bucket)
            if cached is not None:
                self.cache_hits += 1
                return cached
            self.cache_misses += 1

        raw = self.disk.read_exact(self._bucket_position(bucket), self.bucket_bytes)
        if self._cache is not None:
            self._cache[bucket] = raw
        return raw

    def _check_writable(self) -> None:
        if self.read_only:
            raise IndexReadOnlyError(
                f"Index {self.disk.file_path} is read-only; it cannot take new entries")

    def __str__(self) -> str:
        return (f"LinearHashIndex({self.disk.file_path}, level={self.level}, "
                f"buckets={self.num_buckets}, capacity={self.bucket_capacity})")
