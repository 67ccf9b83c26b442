import struct
from dataclasses import dataclass

from ...core.exceptions import InvalidEntryError


@dataclass(frozen=True)
class IndexEntry:
    """
    A ``(key, offset)`` pair stored in one index slot.

    Format: [key: int32][offset: int32], big-endian, 8 bytes.

    An empty slot holds the sentinel ``(-1, -1)``. Slots are dense and
    untagged, so -1 can never be a real key or offset; ``IndexEntry.of``
    refuses it.
    """
    key: int
    offset: int

    EMPTY_VALUE = -1
    FORMAT = '!ii'
    SLOT_SIZE = struct.calcsize(FORMAT)
    MAX_VALUE = 2**31 - 1

    @classmethod
    def of(cls, key: int, offset: int) -> 'IndexEntry':
        """
        Build a real (non-empty) entry.

        Raises:
            InvalidEntryError: If key or offset is negative or not an int32
        """
        for label, value in (("key", key), ("offset", offset)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidEntryError(f"Index {label} must be an int, got {type(value)}")
            if not (0 <= value <= cls.MAX_VALUE):
                raise InvalidEntryError(
                    f"Index {label} {value} out of range [0, {cls.MAX_VALUE}]")
        return cls(key, offset)

    @classmethod
    def empty(cls) -> 'IndexEntry':
        return EMPTY_ENTRY

    def is_empty(self) -> bool:
        return self.key == self.EMPTY_VALUE

    def serialize(self) -> bytes:
        return struct.pack(self.FORMAT, self.key, self.offset)

    @classmethod
    def deserialize(cls, data: bytes) -> 'IndexEntry':
        if len(data) != cls.SLOT_SIZE:
            raise ValueError(
                f"IndexEntry requires exactly {cls.SLOT_SIZE} bytes, got {len(data)}")
        key, offset = struct.unpack(cls.FORMAT, data)
        return cls(key, offset)

    def __str__(self) -> str:
        if self.is_empty():
            return "IndexEntry(empty)"
        return f"IndexEntry({self.key} -> {self.offset})"


EMPTY_ENTRY = IndexEntry(IndexEntry.EMPTY_VALUE, IndexEntry.EMPTY_VALUE)
EMPTY_SLOT_BYTES = EMPTY_ENTRY.serialize()
