import pytest
import struct
from lhstore.core.exceptions import InvalidEntryError
from lhstore.storage.index import IndexEntry


class TestIndexEntry:
    """Tests for IndexEntry slots."""

    def test_of_valid_values(self):
        entry = IndexEntry.of(17, 96)
        assert entry.key == 17
        assert entry.offset == 96
        assert not entry.is_empty()

    def test_of_accepts_zero(self):
        assert not IndexEntry.of(0, 0).is_empty()

    def test_of_rejects_sentinel_and_negatives(self):
        with pytest.raises(InvalidEntryError, match="key -1 out of range"):
            IndexEntry.of(-1, 16)
        with pytest.raises(InvalidEntryError, match="offset -1 out of range"):
            IndexEntry.of(5, -1)
        with pytest.raises(InvalidEntryError):
            IndexEntry.of(-7, 16)

    def test_of_rejects_values_beyond_int32(self):
        with pytest.raises(InvalidEntryError, match="out of range"):
            IndexEntry.of(2**31, 16)
        with pytest.raises(InvalidEntryError, match="out of range"):
            IndexEntry.of(1, 2**31)

    def test_of_rejects_non_int(self):
        with pytest.raises(InvalidEntryError, match="must be an int"):
            IndexEntry.of("5", 16)
        with pytest.raises(InvalidEntryError, match="must be an int"):
            IndexEntry.of(True, 16)

    def test_invalid_entry_error_is_value_error(self):
        with pytest.raises(ValueError):
            IndexEntry.of(-1, -1)

    def test_empty(self):
        entry = IndexEntry.empty()
        assert entry.is_empty()
        assert entry == IndexEntry(-1, -1)
        assert entry.serialize() == b"\xff" * 8
        assert str(entry) == "IndexEntry(empty)"

    def test_serialize_layout(self):
        assert IndexEntry.SLOT_SIZE == 8
        assert IndexEntry.of(5, 16).serialize() == struct.pack('>ii', 5, 16)

    def test_deserialize(self):
        entry = IndexEntry.deserialize(struct.pack('>ii', 33, 160))
        assert entry == IndexEntry(33, 160)
        assert str(entry) == "IndexEntry(33 -> 160)"

    def test_deserialize_wrong_length_raises_error(self):
        with pytest.raises(ValueError, match="exactly 8 bytes"):
            IndexEntry.deserialize(b"\x00" * 4)
