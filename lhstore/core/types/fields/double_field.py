import struct
from .field import Field
from ..type_enum import FieldType


class DoubleField(Field[float]):
    """64-bit floating point field, IEEE 754, big-endian."""

    SIZE = 8

    def __init__(self, value):
        if value is None:
            raise TypeError("DoubleField cannot accept None value")

        try:
            self.value = float(value)
        except (ValueError, TypeError) as e:
            raise TypeError(
                f"DoubleField requires numeric value, got {type(value)}: {e}")

    def get_value(self) -> float:
        return self.value

    def get_type(self) -> FieldType:
        return FieldType.DOUBLE

    def get_size(self) -> int:
        return self.SIZE

    def serialize(self) -> bytes:
        return struct.pack('!d', self.value)

    @classmethod
    def deserialize(cls, data: bytes) -> 'DoubleField':
        """
        Deserialize double field from bytes.

        Raises:
            ValueError: If data length is not 8 bytes
        """
        if len(data) != cls.SIZE:
            raise ValueError(
                f"DoubleField requires exactly {cls.SIZE} bytes, got {len(data)}")

        return cls(struct.unpack('!d', data)[0])
