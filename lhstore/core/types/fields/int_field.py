import struct
from .field import Field
from ..type_enum import FieldType


class IntField(Field[int]):
    """
    Field implementation for 32-bit signed integers.

    Storage format: 4 bytes in big-endian format
    Range: -2,147,483,648 to 2,147,483,647
    """

    MIN_VALUE = -2**31
    MAX_VALUE = 2**31 - 1
    SIZE = 4

    def __init__(self, value):
        """
        Initialize integer field with validation.

        Args:
            value: Must be an integer within 32-bit signed range

        Raises:
            TypeError: If value is not an integer
            ValueError: If value is out of range
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"IntField requires int, got {type(value)}")

        if not (self.MIN_VALUE <= value <= self.MAX_VALUE):
            raise ValueError(
                f"Integer value {value} out of range [{self.MIN_VALUE}, {self.MAX_VALUE}]")

        self.value = value

    def get_value(self) -> int:
        return self.value

    def get_type(self) -> FieldType:
        return FieldType.INT

    def get_size(self) -> int:
        return self.SIZE

    def serialize(self) -> bytes:
        """Serialize to 4 bytes in big-endian format."""
        return struct.pack('!i', self.value)

    @classmethod
    def deserialize(cls, data: bytes) -> 'IntField':
        """
        Deserialize a 4-byte integer from bytes.

        Args:
            data: Must be exactly 4 bytes

        Raises:
            ValueError: If data length is not 4 bytes
        """
        if len(data) != cls.SIZE:
            raise ValueError(
                f"IntField requires exactly {cls.SIZE} bytes, got {len(data)}")

        return cls(struct.unpack('!i', data)[0])
