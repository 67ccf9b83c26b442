from .field import Field
from ..type_enum import FieldType


class StringField(Field[str]):
    """
    Field implementation for fixed-width strings.

    Storage format: the UTF-8 encoded value, left-justified and padded
    with NUL bytes up to ``width``. There is no length prefix; the width
    is a property of the data file, not of the value.

    Readers must not assume the padding is NUL. Files produced by other
    tools may pad with spaces or leave arbitrary filler, so decoding
    strips both.
    """

    PAD_BYTE = b'\0'
    ENCODING = 'utf-8'

    def __init__(self, value, width: int):
        """
        Initialize string field with validation.

        Args:
            value: Must be a string
            width: Fixed on-disk width in bytes

        Raises:
            TypeError: If value is not a string
            ValueError: If the encoded value does not fit in ``width``
        """
        if value is None:
            raise TypeError("StringField cannot accept None value")

        if not isinstance(value, str):
            raise TypeError(f"StringField requires str, got {type(value)}")

        if width < 0:
            raise ValueError(f"String width cannot be negative, got {width}")

        encoded = value.encode(self.ENCODING)
        if len(encoded) > width:
            raise ValueError(
                f"String too long: {len(encoded)} bytes > {width}")

        self.value = value
        self.width = width
        self._encoded = encoded

    def get_value(self) -> str:
        return self.value

    def get_type(self) -> FieldType:
        return FieldType.STRING

    def get_size(self) -> int:
        return self.width

    def serialize(self) -> bytes:
        return self._encoded.ljust(self.width, self.PAD_BYTE)

    @classmethod
    def deserialize(cls, data: bytes, width: int) -> 'StringField':
        """
        Create StringField from ``width`` padded bytes.

        Everything from the first NUL onwards is filler, as is trailing
        whitespace. Undecodable bytes are replaced rather than rejected, or
        dropped when the replacement would not fit in ``width``.
        """
        if len(data) != width:
            raise ValueError(
                f"StringField requires exactly {width} bytes, got {len(data)}")

        raw = bytes(data).split(cls.PAD_BYTE, 1)[0]
        value = raw.decode(cls.ENCODING, errors='replace').rstrip()
        if len(value.encode(cls.ENCODING)) > width:
            # replacement characters outgrew the field; drop the bad bytes instead
            value = raw.decode(cls.ENCODING, errors='ignore').rstrip()
        return cls(value, width)

    @staticmethod
    def encoded_length(value: str) -> int:
        """Number of bytes ``value`` needs on disk."""
        return len(value.encode(StringField.ENCODING))

    def __repr__(self) -> str:
        return f"StringField({self.value!r}, width={self.width})"
