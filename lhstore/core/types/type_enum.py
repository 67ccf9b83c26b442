from enum import Enum
from typing import Optional


class FieldType(Enum):
    """
    Enum for field types.
    """
    INT = "int"
    STRING = "string"
    DOUBLE = "double"

    def get_length(self, width: Optional[int] = None) -> int:
        """
        Get the length of the field type in bytes.

        Strings are fixed-width per data file, so their length is the
        width the file was created with and must be passed in.
        """
        if self is FieldType.STRING:
            if width is None:
                raise ValueError("String fields need an explicit width")
            return width

        length_map = {
            FieldType.INT: 4,
            FieldType.DOUBLE: 8,
        }

        return length_map[self]
