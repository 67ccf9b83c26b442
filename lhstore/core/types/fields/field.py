from abc import ABC, abstractmethod
from typing import TypeVar, Generic
from ..type_enum import FieldType

T = TypeVar('T')


class Field(ABC, Generic[T]):
    """
    Abstract base class for all field types in a record.

    A field represents a single value in a fixed-length record. Each field has:
    - A type (int, string, double)
    - A value
    - A fixed on-disk size and methods for serialization

    All multi-byte values are stored big-endian so files stay readable
    by tools that use network byte order.
    """

    @abstractmethod
    def get_value(self) -> T:
        """
        Get the value stored in this field.

        Returns:
            The value of the field with its appropriate type
        """
        pass

    @abstractmethod
    def serialize(self) -> bytes:
        """
        Convert this field to bytes for storage on disk.
        """
        pass

    @abstractmethod
    def get_size(self) -> int:
        """
        Get the size in bytes this field occupies on disk.
        """
        pass

    @abstractmethod
    def get_type(self) -> FieldType:
        """
        Return the type of this field.
        """
        pass

    def __str__(self) -> str:
        return str(self.get_value())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.get_value()!r})"

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.get_value() == other.get_value()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.get_value()))
