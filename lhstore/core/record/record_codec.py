"""
Fixed-length record serialization.

A record is written as its 4-byte key, the three text fields padded to
the widths of the data file, then five 8-byte doubles. Every record of a
file therefore has the same length, which is what lets the index builder
and the query service compute offsets arithmetically.
"""
from typing import TYPE_CHECKING

from ..exceptions import TruncatedRecordError
from ..types import IntField, StringField, DoubleField, FieldType
from .field_widths import FieldWidths
from .record_layout import RecordLayout
from .solar_record import SolarRecord

if TYPE_CHECKING:
    from ...storage.disk import DiskManager


class RecordCodec:
    """Encodes and decodes SolarRecords for a given set of field widths."""

    @staticmethod
    def record_length(widths: FieldWidths) -> int:
        return RecordLayout(widths).get_size()

    @staticmethod
    def encode(record: SolarRecord, widths: FieldWidths) -> bytes:
        """
        Serialize ``record`` to exactly ``record_length(widths)`` bytes.

        Raises:
            ValueError: If a text field does not fit its width
            TypeError: If a field has the wrong type
        """
        layout = RecordLayout(widths)
        data = bytearray()
        for column in layout.columns:
            value = getattr(record, column.name)
            if column.field_type is FieldType.INT:
                field = IntField(value)
            elif column.field_type is FieldType.STRING:
                field = StringField(value, column.size)
            else:
                field = DoubleField(value)
            data.extend(field.serialize())
        return bytes(data)

    @staticmethod
    def decode(data: bytes, widths: FieldWidths) -> SolarRecord:
        """
        Deserialize one record from the start of ``data``.

        Bytes past the record length are ignored.

        Raises:
            TruncatedRecordError: If ``data`` is shorter than one record
        """
        layout = RecordLayout(widths)
        length = layout.get_size()
        if len(data) < length:
            raise TruncatedRecordError(
                f"Record needs {length} bytes, only {len(data)} available")

        values = {}
        offset = 0
        view = memoryview(data)
        for column in layout.columns:
            chunk = bytes(view[offset:offset + column.size])
            if column.field_type is FieldType.INT:
                values[column.name] = IntField.deserialize(chunk).get_value()
            elif column.field_type is FieldType.STRING:
                values[column.name] = StringField.deserialize(chunk, column.size).get_value()
            else:
                values[column.name] = DoubleField.deserialize(chunk).get_value()
            offset += column.size
        return SolarRecord(**values)

    @classmethod
    def read_from(cls, disk: 'DiskManager', offset: int, widths: FieldWidths) -> SolarRecord:
        """Read and decode the record starting at ``offset`` of an open file."""
        data = disk.read_at(offset, cls.record_length(widths))
        return cls.decode(data, widths)

    @classmethod
    def write_to(cls, disk: 'DiskManager', offset: int, record: SolarRecord,
                 widths: FieldWidths) -> int:
        """Encode ``record`` at ``offset``; returns the offset just past it."""
        data = cls.encode(record, widths)
        disk.write_at(offset, data)
        return offset + len(data)
