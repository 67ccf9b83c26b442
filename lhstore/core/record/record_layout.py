from dataclasses import dataclass
from typing import List

from ..types import FieldType
from .field_widths import FieldWidths


@dataclass(frozen=True)
class ColumnSpec:
    name: str
    field_type: FieldType
    size: int


class RecordLayout:
    """
    Physical layout of a fixed-length solar plant record.

    A RecordLayout defines:
    1. The order of the fields on disk
    2. The type and byte size of each field
    3. The byte offset of each field inside a record

    The order is fixed: the integer key, three padded text fields, then
    five doubles. Only the text widths vary between data files.
    """

    KEY_FIELD = "eia_id"
    TEXT_FIELDS = ("project_name", "solar_cod", "state")
    DOUBLE_FIELDS = ("latitude", "longitude", "avg_ghi",
                     "capacity_dc", "capacity_ac")

    def __init__(self, widths: FieldWidths):
        self.widths = widths
        text_widths = (widths.name, widths.cod, widths.state)

        columns = [ColumnSpec(self.KEY_FIELD, FieldType.INT, FieldType.INT.get_length())]
        for name, width in zip(self.TEXT_FIELDS, text_widths):
            columns.append(ColumnSpec(name, FieldType.STRING, FieldType.STRING.get_length(width)))
        for name in self.DOUBLE_FIELDS:
            columns.append(ColumnSpec(name, FieldType.DOUBLE, FieldType.DOUBLE.get_length()))
        self.columns: List[ColumnSpec] = columns

    def num_fields(self) -> int:
        return len(self.columns)

    def get_size(self) -> int:
        """
        Total size in bytes of one record with this layout.

        Equal to ``4 + name + cod + state + 8 * 5``.
        """
        return sum(column.size for column in self.columns)

    def offset_of(self, field_name: str) -> int:
        """Byte offset of ``field_name`` from the start of a record."""
        offset = 0
        for column in self.columns:
            if column.name == field_name:
                return offset
            offset += column.size
        raise ValueError(f"Field '{field_name}' not found in record layout")

    def __eq__(self, other: object) -> bool:
        return isinstance(other, RecordLayout) and self.widths == other.widths

    def __str__(self) -> str:
        parts = [f"{c.field_type.value}({c.name}:{c.size})" for c in self.columns]
        return f"RecordLayout({', '.join(parts)})"

    def __repr__(self) -> str:
        return self.__str__()
