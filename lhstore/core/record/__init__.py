from .field_widths import FieldWidths
from .record_layout import RecordLayout, ColumnSpec
from .solar_record import SolarRecord
from .record_codec import RecordCodec

__all__ = ["FieldWidths", "RecordLayout", "ColumnSpec", "SolarRecord", "RecordCodec"]
