import pytest
import struct
from lhstore.core.exceptions import TruncatedRecordError
from lhstore.core.record import FieldWidths, RecordCodec, RecordLayout, SolarRecord
from lhstore.core.types import FieldType


class TestFieldWidths:
    """Tests for FieldWidths."""

    def test_fit_uses_longest_encoded_value(self, record_factory):
        records = [
            record_factory(1, project_name="Short", solar_cod="2020-01", state="CA"),
            record_factory(2, project_name="A much longer name", solar_cod="", state="NM"),
            record_factory(3, project_name="Ünïcode", solar_cod="2019", state="AZ"),
        ]
        widths = FieldWidths.fit(records)
        assert widths == FieldWidths(18, 7, 2)

    def test_fit_empty_batch(self):
        assert FieldWidths.fit([]) == FieldWidths(0, 0, 0)

    def test_negative_width_raises_error(self):
        with pytest.raises(ValueError, match="cannot be negative"):
            FieldWidths(-1, 2, 2)


class TestRecordLayout:
    """Tests for RecordLayout."""

    def test_field_order_and_types(self):
        layout = RecordLayout(FieldWidths(10, 7, 2))
        names = [c.name for c in layout.columns]
        assert names == ["eia_id", "project_name", "solar_cod", "state",
                         "latitude", "longitude", "avg_ghi", "capacity_dc", "capacity_ac"]
        assert layout.columns[0].field_type == FieldType.INT
        assert [c.field_type for c in layout.columns[1:4]] == [FieldType.STRING] * 3
        assert [c.field_type for c in layout.columns[4:]] == [FieldType.DOUBLE] * 5
        assert layout.num_fields() == 9

    def test_get_size(self):
        assert RecordLayout(FieldWidths(10, 7, 2)).get_size() == 4 + 10 + 7 + 2 + 40

    def test_offset_of(self):
        layout = RecordLayout(FieldWidths(10, 7, 2))
        assert layout.offset_of("eia_id") == 0
        assert layout.offset_of("project_name") == 4
        assert layout.offset_of("latitude") == 23
        assert layout.offset_of("capacity_ac") == 23 + 32

    def test_offset_of_unknown_field(self):
        with pytest.raises(ValueError, match="not found"):
            RecordLayout(FieldWidths(1, 1, 1)).offset_of("nope")

    def test_string_type_needs_width(self):
        with pytest.raises(ValueError, match="explicit width"):
            FieldType.STRING.get_length()


class TestRecordCodec:
    """Tests for RecordCodec encode/decode."""

    def setup_method(self):
        self.widths = FieldWidths(20, 7, 2)
        self.record = SolarRecord(
            eia_id=60372,
            project_name="Sunny Acres",
            solar_cod="2021-03",
            state="TX",
            latitude=31.25,
            longitude=-99.5,
            avg_ghi=5.17,
            capacity_dc=130.0,
            capacity_ac=100.0,
        )

    def test_record_length(self):
        assert RecordCodec.record_length(self.widths) == 4 + 20 + 7 + 2 + 8 * 5

    def test_encode_length(self):
        data = RecordCodec.encode(self.record, self.widths)
        assert len(data) == RecordCodec.record_length(self.widths)

    def test_encode_layout(self):
        """Test the exact byte layout of an encoded record."""
        data = RecordCodec.encode(self.record, self.widths)
        assert data[:4] == struct.pack('>i', 60372)
        assert data[4:24] == b"Sunny Acres" + b"\x00" * 9
        assert data[24:31] == b"2021-03"
        assert data[31:33] == b"TX"
        doubles = struct.unpack('>5d', data[33:])
        assert doubles == (31.25, -99.5, 5.17, 130.0, 100.0)

    def test_decode_inverts_encode(self):
        data = RecordCodec.encode(self.record, self.widths)
        assert RecordCodec.decode(data, self.widths) == self.record

    def test_decode_trims_padding(self):
        record = SolarRecord(1, "x", "", "NV", 0.0, 0.0, 0.0, 0.0, 0.0)
        decoded = RecordCodec.decode(RecordCodec.encode(record, self.widths), self.widths)
        assert decoded.project_name == "x"
        assert decoded.solar_cod == ""
        assert decoded.state == "NV"

    def test_decode_ignores_trailing_bytes(self):
        data = RecordCodec.encode(self.record, self.widths) + b"next record"
        assert RecordCodec.decode(data, self.widths) == self.record

    def test_decode_truncated_raises_error(self):
        data = RecordCodec.encode(self.record, self.widths)
        with pytest.raises(TruncatedRecordError, match="needs 73 bytes, only 72"):
            RecordCodec.decode(data[:-1], self.widths)

    def test_encode_text_too_wide_raises_error(self):
        with pytest.raises(ValueError, match="String too long"):
            RecordCodec.encode(self.record, FieldWidths(5, 7, 2))

    def test_encode_key_out_of_range_raises_error(self):
        record = SolarRecord(2**31)
        with pytest.raises(ValueError, match="out of range"):
            RecordCodec.encode(record, FieldWidths(0, 0, 0))
