import pytest
from lhstore.core.record import SolarRecord
from lhstore.storage.data_file import DataFileWriter


def make_record(eia_id: int, **overrides) -> SolarRecord:
    values = dict(
        project_name=f"Plant {eia_id}",
        solar_cod="2021-06",
        state="AZ",
        latitude=33.4 + eia_id / 1000,
        longitude=-112.0 - eia_id / 1000,
        avg_ghi=5.5,
        capacity_dc=float(eia_id) * 1.3,
        capacity_ac=float(eia_id),
    )
    values.update(overrides)
    return SolarRecord(eia_id, **values)


@pytest.fixture
def record_factory():
    """Builds SolarRecords with plausible, key-derived field values."""
    return make_record


@pytest.fixture
def data_file_factory(tmp_path):
    """Writes a data file for the given keys and returns (path, records)."""
    def _write(keys, name="plants.bin", sort=True, **overrides):
        records = [make_record(k, **overrides) for k in keys]
        path = tmp_path / name
        DataFileWriter.write(path, records, sort=sort)
        if sort:
            records.sort(key=lambda r: r.eia_id)
        return path, records
    return _write
