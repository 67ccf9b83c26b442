from dataclasses import dataclass


@dataclass
class SolarRecord:
    """One utility-scale solar plant, keyed by its EIA plant id."""
    eia_id: int
    project_name: str = ""
    solar_cod: str = ""
    state: str = ""
    latitude: float = 0.0
    longitude: float = 0.0
    avg_ghi: float = 0.0
    capacity_dc: float = 0.0
    capacity_ac: float = 0.0

    @property
    def key(self) -> int:
        return self.eia_id
