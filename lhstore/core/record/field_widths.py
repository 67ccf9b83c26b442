from dataclasses import dataclass
from typing import Iterable, TYPE_CHECKING

from ..types import StringField

if TYPE_CHECKING:
    from .solar_record import SolarRecord


@dataclass(frozen=True)
class FieldWidths:
    """
    Byte widths of the three fixed-width text fields of a data file.

    The widths are chosen once, when the data file is written, and stored
    in its header. Every reader derives record lengths and offsets from
    the stored values, never from live data.
    """
    name: int
    cod: int
    state: int

    def __post_init__(self):
        for label, width in (("name", self.name), ("cod", self.cod), ("state", self.state)):
            if width < 0:
                raise ValueError(f"Field width '{label}' cannot be negative, got {width}")

    @classmethod
    def fit(cls, records: Iterable['SolarRecord']) -> 'FieldWidths':
        """Smallest widths that hold every text field of ``records``."""
        name = cod = state = 0
        for record in records:
            name = max(name, StringField.encoded_length(record.project_name))
            cod = max(cod, StringField.encoded_length(record.solar_cod))
            state = max(state, StringField.encoded_length(record.state))
        return cls(name, cod, state)
