from .fields import (
    Field,
    IntField,
    StringField,
    DoubleField,
)
from .type_enum import FieldType

__all__ = [
    'Field',
    'IntField',
    'StringField',
    'DoubleField',
    'FieldType',
]
