from .field import Field
from .int_field import IntField
from .string_field import StringField
from .double_field import DoubleField

__all__ = ["Field", "IntField", "StringField", "DoubleField"]
