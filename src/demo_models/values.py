"""
Decoded message values.

Registries return a tagged tree instead of arbitrary dicts: a Record holds
numbered fields, a Sequence holds repeated values and a Scalar wraps a leaf.
`to_plain` walks the tree exhaustively for JSON output.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Tuple, Union


@dataclass(frozen=True)
class Scalar:
    value: Union[int, float, str, bytes, bool]


@dataclass(frozen=True)
class Sequence:
    items: Tuple["DecodedValue", ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not isinstance(self.items, tuple):
            object.__setattr__(self, 'items', tuple(self.items))

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class Record:
    """A decoded message: its type name and (field_number, value) pairs in wire order."""
    type_name: str
    fields: Tuple[Tuple[int, "DecodedValue"], ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not isinstance(self.fields, tuple):
            object.__setattr__(self, 'fields', tuple(self.fields))

    def get(self, field_number: int, default=None):
        for number, value in self.fields:
            if number == field_number:
                return value
        return default

    @property
    def field_numbers(self) -> Tuple[int, ...]:
        return tuple(number for number, _ in self.fields)


DecodedValue = Union[Scalar, Sequence, Record]


def to_plain(value: DecodedValue) -> Any:
    """Convert a decoded value into JSON-compatible data. Bytes become hex strings."""
    if isinstance(value, Record):
        return {
            "type": value.type_name,
            "fields": {str(number): to_plain(item) for number, item in value.fields},
        }
    if isinstance(value, Sequence):
        return [to_plain(item) for item in value.items]
    if isinstance(value, Scalar):
        if isinstance(value.value, (bytes, bytearray)):
            return value.value.hex()
        return value.value
    raise TypeError(f"Not a decoded value: {type(value).__name__}")
