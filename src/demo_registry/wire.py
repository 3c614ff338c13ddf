"""
Schema-free protobuf wire decoding.

Registries carry code tables but no message schemas, so payloads are decoded
from the wire format alone: field numbers, wire types and values. Decoding is
strict: anything that does not parse as a complete message raises
MessageDecodeError.
"""
from __future__ import annotations

import string
from typing import Dict, List, Tuple

from demo_models.values import DecodedValue, Record, Scalar, Sequence

from .exceptions import MessageDecodeError

# Protobuf wire types
WT_VARINT = 0
WT_FIXED64 = 1
WT_LEN = 2
WT_FIXED32 = 5

MAX_NESTING = 16
_PRINTABLE = set(string.printable) - set("\x0b\x0c")


def read_varint(buf: bytes, i: int) -> Tuple[int, int]:
    shift = 0
    out = 0
    while True:
        if i >= len(buf):
            raise MessageDecodeError("truncated varint")
        b = buf[i]
        i += 1
        out |= (b & 0x7F) << shift
        if (b & 0x80) == 0:
            return out, i
        shift += 7
        if shift > 63:
            raise MessageDecodeError("varint too long")


def _as_text(data: bytes):
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return None
    if all(ch in _PRINTABLE or ord(ch) > 127 for ch in text):
        return text
    return None


def _decode_length_delimited(data: bytes, depth: int) -> DecodedValue:
    if not data:
        return Scalar("")
    text = _as_text(data)
    if text is not None:
        return Scalar(text)
    if depth < MAX_NESTING:
        try:
            nested = decode_message(data, "", depth + 1)
        except MessageDecodeError:
            nested = None
        if nested is not None and nested.fields:
            return nested
    return Scalar(bytes(data))


def iter_wire_fields(buf: bytes, depth: int = 0):
    """Yield (field_number, value) for each field in `buf`."""
    i = 0
    end = len(buf)
    while i < end:
        tag, i = read_varint(buf, i)
        field_no = tag >> 3
        wire_type = tag & 0x7
        if field_no == 0:
            raise MessageDecodeError(f"invalid field number 0 at offset {i}")

        if wire_type == WT_VARINT:
            value, i = read_varint(buf, i)
            yield field_no, Scalar(value)
        elif wire_type == WT_FIXED64:
            if i + 8 > end:
                raise MessageDecodeError(f"truncated fixed64 in field {field_no}")
            yield field_no, Scalar(int.from_bytes(buf[i:i + 8], "little"))
            i += 8
        elif wire_type == WT_LEN:
            length, i = read_varint(buf, i)
            if i + length > end:
                raise MessageDecodeError(
                    f"field {field_no} length {length} exceeds {end - i} remaining bytes"
                )
            yield field_no, _decode_length_delimited(buf[i:i + length], depth)
            i += length
        elif wire_type == WT_FIXED32:
            if i + 4 > end:
                raise MessageDecodeError(f"truncated fixed32 in field {field_no}")
            yield field_no, Scalar(int.from_bytes(buf[i:i + 4], "little"))
            i += 4
        else:
            raise MessageDecodeError(f"unsupported wire type {wire_type} in field {field_no}")


def decode_message(data: bytes, type_name: str, depth: int = 0) -> Record:
    """Decode a whole message; repeated field numbers collapse into a Sequence."""
    grouped: Dict[int, List[DecodedValue]] = {}
    for field_no, value in iter_wire_fields(bytes(data), depth):
        grouped.setdefault(field_no, []).append(value)

    fields = []
    for field_no, values in grouped.items():
        fields.append((field_no, values[0] if len(values) == 1 else Sequence(values)))
    return Record(type_name=type_name, fields=tuple(fields))
