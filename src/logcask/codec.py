"""
Binary record codec for the log.

A record is laid out as ``crc | header | key | value``. The header carries the
timestamp, the encoded key and value sizes and a type tag for each, so every
record is self-describing and can be framed from its header alone. All
integers are little-endian.
"""

import struct
import zlib
from enum import IntEnum
from typing import NamedTuple, Optional, Union

from .const import (
    CRC_FORMAT,
    CRC_SIZE,
    FLOAT_FORMAT,
    HEADER_FORMAT,
    HEADER_SIZE,
    INTEGER_FORMAT,
    RECORD_OVERHEAD,
)
from .errors import UnsupportedTypeError

Scalar = Union[str, int, float]


class ValueType(IntEnum):
    """Type tags stored in the record header."""

    TEXT = 1
    INTEGER = 2
    FLOAT = 3


class Record(NamedTuple):
    timestamp: int
    key: Scalar
    value: Scalar


def resolve_type(obj: Scalar) -> ValueType:
    """Map a Python object onto its record type tag."""
    # bool is an int subclass but has no tag of its own
    if isinstance(obj, bool):
        raise UnsupportedTypeError(type(obj).__name__)
    if isinstance(obj, str):
        return ValueType.TEXT
    if isinstance(obj, int):
        return ValueType.INTEGER
    if isinstance(obj, float):
        return ValueType.FLOAT
    raise UnsupportedTypeError(type(obj).__name__)


def _encode_scalar(obj: Scalar, value_type: ValueType) -> bytes:
    if value_type is ValueType.TEXT:
        return obj.encode("utf-8", "surrogateescape")
    if value_type is ValueType.INTEGER:
        return struct.pack(INTEGER_FORMAT, obj)
    return struct.pack(FLOAT_FORMAT, obj)


def encode_scalar(obj: Scalar) -> tuple[ValueType, bytes]:
    """Return the type tag and payload bytes a key or value is stored as."""
    value_type = resolve_type(obj)
    return value_type, _encode_scalar(obj, value_type)


def _decode_scalar(data: bytes, tag: int) -> Scalar:
    if tag == ValueType.TEXT:
        return data.decode("utf-8", "surrogateescape")
    if tag == ValueType.INTEGER:
        return struct.unpack(INTEGER_FORMAT, data)[0]
    if tag == ValueType.FLOAT:
        return struct.unpack(FLOAT_FORMAT, data)[0]
    raise UnsupportedTypeError(f"type tag {tag}")


def encode_header(timestamp: int, key_size: int, value_size: int,
                  key_type: ValueType, value_type: ValueType) -> bytes:
    """Encode the fixed 16-byte header."""
    return struct.pack(HEADER_FORMAT, timestamp, key_size, value_size, key_type, value_type)


def decode_header(header_bytes: bytes) -> tuple[int, int, int, int, int]:
    """Decode header bytes into timestamp, key size, value size, key tag and value tag."""
    return struct.unpack(HEADER_FORMAT, header_bytes)


def record_size(key_size: int, value_size: int) -> int:
    return RECORD_OVERHEAD + key_size + value_size


def encode(timestamp: int, key: Scalar, value: Scalar) -> tuple[bytes, int]:
    """
    Encode a key-value pair into a checksummed record.

    Args:
        timestamp: Seconds since the epoch, stored as an unsigned 32-bit field.
        key: Text, integer or float key.
        value: Text, integer or float value.

    Returns:
        The record bytes and their total length.

    Raises:
        UnsupportedTypeError: If the key or value has no type tag.
    """
    key_type, key_bytes = encode_scalar(key)
    value_type, value_bytes = encode_scalar(value)

    header = encode_header(timestamp, len(key_bytes), len(value_bytes), key_type, value_type)
    data = header + key_bytes + value_bytes
    crc = struct.pack(CRC_FORMAT, zlib.crc32(data) & 0xffffffff)

    record = crc + data
    return record, len(record)


def decode(data: bytes) -> Optional[Record]:
    """
    Decode exactly one record.

    Returns None when the stored checksum does not match the record contents.

    Raises:
        UnsupportedTypeError: If the header carries an unknown type tag.
    """
    if len(data) < RECORD_OVERHEAD:
        return None

    stored_crc = struct.unpack(CRC_FORMAT, data[:CRC_SIZE])[0]
    rest = data[CRC_SIZE:]
    if stored_crc != zlib.crc32(rest) & 0xffffffff:
        return None

    timestamp, key_size, value_size, key_type, value_type = decode_header(rest[:HEADER_SIZE])
    key_end = HEADER_SIZE + key_size
    key = _decode_scalar(rest[HEADER_SIZE:key_end], key_type)
    value = _decode_scalar(rest[key_end:key_end + value_size], value_type)

    return Record(timestamp, key, value)
