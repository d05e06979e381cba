import math
import struct
import zlib

import pytest
from logcask import RECORD_OVERHEAD, Record, UnsupportedTypeError, ValueType, decode, encode
from logcask.codec import encode_header, resolve_type


def build_record(timestamp, key_bytes, value_bytes, key_tag, value_tag):
    header = struct.pack("<LLLHH", timestamp, len(key_bytes), len(value_bytes), key_tag, value_tag)
    data = header + key_bytes + value_bytes
    return struct.pack("<L", zlib.crc32(data)) + data


@pytest.mark.parametrize("timestamp, key, value", [
    (0, "name", "Sai'd"),
    (1700000000, "age", 25),
    (1700000000, "pi", 3.141592653589793),
    (2**32 - 1, 42, "answer"),
    (1234567890, -7, -2.5),
    (1234567890, 1.5, -(2**63)),
    (1234567890, "max", 2**63 - 1),
    (1234567890, "", ""),
    (1234567890, "ключ", "値 🚀"),
])
def test_encode_decode(timestamp, key, value):
    data, size = encode(timestamp, key, value)
    assert size == len(data)

    record = decode(data)
    assert record == Record(timestamp, key, value)
    assert type(record.key) is type(key)
    assert type(record.value) is type(value)


def test_float_special_values():
    data, _ = encode(1, "inf", math.inf)
    assert decode(data).value == math.inf

    data, _ = encode(1, "nan", math.nan)
    assert math.isnan(decode(data).value)


def test_record_layout():
    data, size = encode(1700000000, "name", "Sai'd")
    assert size == RECORD_OVERHEAD + len("name") + len("Sai'd")

    crc, timestamp, key_size, value_size, key_type, value_type = struct.unpack("<LLLLHH", data[:20])
    assert crc == zlib.crc32(data[4:])
    assert timestamp == 1700000000
    assert (key_size, value_size) == (4, 5)
    assert (key_type, value_type) == (ValueType.TEXT, ValueType.TEXT)
    assert data[20:24] == b"name"
    assert data[24:] == b"Sai'd"


def test_numeric_payloads():
    data, size = encode(0, 25, 0.5)
    assert size == RECORD_OVERHEAD + 16

    key_type, value_type = struct.unpack("<HH", data[16:20])
    assert (key_type, value_type) == (ValueType.INTEGER, ValueType.FLOAT)
    assert data[20:28] == (25).to_bytes(8, "little", signed=True)
    assert data[28:36] == struct.pack("<d", 0.5)


def test_text_length_is_byte_length():
    data, size = encode(0, "k", "é")
    assert struct.unpack("<L", data[12:16])[0] == 2
    assert size == RECORD_OVERHEAD + 1 + 2


def test_encode_header_size():
    assert len(encode_header(1, 2, 3, ValueType.TEXT, ValueType.FLOAT)) == 16


def test_every_single_bit_flip_is_detected():
    data, size = encode(1700000000, "key", 123)
    for bit in range(size * 8):
        corrupted = bytearray(data)
        corrupted[bit // 8] ^= 1 << (bit % 8)
        assert decode(bytes(corrupted)) is None


def test_short_input_is_absent():
    assert decode(b"") is None
    assert decode(b"\x00" * (RECORD_OVERHEAD - 1)) is None


@pytest.mark.parametrize("value, type_name", [
    (None, "NoneType"),
    (b"bytes", "bytes"),
    ([1, 2, 3], "list"),
    ({"a": 1}, "dict"),
    (True, "bool"),
])
def test_unsupported_value_type(value, type_name):
    with pytest.raises(UnsupportedTypeError, match=type_name):
        encode(0, "key", value)
    with pytest.raises(UnsupportedTypeError, match=type_name):
        encode(0, value, "value")


def test_unsupported_type_is_a_type_error():
    with pytest.raises(TypeError):
        resolve_type(object())


@pytest.mark.parametrize("key_tag, value_tag", [(9, 1), (1, 0), (1, 4)])
def test_unknown_type_tag(key_tag, value_tag):
    data = build_record(0, b"k", b"v", key_tag, value_tag)
    with pytest.raises(UnsupportedTypeError, match="type tag"):
        decode(data)


def test_invalid_utf8_is_carried_through():
    data = build_record(7, b"k\xff", b"\xc3(", ValueType.TEXT, ValueType.TEXT)
    record = decode(data)
    assert record.timestamp == 7

    reencoded, _ = encode(record.timestamp, record.key, record.value)
    assert reencoded == data
