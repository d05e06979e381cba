from .logcask import Logcask
from .keydir import KeyDir, KeyEntry
from .codec import Record, ValueType, decode, encode
from .errors import (
    CorruptLogError,
    LogcaskError,
    StoreClosedError,
    StoreLockedError,
    UnsupportedTypeError
)
from .const import (
    DEFAULT_PATH,
    HEADER_FORMAT,
    HEADER_SIZE,
    RECORD_OVERHEAD
)

__all__ = [
    "Logcask",
    "KeyDir",
    "KeyEntry",
    "Record",
    "ValueType",
    "encode",
    "decode",
    "CorruptLogError",
    "LogcaskError",
    "StoreClosedError",
    "StoreLockedError",
    "UnsupportedTypeError",
    "DEFAULT_PATH",
    "HEADER_FORMAT",
    "HEADER_SIZE",
    "RECORD_OVERHEAD",
]
