from dataclasses import dataclass
from typing import Optional

from .codec import Scalar, encode_scalar


@dataclass
class KeyEntry:
    offset: int
    length: int
    key: Scalar


class KeyDir(dict):
    """
    Maps each key to the location of its most recent record.

    Keys are stored under their type tag and encoded bytes, the same identity
    they have on disk. ``1`` and ``1.0`` are distinct keys, and a NaN key can
    be found again.
    """

    def __init__(self, *args, **kwargs):
        super().__init__()
        for key, value in dict(*args, **kwargs).items():
            self[key] = value

    def __setitem__(self, key: Scalar, value: KeyEntry) -> None:
        """Point a key at its most recent record."""
        super().__setitem__(encode_scalar(key), value)

    def __getitem__(self, key: Scalar) -> KeyEntry:
        """Get the location of the most recent record for a key."""
        return super().__getitem__(encode_scalar(key))

    def __contains__(self, key) -> bool:
        return super().__contains__(encode_scalar(key))

    def get(self, key: Scalar, default: Optional[KeyEntry] = None) -> Optional[KeyEntry]:
        return super().get(encode_scalar(key), default)
