import os
import time
from typing import BinaryIO, Optional

from .codec import Scalar, decode, decode_header, encode, record_size
from .const import CRC_SIZE, DEFAULT_PATH, HEADER_SIZE, RECORD_OVERHEAD
from .errors import CorruptLogError, StoreClosedError
from .keydir import KeyDir, KeyEntry
from .lockfile import LockFile
from .logging import get_logger

logger = get_logger(__name__)


class Logcask:
    """
    Append-only key-value store backed by a single log file.

    Every put appends a record to the log and points the in-memory key
    directory at it. Older records for the same key stay in the file.

    Args:
        path: Location of the log file, created if absent.
        replay: Rebuild the key directory from the existing log on open.
    """

    def __init__(self, path: str = DEFAULT_PATH, replay: bool = False):
        self.keydir = KeyDir()

        self.path = os.path.abspath(path)
        parent = os.path.dirname(self.path)
        if not os.path.exists(parent):
            os.makedirs(parent)

        self._lock = LockFile(self.path)
        self._lock.acquire()
        try:
            self._file: Optional[BinaryIO] = open(self.path, "ab+")
        except OSError:
            self._lock.release()
            raise
        self.write_cursor = os.path.getsize(self.path)
        self._corrupt_offset: Optional[int] = None

        if replay:
            try:
                self._replay()
            except Exception:
                self.close()
                raise

        logger.info("store_opened", path=self.path, size=self.write_cursor, keys=len(self.keydir))

    def _active_file(self) -> BinaryIO:
        if self._file is None:
            raise StoreClosedError(f"Store '{self.path}' is closed.")
        return self._file

    def _replay(self) -> None:
        """
        Rebuild the keydir by scanning the log from the start.

        A record that runs past the end of the file is a torn write: the file
        is truncated back to the last complete record so later appends stay
        reachable. A complete record with a bad checksum stops the scan and
        blocks further appends.
        """
        f = self._active_file()
        f.seek(0)
        offset = 0
        while offset < self.write_cursor:
            prelude = f.read(RECORD_OVERHEAD)
            if len(prelude) < RECORD_OVERHEAD:
                self._truncate_tail(offset)
                break

            _, key_size, value_size, _, _ = decode_header(prelude[CRC_SIZE:CRC_SIZE + HEADER_SIZE])
            length = record_size(key_size, value_size)
            if offset + length > self.write_cursor:
                self._truncate_tail(offset)
                break

            record = decode(prelude + f.read(length - RECORD_OVERHEAD))
            if record is None:
                logger.warning("replay_checksum_mismatch", path=self.path, offset=offset)
                self._corrupt_offset = offset
                break

            self.keydir[record.key] = KeyEntry(offset=offset, length=length, key=record.key)
            offset += length

        logger.info("replay_complete", path=self.path, keys=len(self.keydir), bytes_scanned=offset)

    def _truncate_tail(self, offset: int) -> None:
        logger.warning("replay_truncated_tail", path=self.path, offset=offset,
                       discarded=self.write_cursor - offset)
        self._file.truncate(offset)
        self.write_cursor = offset

    def put(self, key: Scalar, value: Scalar) -> None:
        """Store a key-value pair."""
        f = self._active_file()
        if self._corrupt_offset is not None:
            raise CorruptLogError(self.path, self._corrupt_offset)
        now = int(time.time())
        data, size = encode(now, key, value)

        f.write(data)
        f.flush()

        self.keydir[key] = KeyEntry(offset=self.write_cursor, length=size, key=key)
        self.write_cursor += size
        logger.debug("put", key=key, offset=self.keydir[key].offset, length=size)

    def get(self, key: Scalar) -> Optional[Scalar]:
        """Retrieve the value for a key, or None if it is missing or corrupt."""
        f = self._active_file()
        entry = self.keydir.get(key, None)
        if entry is None:
            return None

        f.seek(entry.offset)
        data = f.read(entry.length)
        if len(data) < entry.length:
            logger.warning("truncated_record", key=key, offset=entry.offset,
                           expected=entry.length, actual=len(data))
            return None

        record = decode(data)
        if record is None:
            logger.warning("checksum_mismatch", key=key, offset=entry.offset)
            return None

        logger.debug("get", key=key, offset=entry.offset, length=entry.length)
        return record.value

    def flush(self) -> None:
        """Push buffered writes to the operating system."""
        self._active_file().flush()

    def close(self) -> None:
        """Flush and close the log file, then release the lock."""
        if self._file is None:
            return
        try:
            self._file.flush()
            self._file.close()
        finally:
            self._file = None
            self._lock.release()
        logger.info("store_closed", path=self.path, size=self.write_cursor)

    @property
    def closed(self) -> bool:
        return self._file is None

    def __enter__(self) -> "Logcask":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
