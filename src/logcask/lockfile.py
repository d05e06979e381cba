from filelock import FileLock, Timeout

from .const import LOCK_SUFFIX
from .errors import StoreLockedError


class LockFile:
    """Exclusive ownership of a log file, held from open until close."""

    def __init__(self, path: str):
        self.path = path
        self._lock_file = path + LOCK_SUFFIX
        self._lock = FileLock(self._lock_file)

    @property
    def is_locked(self) -> bool:
        return self._lock.is_locked

    def acquire(self) -> None:
        try:
            self._lock.acquire(timeout=0)
        except Timeout:
            raise StoreLockedError(self.path) from None

    def release(self) -> None:
        if self._lock.is_locked:
            self._lock.release()

    def __enter__(self):
        self.acquire()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.release()
        return False
