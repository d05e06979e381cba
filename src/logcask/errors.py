class LogcaskError(Exception):
    """Base class for logcask errors."""


class UnsupportedTypeError(LogcaskError, TypeError):
    """Raised for a key or value type the record format cannot carry."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f"Unsupported type: {type_name}")


class StoreLockedError(LogcaskError):
    """Raised when another store instance already owns the log file."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Log file '{path}' is locked by another store.")


class StoreClosedError(LogcaskError):
    """Raised when operating on a store that has been closed."""


class CorruptLogError(LogcaskError):
    """Raised when appending to a log whose records stop being readable at ``offset``."""

    def __init__(self, path: str, offset: int):
        self.path = path
        self.offset = offset
        super().__init__(
            f"Log file '{path}' has a corrupt record at offset {offset}; "
            f"records appended after it could not be replayed."
        )
