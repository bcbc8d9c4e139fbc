"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.

Store failures surface as one of two typed errors. Each carries a fixed,
human-readable message per operation (e.g. "Failed to create note"),
never the underlying driver error; the cause is chained and logged.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a resource cannot be found."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class StoreError(ApplicationError):
    """Base for failures at the note store boundary."""

    def __init__(self, message: str = "Store error", code: str = "SYS_STORE_ERROR") -> None:
        super().__init__(message, code=code)


class StoreReadError(StoreError):
    """Raised when fetching notes from the store fails."""

    def __init__(self, message: str = "Failed to fetch notes") -> None:
        super().__init__(message, code="STORE_READ_FAILED")


class StoreWriteError(StoreError):
    """Raised when creating, updating, or deleting a note fails."""

    def __init__(self, message: str = "Failed to write note") -> None:
        super().__init__(message, code="STORE_WRITE_FAILED")
