"""Error taxonomy for the cache-aside accessor.

NotFound is not an error: a missing employee is reported as ``None``.

- StoreUnavailableError: the key-value store failed. Always absorbed by
  the accessor, never raised from a read.
- RecordUnavailableError: the system of record failed or timed out.
  Raised to the caller.
- SerializationError: a cached value could not be decoded. Treated as a
  cache miss by the accessor.
"""

from typing import Any


class EmployeeCacheError(Exception):
    """Base exception for the employee cache package."""

    def __init__(self, code: str, message: str, details: dict[str, Any] | None = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class StoreUnavailableError(EmployeeCacheError):
    """The key-value store could not be reached."""

    def __init__(self, message: str = "Key-value store unavailable", details: dict[str, Any] | None = None):
        super().__init__("STORE_UNAVAILABLE", message, details)


class RecordUnavailableError(EmployeeCacheError):
    """The system of record failed the operation."""

    def __init__(self, message: str = "System of record unavailable", details: dict[str, Any] | None = None):
        super().__init__("RECORD_UNAVAILABLE", message, details)


class SerializationError(EmployeeCacheError):
    """A cached snapshot could not be encoded or decoded."""

    def __init__(self, message: str = "Invalid cached snapshot", details: dict[str, Any] | None = None):
        super().__init__("SERIALIZATION_ERROR", message, details)
