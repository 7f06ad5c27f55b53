"""Data Transfer Objects for the cache wire format.

These Pydantic models define what is written to the key-value store.
Internal logic should use entities from the entities package.
"""

from .employee import EmployeeSnapshot

__all__ = ["EmployeeSnapshot"]
