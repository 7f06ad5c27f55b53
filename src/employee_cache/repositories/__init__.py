"""Repository layer for data access.

This layer holds the concrete collaborators of the cache-aside service:
- key-value stores (Redis, in-memory)
- the employee system of record (in-memory)

The repositories are protocol-based (structural typing), not
inheritance-based. Any class implementing the required methods will
satisfy the protocol.
"""

from employee_cache.protocols import KeyValueStore, RecordStore

from .employee_repository import InMemoryEmployeeRepository
from .memory_store import InMemoryKeyValueStore
from .redis_repository import RedisKeyValueStore

__all__ = [
    "KeyValueStore",
    "RecordStore",
    "InMemoryEmployeeRepository",
    "InMemoryKeyValueStore",
    "RedisKeyValueStore",
]
