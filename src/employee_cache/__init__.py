"""Employee Cache - cache-aside access to employees over a key-value store.

This package provides a layered architecture for a fronting cache:

Layers:
    - protocols: Interface contracts (KeyValueStore, RecordStore, EntityCodec)
    - repositories: Data access implementations
    - services: Cache-aside business logic
    - dto: Cache wire format (snapshots)
    - entities: Domain models (internal)

Usage:
    ```python
    from employee_cache import CacheAsideService, EmployeeCodec, RedisKeyValueStore

    service = CacheAsideService.create(
        store=RedisKeyValueStore.create(),
        record_store=repository,
        codec=EmployeeCodec(),
    )
    employee = await service.read(1)
    ```
"""

from employee_cache.codec import EmployeeCodec
from employee_cache.config import get_redis_client, settings
from employee_cache.dto import EmployeeSnapshot
from employee_cache.entities import EmployeeEntity
from employee_cache.errors import (
    EmployeeCacheError,
    RecordUnavailableError,
    SerializationError,
    StoreUnavailableError,
)
from employee_cache.logging_config import get_logger, setup_logging
from employee_cache.protocols import EntityCodec, KeyValueStore, RecordStore
from employee_cache.repositories import (
    InMemoryEmployeeRepository,
    InMemoryKeyValueStore,
    RedisKeyValueStore,
)
from employee_cache.services import CacheAsideService

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    "setup_logging",
    "get_logger",
    # Errors
    "EmployeeCacheError",
    "StoreUnavailableError",
    "RecordUnavailableError",
    "SerializationError",
    # Protocols (interfaces)
    "KeyValueStore",
    "RecordStore",
    "EntityCodec",
    # Services (business logic)
    "CacheAsideService",
    # Repositories (data access)
    "RedisKeyValueStore",
    "InMemoryKeyValueStore",
    "InMemoryEmployeeRepository",
    # Codec, entities and DTOs
    "EmployeeCodec",
    "EmployeeEntity",
    "EmployeeSnapshot",
]
