"""Service layer for business logic.

Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Caller -> Service -> KeyValueStore / RecordStore
              (Cache-aside) -> (Data Access)

Usage:
    ```python
    from employee_cache.services import CacheAsideService

    service = CacheAsideService.create(store=store, record_store=repo, codec=codec)
    ```
"""

from .cache_aside_service import CacheAsideService

__all__ = [
    "CacheAsideService",
]
