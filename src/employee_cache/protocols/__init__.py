"""Protocol interfaces for swappable collaborators.

This package contains protocol definitions using structural typing.
The cache-aside service depends only on these:
- KeyValueStore: the fast, disposable cache (Redis, in-memory, ...)
- RecordStore: the authoritative system of record (in-memory, SQL, Mongo, ...)
- EntityCodec: the explicit encode/decode pair for cached snapshots

Usage:
    ```python
    from employee_cache.protocols import KeyValueStore, RecordStore

    store: KeyValueStore = RedisKeyValueStore.create()
    store: KeyValueStore = InMemoryKeyValueStore()
    ```
"""

from .entity_codec import EntityCodec
from .key_value_store import KeyValueStore
from .record_store import Identifier, RecordStore

__all__ = [
    "EntityCodec",
    "Identifier",
    "KeyValueStore",
    "RecordStore",
]
