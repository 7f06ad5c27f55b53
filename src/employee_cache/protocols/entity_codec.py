"""Entity codec protocol.

Cached values are explicit snapshots: every entity type cached by the
service comes with an encode/decode pair satisfying
``decode(encode(e)) == e``.
"""

from typing import Protocol, TypeVar, runtime_checkable

from .record_store import Identifier

EntityT = TypeVar("EntityT")


@runtime_checkable
class EntityCodec(Protocol[EntityT]):
    """Protocol for snapshot serializers."""

    def identify(self, entity: EntityT) -> Identifier | None:
        """Return the identifier of ``entity`` (None if not yet persisted)."""
        ...

    def encode(self, entity: EntityT) -> bytes:
        """Serialize a persisted entity.

        Raises:
            SerializationError: If the entity cannot be serialized
        """
        ...

    def decode(self, data: bytes) -> EntityT:
        """Deserialize a cached snapshot.

        Raises:
            SerializationError: If ``data`` is not a valid snapshot
        """
        ...
