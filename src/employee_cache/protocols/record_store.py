"""System-of-record protocol."""

from typing import Protocol, TypeVar, Union, runtime_checkable

Identifier = Union[int, str]

EntityT = TypeVar("EntityT")


@runtime_checkable
class RecordStore(Protocol[EntityT]):
    """Protocol for the authoritative store.

    The record store assigns identifiers to new entities on save and
    never reuses an identifier after deletion.
    """

    async def find_by_id(self, entity_id: Identifier) -> EntityT | None:
        """Load an entity, or None if it does not exist."""
        ...

    async def find_all(self) -> list[EntityT]:
        """Load every entity."""
        ...

    async def save(self, entity: EntityT) -> EntityT:
        """Create or update an entity and return the stored value."""
        ...

    async def delete_by_id(self, entity_id: Identifier) -> None:
        """Delete an entity. Deleting a missing entity is a no-op."""
        ...
