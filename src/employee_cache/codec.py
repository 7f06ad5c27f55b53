"""Explicit encode/decode pair for cached employees.

Snapshots are UTF-8 JSON produced by the EmployeeSnapshot DTO, e.g.
``{"id":1,"name":"John Doe"}``.
"""

from pydantic import ValidationError

from employee_cache.dto import EmployeeSnapshot
from employee_cache.entities import EmployeeEntity
from employee_cache.errors import SerializationError
from employee_cache.protocols import Identifier


class EmployeeCodec:
    """EntityCodec implementation for EmployeeEntity.

    This class satisfies the EntityCodec protocol through structural
    typing - no explicit inheritance needed.
    """

    def identify(self, entity: EmployeeEntity) -> Identifier | None:
        return entity.id

    def encode(self, entity: EmployeeEntity) -> bytes:
        """Serialize a persisted employee.

        Raises:
            SerializationError: If the employee has no identifier yet
        """
        if entity.id is None:
            raise SerializationError("Cannot cache an employee without an identifier")
        snapshot = EmployeeSnapshot(id=entity.id, name=entity.name)
        return snapshot.model_dump_json().encode("utf-8")

    def decode(self, data: bytes) -> EmployeeEntity:
        """Deserialize a cached snapshot.

        Raises:
            SerializationError: If ``data`` is not a valid employee snapshot
        """
        try:
            snapshot = EmployeeSnapshot.model_validate_json(data)
        except ValidationError as e:
            raise SerializationError(
                "Invalid employee snapshot",
                details={"errors": e.error_count()},
            ) from e
        except ValueError as e:
            # Bytes that are not UTF-8 text
            raise SerializationError("Undecodable employee snapshot") from e
        return EmployeeEntity(id=snapshot.id, name=snapshot.name)
