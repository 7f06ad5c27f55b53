"""Employee domain entity."""

from dataclasses import dataclass, replace

from employee_cache.protocols import Identifier


@dataclass(frozen=True)
class EmployeeEntity:
    """Domain entity for an employee.

    Entities are immutable and compared by value. Every save produces a
    new value under the same identifier.

    Attributes:
        name: The employee's name
        id: Identifier assigned by the system of record, None until created
    """

    name: str
    id: Identifier | None = None

    def with_id(self, entity_id: Identifier) -> "EmployeeEntity":
        """Return a copy carrying ``entity_id``."""
        return replace(self, id=entity_id)
