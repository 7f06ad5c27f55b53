"""In-memory system of record for employees."""

import asyncio
import itertools

from employee_cache.entities import EmployeeEntity
from employee_cache.protocols import Identifier


class InMemoryEmployeeRepository:
    """Authoritative employee store held in process memory.

    This class satisfies the RecordStore protocol through structural
    typing - no explicit inheritance needed.

    Identifiers are assigned from an increasing counter when an employee
    without an id is saved, and are never handed out again after a
    delete.
    """

    def __init__(
        self,
        employees: list[EmployeeEntity] | None = None,
        latency: float = 0.0,
    ) -> None:
        """Initialize the repository.

        Args:
            employees: Initial employees. Those without an id get one assigned.
            latency: Simulated I/O latency in seconds for every call.
        """
        self._records: dict[Identifier, EmployeeEntity] = {}
        self._ids = itertools.count(1)
        self._latency = latency

        for employee in employees or []:
            self._insert(employee)

    def _insert(self, employee: EmployeeEntity) -> EmployeeEntity:
        if employee.id is None:
            employee = employee.with_id(next(self._ids))
        elif isinstance(employee.id, int):
            # Keep the counter ahead of explicitly seeded ids
            self._ids = itertools.count(max(employee.id + 1, next(self._ids)))
        self._records[employee.id] = employee
        return employee

    async def _io(self) -> None:
        if self._latency:
            await asyncio.sleep(self._latency)

    async def find_by_id(self, entity_id: Identifier) -> EmployeeEntity | None:
        await self._io()
        return self._records.get(entity_id)

    async def find_all(self) -> list[EmployeeEntity]:
        await self._io()
        return list(self._records.values())

    async def save(self, entity: EmployeeEntity) -> EmployeeEntity:
        """Create or update an employee.

        Raises:
            ValueError: If ``entity`` carries an id that does not exist
        """
        await self._io()
        if entity.id is not None and entity.id not in self._records:
            raise ValueError(f"Employee {entity.id} does not exist")
        return self._insert(entity)

    async def delete_by_id(self, entity_id: Identifier) -> None:
        await self._io()
        self._records.pop(entity_id, None)

    def put(self, entity: EmployeeEntity) -> None:
        """Write a record directly, bypassing any cache in front of it.

        Raises:
            ValueError: If ``entity`` has no id
        """
        if entity.id is None:
            raise ValueError("put() needs an employee with an id")
        self._insert(entity)
