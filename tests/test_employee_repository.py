"""
Tests for the in-memory employee system of record.
"""

import pytest

from employee_cache.entities import EmployeeEntity
from employee_cache.protocols import RecordStore
from employee_cache.repositories import InMemoryEmployeeRepository


@pytest.mark.asyncio
async def test_save_assigns_identifier():
    repository = InMemoryEmployeeRepository()

    first = await repository.save(EmployeeEntity(name="John Doe"))
    second = await repository.save(EmployeeEntity(name="Jane Doe"))

    assert first == EmployeeEntity(id=1, name="John Doe")
    assert second.id == 2
    assert await repository.find_by_id(1) == first


@pytest.mark.asyncio
async def test_save_updates_existing_employee():
    repository = InMemoryEmployeeRepository([EmployeeEntity(name="John Doe")])

    updated = await repository.save(EmployeeEntity(id=1, name="Jane Doe"))

    assert await repository.find_by_id(1) == updated
    assert len(await repository.find_all()) == 1


@pytest.mark.asyncio
async def test_identifiers_are_not_reused_after_delete():
    repository = InMemoryEmployeeRepository([EmployeeEntity(name="John Doe")])

    await repository.delete_by_id(1)
    created = await repository.save(EmployeeEntity(name="Jane Doe"))

    assert created.id == 2
    assert await repository.find_by_id(1) is None


@pytest.mark.asyncio
async def test_seeded_identifiers_advance_the_counter():
    repository = InMemoryEmployeeRepository([EmployeeEntity(id=10, name="John Doe")])

    created = await repository.save(EmployeeEntity(name="Jane Doe"))

    assert created.id == 11


@pytest.mark.asyncio
async def test_save_with_unknown_identifier_is_rejected():
    repository = InMemoryEmployeeRepository()

    with pytest.raises(ValueError):
        await repository.save(EmployeeEntity(id=5, name="John Doe"))


@pytest.mark.asyncio
async def test_delete_missing_employee_is_noop():
    repository = InMemoryEmployeeRepository()

    await repository.delete_by_id(404)

    assert await repository.find_all() == []


def test_satisfies_record_store_protocol():
    assert isinstance(InMemoryEmployeeRepository(), RecordStore)


@pytest.mark.asyncio
async def test_put_keeps_identifier_counter_ahead():
    repository = InMemoryEmployeeRepository([EmployeeEntity(name="John Doe")])

    repository.put(EmployeeEntity(id=2, name="Seeded"))
    created = await repository.save(EmployeeEntity(name="New"))

    assert created.id == 3
    assert await repository.find_by_id(2) == EmployeeEntity(id=2, name="Seeded")


def test_put_requires_identifier():
    repository = InMemoryEmployeeRepository()

    with pytest.raises(ValueError):
        repository.put(EmployeeEntity(name="John Doe"))
