"""
Tests for the employee snapshot codec.
"""

import json

import pytest

from employee_cache.codec import EmployeeCodec
from employee_cache.entities import EmployeeEntity
from employee_cache.errors import SerializationError


@pytest.fixture
def codec():
    return EmployeeCodec()


def test_encode_writes_json_snapshot(codec):
    data = codec.encode(EmployeeEntity(id=1, name="John Doe"))

    assert json.loads(data) == {"id": 1, "name": "John Doe"}


@pytest.mark.parametrize(
    "employee",
    [EmployeeEntity(id=1, name="John Doe"), EmployeeEntity(id="64f0c2", name="Jane Doe")],
)
def test_decode_restores_encoded_employee(codec, employee):
    assert codec.decode(codec.encode(employee)) == employee


def test_encode_rejects_unsaved_employee(codec):
    with pytest.raises(SerializationError):
        codec.encode(EmployeeEntity(name="John Doe"))


@pytest.mark.parametrize(
    "data",
    [
        b"{not json",
        b'{"id": 1}',
        b'{"id": 1, "name": "John Doe", "salary": 10}',
        b'{"id": null, "name": "John Doe"}',
        b"\xff\xfe",
    ],
)
def test_decode_rejects_invalid_snapshot(codec, data):
    with pytest.raises(SerializationError) as excinfo:
        codec.decode(data)

    assert excinfo.value.code == "SERIALIZATION_ERROR"


def test_identify_returns_entity_id(codec):
    assert codec.identify(EmployeeEntity(id=7, name="John Doe")) == 7
    assert codec.identify(EmployeeEntity(name="John Doe")) is None
