"""Snapshot DTO for cached employees."""

from pydantic import BaseModel, ConfigDict, Field


class EmployeeSnapshot(BaseModel):
    """Serialized employee as stored in the key-value store."""

    model_config = ConfigDict(frozen=True, extra="forbid", strict=True)

    id: int | str = Field(..., description="Identifier assigned by the system of record")
    name: str = Field(..., description="Employee name")
