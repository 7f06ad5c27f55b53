"""Domain entities for internal representation.

These are pure frozen dataclasses used by services and repositories.
They are NOT the cache wire format - the snapshot DTOs in the dto
package are.
"""

from .employee import EmployeeEntity

__all__ = ["EmployeeEntity"]
