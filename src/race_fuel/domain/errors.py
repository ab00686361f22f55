"""Domain errors raised by services and mapped to HTTP responses by the API."""

from enum import Enum
from uuid import UUID


class ValidationErrorKind(Enum):
    """Kinds of rejected input."""

    OUT_OF_BOUNDS_TIME = "out_of_bounds_time"
    NON_POSITIVE_SERVINGS = "non_positive_servings"
    DURATION_NOT_POSITIVE = "duration_not_positive"
    HOUR_OUT_OF_RANGE = "hour_out_of_range"
    INVALID_UNIT = "invalid_unit"
    INVALID_FIELD = "invalid_field"
    DUPLICATE = "duplicate"


class DomainError(Exception):
    """Base class for planner errors."""


class ValidationError(DomainError):
    """Input rejected before it reaches persistence or the core computations."""

    def __init__(self, kind: ValidationErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


class NotFoundError(DomainError):
    """A referenced entity does not exist."""

    def __init__(self, entity: str, entity_id: UUID | str) -> None:
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class PermissionDeniedError(DomainError):
    """The acting user does not own the entity."""


class UnitConversionError(DomainError):
    """Two quantities cannot be expressed in a common unit."""
