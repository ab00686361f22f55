"""Input checks applied before data reaches persistence or the core."""

import logging
from collections.abc import Iterable
from uuid import UUID

from race_fuel.domain.errors import ValidationError, ValidationErrorKind
from race_fuel.domain.units import Unit, units_compatible

_logger = logging.getLogger(__name__)


def validate_duration(duration_seconds: int) -> None:
    """Reject event durations that are not positive."""
    if duration_seconds <= 0:
        raise _rejected(
            ValidationErrorKind.DURATION_NOT_POSITIVE,
            f"Event duration must be positive, got {duration_seconds}s",
        )


def validate_time_offset(time_offset_seconds: int, duration_seconds: int) -> None:
    """Reject elapsed times outside 0..duration (inclusive)."""
    if time_offset_seconds < 0:
        raise _rejected(
            ValidationErrorKind.OUT_OF_BOUNDS_TIME,
            "Time offset cannot be negative",
        )
    if time_offset_seconds > duration_seconds:
        raise _rejected(
            ValidationErrorKind.OUT_OF_BOUNDS_TIME,
            f"Time offset ({time_offset_seconds}s) cannot exceed "
            f"event duration ({duration_seconds}s)",
        )


def validate_servings(servings: float) -> None:
    """Reject zero or negative servings."""
    if servings <= 0:
        raise _rejected(
            ValidationErrorKind.NON_POSITIVE_SERVINGS,
            f"Servings must be a positive number, got {servings}",
        )


def validate_goal_hour(hour: int, hour_count: int) -> None:
    """Reject hourly overrides outside the event's hour buckets."""
    if not 0 <= hour < hour_count:
        raise _rejected(
            ValidationErrorKind.HOUR_OUT_OF_RANGE,
            f"Hour {hour} is outside 0..{hour_count - 1}",
        )


def parse_unit(raw: str) -> Unit:
    """Parse a unit string or raise a validation error."""
    try:
        return Unit.parse(raw)
    except ValueError as exc:
        raise _rejected(
            ValidationErrorKind.INVALID_UNIT, f"Unknown unit: {raw!r}"
        ) from exc


def parse_nutrient_id(raw: object) -> UUID:
    """Parse a nutrient reference or raise a validation error."""
    try:
        return UUID(str(raw))
    except ValueError as exc:
        raise _rejected(
            ValidationErrorKind.INVALID_FIELD, f"Invalid nutrient_id: {raw!r}"
        ) from exc


def validate_unit_compatible(
    nutrient_id: object, unit: Unit, existing: Iterable[Unit]
) -> None:
    """Reject a unit that cannot convert to the units already used for a nutrient."""
    for other in existing:
        if not units_compatible(unit, other):
            raise _rejected(
                ValidationErrorKind.INVALID_UNIT,
                f"Unit {unit} for nutrient {nutrient_id} does not convert to {other}",
            )


def _rejected(kind: ValidationErrorKind, message: str) -> ValidationError:
    _logger.warning("Rejected input (%s): %s", kind.value, message)
    return ValidationError(kind, message)
