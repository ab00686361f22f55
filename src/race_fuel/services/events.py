"""Planning event services."""

import logging
import math
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from race_fuel.domain.errors import (
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
    ValidationErrorKind,
)
from race_fuel.domain.events import SECONDS_PER_HOUR, EventType, PlanningEvent
from race_fuel.services.consumption import ConsumptionRepository
from race_fuel.services.goals import GoalRepository
from race_fuel.services.validation import validate_duration

_logger = logging.getLogger(__name__)

COPY_SUFFIX = " - copy"


class EventRepository(Protocol):
    """Persistence interface for planning events."""

    def list_events(self, user_id: UUID) -> list[PlanningEvent]:
        """Return a user's events, newest first."""

    def get_event(self, event_id: UUID) -> PlanningEvent | None:
        """Return an event by id, if present."""

    def create_event(
        self,
        user_id: UUID,
        name: str,
        event_type: EventType,
        duration_seconds: int,
    ) -> PlanningEvent:
        """Create an event and return it."""

    def update_event(self, event_id: UUID, payload: dict[str, object]) -> PlanningEvent:
        """Update event columns and return the event."""

    def delete_event(self, event_id: UUID) -> None:
        """Delete an event row."""


@dataclass
class EventService:
    """Application service for planning events."""

    repository: EventRepository
    consumption_repository: ConsumptionRepository
    goal_repository: GoalRepository

    def list_events(self, user_id: UUID) -> list[PlanningEvent]:
        """Return the user's events, newest first."""
        return self.repository.list_events(user_id)

    def get_event(self, event_id: UUID) -> PlanningEvent:
        """Return an event or raise when it does not exist."""
        event = self.repository.get_event(event_id)
        if event is None:
            raise NotFoundError("Event", event_id)
        return event

    def create_event(
        self,
        user_id: UUID,
        name: str,
        event_type: EventType,
        duration_seconds: int,
    ) -> PlanningEvent:
        """Create a planning event."""
        validate_duration(duration_seconds)
        _require_name(name)
        event = self.repository.create_event(
            user_id, name.strip(), event_type, duration_seconds
        )
        _logger.info("Created event %s (%s)", event.id, event.event_type.value)
        return event

    def update_event(
        self,
        event_id: UUID,
        user_id: UUID,
        *,
        name: str | None = None,
        event_type: EventType | None = None,
        duration_seconds: int | None = None,
    ) -> PlanningEvent:
        """Update the provided fields of an event owned by the user.

        A shorter duration must still cover every scheduled item and every
        hourly goal override.
        """
        event = self._owned(event_id, user_id)
        payload: dict[str, object] = {}
        if name is not None:
            _require_name(name)
            payload["name"] = name.strip()
        if event_type is not None:
            payload["event_type"] = event_type.value
        if duration_seconds is not None:
            validate_duration(duration_seconds)
            latest = max(
                (
                    item.time_offset_seconds
                    for item in self.consumption_repository.list_for_event(event.id)
                ),
                default=0,
            )
            if latest > duration_seconds:
                raise ValidationError(
                    ValidationErrorKind.OUT_OF_BOUNDS_TIME,
                    f"Duration {duration_seconds}s is shorter than a scheduled "
                    f"item at {latest}s",
                )
            hour_count = math.ceil(duration_seconds / SECONDS_PER_HOUR)
            stranded = sorted(
                goal.hour
                for goal in self.goal_repository.list_hourly_for_event(event.id)
                if goal.hour is not None and goal.hour >= hour_count
            )
            if stranded:
                raise ValidationError(
                    ValidationErrorKind.HOUR_OUT_OF_RANGE,
                    f"Duration {duration_seconds}s drops hour {stranded[-1]}, "
                    "which still has an hourly goal",
                )
            payload["duration_seconds"] = duration_seconds
        if not payload:
            raise ValidationError(
                ValidationErrorKind.INVALID_FIELD,
                "At least one of name, event_type or duration_seconds is required",
            )
        updated = self.repository.update_event(event_id, payload)
        _logger.info("Updated event %s fields=%s", event_id, ", ".join(payload))
        return updated

    def duplicate_event(self, event_id: UUID) -> tuple[PlanningEvent, int]:
        """Copy an event and its scheduled items; return the copy and item count."""
        original = self.get_event(event_id)
        copy = self.repository.create_event(
            original.user_id,
            f"{original.name}{COPY_SUFFIX}",
            original.event_type,
            original.duration_seconds,
        )
        items = self.consumption_repository.list_for_event(original.id)
        if items:
            self.consumption_repository.create_many(
                copy.id,
                [
                    {
                        "food_item_id": str(item.food_item_id),
                        "time_offset_seconds": item.time_offset_seconds,
                        "servings": item.servings,
                    }
                    for item in items
                ],
            )
        _logger.info(
            "Duplicated event %s as %s with %s items", original.id, copy.id, len(items)
        )
        return copy, len(items)

    def delete_event(self, event_id: UUID, user_id: UUID) -> None:
        """Delete an owned event with its scheduled items and goals."""
        self._owned(event_id, user_id)
        self.consumption_repository.delete_for_event(event_id)
        self.goal_repository.delete_for_event(event_id)
        self.repository.delete_event(event_id)
        _logger.info("Deleted event %s", event_id)

    def _owned(self, event_id: UUID, user_id: UUID) -> PlanningEvent:
        event = self.get_event(event_id)
        if event.user_id != user_id:
            raise PermissionDeniedError(
                "You do not have permission to modify this event"
            )
        return event


def _require_name(name: str) -> None:
    if not name.strip():
        raise ValidationError(ValidationErrorKind.INVALID_FIELD, "Name is required")
