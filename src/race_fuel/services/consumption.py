"""Scheduling of food consumption within planning events."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol
from uuid import UUID

from race_fuel.domain.errors import NotFoundError, ValidationError, ValidationErrorKind
from race_fuel.domain.events import ConsumptionEvent, PlanningEvent
from race_fuel.services.validation import validate_servings, validate_time_offset

if TYPE_CHECKING:
    from race_fuel.services.events import EventRepository
    from race_fuel.services.food_items import FoodItemRepository

_logger = logging.getLogger(__name__)


class ConsumptionRepository(Protocol):
    """Persistence interface for scheduled consumption events."""

    def list_for_event(self, event_id: UUID) -> list[ConsumptionEvent]:
        """Return an event's consumption events in ascending time."""

    def get(self, instance_id: UUID) -> ConsumptionEvent | None:
        """Return a consumption event by id, if present."""

    def create(
        self,
        event_id: UUID,
        food_item_id: UUID,
        time_offset_seconds: int,
        servings: float,
    ) -> ConsumptionEvent:
        """Create a consumption event and return it."""

    def create_many(
        self, event_id: UUID, items: list[dict[str, object]]
    ) -> list[ConsumptionEvent]:
        """Create several consumption events for one event."""

    def update(self, instance_id: UUID, payload: dict[str, object]) -> ConsumptionEvent:
        """Update columns of a consumption event and return it."""

    def delete(self, instance_id: UUID) -> None:
        """Delete a consumption event."""

    def delete_for_event(self, event_id: UUID) -> None:
        """Delete every consumption event of an event."""


@dataclass
class ConsumptionService:
    """Application service for placing food items on an event timeline."""

    repository: ConsumptionRepository
    event_repository: "EventRepository"
    food_item_repository: "FoodItemRepository"

    def list_for_event(self, event_id: UUID) -> list[ConsumptionEvent]:
        """Return the event's scheduled items in ascending time."""
        self._event(event_id)
        return self.repository.list_for_event(event_id)

    def add(
        self,
        event_id: UUID,
        food_item_id: UUID,
        time_offset_seconds: int,
        servings: float = 1.0,
    ) -> ConsumptionEvent:
        """Schedule a food item at an elapsed time within the event."""
        event = self._event(event_id)
        self._require_food_item(food_item_id)
        validate_time_offset(time_offset_seconds, event.duration_seconds)
        validate_servings(servings)
        created = self.repository.create(
            event_id, food_item_id, time_offset_seconds, servings
        )
        _logger.info(
            "Scheduled food item %s in event %s at %ss",
            food_item_id,
            event_id,
            time_offset_seconds,
        )
        return created

    def update(
        self,
        instance_id: UUID,
        *,
        time_offset_seconds: int | None = None,
        servings: float | None = None,
    ) -> ConsumptionEvent:
        """Change the time and/or servings of a scheduled item."""
        payload: dict[str, object] = {}
        if servings is not None:
            validate_servings(servings)
            payload["servings"] = servings
        if time_offset_seconds is not None:
            payload["time_offset_seconds"] = time_offset_seconds
        if not payload:
            raise ValidationError(
                ValidationErrorKind.INVALID_FIELD,
                "At least one of time_offset_seconds or servings must be provided",
            )
        existing = self._instance(instance_id)
        if time_offset_seconds is not None:
            event = self._event(existing.event_id)
            validate_time_offset(time_offset_seconds, event.duration_seconds)
        updated = self.repository.update(instance_id, payload)
        _logger.info(
            "Updated food instance %s fields=%s", instance_id, ", ".join(payload)
        )
        return updated

    def reposition(
        self, instance_id: UUID, time_offset_seconds: int
    ) -> ConsumptionEvent:
        """Move a scheduled item to a new elapsed time."""
        return self.update(instance_id, time_offset_seconds=time_offset_seconds)

    def remove(self, instance_id: UUID) -> UUID:
        """Delete a scheduled item and return its id."""
        self._instance(instance_id)
        self.repository.delete(instance_id)
        _logger.info("Deleted food instance %s", instance_id)
        return instance_id

    def schedule_repeating(  # noqa: PLR0913
        self,
        event_id: UUID,
        food_item_id: UUID,
        start_seconds: int,
        interval_seconds: int,
        servings: float = 1.0,
        end_seconds: int | None = None,
    ) -> list[ConsumptionEvent]:
        """Schedule a food item every interval from start through the end.

        The end defaults to, and is capped at, the event duration. An item
        falling exactly on the end is included.
        """
        event = self._event(event_id)
        self._require_food_item(food_item_id)
        validate_time_offset(start_seconds, event.duration_seconds)
        validate_servings(servings)
        if interval_seconds <= 0:
            raise ValidationError(
                ValidationErrorKind.INVALID_FIELD,
                f"Interval must be positive, got {interval_seconds}s",
            )
        end = event.duration_seconds
        if end_seconds is not None:
            if end_seconds < start_seconds:
                raise ValidationError(
                    ValidationErrorKind.OUT_OF_BOUNDS_TIME,
                    f"End ({end_seconds}s) is before start ({start_seconds}s)",
                )
            end = min(end_seconds, event.duration_seconds)
        items = [
            {
                "food_item_id": str(food_item_id),
                "time_offset_seconds": time,
                "servings": servings,
            }
            for time in range(start_seconds, end + 1, interval_seconds)
        ]
        created = self.repository.create_many(event_id, items)
        _logger.info(
            "Scheduled %s repeats of food item %s in event %s every %ss",
            len(created),
            food_item_id,
            event_id,
            interval_seconds,
        )
        return created

    def _event(self, event_id: UUID) -> PlanningEvent:
        event = self.event_repository.get_event(event_id)
        if event is None:
            raise NotFoundError("Event", event_id)
        return event

    def _instance(self, instance_id: UUID) -> ConsumptionEvent:
        instance = self.repository.get(instance_id)
        if instance is None:
            raise NotFoundError("Food instance", instance_id)
        return instance

    def _require_food_item(self, food_item_id: UUID) -> None:
        if self.food_item_repository.get_item(food_item_id) is None:
            raise NotFoundError("Food item", food_item_id)
