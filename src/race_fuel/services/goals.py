"""Base and hourly nutrient goals for planning events."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol
from uuid import UUID

from race_fuel.domain.errors import NotFoundError, ValidationError, ValidationErrorKind
from race_fuel.domain.events import PlanningEvent
from race_fuel.domain.goals import EventGoals, NutrientGoal
from race_fuel.domain.units import Unit
from race_fuel.services.food_items import FoodItemRepository
from race_fuel.services.validation import (
    parse_nutrient_id,
    parse_unit,
    validate_goal_hour,
    validate_unit_compatible,
)

if TYPE_CHECKING:
    from race_fuel.services.events import EventRepository

_logger = logging.getLogger(__name__)


class GoalRepository(Protocol):
    """Persistence interface for event nutrient goals."""

    def list_base(self, user_id: UUID, event_id: UUID) -> list[NutrientGoal]:
        """Return the base goals a user set for an event."""

    def list_hourly(self, user_id: UUID, event_id: UUID) -> list[NutrientGoal]:
        """Return the hourly overrides a user set for an event."""

    def list_hourly_for_event(self, event_id: UUID) -> list[NutrientGoal]:
        """Return the hourly overrides every user set for an event."""

    def replace_base(
        self, user_id: UUID, event_id: UUID, goals: list[dict[str, object]]
    ) -> list[NutrientGoal]:
        """Delete and recreate the base goals of an event."""

    def replace_hourly(
        self, user_id: UUID, event_id: UUID, goals: list[dict[str, object]]
    ) -> list[NutrientGoal]:
        """Delete and recreate the hourly overrides of an event."""

    def get_base(self, goal_id: UUID) -> NutrientGoal | None:
        """Return a base goal by id, if present."""

    def get_hourly(self, goal_id: UUID) -> NutrientGoal | None:
        """Return an hourly override by id, if present."""

    def delete_base(self, goal_id: UUID) -> None:
        """Delete a base goal."""

    def delete_hourly(self, goal_id: UUID) -> None:
        """Delete an hourly override."""

    def delete_for_event(self, event_id: UUID) -> None:
        """Delete every goal of an event."""


@dataclass
class GoalService:
    """Application service for event nutrient goals."""

    repository: GoalRepository
    event_repository: "EventRepository"
    food_item_repository: FoodItemRepository

    def get_goals(self, user_id: UUID, event_id: UUID) -> EventGoals:
        self._event(event_id)
        return EventGoals(
            base=self.repository.list_base(user_id, event_id),
            hourly=self.repository.list_hourly(user_id, event_id),
        )

    def replace_base_goals(
        self, user_id: UUID, event_id: UUID, goals: list[dict[str, object]]
    ) -> list[NutrientGoal]:
        """Replace the base goals applied to every hour of the event."""
        self._event(event_id)
        rows = []
        seen: set[str] = set()
        for raw in goals:
            row = _goal_row(raw)
            if row["nutrient_id"] in seen:
                raise _duplicate(row["nutrient_id"])
            seen.add(row["nutrient_id"])
            rows.append(row)
        self._check_units(rows, self.repository.list_hourly(user_id, event_id))
        saved = self.repository.replace_base(user_id, event_id, rows)
        _logger.info("Saved %s base goals for event %s", len(saved), event_id)
        return saved

    def replace_hourly_goals(
        self, user_id: UUID, event_id: UUID, goals: list[dict[str, object]]
    ) -> list[NutrientGoal]:
        """Replace the per-hour overrides of the event."""
        event = self._event(event_id)
        rows = []
        seen: set[tuple[str, int]] = set()
        for raw in goals:
            row = _goal_row(raw)
            hour = raw.get("hour")
            if not isinstance(hour, int) or isinstance(hour, bool):
                raise ValidationError(
                    ValidationErrorKind.HOUR_OUT_OF_RANGE,
                    "Hourly goals require an integer hour",
                )
            validate_goal_hour(hour, event.hour_count)
            key = (row["nutrient_id"], hour)
            if key in seen:
                raise _duplicate(row["nutrient_id"], hour)
            seen.add(key)
            rows.append({**row, "hour": hour})
        self._check_units(rows, self.repository.list_base(user_id, event_id))
        saved = self.repository.replace_hourly(user_id, event_id, rows)
        _logger.info("Saved %s hourly goals for event %s", len(saved), event_id)
        return saved

    def delete_base_goal(self, goal_id: UUID) -> None:
        if self.repository.get_base(goal_id) is None:
            raise NotFoundError("Base goal", goal_id)
        self.repository.delete_base(goal_id)
        _logger.info("Deleted base goal %s", goal_id)

    def delete_hourly_goal(self, goal_id: UUID) -> None:
        if self.repository.get_hourly(goal_id) is None:
            raise NotFoundError("Hourly goal", goal_id)
        self.repository.delete_hourly(goal_id)
        _logger.info("Deleted hourly goal %s", goal_id)

    def _check_units(
        self, rows: list[dict[str, object]], other_goals: list[NutrientGoal]
    ) -> None:
        """Every unit used for a nutrient must convert to the others."""
        if not rows:
            return
        known = self.food_item_repository.nutrient_units(
            list(dict.fromkeys(UUID(str(row["nutrient_id"])) for row in rows))
        )
        for goal in other_goals:
            known.setdefault(goal.nutrient_id, set()).add(goal.unit)
        for row in rows:
            nutrient_id = UUID(str(row["nutrient_id"]))
            unit = Unit(row["unit"])
            validate_unit_compatible(nutrient_id, unit, known.get(nutrient_id, set()))
            known.setdefault(nutrient_id, set()).add(unit)

    def _event(self, event_id: UUID) -> PlanningEvent:
        event = self.event_repository.get_event(event_id)
        if event is None:
            raise NotFoundError("Event", event_id)
        return event


def _goal_row(raw: dict[str, object]) -> dict[str, object]:
    nutrient_id = str(raw.get("nutrient_id") or "")
    quantity = raw.get("quantity")
    if not nutrient_id or not isinstance(quantity, int | float) or quantity < 0:
        raise ValidationError(
            ValidationErrorKind.INVALID_FIELD,
            "Each goal must have nutrient_id and a non-negative quantity",
        )
    return {
        "nutrient_id": str(parse_nutrient_id(nutrient_id)),
        "quantity": float(quantity),
        "unit": parse_unit(str(raw.get("unit") or "")).value,
    }


def _duplicate(nutrient_id: object, hour: int | None = None) -> ValidationError:
    where = f" in hour {hour}" if hour is not None else ""
    return ValidationError(
        ValidationErrorKind.INVALID_FIELD,
        f"Nutrient {nutrient_id} has more than one goal{where}",
    )
