"""Domain models for nutrient goals."""

from dataclasses import dataclass, field
from uuid import UUID

from race_fuel.domain.units import Unit


@dataclass(frozen=True)
class NutrientGoal:
    """A nutrient target; hourly overrides carry an hour index."""

    nutrient_id: UUID
    nutrient_name: str
    quantity: float
    unit: Unit
    hour: int | None = None
    id: UUID | None = None

    @property
    def is_hourly(self) -> bool:
        return self.hour is not None


@dataclass(frozen=True)
class EventGoals:
    """Base goals and hourly overrides for one event."""

    base: list[NutrientGoal] = field(default_factory=list)
    hourly: list[NutrientGoal] = field(default_factory=list)
