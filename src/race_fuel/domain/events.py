"""Domain models for planning events and scheduled consumption."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID

SECONDS_PER_HOUR = 3600


class EventType(StrEnum):
    """Kind of race or training session."""

    TRIATHLON = "TRIATHLON"
    RUN = "RUN"
    BIKE = "BIKE"
    OTHER = "OTHER"


@dataclass(frozen=True)
class PlanningEvent:
    """A race or training session with a fixed expected duration."""

    id: UUID
    user_id: UUID
    name: str
    event_type: EventType
    duration_seconds: int
    created_at: datetime | None = None

    @property
    def hour_count(self) -> int:
        """Number of hour buckets covering the event."""
        return -(-self.duration_seconds // SECONDS_PER_HOUR)


@dataclass(frozen=True)
class ConsumptionEvent:
    """A scheduled consumption of a food item at an elapsed time."""

    id: UUID
    event_id: UUID
    food_item_id: UUID
    time_offset_seconds: int
    servings: float
