"""Models for hourly nutrient reports and timeline layout."""

from dataclasses import dataclass
from enum import Enum
from uuid import UUID


class NutrientStatus(Enum):
    """Classification of actual intake against a goal."""

    CRITICAL_LOW = "Critical Low"
    BELOW_GOAL = "Below Goal"
    ON_TARGET = "On Target"
    ABOVE_GOAL = "Above Goal"
    WAY_OVER = "Way Over"
    NO_GOAL_SET = "No Goal Set"


@dataclass(frozen=True)
class NutrientReading:
    """Goal vs actual quantity of one nutrient in one hour."""

    name: str
    goal: float | None
    actual: float
    unit: str


@dataclass(frozen=True)
class HourBucket:
    """Nutrient readings for one hour of an event."""

    hour: int
    start_time: int
    end_time: int
    nutrients: list[NutrientReading]


@dataclass(frozen=True)
class StatusReading:
    """Status tier with display percentages."""

    status: NutrientStatus
    percentage: int | None
    bar_width: int | None


@dataclass(frozen=True)
class TimelineMark:
    """A tick or divider on the timeline axis."""

    time: int
    percentage: float
    label: str


@dataclass(frozen=True)
class TimelineEntry:
    """A consumption event placed on the timeline."""

    id: UUID
    food_item_id: UUID
    food_name: str
    time_offset_seconds: int
    servings: float
    top_percent: float
    lane: int
    horizontal_offset: float


@dataclass(frozen=True)
class NutrientSummary:
    """A nutrient reading with its status."""

    reading: NutrientReading
    status: StatusReading


@dataclass(frozen=True)
class HourSummary:
    """Classified nutrient readings for one hour of an event."""

    hour: int
    start_time: int
    end_time: int
    nutrients: list[NutrientSummary]


@dataclass(frozen=True)
class TimelineView:
    """Placed timeline entries with their axis marks."""

    entries: list[TimelineEntry]
    ticks: list[TimelineMark]
    dividers: list[TimelineMark]
    lane_count: int


@dataclass(frozen=True)
class ItemUsage:
    """How often one food item is scheduled in an event."""

    food_item_id: UUID
    name: str
    count: int
    total_servings: float


@dataclass(frozen=True)
class NutrientTotal:
    name: str
    total: float
    unit: str


@dataclass(frozen=True)
class WindowSummary:
    """Nutrient totals for one tick window of the timeline."""

    start_time: int
    end_time: int
    label: str
    nutrients: list[NutrientTotal]


@dataclass(frozen=True)
class PlanView:
    """Timeline layout and nutrient report for one planning event."""

    event_id: UUID
    duration_seconds: int
    timeline: TimelineView
    hours: list[HourSummary]
    totals: list[NutrientSummary]
    items: list[ItemUsage]
    windows: list[WindowSummary]
