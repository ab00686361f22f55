"""Plan views combining the timeline layout and the nutrient report."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from uuid import UUID

from race_fuel.domain.errors import NotFoundError
from race_fuel.domain.events import ConsumptionEvent, PlanningEvent
from race_fuel.domain.foods import FoodItem
from race_fuel.domain.goals import EventGoals
from race_fuel.domain.report import (
    HourBucket,
    HourSummary,
    NutrientReading,
    NutrientSummary,
    PlanView,
    TimelineEntry,
    TimelineView,
)
from race_fuel.services.aggregation import (
    compute_nutrient_report,
    status_reading,
    summarize_items,
    summarize_totals,
    summarize_windows,
)
from race_fuel.services.consumption import ConsumptionRepository
from race_fuel.services.events import EventRepository
from race_fuel.services.food_items import FoodItemService
from race_fuel.services.goals import GoalRepository
from race_fuel.services.layout import (
    LayoutConfig,
    compute_layout,
    lane_offset,
    timeline_dividers,
    timeline_ticks,
    top_percent,
)

_logger = logging.getLogger(__name__)


@dataclass
class PlanService:
    """Builds read-only plan views for an event."""

    event_repository: EventRepository
    consumption_repository: ConsumptionRepository
    food_item_service: FoodItemService
    goal_repository: GoalRepository
    layout_config: LayoutConfig = field(default_factory=LayoutConfig)

    def build_plan(
        self, event_id: UUID, user_id: UUID, exclude_id: UUID | None = None
    ) -> PlanView:
        """Return the timeline, nutrient summaries and item counts for an event."""
        event, items, food_items = self._load(event_id)
        goals = self._goals(user_id, event_id)
        buckets = compute_nutrient_report(
            items, food_items, goals, event.duration_seconds
        )
        _logger.info(
            "Built plan for event %s: %s items over %s hours",
            event_id,
            len(items),
            len(buckets),
        )
        return PlanView(
            event_id=event.id,
            duration_seconds=event.duration_seconds,
            timeline=self._timeline(event, items, food_items, exclude_id),
            hours=[_summarize_hour(bucket) for bucket in buckets],
            totals=[_summarize(reading) for reading in summarize_totals(buckets)],
            items=summarize_items(items, food_items),
            windows=summarize_windows(items, food_items, event.duration_seconds),
        )

    def build_timeline(
        self, event_id: UUID, exclude_id: UUID | None = None
    ) -> TimelineView:
        """Return only the timeline layout of an event."""
        event, items, food_items = self._load(event_id)
        return self._timeline(event, items, food_items, exclude_id)

    def build_report(self, event_id: UUID, user_id: UUID) -> list[HourSummary]:
        """Return only the hourly nutrient report of an event."""
        event, items, food_items = self._load(event_id)
        buckets = compute_nutrient_report(
            items, food_items, self._goals(user_id, event_id), event.duration_seconds
        )
        return [_summarize_hour(bucket) for bucket in buckets]

    def _load(
        self, event_id: UUID
    ) -> tuple[PlanningEvent, list[ConsumptionEvent], dict[UUID, FoodItem]]:
        event = self.event_repository.get_event(event_id)
        if event is None:
            raise NotFoundError("Event", event_id)
        items = self.consumption_repository.list_for_event(event_id)
        food_items = self.food_item_service.items_by_id(
            [item.food_item_id for item in items]
        )
        for item in items:
            if item.food_item_id not in food_items:
                raise NotFoundError("Food item", item.food_item_id)
        return event, items, food_items

    def _goals(self, user_id: UUID, event_id: UUID) -> EventGoals:
        return EventGoals(
            base=self.goal_repository.list_base(user_id, event_id),
            hourly=self.goal_repository.list_hourly(user_id, event_id),
        )

    def _timeline(
        self,
        event: PlanningEvent,
        items: Sequence[ConsumptionEvent],
        food_items: dict[UUID, FoodItem],
        exclude_id: UUID | None,
    ) -> TimelineView:
        config = self.layout_config
        lanes = compute_layout(items, event.duration_seconds, exclude_id, config)
        entries = [
            TimelineEntry(
                id=item.id,
                food_item_id=item.food_item_id,
                food_name=food_items[item.food_item_id].name,
                time_offset_seconds=item.time_offset_seconds,
                servings=item.servings,
                top_percent=top_percent(
                    item.time_offset_seconds, event.duration_seconds, config
                ),
                lane=lanes[item.id],
                horizontal_offset=lane_offset(lanes[item.id], config),
            )
            for item in sorted(items, key=lambda item: item.time_offset_seconds)
            if item.id in lanes
        ]
        return TimelineView(
            entries=entries,
            ticks=timeline_ticks(event.duration_seconds, config),
            dividers=timeline_dividers(event.duration_seconds, config),
            lane_count=max(lanes.values(), default=-1) + 1,
        )


def _summarize(reading: NutrientReading) -> NutrientSummary:
    return NutrientSummary(
        reading=reading, status=status_reading(reading.actual, reading.goal)
    )


def _summarize_hour(bucket: HourBucket) -> HourSummary:
    return HourSummary(
        hour=bucket.hour,
        start_time=bucket.start_time,
        end_time=bucket.end_time,
        nutrients=[_summarize(reading) for reading in bucket.nutrients],
    )
