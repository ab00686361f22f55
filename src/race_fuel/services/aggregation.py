"""Nutrient aggregation over hours and tick windows, and goal status tiers."""

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from uuid import UUID

from race_fuel.domain.events import SECONDS_PER_HOUR, ConsumptionEvent
from race_fuel.domain.foods import FoodItem
from race_fuel.domain.goals import EventGoals, NutrientGoal
from race_fuel.domain.report import (
    HourBucket,
    ItemUsage,
    NutrientReading,
    NutrientStatus,
    NutrientTotal,
    StatusReading,
    WindowSummary,
)
from race_fuel.domain.units import Unit, convert_quantity
from race_fuel.services.layout import format_elapsed, tick_interval

CRITICAL_LOW_BELOW = 50
BELOW_GOAL_BELOW = 90
ON_TARGET_MAX = 120
ABOVE_GOAL_MAX = 150
BAR_MAX = 100


@dataclass
class _NutrientTrack:
    name: str
    unit: Unit
    amounts: list[float]


@dataclass(frozen=True)
class GoalIndex:
    """Lookup of base goals and hourly overrides by nutrient."""

    base: dict[UUID, NutrientGoal]
    hourly: dict[tuple[UUID, int], NutrientGoal]

    @classmethod
    def from_goals(cls, goals: EventGoals) -> "GoalIndex":
        return cls(
            base={goal.nutrient_id: goal for goal in goals.base},
            hourly={
                (goal.nutrient_id, goal.hour): goal
                for goal in goals.hourly
                if goal.hour is not None
            },
        )

    def resolve(self, nutrient_id: UUID, hour: int) -> NutrientGoal | None:
        """Hourly override, else base goal, else no goal."""
        override = self.hourly.get((nutrient_id, hour))
        if override is not None:
            return override
        return self.base.get(nutrient_id)


def hour_of(time_offset_seconds: int, hour_count: int) -> int:
    """Bucket index for an elapsed time; the event end joins the last hour."""
    return min(time_offset_seconds // SECONDS_PER_HOUR, hour_count - 1)


def compute_nutrient_report(
    events: Sequence[ConsumptionEvent],
    food_items_by_id: Mapping[UUID, FoodItem],
    goals: EventGoals,
    duration_seconds: int,
) -> list[HourBucket]:
    """Sum per-hour nutrient intake and pair it with the resolved goals.

    Every nutrient declared by a consumed food item or carrying a goal is
    reported in every hour, ordered by name. Quantities are expressed in
    the first unit seen for the nutrient.
    """
    hour_count = math.ceil(duration_seconds / SECONDS_PER_HOUR)
    index = GoalIndex.from_goals(goals)
    tracks: dict[UUID, _NutrientTrack] = {}

    for event in sorted(events, key=lambda event: event.time_offset_seconds):
        food_item = food_items_by_id[event.food_item_id]
        hour = hour_of(event.time_offset_seconds, hour_count)
        for nutrient in food_item.nutrients:
            track = tracks.setdefault(
                nutrient.nutrient_id,
                _NutrientTrack(
                    name=nutrient.nutrient_name,
                    unit=nutrient.unit,
                    amounts=[0.0] * hour_count,
                ),
            )
            quantity = convert_quantity(
                nutrient.quantity * event.servings, nutrient.unit, track.unit
            )
            track.amounts[hour] += quantity

    for goal in [*goals.base, *goals.hourly]:
        tracks.setdefault(
            goal.nutrient_id,
            _NutrientTrack(
                name=goal.nutrient_name, unit=goal.unit, amounts=[0.0] * hour_count
            ),
        )

    ordered = sorted(tracks.items(), key=lambda item: item[1].name)
    buckets = []
    for hour in range(hour_count):
        readings = []
        for nutrient_id, track in ordered:
            unit = track.unit
            goal = index.resolve(nutrient_id, hour)
            readings.append(
                NutrientReading(
                    name=track.name,
                    goal=(
                        convert_quantity(goal.quantity, goal.unit, unit)
                        if goal is not None
                        else None
                    ),
                    actual=track.amounts[hour],
                    unit=unit.value,
                )
            )
        buckets.append(
            HourBucket(
                hour=hour,
                start_time=hour * SECONDS_PER_HOUR,
                end_time=min((hour + 1) * SECONDS_PER_HOUR, duration_seconds),
                nutrients=readings,
            )
        )
    return buckets


def summarize_totals(buckets: Sequence[HourBucket]) -> list[NutrientReading]:
    """Whole-event totals; the goal is the sum of the hours that have one."""
    totals: dict[str, NutrientReading] = {}
    for bucket in buckets:
        for reading in bucket.nutrients:
            current = totals.get(reading.name)
            if current is None:
                totals[reading.name] = reading
                continue
            goal = current.goal
            if reading.goal is not None:
                goal = (goal or 0.0) + reading.goal
            totals[reading.name] = NutrientReading(
                name=reading.name,
                goal=goal,
                actual=current.actual + reading.actual,
                unit=current.unit,
            )
    return list(totals.values())


def summarize_items(
    events: Sequence[ConsumptionEvent], food_items_by_id: Mapping[UUID, FoodItem]
) -> list[ItemUsage]:
    """Count and total servings per food item, sorted by item name."""
    counts: dict[UUID, tuple[int, float]] = {}
    for event in events:
        count, servings = counts.get(event.food_item_id, (0, 0.0))
        counts[event.food_item_id] = (count + 1, servings + event.servings)
    usages = [
        ItemUsage(
            food_item_id=food_item_id,
            name=food_items_by_id[food_item_id].name,
            count=count,
            total_servings=servings,
        )
        for food_item_id, (count, servings) in counts.items()
    ]
    return sorted(usages, key=lambda usage: usage.name.casefold())


def summarize_windows(
    events: Sequence[ConsumptionEvent],
    food_items_by_id: Mapping[UUID, FoodItem],
    duration_seconds: int,
    interval_seconds: int | None = None,
) -> list[WindowSummary]:
    """Nutrient totals per tick window of the timeline.

    Windows cover ``[start, end)`` with the tick interval as width; the last
    one is shortened to the event end and also takes an item placed exactly
    at the end. Each window lists every nutrient of the consumed food items,
    ordered by name, in the first unit seen for it.
    """
    step = interval_seconds or tick_interval(duration_seconds)
    starts = list(range(0, duration_seconds, step))
    tracks: dict[UUID, _NutrientTrack] = {}
    for event in sorted(events, key=lambda event: event.time_offset_seconds):
        window = min(event.time_offset_seconds // step, len(starts) - 1)
        for nutrient in food_items_by_id[event.food_item_id].nutrients:
            track = tracks.setdefault(
                nutrient.nutrient_id,
                _NutrientTrack(
                    name=nutrient.nutrient_name,
                    unit=nutrient.unit,
                    amounts=[0.0] * len(starts),
                ),
            )
            track.amounts[window] += convert_quantity(
                nutrient.quantity * event.servings, nutrient.unit, track.unit
            )

    ordered = sorted(tracks.values(), key=lambda track: track.name)
    windows = []
    for index, start in enumerate(starts):
        end = min(start + step, duration_seconds)
        windows.append(
            WindowSummary(
                start_time=start,
                end_time=end,
                label=f"{format_elapsed(start)} - {format_elapsed(end)}",
                nutrients=[
                    NutrientTotal(
                        name=track.name,
                        total=track.amounts[index],
                        unit=track.unit.value,
                    )
                    for track in ordered
                ],
            )
        )
    return windows


def goal_ratio(actual: float, goal: float | None) -> float | None:
    """Actual as a percentage of goal, or None without a positive goal."""
    if not goal or goal <= 0:
        return None
    return actual * 100 / goal


def classify(actual: float, goal: float | None) -> NutrientStatus:
    """Classify intake into one of the six status tiers."""
    ratio = goal_ratio(actual, goal)
    if ratio is None:
        return NutrientStatus.NO_GOAL_SET
    if ratio < CRITICAL_LOW_BELOW:
        return NutrientStatus.CRITICAL_LOW
    if ratio < BELOW_GOAL_BELOW:
        return NutrientStatus.BELOW_GOAL
    if ratio <= ON_TARGET_MAX:
        return NutrientStatus.ON_TARGET
    if ratio <= ABOVE_GOAL_MAX:
        return NutrientStatus.ABOVE_GOAL
    return NutrientStatus.WAY_OVER


def status_reading(actual: float, goal: float | None) -> StatusReading:
    """Status tier plus rounded percentage and progress bar width.

    Only the bar width is capped at 100; the text percentage is not.
    """
    ratio = goal_ratio(actual, goal)
    if ratio is None:
        return StatusReading(
            status=NutrientStatus.NO_GOAL_SET, percentage=None, bar_width=None
        )
    percentage = math.floor(ratio + 0.5)
    return StatusReading(
        status=classify(actual, goal),
        percentage=percentage,
        bar_width=min(percentage, BAR_MAX),
    )
