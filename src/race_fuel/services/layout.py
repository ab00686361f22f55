"""Timeline lane layout for scheduled consumption events."""

from collections.abc import Sequence
from dataclasses import dataclass
from uuid import UUID

from race_fuel.domain.events import ConsumptionEvent
from race_fuel.domain.report import TimelineMark

ITEM_HEIGHT_PERCENT = 8.0
ITEM_WIDTH = 180.0
THREE_HOURS = 3 * 3600
ONE_HOUR = 3600
HALF_HOUR = 1800


@dataclass(frozen=True)
class LayoutConfig:
    """Geometry of the timeline.

    Box height is a percentage of the whole timeline; width is in the
    caller's horizontal unit. Padding adds empty time before the start and
    after the end of the event.
    """

    item_height_percent: float = ITEM_HEIGHT_PERCENT
    item_width: float = ITEM_WIDTH
    pre_start_seconds: int = 0
    post_end_seconds: int = 0

    def total_seconds(self, duration_seconds: int) -> int:
        return duration_seconds + self.pre_start_seconds + self.post_end_seconds


@dataclass(frozen=True)
class _Interval:
    top: float
    bottom: float

    def overlaps(self, other: "_Interval") -> bool:
        return not (other.bottom <= self.top or other.top >= self.bottom)


def top_percent(
    time_offset_seconds: float, duration_seconds: int, config: LayoutConfig
) -> float:
    """Return the vertical position of an elapsed time as a percentage."""
    total = config.total_seconds(duration_seconds)
    return (time_offset_seconds + config.pre_start_seconds) / total * 100


def compute_layout(
    events: Sequence[ConsumptionEvent],
    duration_seconds: int,
    exclude_id: UUID | None = None,
    config: LayoutConfig | None = None,
) -> dict[UUID, int]:
    """Assign each event the first lane where its box overlaps nothing.

    Events are placed in ascending time order, ties in input order. The
    excluded event (one being dragged) is neither placed nor assigned.
    """
    resolved = config or LayoutConfig()
    ordered = sorted(
        (event for event in events if event.id != exclude_id),
        key=lambda event: event.time_offset_seconds,
    )
    lanes: list[list[_Interval]] = []
    assignments: dict[UUID, int] = {}
    for event in ordered:
        top = top_percent(event.time_offset_seconds, duration_seconds, resolved)
        interval = _Interval(top=top, bottom=top + resolved.item_height_percent)
        lane_index = _first_free_lane(lanes, interval)
        if lane_index == len(lanes):
            lanes.append([])
        lanes[lane_index].append(interval)
        assignments[event.id] = lane_index
    return assignments


def lane_offset(lane_index: int, config: LayoutConfig | None = None) -> float:
    """Convert a lane index to a horizontal offset."""
    return lane_index * (config or LayoutConfig()).item_width


def tick_interval(duration_seconds: int) -> int:
    """Hourly ticks for events longer than three hours, else half-hourly."""
    return ONE_HOUR if duration_seconds > THREE_HOURS else HALF_HOUR


def timeline_ticks(
    duration_seconds: int, config: LayoutConfig | None = None
) -> list[TimelineMark]:
    """Return axis ticks from the start through the end of the event."""
    resolved = config or LayoutConfig()
    step = tick_interval(duration_seconds)
    return [
        _mark(time, duration_seconds, resolved)
        for time in range(0, duration_seconds + 1, step)
    ]


def timeline_dividers(
    duration_seconds: int, config: LayoutConfig | None = None
) -> list[TimelineMark]:
    """Return divider lines strictly inside the event."""
    resolved = config or LayoutConfig()
    step = tick_interval(duration_seconds)
    return [
        _mark(time, duration_seconds, resolved)
        for time in range(step, duration_seconds, step)
    ]


def format_elapsed(seconds: int) -> str:
    """Format elapsed seconds as H:MM."""
    sign = "-" if seconds < 0 else ""
    absolute = abs(seconds)
    hours = absolute // 3600
    minutes = (absolute % 3600) // 60
    return f"{sign}{hours}:{minutes:02d}"


def _first_free_lane(lanes: list[list[_Interval]], interval: _Interval) -> int:
    for index, lane in enumerate(lanes):
        if not any(placed.overlaps(interval) for placed in lane):
            return index
    return len(lanes)


def _mark(time: int, duration_seconds: int, config: LayoutConfig) -> TimelineMark:
    return TimelineMark(
        time=time,
        percentage=top_percent(time, duration_seconds, config),
        label=format_elapsed(time),
    )
