"""Conversion of domain models into JSON-ready dictionaries."""

from race_fuel.domain.events import ConsumptionEvent, PlanningEvent
from race_fuel.domain.foods import FavoriteFoodItem, FoodItem, Nutrient
from race_fuel.domain.goals import EventGoals, NutrientGoal
from race_fuel.domain.models import UserRecord
from race_fuel.domain.report import (
    HourSummary,
    ItemUsage,
    NutrientSummary,
    PlanView,
    TimelineMark,
    TimelineView,
    WindowSummary,
)


def user_to_dict(user: UserRecord) -> dict[str, object]:
    return {
        "id": str(user.id),
        "auth0_sub": user.auth_sub,
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
    }


def event_to_dict(event: PlanningEvent) -> dict[str, object]:
    return {
        "id": str(event.id),
        "user_id": str(event.user_id),
        "name": event.name,
        "event_type": event.event_type.value,
        "duration_seconds": event.duration_seconds,
        "created_at": event.created_at.isoformat() if event.created_at else None,
    }


def food_instance_to_dict(instance: ConsumptionEvent) -> dict[str, object]:
    return {
        "id": str(instance.id),
        "event_id": str(instance.event_id),
        "food_item_id": str(instance.food_item_id),
        "time_offset_seconds": instance.time_offset_seconds,
        "servings": instance.servings,
    }


def food_item_to_dict(item: FoodItem) -> dict[str, object]:
    return {
        "id": str(item.id),
        "name": item.name,
        "brand": item.brand,
        "category": item.category.value if item.category else None,
        "cost": item.cost,
        "created_by": str(item.created_by),
        "nutrients": [
            {
                "nutrient_id": str(nutrient.nutrient_id),
                "name": nutrient.nutrient_name,
                "quantity": nutrient.quantity,
                "unit": nutrient.unit.value,
            }
            for nutrient in item.nutrients
        ],
    }


def favorite_to_dict(favorite: FavoriteFoodItem) -> dict[str, object]:
    return {
        "id": str(favorite.id),
        "user_id": str(favorite.user_id),
        "food_item_id": str(favorite.food_item_id),
        "created_at": favorite.created_at.isoformat() if favorite.created_at else None,
    }


def nutrient_to_dict(nutrient: Nutrient) -> dict[str, object]:
    return {
        "id": str(nutrient.id),
        "name": nutrient.name,
        "abbreviation": nutrient.abbreviation,
    }


def goal_to_dict(goal: NutrientGoal) -> dict[str, object]:
    payload: dict[str, object] = {
        "id": str(goal.id) if goal.id else None,
        "nutrient_id": str(goal.nutrient_id),
        "nutrient_name": goal.nutrient_name,
        "quantity": goal.quantity,
        "unit": goal.unit.value,
    }
    if goal.is_hourly:
        payload["hour"] = goal.hour
    return payload


def goals_to_dict(goals: EventGoals) -> dict[str, object]:
    return {
        "base": [goal_to_dict(goal) for goal in goals.base],
        "hourly": [goal_to_dict(goal) for goal in goals.hourly],
    }


def _summary_to_dict(summary: NutrientSummary) -> dict[str, object]:
    reading = summary.reading
    return {
        "name": reading.name,
        "goal": reading.goal,
        "actual": reading.actual,
        "unit": reading.unit,
        "status": summary.status.status.value,
        "percentage": summary.status.percentage,
        "bar_width": summary.status.bar_width,
    }


def hour_to_dict(hour: HourSummary) -> dict[str, object]:
    return {
        "hour": hour.hour,
        "start_time": hour.start_time,
        "end_time": hour.end_time,
        "nutrients": [_summary_to_dict(summary) for summary in hour.nutrients],
    }


def _mark_to_dict(mark: TimelineMark) -> dict[str, object]:
    return {"time": mark.time, "percentage": mark.percentage, "label": mark.label}


def timeline_to_dict(timeline: TimelineView) -> dict[str, object]:
    return {
        "entries": [
            {
                "id": str(entry.id),
                "food_item_id": str(entry.food_item_id),
                "food_name": entry.food_name,
                "time_offset_seconds": entry.time_offset_seconds,
                "servings": entry.servings,
                "top_percent": entry.top_percent,
                "lane": entry.lane,
                "horizontal_offset": entry.horizontal_offset,
            }
            for entry in timeline.entries
        ],
        "ticks": [_mark_to_dict(mark) for mark in timeline.ticks],
        "dividers": [_mark_to_dict(mark) for mark in timeline.dividers],
        "lane_count": timeline.lane_count,
    }


def item_usage_to_dict(usage: ItemUsage) -> dict[str, object]:
    return {
        "food_item_id": str(usage.food_item_id),
        "name": usage.name,
        "count": usage.count,
        "total_servings": usage.total_servings,
    }


def window_to_dict(window: WindowSummary) -> dict[str, object]:
    return {
        "start_time": window.start_time,
        "end_time": window.end_time,
        "label": window.label,
        "nutrients": [
            {"name": total.name, "total": total.total, "unit": total.unit}
            for total in window.nutrients
        ],
    }


def plan_to_dict(plan: PlanView) -> dict[str, object]:
    return {
        "event_id": str(plan.event_id),
        "duration_seconds": plan.duration_seconds,
        "timeline": timeline_to_dict(plan.timeline),
        "hours": [hour_to_dict(hour) for hour in plan.hours],
        "totals": [_summary_to_dict(summary) for summary in plan.totals],
        "items": [item_usage_to_dict(usage) for usage in plan.items],
        "windows": [window_to_dict(window) for window in plan.windows],
    }
