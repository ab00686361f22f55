"""Supabase implementation for event nutrient goals."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from race_fuel.domain.goals import NutrientGoal
from race_fuel.domain.units import Unit
from race_fuel.services.goals import GoalRepository

_BASE_TABLE = "event_goals_base"
_HOURLY_TABLE = "event_goals_hourly"
_GOAL_SELECT = "*, nutrients(name)"


@dataclass
class SupabaseGoalRepository(GoalRepository):
    """Supabase-backed repository for base goals and hourly overrides."""

    client: Client

    def list_base(self, user_id: UUID, event_id: UUID) -> list[NutrientGoal]:
        """Return the base goals a user set for an event."""
        return self._list(_BASE_TABLE, user_id, event_id)

    def list_hourly(self, user_id: UUID, event_id: UUID) -> list[NutrientGoal]:
        """Return the hourly overrides ordered by hour."""
        return sorted(
            self._list(_HOURLY_TABLE, user_id, event_id),
            key=lambda goal: goal.hour or 0,
        )

    def list_hourly_for_event(self, event_id: UUID) -> list[NutrientGoal]:
        """Return the hourly overrides every user set for an event."""
        response = (
            self.client.table(_HOURLY_TABLE)
            .select(_GOAL_SELECT)
            .eq("event_id", str(event_id))
            .execute()
        )
        return [_parse_goal(row) for row in response.data or []]

    def replace_base(
        self, user_id: UUID, event_id: UUID, goals: list[dict[str, object]]
    ) -> list[NutrientGoal]:
        """Delete and recreate the base goals of an event."""
        return self._replace(_BASE_TABLE, user_id, event_id, goals)

    def replace_hourly(
        self, user_id: UUID, event_id: UUID, goals: list[dict[str, object]]
    ) -> list[NutrientGoal]:
        """Delete and recreate the hourly overrides of an event."""
        return self._replace(_HOURLY_TABLE, user_id, event_id, goals)

    def get_base(self, goal_id: UUID) -> NutrientGoal | None:
        return self._get(_BASE_TABLE, goal_id)

    def get_hourly(self, goal_id: UUID) -> NutrientGoal | None:
        return self._get(_HOURLY_TABLE, goal_id)

    def delete_base(self, goal_id: UUID) -> None:
        self.client.table(_BASE_TABLE).delete().eq("id", str(goal_id)).execute()

    def delete_hourly(self, goal_id: UUID) -> None:
        self.client.table(_HOURLY_TABLE).delete().eq("id", str(goal_id)).execute()

    def delete_for_event(self, event_id: UUID) -> None:
        """Delete every goal of an event."""
        for table in (_BASE_TABLE, _HOURLY_TABLE):
            self.client.table(table).delete().eq("event_id", str(event_id)).execute()

    def _list(self, table: str, user_id: UUID, event_id: UUID) -> list[NutrientGoal]:
        response = (
            self.client.table(table)
            .select(_GOAL_SELECT)
            .eq("user_id", str(user_id))
            .eq("event_id", str(event_id))
            .execute()
        )
        return [_parse_goal(row) for row in response.data or []]

    def _get(self, table: str, goal_id: UUID) -> NutrientGoal | None:
        response = (
            self.client.table(table)
            .select(_GOAL_SELECT)
            .eq("id", str(goal_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_goal(response.data[0])

    def _replace(
        self,
        table: str,
        user_id: UUID,
        event_id: UUID,
        goals: list[dict[str, object]],
    ) -> list[NutrientGoal]:
        self.client.table(table).delete().eq("user_id", str(user_id)).eq(
            "event_id", str(event_id)
        ).execute()
        if not goals:
            return []
        response = (
            self.client.table(table)
            .insert(
                [
                    {"user_id": str(user_id), "event_id": str(event_id), **goal}
                    for goal in goals
                ]
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save nutrient goals")
        return self._list(table, user_id, event_id)


def _parse_goal(row: dict[str, object]) -> NutrientGoal:
    """Parse a goal row with its embedded nutrient name."""
    nutrient = row.get("nutrients") or {}
    hour = row.get("hour")
    return NutrientGoal(
        nutrient_id=UUID(row["nutrient_id"]),
        nutrient_name=str(nutrient.get("name", "")),
        quantity=float(row.get("quantity", 0.0)),
        unit=Unit.parse(str(row.get("unit", "g"))),
        hour=int(hour) if hour is not None else None,
        id=UUID(row["id"]) if row.get("id") else None,
    )
