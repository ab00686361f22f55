"""Supabase implementation for scheduled food instances."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from race_fuel.domain.events import ConsumptionEvent
from race_fuel.services.consumption import ConsumptionRepository


@dataclass
class SupabaseConsumptionRepository(ConsumptionRepository):
    """Supabase-backed repository for food instances on event timelines."""

    client: Client

    def list_for_event(self, event_id: UUID) -> list[ConsumptionEvent]:
        """Return an event's food instances in ascending time."""
        response = (
            self.client.table("food_instances")
            .select("*")
            .eq("event_id", str(event_id))
            .order("time_offset_seconds")
            .execute()
        )
        return [_parse_instance(row) for row in response.data or []]

    def get(self, instance_id: UUID) -> ConsumptionEvent | None:
        """Return a food instance by id, if present."""
        response = (
            self.client.table("food_instances")
            .select("*")
            .eq("id", str(instance_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_instance(response.data[0])

    def create(
        self,
        event_id: UUID,
        food_item_id: UUID,
        time_offset_seconds: int,
        servings: float,
    ) -> ConsumptionEvent:
        """Create a food instance and return it."""
        response = (
            self.client.table("food_instances")
            .insert(
                {
                    "event_id": str(event_id),
                    "food_item_id": str(food_item_id),
                    "time_offset_seconds": time_offset_seconds,
                    "servings": servings,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create food instance")
        return _parse_instance(response.data[0])

    def create_many(
        self, event_id: UUID, items: list[dict[str, object]]
    ) -> list[ConsumptionEvent]:
        """Create several food instances for one event in a single insert."""
        if not items:
            return []
        response = (
            self.client.table("food_instances")
            .insert([{"event_id": str(event_id), **item} for item in items])
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create food instances")
        return [_parse_instance(row) for row in response.data]

    def update(self, instance_id: UUID, payload: dict[str, object]) -> ConsumptionEvent:
        """Update a food instance and return it."""
        response = (
            self.client.table("food_instances")
            .update(payload)
            .eq("id", str(instance_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update food instance")
        return _parse_instance(response.data[0])

    def delete(self, instance_id: UUID) -> None:
        """Delete a food instance."""
        self.client.table("food_instances").delete().eq(
            "id", str(instance_id)
        ).execute()

    def delete_for_event(self, event_id: UUID) -> None:
        """Delete every food instance of an event."""
        self.client.table("food_instances").delete().eq(
            "event_id", str(event_id)
        ).execute()


def _parse_instance(row: dict[str, object]) -> ConsumptionEvent:
    return ConsumptionEvent(
        id=UUID(row["id"]),
        event_id=UUID(row["event_id"]),
        food_item_id=UUID(row["food_item_id"]),
        time_offset_seconds=int(row["time_offset_seconds"]),
        servings=float(row.get("servings", 1.0)),
    )
