"""Supabase implementation for planning events."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from race_fuel.domain.events import EventType, PlanningEvent
from race_fuel.services.events import EventRepository


@dataclass
class SupabaseEventRepository(EventRepository):
    """Supabase-backed repository for planning events."""

    client: Client

    def list_events(self, user_id: UUID) -> list[PlanningEvent]:
        """Return a user's events, newest first."""
        response = (
            self.client.table("events")
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_event(row) for row in response.data or []]

    def get_event(self, event_id: UUID) -> PlanningEvent | None:
        """Return an event by id, if present."""
        response = (
            self.client.table("events")
            .select("*")
            .eq("id", str(event_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_event(response.data[0])

    def create_event(
        self,
        user_id: UUID,
        name: str,
        event_type: EventType,
        duration_seconds: int,
    ) -> PlanningEvent:
        """Create an event row and return it."""
        response = (
            self.client.table("events")
            .insert(
                {
                    "user_id": str(user_id),
                    "name": name,
                    "event_type": event_type.value,
                    "duration_seconds": duration_seconds,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create event")
        return _parse_event(response.data[0])

    def update_event(self, event_id: UUID, payload: dict[str, object]) -> PlanningEvent:
        """Update event columns and return the event."""
        response = (
            self.client.table("events")
            .update(payload)
            .eq("id", str(event_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update event")
        return _parse_event(response.data[0])

    def delete_event(self, event_id: UUID) -> None:
        """Delete an event row."""
        self.client.table("events").delete().eq("id", str(event_id)).execute()


def _parse_event(row: dict[str, object]) -> PlanningEvent:
    """Parse an events row into a domain model."""
    created_raw = row.get("created_at")
    created_at = (
        datetime.fromisoformat(created_raw)
        if isinstance(created_raw, str) and created_raw
        else None
    )
    return PlanningEvent(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        name=str(row.get("name", "")),
        event_type=EventType(row.get("event_type") or EventType.OTHER.value),
        duration_seconds=int(row["duration_seconds"]),
        created_at=created_at,
    )
