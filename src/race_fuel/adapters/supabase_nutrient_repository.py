"""Supabase-backed nutrient catalog."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from race_fuel.domain.foods import Nutrient
from race_fuel.services.nutrients import NutrientRepository


@dataclass
class SupabaseNutrientRepository(NutrientRepository):
    """Supabase implementation for the nutrient catalog."""

    client: Client

    def list_nutrients(self) -> list[Nutrient]:
        """Return all nutrients ordered by name."""
        response = (
            self.client.table("nutrients")
            .select("id, name, abbreviation")
            .order("name")
            .execute()
        )
        return [
            Nutrient(
                id=UUID(row["id"]),
                name=str(row.get("name", "")),
                abbreviation=str(row.get("abbreviation") or ""),
            )
            for row in response.data or []
        ]
