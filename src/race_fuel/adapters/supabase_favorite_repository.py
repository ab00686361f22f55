"""Supabase implementation for favorite food items."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from race_fuel.domain.foods import FavoriteFoodItem
from race_fuel.services.favorites import FavoriteRepository

_TABLE = "favorite_food_items"


@dataclass
class SupabaseFavoriteRepository(FavoriteRepository):
    """Supabase-backed repository for per-user favorites."""

    client: Client

    def list_favorites(self, user_id: UUID) -> list[FavoriteFoodItem]:
        """Return a user's favorites, oldest first."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at")
            .execute()
        )
        return [_parse_favorite(row) for row in response.data or []]

    def get_favorite(
        self, user_id: UUID, food_item_id: UUID
    ) -> FavoriteFoodItem | None:
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .eq("food_item_id", str(food_item_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_favorite(response.data[0])

    def add_favorite(self, user_id: UUID, food_item_id: UUID) -> FavoriteFoodItem:
        response = (
            self.client.table(_TABLE)
            .insert({"user_id": str(user_id), "food_item_id": str(food_item_id)})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to add favorite food item")
        return _parse_favorite(response.data[0])

    def remove_favorite(self, user_id: UUID, food_item_id: UUID) -> None:
        self.client.table(_TABLE).delete().eq("user_id", str(user_id)).eq(
            "food_item_id", str(food_item_id)
        ).execute()


def _parse_favorite(row: dict[str, object]) -> FavoriteFoodItem:
    created_raw = row.get("created_at")
    return FavoriteFoodItem(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        food_item_id=UUID(row["food_item_id"]),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )
