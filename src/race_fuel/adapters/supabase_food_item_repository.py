"""Supabase implementation for the food item catalog."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from race_fuel.domain.foods import FoodCategory, FoodItem, FoodItemNutrient
from race_fuel.domain.units import Unit
from race_fuel.services.food_items import FoodItemRepository

_ITEM_SELECT = (
    "*, food_item_nutrients(nutrient_id, quantity, unit, nutrients(name))"
)


@dataclass
class SupabaseFoodItemRepository(FoodItemRepository):
    """Supabase-backed repository for food items and their nutrients."""

    client: Client

    def list_items(self, created_by: UUID | None) -> list[FoodItem]:
        """Return food items, newest first."""
        query = self.client.table("food_items").select(_ITEM_SELECT)
        if created_by is not None:
            query = query.eq("created_by", str(created_by))
        response = query.order("created_at", desc=True).execute()
        return [_parse_item(row) for row in response.data or []]

    def get_item(self, food_item_id: UUID) -> FoodItem | None:
        """Return a food item with nutrients, if present."""
        response = (
            self.client.table("food_items")
            .select(_ITEM_SELECT)
            .eq("id", str(food_item_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_item(response.data[0])

    def get_items(self, food_item_ids: list[UUID]) -> list[FoodItem]:
        """Return the food items with the given ids."""
        response = (
            self.client.table("food_items")
            .select(_ITEM_SELECT)
            .in_("id", [str(food_item_id) for food_item_id in food_item_ids])
            .execute()
        )
        return [_parse_item(row) for row in response.data or []]

    def create_item(
        self,
        user_id: UUID,
        payload: dict[str, object],
        nutrients: list[dict[str, object]],
    ) -> FoodItem:
        """Create a food item, then its nutrient rows."""
        response = (
            self.client.table("food_items")
            .insert({"created_by": str(user_id), **payload})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create food item")
        food_item_id = UUID(response.data[0]["id"])
        self._insert_nutrients(food_item_id, nutrients)
        return self._reload(food_item_id)

    def update_item(
        self,
        food_item_id: UUID,
        payload: dict[str, object],
        nutrients: list[dict[str, object]],
    ) -> FoodItem:
        """Update a food item and replace its nutrient rows."""
        response = (
            self.client.table("food_items")
            .update(payload)
            .eq("id", str(food_item_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update food item")
        self.client.table("food_item_nutrients").delete().eq(
            "food_item_id", str(food_item_id)
        ).execute()
        self._insert_nutrients(food_item_id, nutrients)
        return self._reload(food_item_id)

    def nutrient_units(
        self, nutrient_ids: list[UUID], exclude_item_id: UUID | None = None
    ) -> dict[UUID, set[Unit]]:
        """Return the units food items declare for each of the nutrients."""
        query = (
            self.client.table("food_item_nutrients")
            .select("food_item_id, nutrient_id, unit")
            .in_("nutrient_id", [str(nutrient_id) for nutrient_id in nutrient_ids])
        )
        if exclude_item_id is not None:
            query = query.neq("food_item_id", str(exclude_item_id))
        response = query.execute()
        units: dict[UUID, set[Unit]] = {}
        for row in response.data or []:
            units.setdefault(UUID(row["nutrient_id"]), set()).add(
                Unit.parse(str(row["unit"]))
            )
        return units

    def _insert_nutrients(
        self, food_item_id: UUID, nutrients: list[dict[str, object]]
    ) -> None:
        if not nutrients:
            return
        self.client.table("food_item_nutrients").insert(
            [{"food_item_id": str(food_item_id), **row} for row in nutrients]
        ).execute()

    def _reload(self, food_item_id: UUID) -> FoodItem:
        item = self.get_item(food_item_id)
        if item is None:
            raise RuntimeError("Failed to load saved food item")
        return item


def _parse_item(row: dict[str, object]) -> FoodItem:
    """Parse a food_items row with embedded nutrients into a domain model."""
    category = row.get("category")
    cost = row.get("cost")
    return FoodItem(
        id=UUID(row["id"]),
        name=str(row.get("name", "")),
        created_by=UUID(row["created_by"]),
        brand=row.get("brand"),
        category=FoodCategory(category) if category else None,
        cost=float(cost) if cost is not None else None,
        nutrients=[
            _parse_nutrient(nutrient)
            for nutrient in row.get("food_item_nutrients") or []
        ],
    )


def _parse_nutrient(row: dict[str, object]) -> FoodItemNutrient:
    nutrient = row.get("nutrients") or {}
    return FoodItemNutrient(
        nutrient_id=UUID(row["nutrient_id"]),
        nutrient_name=str(nutrient.get("name", "")),
        quantity=float(row.get("quantity", 0.0)),
        unit=Unit.parse(str(row.get("unit", "g"))),
    )
