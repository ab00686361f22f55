"""Services for the food item catalog."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from race_fuel.domain.errors import (
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
    ValidationErrorKind,
)
from race_fuel.domain.foods import FoodCategory, FoodItem
from race_fuel.domain.units import Unit
from race_fuel.services.validation import (
    parse_nutrient_id,
    parse_unit,
    validate_unit_compatible,
)

_logger = logging.getLogger(__name__)


class FoodItemRepository(Protocol):
    """Persistence interface for catalog food items."""

    def list_items(self, created_by: UUID | None) -> list[FoodItem]:
        """Return food items, newest first; all users when created_by is None."""

    def get_item(self, food_item_id: UUID) -> FoodItem | None:
        """Return a food item with nutrients, if present."""

    def get_items(self, food_item_ids: list[UUID]) -> list[FoodItem]:
        """Return the food items with the given ids."""

    def create_item(
        self,
        user_id: UUID,
        payload: dict[str, object],
        nutrients: list[dict[str, object]],
    ) -> FoodItem:
        """Create a food item with its nutrient rows."""

    def update_item(
        self,
        food_item_id: UUID,
        payload: dict[str, object],
        nutrients: list[dict[str, object]],
    ) -> FoodItem:
        """Update a food item and replace its nutrient rows."""

    def nutrient_units(
        self, nutrient_ids: list[UUID], exclude_item_id: UUID | None = None
    ) -> dict[UUID, set[Unit]]:
        """Return the units food items declare for each of the nutrients."""


@dataclass
class FoodItemService:
    """Application service for the food item catalog."""

    repository: FoodItemRepository

    def list_items(self, user_id: UUID, mine_only: bool = False) -> list[FoodItem]:
        """Return every catalog item, or only the user's own."""
        return self.repository.list_items(user_id if mine_only else None)

    def get_item(self, food_item_id: UUID) -> FoodItem:
        """Return a food item or raise when it does not exist."""
        item = self.repository.get_item(food_item_id)
        if item is None:
            raise NotFoundError("Food item", food_item_id)
        return item

    def items_by_id(self, food_item_ids: list[UUID]) -> dict[UUID, FoodItem]:
        """Return the referenced food items keyed by id."""
        unique = list(dict.fromkeys(food_item_ids))
        if not unique:
            return {}
        return {item.id: item for item in self.repository.get_items(unique)}

    def create_item(self, user_id: UUID, payload: dict[str, object]) -> FoodItem:
        """Create a catalog item with per-serving nutrients."""
        columns, nutrients = _normalize(payload)
        self._check_units(nutrients)
        item = self.repository.create_item(user_id, columns, nutrients)
        _logger.info(
            "Created food item %s with %s nutrients", item.name, len(nutrients)
        )
        return item

    def update_item(
        self, food_item_id: UUID, user_id: UUID, payload: dict[str, object]
    ) -> FoodItem:
        """Update an item created by the user, replacing its nutrients."""
        existing = self.get_item(food_item_id)
        if existing.created_by != user_id:
            raise PermissionDeniedError(
                "You do not have permission to modify this food item"
            )
        columns, nutrients = _normalize(payload)
        self._check_units(nutrients, exclude_item_id=food_item_id)
        item = self.repository.update_item(food_item_id, columns, nutrients)
        _logger.info("Updated food item %s", item.name)
        return item

    def _check_units(
        self,
        nutrients: list[dict[str, object]],
        exclude_item_id: UUID | None = None,
    ) -> None:
        if not nutrients:
            return
        declared = self.repository.nutrient_units(
            [UUID(str(row["nutrient_id"])) for row in nutrients], exclude_item_id
        )
        for row in nutrients:
            nutrient_id = UUID(str(row["nutrient_id"]))
            validate_unit_compatible(
                nutrient_id, Unit(row["unit"]), declared.get(nutrient_id, set())
            )


def _normalize(
    payload: dict[str, object],
) -> tuple[dict[str, object], list[dict[str, object]]]:
    """Validate a food item payload into column values and nutrient rows."""
    name = str(payload.get("name") or "").strip()
    if not name:
        raise ValidationError(ValidationErrorKind.INVALID_FIELD, "Name is required")

    category = payload.get("category")
    if category is not None:
        try:
            category = FoodCategory(str(category)).value
        except ValueError as exc:
            raise ValidationError(
                ValidationErrorKind.INVALID_FIELD, f"Unknown category: {category}"
            ) from exc

    cost = payload.get("cost")
    if cost is not None:
        if not isinstance(cost, int | float) or cost < 0:
            raise ValidationError(
                ValidationErrorKind.INVALID_FIELD, "Cost must be a non-negative number"
            )
        cost = float(cost)

    nutrients = []
    seen: set[str] = set()
    for raw in payload.get("nutrients") or []:
        nutrient_id = str(raw.get("nutrient_id") or "")
        quantity = raw.get("quantity")
        if not nutrient_id or not isinstance(quantity, int | float) or quantity < 0:
            raise ValidationError(
                ValidationErrorKind.INVALID_FIELD,
                "Each nutrient must have nutrient_id and a non-negative quantity",
            )
        nutrient_id = str(parse_nutrient_id(nutrient_id))
        if nutrient_id in seen:
            raise ValidationError(
                ValidationErrorKind.INVALID_FIELD,
                f"Nutrient {nutrient_id} listed more than once",
            )
        seen.add(nutrient_id)
        nutrients.append(
            {
                "nutrient_id": nutrient_id,
                "quantity": float(quantity),
                "unit": parse_unit(str(raw.get("unit") or "")).value,
            }
        )

    columns = {
        "name": name,
        "brand": payload.get("brand") or None,
        "category": category,
        "cost": cost,
    }
    return columns, nutrients
