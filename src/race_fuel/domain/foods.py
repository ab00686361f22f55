"""Domain models for the food item catalog."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from race_fuel.domain.units import Unit


class FoodCategory(StrEnum):
    """Catalog categories for food items."""

    ENERGY_GEL = "ENERGY_GEL"
    ENERGY_BAR = "ENERGY_BAR"
    SPORTS_DRINK = "SPORTS_DRINK"
    FRUIT = "FRUIT"
    SNACK = "SNACK"
    OTHER = "OTHER"


@dataclass(frozen=True)
class Nutrient:
    """A trackable nutrient."""

    id: UUID
    name: str
    abbreviation: str


@dataclass(frozen=True)
class FoodItemNutrient:
    """Per-serving quantity of a nutrient in a food item."""

    nutrient_id: UUID
    nutrient_name: str
    quantity: float
    unit: Unit


@dataclass(frozen=True)
class FoodItem:
    """A catalog food item with per-serving nutrients."""

    id: UUID
    name: str
    created_by: UUID
    brand: str | None = None
    category: FoodCategory | None = None
    cost: float | None = None
    nutrients: list[FoodItemNutrient] = field(default_factory=list)


@dataclass(frozen=True)
class FavoriteFoodItem:
    """A catalog food item a user marked as a favorite."""

    id: UUID
    user_id: UUID
    food_item_id: UUID
    created_at: datetime | None = None
