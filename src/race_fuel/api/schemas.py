"""Pydantic models for API request bodies."""

from uuid import UUID

from pydantic import BaseModel, Field

from race_fuel.domain.events import EventType


class SyncUserRequest(BaseModel):
    """Profile details forwarded by the identity provider."""

    auth0_sub: str = Field(min_length=1)
    email: str | None = None
    first_name: str = ""
    last_name: str = ""


class CreateEventRequest(BaseModel):
    """New planning event."""

    name: str
    event_type: EventType = EventType.OTHER
    duration_seconds: int


class UpdateEventRequest(BaseModel):
    """Partial planning event update."""

    name: str | None = None
    event_type: EventType | None = None
    duration_seconds: int | None = None


class FoodItemNutrientInput(BaseModel):
    """Per-serving nutrient quantity of a food item."""

    nutrient_id: UUID
    quantity: float
    unit: str


class FoodItemRequest(BaseModel):
    """Food item with its per-serving nutrients."""

    name: str
    brand: str | None = None
    category: str | None = None
    cost: float | None = None
    nutrients: list[FoodItemNutrientInput] = Field(default_factory=list)


class CreateFoodInstanceRequest(BaseModel):
    """Food item scheduled at an elapsed time."""

    food_item_id: UUID
    time_offset_seconds: int
    servings: float = 1.0


class RepeatFoodInstanceRequest(BaseModel):
    """Food item scheduled at a fixed interval."""

    food_item_id: UUID
    start_seconds: int
    interval_seconds: int
    servings: float = 1.0
    end_seconds: int | None = None


class UpdateFoodInstanceRequest(BaseModel):
    """Partial food instance update."""

    time_offset_seconds: int | None = None
    servings: float | None = None


class GoalInput(BaseModel):
    """Nutrient target applied to every hour."""

    nutrient_id: UUID
    quantity: float
    unit: str


class HourlyGoalInput(GoalInput):
    """Nutrient target overriding the base goal for one hour."""

    hour: int


class BaseGoalsRequest(BaseModel):
    goals: list[GoalInput] = Field(default_factory=list)


class HourlyGoalsRequest(BaseModel):
    goals: list[HourlyGoalInput] = Field(default_factory=list)


class FavoriteRequest(BaseModel):
    """Food item to add to the user's favorites."""

    food_item_id: UUID
