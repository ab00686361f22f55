"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from race_fuel.config import Settings
from race_fuel.containers import AppContainer
from race_fuel.domain.events import ConsumptionEvent, EventType, PlanningEvent
from race_fuel.domain.foods import (
    FavoriteFoodItem,
    FoodCategory,
    FoodItem,
    FoodItemNutrient,
    Nutrient,
)
from race_fuel.domain.goals import NutrientGoal
from race_fuel.domain.models import UserRecord
from race_fuel.domain.units import Unit
from race_fuel.services.cache import InMemoryCache
from race_fuel.services.consumption import ConsumptionRepository, ConsumptionService
from race_fuel.services.events import EventRepository, EventService
from race_fuel.services.favorites import FavoriteRepository, FavoriteService
from race_fuel.services.food_items import FoodItemRepository, FoodItemService
from race_fuel.services.goals import GoalRepository, GoalService
from race_fuel.services.nutrients import NutrientRepository, NutrientService
from race_fuel.services.plans import PlanService
from race_fuel.services.users import UserRepository, UserService

CARBS_ID = UUID("00000000-0000-0000-0000-0000000000c1")
SODIUM_ID = UUID("00000000-0000-0000-0000-0000000000d2")
CAFFEINE_ID = UUID("00000000-0000-0000-0000-0000000000e3")

NUTRIENTS = [
    Nutrient(id=CAFFEINE_ID, name="Caffeine", abbreviation="CAF"),
    Nutrient(id=CARBS_ID, name="Carbohydrates", abbreviation="CHO"),
    Nutrient(id=SODIUM_ID, name="Sodium", abbreviation="Na"),
]
_NUTRIENT_NAMES = {nutrient.id: nutrient.name for nutrient in NUTRIENTS}


def make_food(
    name: str,
    nutrients: list[tuple[UUID, float, Unit]],
    created_by: UUID | None = None,
) -> FoodItem:
    """Build a food item from (nutrient id, quantity, unit) triples."""
    return FoodItem(
        id=uuid4(),
        name=name,
        created_by=created_by or uuid4(),
        nutrients=[
            FoodItemNutrient(
                nutrient_id=nutrient_id,
                nutrient_name=_NUTRIENT_NAMES[nutrient_id],
                quantity=quantity,
                unit=unit,
            )
            for nutrient_id, quantity, unit in nutrients
        ],
    )


def make_instance(
    food_item_id: UUID,
    time_offset_seconds: int,
    servings: float = 1.0,
    event_id: UUID | None = None,
) -> ConsumptionEvent:
    return ConsumptionEvent(
        id=uuid4(),
        event_id=event_id or uuid4(),
        food_item_id=food_item_id,
        time_offset_seconds=time_offset_seconds,
        servings=servings,
    )


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[str, UserRecord] = field(default_factory=dict)

    def get_by_auth_sub(self, auth_sub: str) -> UserRecord | None:
        return self.users.get(auth_sub)

    def create_user(
        self, auth_sub: str, email: str | None, first_name: str, last_name: str
    ) -> UserRecord:
        user = UserRecord(
            id=uuid4(),
            auth_sub=auth_sub,
            email=email,
            first_name=first_name,
            last_name=last_name,
        )
        self.users[auth_sub] = user
        return user


@dataclass
class InMemoryEventRepository(EventRepository):
    """In-memory planning event repository for tests."""

    events: dict[UUID, PlanningEvent] = field(default_factory=dict)

    def list_events(self, user_id: UUID) -> list[PlanningEvent]:
        owned = [event for event in self.events.values() if event.user_id == user_id]
        return sorted(owned, key=lambda event: event.created_at, reverse=True)

    def get_event(self, event_id: UUID) -> PlanningEvent | None:
        return self.events.get(event_id)

    def create_event(
        self,
        user_id: UUID,
        name: str,
        event_type: EventType,
        duration_seconds: int,
    ) -> PlanningEvent:
        event = PlanningEvent(
            id=uuid4(),
            user_id=user_id,
            name=name,
            event_type=event_type,
            duration_seconds=duration_seconds,
            created_at=datetime(2026, 1, 1, tzinfo=UTC)
            + timedelta(seconds=len(self.events)),
        )
        self.events[event.id] = event
        return event

    def update_event(self, event_id: UUID, payload: dict[str, object]) -> PlanningEvent:
        event = self.events[event_id]
        event_type = payload.get("event_type")
        updated = PlanningEvent(
            id=event.id,
            user_id=event.user_id,
            name=str(payload.get("name", event.name)),
            event_type=EventType(event_type) if event_type else event.event_type,
            duration_seconds=int(
                payload.get("duration_seconds", event.duration_seconds)
            ),
            created_at=event.created_at,
        )
        self.events[event_id] = updated
        return updated

    def delete_event(self, event_id: UUID) -> None:
        self.events.pop(event_id, None)


@dataclass
class InMemoryConsumptionRepository(ConsumptionRepository):
    """In-memory food instance repository for tests."""

    instances: dict[UUID, ConsumptionEvent] = field(default_factory=dict)

    def list_for_event(self, event_id: UUID) -> list[ConsumptionEvent]:
        matching = [
            item for item in self.instances.values() if item.event_id == event_id
        ]
        return sorted(matching, key=lambda item: item.time_offset_seconds)

    def get(self, instance_id: UUID) -> ConsumptionEvent | None:
        return self.instances.get(instance_id)

    def create(
        self,
        event_id: UUID,
        food_item_id: UUID,
        time_offset_seconds: int,
        servings: float,
    ) -> ConsumptionEvent:
        instance = ConsumptionEvent(
            id=uuid4(),
            event_id=event_id,
            food_item_id=food_item_id,
            time_offset_seconds=time_offset_seconds,
            servings=servings,
        )
        self.instances[instance.id] = instance
        return instance

    def create_many(
        self, event_id: UUID, items: list[dict[str, object]]
    ) -> list[ConsumptionEvent]:
        return [
            self.create(
                event_id,
                UUID(str(item["food_item_id"])),
                int(item["time_offset_seconds"]),
                float(item["servings"]),
            )
            for item in items
        ]

    def update(self, instance_id: UUID, payload: dict[str, object]) -> ConsumptionEvent:
        current = self.instances[instance_id]
        updated = ConsumptionEvent(
            id=current.id,
            event_id=current.event_id,
            food_item_id=current.food_item_id,
            time_offset_seconds=int(
                payload.get("time_offset_seconds", current.time_offset_seconds)
            ),
            servings=float(payload.get("servings", current.servings)),
        )
        self.instances[instance_id] = updated
        return updated

    def delete(self, instance_id: UUID) -> None:
        self.instances.pop(instance_id, None)

    def delete_for_event(self, event_id: UUID) -> None:
        for instance_id in [
            item.id for item in self.instances.values() if item.event_id == event_id
        ]:
            del self.instances[instance_id]


@dataclass
class InMemoryFoodItemRepository(FoodItemRepository):
    """In-memory food item repository for tests."""

    items: dict[UUID, FoodItem] = field(default_factory=dict)

    def add(self, item: FoodItem) -> FoodItem:
        self.items[item.id] = item
        return item

    def list_items(self, created_by: UUID | None) -> list[FoodItem]:
        items = list(self.items.values())
        if created_by is not None:
            items = [item for item in items if item.created_by == created_by]
        return list(reversed(items))

    def get_item(self, food_item_id: UUID) -> FoodItem | None:
        return self.items.get(food_item_id)

    def get_items(self, food_item_ids: list[UUID]) -> list[FoodItem]:
        return [
            self.items[item_id] for item_id in food_item_ids if item_id in self.items
        ]

    def nutrient_units(
        self, nutrient_ids: list[UUID], exclude_item_id: UUID | None = None
    ) -> dict[UUID, set[Unit]]:
        units: dict[UUID, set[Unit]] = {}
        for item in self.items.values():
            if item.id == exclude_item_id:
                continue
            for nutrient in item.nutrients:
                if nutrient.nutrient_id in nutrient_ids:
                    units.setdefault(nutrient.nutrient_id, set()).add(nutrient.unit)
        return units

    def create_item(
        self,
        user_id: UUID,
        payload: dict[str, object],
        nutrients: list[dict[str, object]],
    ) -> FoodItem:
        return self.add(_build_item(uuid4(), user_id, payload, nutrients))

    def update_item(
        self,
        food_item_id: UUID,
        payload: dict[str, object],
        nutrients: list[dict[str, object]],
    ) -> FoodItem:
        created_by = self.items[food_item_id].created_by
        return self.add(_build_item(food_item_id, created_by, payload, nutrients))


def _build_item(
    food_item_id: UUID,
    created_by: UUID,
    payload: dict[str, object],
    nutrients: list[dict[str, object]],
) -> FoodItem:
    category = payload.get("category")
    return FoodItem(
        id=food_item_id,
        name=str(payload["name"]),
        created_by=created_by,
        brand=payload.get("brand"),
        category=FoodCategory(category) if category else None,
        cost=payload.get("cost"),
        nutrients=[
            FoodItemNutrient(
                nutrient_id=UUID(str(row["nutrient_id"])),
                nutrient_name=_NUTRIENT_NAMES.get(UUID(str(row["nutrient_id"])), ""),
                quantity=float(row["quantity"]),
                unit=Unit(row["unit"]),
            )
            for row in nutrients
        ],
    )


@dataclass
class InMemoryFavoriteRepository(FavoriteRepository):
    """In-memory favorites repository for tests."""

    favorites: list[FavoriteFoodItem] = field(default_factory=list)

    def list_favorites(self, user_id: UUID) -> list[FavoriteFoodItem]:
        return [favorite for favorite in self.favorites if favorite.user_id == user_id]

    def get_favorite(
        self, user_id: UUID, food_item_id: UUID
    ) -> FavoriteFoodItem | None:
        return next(
            (
                favorite
                for favorite in self.list_favorites(user_id)
                if favorite.food_item_id == food_item_id
            ),
            None,
        )

    def add_favorite(self, user_id: UUID, food_item_id: UUID) -> FavoriteFoodItem:
        favorite = FavoriteFoodItem(
            id=uuid4(), user_id=user_id, food_item_id=food_item_id
        )
        self.favorites.append(favorite)
        return favorite

    def remove_favorite(self, user_id: UUID, food_item_id: UUID) -> None:
        self.favorites = [
            favorite
            for favorite in self.favorites
            if (favorite.user_id, favorite.food_item_id) != (user_id, food_item_id)
        ]


@dataclass
class InMemoryNutrientRepository(NutrientRepository):
    """In-memory nutrient catalog that counts loads."""

    nutrients: list[Nutrient] = field(default_factory=lambda: list(NUTRIENTS))
    calls: int = 0

    def list_nutrients(self) -> list[Nutrient]:
        self.calls += 1
        return sorted(self.nutrients, key=lambda nutrient: nutrient.name)


@dataclass
class _StoredGoal:
    user_id: UUID
    event_id: UUID
    goal: NutrientGoal


@dataclass
class InMemoryGoalRepository(GoalRepository):
    """In-memory goal repository for tests."""

    base: dict[UUID, _StoredGoal] = field(default_factory=dict)
    hourly: dict[UUID, _StoredGoal] = field(default_factory=dict)

    def list_base(self, user_id: UUID, event_id: UUID) -> list[NutrientGoal]:
        return _goals_for(self.base, user_id, event_id)

    def list_hourly(self, user_id: UUID, event_id: UUID) -> list[NutrientGoal]:
        return sorted(
            _goals_for(self.hourly, user_id, event_id), key=lambda goal: goal.hour
        )

    def list_hourly_for_event(self, event_id: UUID) -> list[NutrientGoal]:
        return [
            stored.goal
            for stored in self.hourly.values()
            if stored.event_id == event_id
        ]

    def replace_base(
        self, user_id: UUID, event_id: UUID, goals: list[dict[str, object]]
    ) -> list[NutrientGoal]:
        return _replace(self.base, user_id, event_id, goals)

    def replace_hourly(
        self, user_id: UUID, event_id: UUID, goals: list[dict[str, object]]
    ) -> list[NutrientGoal]:
        return _replace(self.hourly, user_id, event_id, goals)

    def get_base(self, goal_id: UUID) -> NutrientGoal | None:
        stored = self.base.get(goal_id)
        return stored.goal if stored else None

    def get_hourly(self, goal_id: UUID) -> NutrientGoal | None:
        stored = self.hourly.get(goal_id)
        return stored.goal if stored else None

    def delete_base(self, goal_id: UUID) -> None:
        self.base.pop(goal_id, None)

    def delete_hourly(self, goal_id: UUID) -> None:
        self.hourly.pop(goal_id, None)

    def delete_for_event(self, event_id: UUID) -> None:
        for table in (self.base, self.hourly):
            for goal_id in [
                goal_id
                for goal_id, stored in table.items()
                if stored.event_id == event_id
            ]:
                del table[goal_id]


def _goals_for(
    table: dict[UUID, _StoredGoal], user_id: UUID, event_id: UUID
) -> list[NutrientGoal]:
    return [
        stored.goal
        for stored in table.values()
        if stored.user_id == user_id and stored.event_id == event_id
    ]


def _replace(
    table: dict[UUID, _StoredGoal],
    user_id: UUID,
    event_id: UUID,
    goals: list[dict[str, object]],
) -> list[NutrientGoal]:
    for goal_id in [
        goal_id
        for goal_id, stored in table.items()
        if stored.user_id == user_id and stored.event_id == event_id
    ]:
        del table[goal_id]
    saved = []
    for row in goals:
        nutrient_id = UUID(str(row["nutrient_id"]))
        goal = NutrientGoal(
            nutrient_id=nutrient_id,
            nutrient_name=_NUTRIENT_NAMES.get(nutrient_id, ""),
            quantity=float(row["quantity"]),
            unit=Unit(row["unit"]),
            hour=row.get("hour"),
            id=uuid4(),
        )
        table[goal.id] = _StoredGoal(user_id=user_id, event_id=event_id, goal=goal)
        saved.append(goal)
    return saved


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="test.service.key",
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def event_repository() -> InMemoryEventRepository:
    return InMemoryEventRepository()


@pytest.fixture
def consumption_repository() -> InMemoryConsumptionRepository:
    return InMemoryConsumptionRepository()


@pytest.fixture
def food_item_repository() -> InMemoryFoodItemRepository:
    return InMemoryFoodItemRepository()


@pytest.fixture
def goal_repository() -> InMemoryGoalRepository:
    return InMemoryGoalRepository()


@pytest.fixture
def nutrient_repository() -> InMemoryNutrientRepository:
    return InMemoryNutrientRepository()


@pytest.fixture
def event_service(
    event_repository: InMemoryEventRepository,
    consumption_repository: InMemoryConsumptionRepository,
    goal_repository: InMemoryGoalRepository,
) -> EventService:
    return EventService(event_repository, consumption_repository, goal_repository)


@pytest.fixture
def consumption_service(
    consumption_repository: InMemoryConsumptionRepository,
    event_repository: InMemoryEventRepository,
    food_item_repository: InMemoryFoodItemRepository,
) -> ConsumptionService:
    return ConsumptionService(
        consumption_repository, event_repository, food_item_repository
    )


@pytest.fixture
def food_item_service(
    food_item_repository: InMemoryFoodItemRepository,
) -> FoodItemService:
    return FoodItemService(food_item_repository)


@pytest.fixture
def favorite_service(food_item_service: FoodItemService) -> FavoriteService:
    return FavoriteService(InMemoryFavoriteRepository(), food_item_service)


@pytest.fixture
def goal_service(
    goal_repository: InMemoryGoalRepository,
    event_repository: InMemoryEventRepository,
    food_item_repository: InMemoryFoodItemRepository,
) -> GoalService:
    return GoalService(goal_repository, event_repository, food_item_repository)


@pytest.fixture
def plan_service(
    event_repository: InMemoryEventRepository,
    consumption_repository: InMemoryConsumptionRepository,
    food_item_service: FoodItemService,
    goal_repository: InMemoryGoalRepository,
) -> PlanService:
    return PlanService(
        event_repository,
        consumption_repository,
        food_item_service,
        goal_repository,
    )


@pytest.fixture
def container(
    settings: Settings,
    user_repository: InMemoryUserRepository,
    event_service: EventService,
    food_item_service: FoodItemService,
    favorite_service: FavoriteService,
    nutrient_repository: InMemoryNutrientRepository,
    consumption_service: ConsumptionService,
    goal_service: GoalService,
    plan_service: PlanService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        user_service=UserService(user_repository),
        event_service=event_service,
        food_item_service=food_item_service,
        favorite_service=favorite_service,
        nutrient_service=NutrientService(nutrient_repository, InMemoryCache()),
        consumption_service=consumption_service,
        goal_service=goal_service,
        plan_service=plan_service,
        close_resources=close_resources,
    )
