"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from race_fuel.adapters.supabase_consumption_repository import (
    SupabaseConsumptionRepository,
)
from race_fuel.adapters.supabase_event_repository import SupabaseEventRepository
from race_fuel.adapters.supabase_favorite_repository import (
    SupabaseFavoriteRepository,
)
from race_fuel.adapters.supabase_food_item_repository import (
    SupabaseFoodItemRepository,
)
from race_fuel.adapters.supabase_goal_repository import SupabaseGoalRepository
from race_fuel.adapters.supabase_nutrient_repository import SupabaseNutrientRepository
from race_fuel.adapters.supabase_user_repository import SupabaseUserRepository
from race_fuel.config import Settings
from race_fuel.services.cache import InMemoryCache
from race_fuel.services.consumption import ConsumptionService
from race_fuel.services.events import EventService
from race_fuel.services.favorites import FavoriteService
from race_fuel.services.food_items import FoodItemService
from race_fuel.services.goals import GoalService
from race_fuel.services.nutrients import NutrientService
from race_fuel.services.plans import PlanService
from race_fuel.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    event_service: EventService
    food_item_service: FoodItemService
    favorite_service: FavoriteService
    nutrient_service: NutrientService
    consumption_service: ConsumptionService
    goal_service: GoalService
    plan_service: PlanService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    event_repository = SupabaseEventRepository(supabase_client)
    consumption_repository = SupabaseConsumptionRepository(supabase_client)
    food_item_repository = SupabaseFoodItemRepository(supabase_client)
    nutrient_repository = SupabaseNutrientRepository(supabase_client)
    goal_repository = SupabaseGoalRepository(supabase_client)
    favorite_repository = SupabaseFavoriteRepository(supabase_client)
    food_item_service = FoodItemService(food_item_repository)
    nutrient_cache = InMemoryCache()

    async def close_resources() -> None:
        nutrient_cache.clear()

    return AppContainer(
        settings=resolved_settings,
        user_service=UserService(user_repository),
        event_service=EventService(
            event_repository, consumption_repository, goal_repository
        ),
        food_item_service=food_item_service,
        favorite_service=FavoriteService(favorite_repository, food_item_service),
        nutrient_service=NutrientService(
            nutrient_repository,
            nutrient_cache,
            ttl_seconds=resolved_settings.nutrient_cache_ttl_seconds,
        ),
        consumption_service=ConsumptionService(
            consumption_repository, event_repository, food_item_repository
        ),
        goal_service=GoalService(
            goal_repository, event_repository, food_item_repository
        ),
        plan_service=PlanService(
            event_repository,
            consumption_repository,
            food_item_service,
            goal_repository,
            layout_config=resolved_settings.layout_config(),
        ),
        close_resources=close_resources,
    )
