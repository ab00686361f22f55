"""Per-user favorite food items."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from race_fuel.domain.errors import NotFoundError, ValidationError, ValidationErrorKind
from race_fuel.domain.foods import FavoriteFoodItem, FoodItem
from race_fuel.services.food_items import FoodItemService

_logger = logging.getLogger(__name__)


class FavoriteRepository(Protocol):
    """Persistence interface for favorite food items."""

    def list_favorites(self, user_id: UUID) -> list[FavoriteFoodItem]:
        """Return a user's favorites, oldest first."""

    def get_favorite(
        self, user_id: UUID, food_item_id: UUID
    ) -> FavoriteFoodItem | None:
        """Return the favorite for a user and food item, if present."""

    def add_favorite(self, user_id: UUID, food_item_id: UUID) -> FavoriteFoodItem:
        """Mark a food item as a favorite of the user."""

    def remove_favorite(self, user_id: UUID, food_item_id: UUID) -> None:
        """Remove a food item from the user's favorites."""


@dataclass
class FavoriteService:
    """Application service for favorite food items."""

    repository: FavoriteRepository
    food_item_service: FoodItemService

    def list_favorites(self, user_id: UUID) -> list[FoodItem]:
        """Return the user's favorite food items in the order they were added."""
        favorites = self.repository.list_favorites(user_id)
        items = self.food_item_service.items_by_id(
            [favorite.food_item_id for favorite in favorites]
        )
        return [
            items[favorite.food_item_id]
            for favorite in favorites
            if favorite.food_item_id in items
        ]

    def add_favorite(self, user_id: UUID, food_item_id: UUID) -> FavoriteFoodItem:
        self.food_item_service.get_item(food_item_id)
        if self.repository.get_favorite(user_id, food_item_id) is not None:
            raise ValidationError(
                ValidationErrorKind.DUPLICATE, "Food item is already favorited"
            )
        favorite = self.repository.add_favorite(user_id, food_item_id)
        _logger.info("User %s favorited food item %s", user_id, food_item_id)
        return favorite

    def remove_favorite(self, user_id: UUID, food_item_id: UUID) -> None:
        if self.repository.get_favorite(user_id, food_item_id) is None:
            raise NotFoundError("Favorite", food_item_id)
        self.repository.remove_favorite(user_id, food_item_id)
        _logger.info("User %s unfavorited food item %s", user_id, food_item_id)
