"""Nutrient catalog service."""

from dataclasses import dataclass
from typing import Protocol

from race_fuel.domain.foods import Nutrient
from race_fuel.services.cache import Cache, get_or_load

_CATALOG_KEY = "nutrients:all"


class NutrientRepository(Protocol):
    """Persistence interface for the nutrient catalog."""

    def list_nutrients(self) -> list[Nutrient]:
        """Return all nutrients ordered by name."""


@dataclass
class NutrientService:
    """Read access to the nutrient catalog with caching."""

    repository: NutrientRepository
    cache: Cache
    ttl_seconds: int = 3600

    def list_nutrients(self) -> list[Nutrient]:
        """Return the nutrient catalog."""
        return get_or_load(
            self.cache,
            _CATALOG_KEY,
            self.repository.list_nutrients,
            ttl_seconds=self.ttl_seconds,
        )

    def refresh(self) -> None:
        """Forget the cached catalog."""
        self.cache.invalidate(_CATALOG_KEY)
