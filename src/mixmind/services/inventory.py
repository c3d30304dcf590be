"""Home bar inventory service."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol
from uuid import uuid4

from mixmind.domain.errors import NotFoundError
from mixmind.domain.profiles import BarIngredient
from mixmind.domain.recipes import SPIRITS
from mixmind.domain.shopping import GroceryItem

_GROCERY_TO_BAR_CATEGORY = {
    "spirits_liquors": "spirit",
    "mixers": "mixer",
    "garnish": "garnish",
    "bitters": "bitters",
    "syrup": "syrup",
    "other": "other",
}

_logger = logging.getLogger(__name__)


class InventoryRepository(Protocol):
    """Persistence interface for home bar ingredients."""

    def list_ingredients(self, user_id: str) -> list[BarIngredient]:
        """Return every ingredient in a user's bar."""

    def add_ingredient(self, user_id: str, ingredient: BarIngredient) -> BarIngredient:
        """Store an ingredient and return it."""

    def remove_ingredient(self, user_id: str, ingredient_id: str) -> bool:
        """Remove an ingredient; return False when it did not exist."""


def spirit_types(ingredients: Iterable[BarIngredient]) -> set[str]:
    """Return the base spirit types present among bar ingredients."""
    found: set[str] = set()
    for ingredient in ingredients:
        if ingredient.subcategory in SPIRITS:
            found.add(ingredient.subcategory)
            continue
        lowered = ingredient.name.lower()
        found.update(spirit for spirit in SPIRITS if spirit in lowered.split())
    return found


def _now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class InventoryService:
    """Application service for adding and finishing home bar bottles."""

    repository: InventoryRepository
    clock: Callable[[], datetime] = field(default=_now)

    def list_ingredients(self, user_id: str) -> list[BarIngredient]:
        """Return the user's current bar."""
        return self.repository.list_ingredients(user_id)

    def add(  # noqa: PLR0913
        self,
        user_id: str,
        name: str,
        category: str,
        subcategory: str | None = None,
        brand: str | None = None,
        abv: float | None = None,
        volume: float | None = None,
        tags: tuple[str, ...] = (),
    ) -> BarIngredient:
        """Add a new ingredient to the bar."""
        ingredient = BarIngredient(
            id=str(uuid4()),
            name=name,
            category=category,
            added_at=self.clock(),
            subcategory=subcategory,
            brand=brand,
            abv=abv,
            volume=volume,
            tags=tags,
        )
        return self.repository.add_ingredient(user_id, ingredient)

    def add_purchased(self, user_id: str, item: GroceryItem) -> BarIngredient:
        """Move a purchased grocery item into the bar."""
        category = _GROCERY_TO_BAR_CATEGORY.get(item.category, "other")
        if item.subcategory and "liqueur" in item.subcategory:
            category = "liqueur"
        brand = item.brand if item.brand and item.brand != "Unknown" else None
        _logger.info(
            "Adding purchased item to bar: user=%s item=%s", user_id, item.name
        )
        return self.add(
            user_id,
            name=item.name,
            category=category,
            subcategory=item.subcategory,
            brand=brand,
            tags=("purchased",),
        )

    def finish(self, user_id: str, ingredient_id: str) -> None:
        """Remove a finished or deleted ingredient from the bar."""
        if not self.repository.remove_ingredient(user_id, ingredient_id):
            raise NotFoundError("bar ingredient", ingredient_id)
