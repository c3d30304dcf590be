"""Domain models for per-recipe shopping lists and the consolidated cart."""

from dataclasses import dataclass, field
from datetime import datetime

GROCERY_CATEGORIES = (
    "spirits_liquors",
    "mixers",
    "garnish",
    "bitters",
    "syrup",
    "other",
)


@dataclass(frozen=True)
class ParsedIngredient:
    """Structured pieces extracted from a raw ingredient line."""

    name: str
    amount: str | None = None
    unit: str | None = None
    brand: str | None = None
    size: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class GroceryItem:
    """One ingredient occurrence within one shopping list."""

    id: str
    name: str
    category: str
    subcategory: str | None = None
    brand: str | None = None
    size: str | None = None
    notes: str | None = None
    checked: bool = False
    is_completed: bool = False
    estimated_price: float | None = None
    where_to_find: str | None = None
    original_index: int | None = None


@dataclass(frozen=True)
class ShoppingList:
    """Shopping list generated from a single recipe."""

    id: str
    recipe_name: str
    name: str
    items: tuple[GroceryItem, ...]
    created_at: datetime
    updated_at: datetime
    is_completed: bool = False
    recipe_ids: tuple[str, ...] = field(default_factory=tuple)
    user_id: str | None = None


@dataclass(frozen=True)
class ConsolidatedItem:
    """Grocery item annotated with how often and where it is needed."""

    item: GroceryItem
    quantity: int
    recipe_names: tuple[str, ...]


@dataclass(frozen=True)
class ConsolidatedView:
    """Read-time projection of all stored lists for the combined cart."""

    items_by_recipe: dict[str, list[GroceryItem]]
    all_items: list[ConsolidatedItem]


@dataclass(frozen=True)
class CartSummary:
    """Combined cart with one item per ingredient, priced and grouped by aisle."""

    items: list[GroceryItem]
    total_cost: float
    by_category: dict[str, list[GroceryItem]]
