"""Per-recipe shopping lists and the consolidated cart view.

Mutations are identity-scoped: checking, re-branding, or deleting an item
affects exactly the one ``GroceryItem`` whose id is given. The consolidated
view groups by normalized name for display only, so checking "Lime Juice" in
one recipe's list leaves the "Lime Juice" entries of other lists unchanged.
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import uuid4

from mixmind.domain.errors import InvalidInputError, NotFoundError
from mixmind.domain.shopping import (
    CartSummary,
    ConsolidatedItem,
    ConsolidatedView,
    GroceryItem,
    ShoppingList,
)
from mixmind.services.ingredients import (
    PriceEstimator,
    categorize,
    parse_ingredient,
    subcategory_for,
    vermouth_price,
    where_to_find,
)
from mixmind.services.normalizer import normalize_key

UNKNOWN_BRAND = "Unknown"

IngredientLine = str | tuple[str, str | None]

_logger = logging.getLogger(__name__)


class ShoppingListRepository(Protocol):
    """Whole-collection persistence for shopping lists."""

    def load_lists(self) -> list[ShoppingList]:
        """Return every stored list."""

    def save_lists(self, lists: list[ShoppingList]) -> None:
        """Replace the stored collection with the given lists."""


def _now() -> datetime:
    return datetime.now(tz=UTC)


def _new_id() -> str:
    return uuid4().hex


def build_grocery_items(
    ingredients: Sequence[IngredientLine],
    price_estimator: PriceEstimator,
    id_factory: Callable[[], str] = _new_id,
) -> list[GroceryItem]:
    """Parse and categorize ingredient lines into fresh grocery items."""
    items = []
    for index, line in enumerate(ingredients):
        raw, recipe_note = (line, None) if isinstance(line, str) else line
        if not raw or not raw.strip():
            continue
        parsed = parse_ingredient(raw)
        category = categorize(parsed.name)
        notes = parsed.notes
        if recipe_note:
            notes = f"{recipe_note} • {notes}" if notes else recipe_note
        items.append(
            GroceryItem(
                id=f"item_{id_factory()}",
                name=parsed.name,
                category=category,
                subcategory=subcategory_for(parsed.name),
                brand=parsed.brand or UNKNOWN_BRAND,
                size=parsed.size,
                notes=notes,
                estimated_price=price_estimator.estimate(parsed.name),
                where_to_find=where_to_find(category),
                original_index=index,
            )
        )
    return items


def get_consolidated_view(lists: Iterable[ShoppingList]) -> ConsolidatedView:
    """Project stored lists into per-recipe groups and a deduplicated cart.

    The first occurrence of a normalized name is the representative for that
    name: its id, price, and metadata are kept, while later occurrences only
    raise ``quantity`` and extend ``recipe_names``.
    """
    items_by_recipe: dict[str, list[GroceryItem]] = {}
    representatives: dict[str, GroceryItem] = {}
    quantities: dict[str, int] = {}
    provenance: dict[str, list[str]] = {}

    for shopping_list in lists:
        recipe_items = items_by_recipe.setdefault(shopping_list.recipe_name, [])
        for item in shopping_list.items:
            recipe_items.append(item)
            key = normalize_key(item.name)
            if key in representatives:
                quantities[key] += 1
                if shopping_list.recipe_name not in provenance[key]:
                    provenance[key].append(shopping_list.recipe_name)
            else:
                representatives[key] = item
                quantities[key] = 1
                provenance[key] = [shopping_list.recipe_name]

    all_items = [
        ConsolidatedItem(
            item=item,
            quantity=quantities[key],
            recipe_names=tuple(provenance[key]),
        )
        for key, item in representatives.items()
    ]
    return ConsolidatedView(items_by_recipe=items_by_recipe, all_items=all_items)


def migrate_lists(lists: Iterable[ShoppingList]) -> list[ShoppingList]:
    """Backfill missing subcategories from item names."""
    migrated = []
    for shopping_list in lists:
        items = tuple(
            item
            if item.subcategory
            else replace(item, subcategory=subcategory_for(item.name))
            for item in shopping_list.items
        )
        migrated.append(replace(shopping_list, items=items))
    return migrated


def normalize_vermouth_category(lists: Iterable[ShoppingList]) -> list[ShoppingList]:
    """Move vermouths stored under older categories into spirits & liquors."""
    upgraded = []
    for shopping_list in lists:
        items = tuple(
            replace(
                item,
                category="spirits_liquors",
                estimated_price=item.estimated_price or vermouth_price(item.name),
            )
            if "vermouth" in item.name.lower() and item.category != "spirits_liquors"
            else item
            for item in shopping_list.items
        )
        upgraded.append(replace(shopping_list, items=items))
    return upgraded


def combine_lists(lists: Sequence[ShoppingList]) -> list[GroceryItem]:
    """Merge lists into one item per normalized name, joining differing notes."""
    if not lists:
        raise InvalidInputError("Cannot combine an empty set of shopping lists")
    combined: dict[str, GroceryItem] = {}
    for shopping_list in lists:
        for item in shopping_list.items:
            key = normalize_key(item.name)
            existing = combined.get(key)
            if existing is None:
                combined[key] = item
            elif item.notes and existing.notes != item.notes:
                notes = (
                    f"{existing.notes}; {item.notes}" if existing.notes else item.notes
                )
                combined[key] = replace(existing, notes=notes)
    return list(combined.values())


def total_cost(items: Iterable[GroceryItem]) -> float:
    """Sum estimated prices, treating unknown prices as zero."""
    return sum(item.estimated_price or 0 for item in items)


def group_by_category(items: Iterable[GroceryItem]) -> dict[str, list[GroceryItem]]:
    """Group items by grocery category, preserving input order."""
    groups: dict[str, list[GroceryItem]] = {}
    for item in items:
        groups.setdefault(item.category, []).append(item)
    return groups


@dataclass
class ShoppingListService:
    """Application service that owns the stored shopping lists.

    Every mutation is a load-all, mutate, save-all cycle against the injected
    store; derived views are recomputed from a fresh read each time.
    """

    store: ShoppingListRepository
    price_estimator: PriceEstimator = field(default_factory=PriceEstimator)
    id_factory: Callable[[], str] = field(default=_new_id)
    clock: Callable[[], datetime] = field(default=_now)
    user_id: str | None = None

    def get_lists(self) -> list[ShoppingList]:
        """Return every stored list, with legacy vermouth entries upgraded."""
        return normalize_vermouth_category(self.store.load_lists())

    def get_item(self, item_id: str) -> GroceryItem:
        """Return one item instance by id."""
        for shopping_list in self.get_lists():
            for item in shopping_list.items:
                if item.id == item_id:
                    return item
        raise NotFoundError("shopping item", item_id)

    def create_list(
        self,
        recipe_name: str,
        ingredients: Sequence[IngredientLine],
        recipe_id: str | None = None,
    ) -> ShoppingList:
        """Convert a recipe's ingredient lines into a stored shopping list."""
        if not recipe_name or not recipe_name.strip():
            raise InvalidInputError("recipe_name must not be blank")
        items = build_grocery_items(ingredients, self.price_estimator, self.id_factory)
        if not items:
            raise InvalidInputError("A shopping list needs at least one ingredient")

        now = self.clock()
        shopping_list = ShoppingList(
            id=f"shopping_{self.id_factory()}",
            recipe_name=recipe_name,
            name=f"{recipe_name} - Shopping List",
            items=tuple(items),
            created_at=now,
            updated_at=now,
            recipe_ids=(recipe_id,) if recipe_id else (),
            user_id=self.user_id,
        )
        lists = self.store.load_lists()
        lists.append(shopping_list)
        self.store.save_lists(lists)
        _logger.info(
            "Shopping list created: recipe=%s items=%s", recipe_name, len(items)
        )
        return shopping_list

    def add_item(self, name: str, source: str = "Recommendation") -> ShoppingList:
        """Store a single suggested ingredient as its own list."""
        return self.create_list(source, [name])

    def delete_list(self, list_id: str) -> None:
        """Remove a whole list."""
        lists = self.store.load_lists()
        remaining = [
            shopping_list for shopping_list in lists if shopping_list.id != list_id
        ]
        if len(remaining) == len(lists):
            raise NotFoundError("shopping list", list_id)
        self.store.save_lists(remaining)
        _logger.info("Shopping list deleted: list=%s", list_id)

    def delete_item(self, item_id: str) -> None:
        """Remove one item; a list left empty is removed as well."""
        lists = self.store.load_lists()
        updated: list[ShoppingList] = []
        found = False
        for shopping_list in lists:
            items = tuple(item for item in shopping_list.items if item.id != item_id)
            if len(items) == len(shopping_list.items):
                updated.append(shopping_list)
                continue
            found = True
            if not items:
                _logger.info(
                    "Shopping list emptied and removed: recipe=%s",
                    shopping_list.recipe_name,
                )
                continue
            updated.append(replace(shopping_list, items=items, updated_at=self.clock()))
        if not found:
            raise NotFoundError("shopping item", item_id)
        self.store.save_lists(updated)
        _logger.info("Shopping item deleted: item=%s", item_id)

    def set_checked(self, item_id: str, checked: bool) -> GroceryItem:
        """Set the checked state of exactly one item instance."""
        updated_item: GroceryItem | None = None

        def apply(item: GroceryItem) -> GroceryItem:
            nonlocal updated_item
            updated_item = replace(item, checked=checked, is_completed=checked)
            return updated_item

        self._update_item(item_id, apply)
        _logger.info("Shopping item checked=%s: item=%s", checked, item_id)
        return updated_item

    def update_item_brand(self, item_id: str, brand: str) -> None:
        """Change the preferred brand of one item instance."""
        self._update_item(item_id, lambda item: replace(item, brand=brand))

    def update_list_items(
        self, list_id: str, checked_ids: Iterable[str]
    ) -> ShoppingList:
        """Set each item's completion from the given id set."""
        checked = set(checked_ids)
        lists = self.store.load_lists()
        for index, shopping_list in enumerate(lists):
            if shopping_list.id != list_id:
                continue
            items = tuple(
                replace(
                    item, checked=item.id in checked, is_completed=item.id in checked
                )
                for item in shopping_list.items
            )
            lists[index] = replace(
                shopping_list,
                items=items,
                is_completed=all(item.is_completed for item in items),
                updated_at=self.clock(),
            )
            self.store.save_lists(lists)
            return lists[index]
        raise NotFoundError("shopping list", list_id)

    def get_consolidated(self) -> ConsolidatedView:
        """Re-read the store and build the combined cart view."""
        return get_consolidated_view(self.get_lists())

    def get_cart_summary(self) -> CartSummary:
        """Merge every list into one priced cart grouped by category."""
        lists = self.get_lists()
        if not lists:
            return CartSummary(items=[], total_cost=0.0, by_category={})
        items = combine_lists(lists)
        return CartSummary(
            items=items,
            total_cost=total_cost(items),
            by_category=group_by_category(items),
        )

    def migrate(self) -> int:
        """Backfill missing subcategories; return how many items changed."""
        lists = self.store.load_lists()
        migrated = migrate_lists(lists)
        changed = sum(
            1
            for before, after in zip(lists, migrated, strict=True)
            for old, new in zip(before.items, after.items, strict=True)
            if old.subcategory != new.subcategory
        )
        if changed:
            self.store.save_lists(migrated)
        _logger.info("Shopping lists migrated: items_backfilled=%s", changed)
        return changed

    def clear(self) -> None:
        """Remove every stored list."""
        self.store.save_lists([])

    def _update_item(
        self, item_id: str, change: Callable[[GroceryItem], GroceryItem]
    ) -> None:
        lists = self.store.load_lists()
        for index, shopping_list in enumerate(lists):
            if not any(item.id == item_id for item in shopping_list.items):
                continue
            items = tuple(
                change(item) if item.id == item_id else item
                for item in shopping_list.items
            )
            lists[index] = replace(
                shopping_list,
                items=items,
                is_completed=all(item.is_completed for item in items),
                updated_at=self.clock(),
            )
            self.store.save_lists(lists)
            return
        raise NotFoundError("shopping item", item_id)
