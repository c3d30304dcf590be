"""Supabase store for a user's shopping lists.

The whole collection is kept as a JSON document in a single row per user, so
``save_lists`` replaces the previous document in one upsert.
"""

from dataclasses import asdict, dataclass
from datetime import UTC, datetime

from supabase import Client

from mixmind.adapters.supabase_errors import execute
from mixmind.domain.shopping import GroceryItem, ShoppingList
from mixmind.services.shopping import ShoppingListRepository


@dataclass
class SupabaseShoppingListStore(ShoppingListRepository):
    """Supabase-backed shopping list collection for one user."""

    client: Client
    user_id: str
    table: str = "shopping_lists"

    def load_lists(self) -> list[ShoppingList]:
        """Return the user's stored lists, or an empty list."""
        response = execute(
            self.client.table(self.table)
            .select("lists")
            .eq("user_id", self.user_id)
            .limit(1),
            "load shopping lists",
        )
        if not response.data:
            return []
        return [_parse_list(raw) for raw in response.data[0].get("lists") or []]

    def save_lists(self, lists: list[ShoppingList]) -> None:
        """Replace the user's stored lists."""
        execute(
            self.client.table(self.table).upsert(
                {
                    "user_id": self.user_id,
                    "lists": [_serialize_list(item) for item in lists],
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="user_id",
            ),
            "save shopping lists",
        )


def _serialize_list(shopping_list: ShoppingList) -> dict[str, object]:
    return {
        "id": shopping_list.id,
        "recipe_name": shopping_list.recipe_name,
        "name": shopping_list.name,
        "items": [asdict(item) for item in shopping_list.items],
        "created_at": shopping_list.created_at.isoformat(),
        "updated_at": shopping_list.updated_at.isoformat(),
        "is_completed": shopping_list.is_completed,
        "recipe_ids": list(shopping_list.recipe_ids),
        "user_id": shopping_list.user_id,
    }


def _parse_list(raw: dict[str, object]) -> ShoppingList:
    return ShoppingList(
        id=str(raw["id"]),
        recipe_name=str(raw["recipe_name"]),
        name=str(raw.get("name") or f"{raw['recipe_name']} - Shopping List"),
        items=tuple(_parse_item(item) for item in raw.get("items") or []),
        created_at=datetime.fromisoformat(str(raw["created_at"])),
        updated_at=datetime.fromisoformat(str(raw["updated_at"])),
        is_completed=bool(raw.get("is_completed", False)),
        recipe_ids=tuple(raw.get("recipe_ids") or []),
        user_id=raw.get("user_id"),
    )


def _parse_item(raw: dict[str, object]) -> GroceryItem:
    price = raw.get("estimated_price")
    return GroceryItem(
        id=str(raw["id"]),
        name=str(raw["name"]),
        category=str(raw.get("category") or "other"),
        subcategory=raw.get("subcategory"),
        brand=raw.get("brand"),
        size=raw.get("size"),
        notes=raw.get("notes"),
        checked=bool(raw.get("checked", False)),
        is_completed=bool(raw.get("is_completed", False)),
        estimated_price=float(price) if price is not None else None,
        where_to_find=raw.get("where_to_find"),
        original_index=raw.get("original_index"),
    )
