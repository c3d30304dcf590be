"""Supabase repository for home bar ingredients."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from mixmind.adapters.supabase_errors import execute
from mixmind.domain.errors import PersistenceError
from mixmind.domain.profiles import BarIngredient
from mixmind.services.inventory import InventoryRepository


@dataclass
class SupabaseInventoryRepository(InventoryRepository):
    """Supabase-backed repository for bar ingredients."""

    client: Client
    table: str = "bar_ingredients"

    def list_ingredients(self, user_id: str) -> list[BarIngredient]:
        """Return a user's bar ingredients, oldest first."""
        response = execute(
            self.client.table(self.table)
            .select("*")
            .eq("user_id", user_id)
            .order("added_at"),
            "load bar ingredients",
        )
        return [_parse_ingredient(row) for row in response.data or []]

    def add_ingredient(self, user_id: str, ingredient: BarIngredient) -> BarIngredient:
        """Insert an ingredient and return the stored row."""
        response = execute(
            self.client.table(self.table).insert(
                {
                    "id": ingredient.id,
                    "user_id": user_id,
                    "name": ingredient.name,
                    "category": ingredient.category,
                    "subcategory": ingredient.subcategory,
                    "brand": ingredient.brand,
                    "abv": ingredient.abv,
                    "volume": ingredient.volume,
                    "tags": list(ingredient.tags),
                    "added_at": ingredient.added_at.isoformat(),
                }
            ),
            "add bar ingredient",
        )
        if not response.data:
            raise PersistenceError("Failed to add bar ingredient")
        return _parse_ingredient(response.data[0])

    def remove_ingredient(self, user_id: str, ingredient_id: str) -> bool:
        """Delete an ingredient; return whether a row was removed."""
        response = execute(
            self.client.table(self.table)
            .delete()
            .eq("user_id", user_id)
            .eq("id", ingredient_id),
            "remove bar ingredient",
        )
        return bool(response.data)


def _parse_ingredient(row: dict[str, object]) -> BarIngredient:
    abv = row.get("abv")
    volume = row.get("volume")
    return BarIngredient(
        id=str(row["id"]),
        name=str(row["name"]),
        category=str(row.get("category") or "other"),
        added_at=datetime.fromisoformat(str(row["added_at"])),
        subcategory=row.get("subcategory"),
        brand=row.get("brand"),
        abv=float(abv) if abv is not None else None,
        volume=float(volume) if volume is not None else None,
        tags=tuple(row.get("tags") or []),
    )
