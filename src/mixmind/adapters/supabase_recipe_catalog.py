"""Supabase implementation of the recipe catalog."""

from dataclasses import dataclass

from supabase import Client

from mixmind.adapters.supabase_errors import execute
from mixmind.domain.recipes import Recipe
from mixmind.services.recommendations import RecipeCatalog


@dataclass
class SupabaseRecipeCatalog(RecipeCatalog):
    """Supabase-backed read access to cocktail recipes."""

    client: Client
    table: str = "recipes"

    def get_all(self) -> list[Recipe]:
        """Return every recipe ordered by id."""
        response = execute(
            self.client.table(self.table).select("*").order("id"),
            "load recipes",
        )
        return [_parse_recipe(row) for row in response.data or []]


def _parse_recipe(row: dict[str, object]) -> Recipe:
    return Recipe(
        id=str(row["id"]),
        name=str(row.get("name") or ""),
        spirits_used=frozenset(row.get("spirits_used") or []),
        base_spirit=row.get("base_spirit"),
        flavor_profiles=frozenset(row.get("flavor_profiles") or []),
        difficulty=str(row.get("difficulty") or "beginner"),
        abv=float(row.get("abv") or 0),
        tools=frozenset(row.get("tools") or []),
        preparation_time=int(row.get("preparation_time") or 0),
        ingredients=tuple(row.get("ingredients") or []),
        category=row.get("category"),
        saves=int(row.get("saves") or 0),
    )
