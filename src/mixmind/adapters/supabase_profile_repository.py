"""Supabase repository for user taste profiles."""

from dataclasses import dataclass

from supabase import Client

from mixmind.adapters.supabase_errors import execute
from mixmind.domain.profiles import AbvRange, BarInventoryItem, UserProfile
from mixmind.services.recommendations import ProfileStore


@dataclass
class SupabaseProfileRepository(ProfileStore):
    """Supabase implementation for user profiles."""

    client: Client
    table: str = "user_profiles"

    def get(self, user_id: str) -> UserProfile | None:
        """Return the stored profile for a user."""
        response = execute(
            self.client.table(self.table)
            .select("*")
            .eq("user_id", user_id)
            .limit(1),
            "load profile",
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])


def _parse_profile(row: dict[str, object]) -> UserProfile:
    abv_raw = row.get("preferred_abv_range")
    abv_range = (
        AbvRange(min=float(abv_raw["min"]), max=float(abv_raw["max"]))
        if isinstance(abv_raw, dict)
        else None
    )
    bar_inventory = tuple(
        BarInventoryItem(type=item["type"], id=item.get("id"), name=item.get("name"))
        for item in row.get("bar_inventory") or []
        if item.get("type")
    )
    return UserProfile(
        user_id=str(row["user_id"]),
        favorite_spirit=row.get("favorite_spirit"),
        spirit_preferences=frozenset(row.get("spirit_preferences") or []),
        flavor_profiles=frozenset(row.get("flavor_profiles") or []),
        skill_level=str(row.get("skill_level") or "beginner"),
        preferred_abv_range=abv_range,
        alcohol_preference=str(row.get("alcohol_preference") or "full"),
        available_tools=frozenset(row.get("available_tools") or []),
        saved_recipes=frozenset(row.get("saved_recipes") or []),
        favorite_recipes=frozenset(row.get("favorite_recipes") or []),
        disliked_recipes=frozenset(row.get("disliked_recipes") or []),
        bar_inventory=bar_inventory,
    )
