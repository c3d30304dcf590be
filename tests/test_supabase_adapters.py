"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest

from mixmind.adapters.supabase_inventory_repository import SupabaseInventoryRepository
from mixmind.adapters.supabase_profile_repository import SupabaseProfileRepository
from mixmind.adapters.supabase_recipe_catalog import SupabaseRecipeCatalog
from mixmind.adapters.supabase_shopping_list_store import SupabaseShoppingListStore
from mixmind.domain.errors import PersistenceError
from mixmind.domain.profiles import AbvRange, BarIngredient
from mixmind.domain.shopping import GroceryItem, ShoppingList


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "upsert": [], "delete": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    error: Exception | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def upsert(  # type: ignore[no-untyped-def]
        self, payload, on_conflict: str = ""
    ) -> "FakeTable":
        self._action = "upsert"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        if self.error is not None:
            raise self.error
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_supabase_recipe_catalog_parses_rows() -> None:
    client = FakeSupabaseClient()
    client.table("recipes").queue(
        "select",
        [
            {
                "id": "negroni",
                "name": "Negroni",
                "spirits_used": ["gin"],
                "base_spirit": "gin",
                "flavor_profiles": ["bitter", "herbal"],
                "difficulty": "beginner",
                "abv": 24,
                "tools": ["jigger"],
                "preparation_time": 3,
                "ingredients": ["1 oz Gin", "1 oz Campari"],
                "saves": 12,
            }
        ],
    )

    (recipe,) = SupabaseRecipeCatalog(client).get_all()

    assert recipe.id == "negroni"
    assert recipe.spirits_used == frozenset({"gin"})
    assert recipe.abv == 24.0
    assert recipe.ingredients == ("1 oz Gin", "1 oz Campari")
    assert recipe.saves == 12


def test_supabase_profile_repository() -> None:
    client = FakeSupabaseClient()
    profiles_table = client.table("user_profiles")
    profiles_table.queue(
        "select",
        [
            {
                "user_id": "user-1",
                "favorite_spirit": "gin",
                "flavor_profiles": ["herbal"],
                "skill_level": "intermediate",
                "preferred_abv_range": {"min": 10, "max": 25},
                "bar_inventory": [{"id": "b1", "name": "Tanqueray", "type": "gin"}],
            }
        ],
    )

    repository = SupabaseProfileRepository(client)
    profile = repository.get("user-1")

    assert profile is not None
    assert profile.preferred_abv_range == AbvRange(min=10.0, max=25.0)
    assert profile.bar_inventory[0].type == "gin"
    assert profile.alcohol_preference == "full"
    assert profiles_table.last_filters == [("user_id", "user-1")]
    assert repository.get("missing") is None


def test_supabase_inventory_repository() -> None:
    client = FakeSupabaseClient()
    table = client.table("bar_ingredients")
    added_at = datetime(2024, 5, 1, tzinfo=UTC)
    row = {
        "id": "ing-1",
        "user_id": "user-1",
        "name": "Campari",
        "category": "liqueur",
        "abv": 24,
        "tags": ["bitter"],
        "added_at": added_at.isoformat(),
    }
    table.queue("insert", [row])
    table.queue("select", [row])
    table.queue("delete", [row])

    repository = SupabaseInventoryRepository(client)
    created = repository.add_ingredient(
        "user-1",
        BarIngredient(
            id="ing-1", name="Campari", category="liqueur", added_at=added_at
        ),
    )
    listed = repository.list_ingredients("user-1")

    assert created.abv == 24.0
    assert listed == [created]
    assert isinstance(table.last_payload, dict)
    assert table.last_payload["user_id"] == "user-1"
    assert repository.remove_ingredient("user-1", "ing-1") is True
    assert repository.remove_ingredient("user-1", "ing-1") is False


def test_supabase_shopping_list_store_roundtrip() -> None:
    client = FakeSupabaseClient()
    table = client.table("shopping_lists")
    now = datetime(2024, 5, 1, tzinfo=UTC)
    shopping_list = ShoppingList(
        id="shopping_1",
        recipe_name="Paloma",
        name="Paloma - Shopping List",
        items=(
            GroceryItem(
                id="item_1",
                name="Tequila Blanco",
                category="spirits_liquors",
                subcategory="tequila",
                estimated_price=35.0,
                original_index=0,
            ),
        ),
        created_at=now,
        updated_at=now,
        user_id="user-1",
    )

    store = SupabaseShoppingListStore(client, user_id="user-1")
    store.save_lists([shopping_list])
    payload = table.last_payload
    assert isinstance(payload, dict)
    assert payload["user_id"] == "user-1"

    table.queue("select", [{"lists": payload["lists"]}])
    assert store.load_lists() == [shopping_list]
    assert store.load_lists() == []


def test_supabase_failures_become_persistence_errors() -> None:
    client = FakeSupabaseClient()
    client.table("shopping_lists").error = ConnectionError("network down")

    store = SupabaseShoppingListStore(client, user_id="user-1")

    with pytest.raises(PersistenceError) as exc_info:
        store.load_lists()
    assert isinstance(exc_info.value.cause, ConnectionError)
