"""Shared test fixtures."""

import random
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from itertools import count

import pytest

from mixmind.config import Settings
from mixmind.containers import AppContainer
from mixmind.domain.profiles import BarIngredient, UserProfile
from mixmind.domain.recipes import Recipe
from mixmind.domain.shopping import ShoppingList
from mixmind.services.ingredients import PriceEstimator
from mixmind.services.inventory import InventoryRepository, InventoryService
from mixmind.services.recommendations import (
    ProfileStore,
    RecipeCatalog,
    RecommendationService,
)
from mixmind.services.shopping import ShoppingListRepository, ShoppingListService


@dataclass
class InMemoryRecipeCatalog(RecipeCatalog):
    """In-memory recipe catalog for tests."""

    recipes: list[Recipe] = field(default_factory=list)

    def get_all(self) -> list[Recipe]:
        return list(self.recipes)


@dataclass
class InMemoryProfileStore(ProfileStore):
    """In-memory profile store for tests."""

    profiles: dict[str, UserProfile] = field(default_factory=dict)

    def get(self, user_id: str) -> UserProfile | None:
        return self.profiles.get(user_id)


@dataclass
class InMemoryInventoryRepository(InventoryRepository):
    """In-memory bar inventory for tests."""

    ingredients: dict[str, list[BarIngredient]] = field(default_factory=dict)

    def list_ingredients(self, user_id: str) -> list[BarIngredient]:
        return list(self.ingredients.get(user_id, []))

    def add_ingredient(self, user_id: str, ingredient: BarIngredient) -> BarIngredient:
        self.ingredients.setdefault(user_id, []).append(ingredient)
        return ingredient

    def remove_ingredient(self, user_id: str, ingredient_id: str) -> bool:
        current = self.ingredients.get(user_id, [])
        remaining = [item for item in current if item.id != ingredient_id]
        self.ingredients[user_id] = remaining
        return len(remaining) != len(current)


@dataclass
class InMemoryShoppingListStore(ShoppingListRepository):
    """In-memory shopping list collection that counts writes."""

    lists: list[ShoppingList] = field(default_factory=list)
    saves: int = 0

    def load_lists(self) -> list[ShoppingList]:
        return list(self.lists)

    def save_lists(self, lists: list[ShoppingList]) -> None:
        self.lists = list(lists)
        self.saves += 1


def sequential_ids() -> Callable[[], str]:
    counter = count(1)
    return lambda: str(next(counter))


def ticking_clock() -> Callable[[], datetime]:
    start = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
    counter = count()
    return lambda: start + timedelta(seconds=next(counter))


def make_recipe(recipe_id: str, **overrides: object) -> Recipe:
    values: dict[str, object] = {"name": recipe_id.title()}
    values.update(overrides)
    return Recipe(id=recipe_id, **values)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        api_token="api-token",
        price_seed=7,
    )


@pytest.fixture
def recipes() -> list[Recipe]:
    return [
        make_recipe(
            "negroni",
            base_spirit="gin",
            spirits_used=frozenset({"gin"}),
            flavor_profiles=frozenset({"bitter", "herbal", "citrusy"}),
            difficulty="beginner",
            abv=24,
            tools=frozenset({"jigger"}),
            ingredients=("1 oz Gin", "1 oz Campari", "1 oz Sweet Vermouth"),
            saves=40,
        ),
        make_recipe(
            "margarita",
            base_spirit="tequila",
            spirits_used=frozenset({"tequila"}),
            flavor_profiles=frozenset({"sour", "citrusy"}),
            difficulty="intermediate",
            abv=18,
            tools=frozenset({"shaker", "jigger"}),
            ingredients=("2 oz Tequila Blanco", "1 oz Fresh Lime Juice"),
            saves=90,
        ),
        make_recipe(
            "virgin-mojito",
            flavor_profiles=frozenset({"sweet", "herbal"}),
            difficulty="beginner",
            abv=0,
            tools=frozenset({"muddler"}),
            ingredients=("6 Mint Leaves", "1 oz Lime Juice", "Soda Water"),
            saves=10,
        ),
        make_recipe(
            "ramos-fizz",
            base_spirit="gin",
            spirits_used=frozenset({"gin"}),
            flavor_profiles=frozenset({"sour", "sweet"}),
            difficulty="advanced",
            abv=12,
            tools=frozenset({"shaker"}),
            ingredients=("2 oz Gin", "1 Egg White", "1 oz Cream"),
            saves=25,
        ),
    ]


@pytest.fixture
def profile() -> UserProfile:
    return UserProfile(
        user_id="user-1",
        favorite_spirit="gin",
        flavor_profiles=frozenset({"herbal", "bitter"}),
        skill_level="intermediate",
        available_tools=frozenset({"jigger", "shaker"}),
    )


@pytest.fixture
def recipe_catalog(recipes: list[Recipe]) -> InMemoryRecipeCatalog:
    return InMemoryRecipeCatalog(recipes)


@pytest.fixture
def profile_store(profile: UserProfile) -> InMemoryProfileStore:
    return InMemoryProfileStore({"user-1": profile})


@pytest.fixture
def inventory_repository() -> InMemoryInventoryRepository:
    return InMemoryInventoryRepository()


@pytest.fixture
def shopping_store() -> InMemoryShoppingListStore:
    return InMemoryShoppingListStore()


@pytest.fixture
def shopping_service(shopping_store: InMemoryShoppingListStore) -> ShoppingListService:
    return ShoppingListService(
        store=shopping_store,
        price_estimator=PriceEstimator(random.Random(7)),
        id_factory=sequential_ids(),
        clock=ticking_clock(),
    )


@pytest.fixture
def container(
    settings: Settings,
    recipe_catalog: InMemoryRecipeCatalog,
    profile_store: InMemoryProfileStore,
    inventory_repository: InMemoryInventoryRepository,
) -> AppContainer:
    stores: dict[str, InMemoryShoppingListStore] = {}
    ids = sequential_ids()

    def shopping_service_for(user_id: str) -> ShoppingListService:
        store = stores.setdefault(user_id, InMemoryShoppingListStore())
        return ShoppingListService(
            store=store,
            price_estimator=PriceEstimator(random.Random(settings.price_seed)),
            id_factory=ids,
            user_id=user_id,
        )

    return AppContainer(
        settings=settings,
        recommendation_service=RecommendationService(
            catalog=recipe_catalog,
            profiles=profile_store,
            inventory=inventory_repository,
        ),
        inventory_service=InventoryService(inventory_repository),
        shopping_service_for=shopping_service_for,
    )
