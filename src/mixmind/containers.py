"""Dependency container wiring for the application."""

import random
from collections.abc import Callable
from dataclasses import dataclass

from supabase import create_client

from mixmind.adapters.supabase_inventory_repository import SupabaseInventoryRepository
from mixmind.adapters.supabase_profile_repository import SupabaseProfileRepository
from mixmind.adapters.supabase_recipe_catalog import SupabaseRecipeCatalog
from mixmind.adapters.supabase_shopping_list_store import SupabaseShoppingListStore
from mixmind.config import Settings
from mixmind.services.ingredients import PriceEstimator
from mixmind.services.inventory import InventoryService
from mixmind.services.recommendations import RecommendationService
from mixmind.services.shopping import ShoppingListService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    recommendation_service: RecommendationService
    inventory_service: InventoryService
    shopping_service_for: Callable[[str], ShoppingListService]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    inventory_repository = SupabaseInventoryRepository(
        supabase_client, table=resolved_settings.inventory_table
    )
    recommendation_service = RecommendationService(
        catalog=SupabaseRecipeCatalog(
            supabase_client, table=resolved_settings.recipes_table
        ),
        profiles=SupabaseProfileRepository(
            supabase_client, table=resolved_settings.profiles_table
        ),
        inventory=inventory_repository,
        feed_limit=resolved_settings.feed_limit,
        trending_limit=resolved_settings.trending_limit,
        challenge_limit=resolved_settings.challenge_limit,
        bar_limit=resolved_settings.bar_limit,
    )
    price_estimator = PriceEstimator(random.Random(resolved_settings.price_seed))

    def shopping_service_for(user_id: str) -> ShoppingListService:
        store = SupabaseShoppingListStore(
            supabase_client,
            user_id=user_id,
            table=resolved_settings.shopping_lists_table,
        )
        return ShoppingListService(
            store=store, price_estimator=price_estimator, user_id=user_id
        )

    return AppContainer(
        settings=resolved_settings,
        recommendation_service=recommendation_service,
        inventory_service=InventoryService(inventory_repository),
        shopping_service_for=shopping_service_for,
    )
