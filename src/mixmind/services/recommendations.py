"""Recipe filtering, ranking, and the personalized home feed."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol

from mixmind.domain.errors import InvalidInputError, NotFoundError
from mixmind.domain.profiles import (
    LOW_ABV_CEILING,
    BarIngredient,
    UserProfile,
)
from mixmind.domain.recipes import SKILL_LEVELS, Recipe, skill_index
from mixmind.domain.recommendations import (
    PersonalizedFeed,
    RecipeFilters,
    ScoredRecommendation,
)
from mixmind.services.availability import check_availability
from mixmind.services.inventory import InventoryRepository, spirit_types
from mixmind.services.scoring import score_recipe

BAR_SPIRIT_COVERAGE = 0.7

_logger = logging.getLogger(__name__)


class RecipeCatalog(Protocol):
    """Read interface for the recipe catalog."""

    def get_all(self) -> list[Recipe]:
        """Return every recipe in catalog order."""


class ProfileStore(Protocol):
    """Read interface for user taste profiles."""

    def get(self, user_id: str) -> UserProfile | None:
        """Return the profile for a user, if present."""


def filter_recipes(
    recipes: Iterable[Recipe],
    profile: UserProfile,
    filters: RecipeFilters | None = None,
) -> list[Recipe]:
    """Drop disliked recipes, then keep those passing every supplied filter."""
    return [
        recipe
        for recipe in recipes
        if recipe.id not in profile.disliked_recipes
        and _fits_alcohol_preference(recipe, profile.alcohol_preference)
        and (filters is None or _passes_filters(recipe, filters))
    ]


def _fits_alcohol_preference(recipe: Recipe, preference: str) -> bool:
    if preference == "zero-proof":
        return recipe.abv == 0
    if preference == "low-abv":
        return recipe.abv <= LOW_ABV_CEILING
    return True


def _passes_filters(recipe: Recipe, filters: RecipeFilters) -> bool:  # noqa: PLR0911
    if filters.spirits:
        spirits = set(recipe.spirits_used)
        if recipe.base_spirit:
            spirits.add(recipe.base_spirit)
        if not spirits & filters.spirits:
            return False
    if filters.flavor_profiles and not (
        recipe.flavor_profiles & filters.flavor_profiles
    ):
        return False
    if filters.difficulty and recipe.difficulty not in filters.difficulty:
        return False
    if filters.abv_range is not None and not (
        filters.abv_range.min <= recipe.abv <= filters.abv_range.max
    ):
        return False
    if (
        filters.max_preparation_time is not None
        and recipe.preparation_time > filters.max_preparation_time
    ):
        return False
    if filters.required_tools and not (
        recipe.tools - {"none"} <= filters.required_tools
    ):
        return False
    return True


def _validate_limit(limit: int) -> None:
    if limit <= 0:
        raise InvalidInputError("limit must be a positive integer")


def rank(
    recipes: Iterable[Recipe],
    profile: UserProfile,
    limit: int,
    inventory: Sequence[str] | None = None,
) -> list[ScoredRecommendation]:
    """Score recipes and return the best, ties kept in catalog order."""
    _validate_limit(limit)
    scored = [score_recipe(recipe, profile, inventory) for recipe in recipes]
    scored.sort(key=lambda item: item.score, reverse=True)
    return scored[:limit]


def get_top_recommendations(
    recipes: Iterable[Recipe],
    profile: UserProfile,
    limit: int,
    filters: RecipeFilters | None = None,
    inventory: Sequence[str] | None = None,
) -> list[ScoredRecommendation]:
    """Filter, score, and sort recipes for a profile."""
    return rank(filter_recipes(recipes, profile, filters), profile, limit, inventory)


def get_recommendations_from_bar_inventory(
    recipes: Iterable[Recipe],
    profile: UserProfile,
    limit: int,
    extra_spirits: Iterable[str] = (),
    inventory: Sequence[str] | None = None,
) -> list[ScoredRecommendation]:
    """Rank only recipes whose spirits the user already owns.

    A recipe qualifies when its base spirit is on hand or when at least 70% of
    the spirits it uses are. An empty bar falls back to the general ranking.
    """
    available = {item.type for item in profile.bar_inventory if item.type}
    available.update(extra_spirits)
    if not available:
        return get_top_recommendations(recipes, profile, limit, inventory=inventory)

    candidates = [
        recipe for recipe in recipes if _covered_by_bar(recipe, available)
    ]
    return get_top_recommendations(candidates, profile, limit, inventory=inventory)


def _covered_by_bar(recipe: Recipe, available: set[str]) -> bool:
    if recipe.base_spirit and recipe.base_spirit in available:
        return True
    if not recipe.spirits_used:
        return False
    owned = len(recipe.spirits_used & available)
    return owned / len(recipe.spirits_used) >= BAR_SPIRIT_COVERAGE


def get_challenging_recommendations(
    recipes: Iterable[Recipe],
    profile: UserProfile,
    limit: int,
    inventory: Sequence[str] | None = None,
) -> list[ScoredRecommendation]:
    """Rank recipes from the difficulty tier just above the user's level."""
    current = skill_index(profile.skill_level)
    if current >= len(SKILL_LEVELS) - 1:
        return get_top_recommendations(recipes, profile, limit, inventory=inventory)
    next_level = SKILL_LEVELS[current + 1]
    candidates = [recipe for recipe in recipes if recipe.difficulty == next_level]
    return get_top_recommendations(candidates, profile, limit, inventory=inventory)


def get_trending(
    recipes: Iterable[Recipe], profile: UserProfile, limit: int
) -> list[Recipe]:
    """Return the most saved recipes, excluding ones the user dislikes."""
    _validate_limit(limit)
    candidates = [
        recipe for recipe in recipes if recipe.id not in profile.disliked_recipes
    ]
    candidates.sort(key=lambda recipe: recipe.saves, reverse=True)
    return candidates[:limit]


def build_personalized_feed(  # noqa: PLR0913
    recipes: Sequence[Recipe],
    profile: UserProfile,
    *,
    feed_limit: int = 8,
    trending_limit: int = 5,
    challenge_limit: int = 3,
    bar_limit: int = 6,
    extra_spirits: Iterable[str] = (),
    inventory: Sequence[str] | None = None,
) -> PersonalizedFeed:
    """Assemble the named recommendation buckets for the home feed."""
    bar_spirits = {item.type for item in profile.bar_inventory if item.type}
    bar_spirits.update(extra_spirits)
    from_your_bar = None
    if bar_spirits:
        from_your_bar = get_recommendations_from_bar_inventory(
            recipes, profile, bar_limit, bar_spirits, inventory
        )
    return PersonalizedFeed(
        for_you=get_top_recommendations(
            recipes, profile, feed_limit, inventory=inventory
        ),
        trending=get_trending(recipes, profile, trending_limit),
        challenging=get_challenging_recommendations(
            recipes, profile, challenge_limit, inventory
        ),
        from_your_bar=from_your_bar,
    )


@dataclass
class RecommendationService:
    """Application service that loads collaborators and ranks recipes."""

    catalog: RecipeCatalog
    profiles: ProfileStore
    inventory: InventoryRepository | None = None
    feed_limit: int = 8
    trending_limit: int = 5
    challenge_limit: int = 3
    bar_limit: int = 6

    def get_profile(self, user_id: str) -> UserProfile:
        """Return a user's profile or raise NotFoundError."""
        profile = self.profiles.get(user_id)
        if profile is None:
            raise NotFoundError("profile", user_id)
        return profile

    def get_top_recommendations(
        self,
        user_id: str,
        limit: int | None = None,
        filters: RecipeFilters | None = None,
    ) -> list[ScoredRecommendation]:
        """Return the best-scoring recipes for a user."""
        profile = self.get_profile(user_id)
        bar = self._bar(user_id)
        return get_top_recommendations(
            self.catalog.get_all(),
            profile,
            self.feed_limit if limit is None else limit,
            filters,
            _inventory_names(profile, bar),
        )

    def get_personalized_feed(self, user_id: str) -> PersonalizedFeed:
        """Build the home feed for a user."""
        profile = self.get_profile(user_id)
        recipes = self.catalog.get_all()
        bar = self._bar(user_id)
        feed = build_personalized_feed(
            recipes,
            profile,
            feed_limit=self.feed_limit,
            trending_limit=self.trending_limit,
            challenge_limit=self.challenge_limit,
            bar_limit=self.bar_limit,
            extra_spirits=spirit_types(bar),
            inventory=_inventory_names(profile, bar),
        )
        _logger.debug(
            "Feed built: user=%s recipes=%s for_you=%s bar=%s",
            user_id,
            len(recipes),
            len(feed.for_you),
            None if feed.from_your_bar is None else len(feed.from_your_bar),
        )
        return feed

    def get_makeable_recipes(self, user_id: str) -> list[Recipe]:
        """Return catalog recipes whose every ingredient is in the home bar."""
        profile = self.get_profile(user_id)
        names = _inventory_names(profile, self._bar(user_id))
        return [
            recipe
            for recipe in filter_recipes(self.catalog.get_all(), profile)
            if recipe.ingredients
            and check_availability(recipe.ingredients, names).can_make
        ]

    def _bar(self, user_id: str) -> list[BarIngredient]:
        if self.inventory is None:
            return []
        return self.inventory.list_ingredients(user_id)


def _inventory_names(
    profile: UserProfile, bar: Sequence[BarIngredient]
) -> list[str] | None:
    names = [ingredient.name for ingredient in bar]
    names.extend(item.name or item.type for item in profile.bar_inventory)
    return names or None
