"""Tests for recipe filtering, ranking, and the personalized feed."""

from dataclasses import replace
from datetime import UTC, datetime

import pytest

from mixmind.domain.errors import InvalidInputError, NotFoundError
from mixmind.domain.profiles import (
    AbvRange,
    BarIngredient,
    BarInventoryItem,
    UserProfile,
)
from mixmind.domain.recipes import Recipe
from mixmind.domain.recommendations import RecipeFilters
from mixmind.services.recommendations import (
    RecommendationService,
    build_personalized_feed,
    filter_recipes,
    get_challenging_recommendations,
    get_recommendations_from_bar_inventory,
    get_top_recommendations,
    get_trending,
)
from tests.conftest import (
    InMemoryInventoryRepository,
    InMemoryProfileStore,
    InMemoryRecipeCatalog,
)


def _ids(results) -> list[str]:  # type: ignore[no-untyped-def]
    return [result.recipe_id for result in results]


def test_top_recommendations_sorted_with_stable_ties(
    recipes: list[Recipe], profile: UserProfile
) -> None:
    results = get_top_recommendations(recipes, profile, limit=10)

    assert _ids(results) == ["negroni", "ramos-fizz", "margarita", "virgin-mojito"]
    assert [result.score for result in results] == [71, 53, 38, 38]


def test_limit_truncates_results(recipes: list[Recipe], profile: UserProfile) -> None:
    assert _ids(get_top_recommendations(recipes, profile, limit=2)) == [
        "negroni",
        "ramos-fizz",
    ]


def test_non_positive_limit_is_rejected(
    recipes: list[Recipe], profile: UserProfile
) -> None:
    with pytest.raises(InvalidInputError):
        get_top_recommendations(recipes, profile, limit=0)


def test_spirit_filter(recipes: list[Recipe], profile: UserProfile) -> None:
    filters = RecipeFilters(spirits=frozenset({"gin"}))

    results = get_top_recommendations(recipes, profile, limit=10, filters=filters)

    assert _ids(results) == ["negroni", "ramos-fizz"]


def test_required_tools_filter(recipes: list[Recipe], profile: UserProfile) -> None:
    filters = RecipeFilters(required_tools=frozenset({"jigger", "shaker"}))

    kept = filter_recipes(recipes, profile, filters)

    assert [recipe.id for recipe in kept] == ["negroni", "margarita", "ramos-fizz"]


def test_filtering_is_idempotent(recipes: list[Recipe], profile: UserProfile) -> None:
    filters = RecipeFilters(
        flavor_profiles=frozenset({"sour"}), abv_range=AbvRange(min=10, max=20)
    )

    once = filter_recipes(recipes, profile, filters)

    assert filter_recipes(once, profile, filters) == once
    assert [recipe.id for recipe in once] == ["margarita", "ramos-fizz"]


def test_empty_filter_sets_are_ignored(
    recipes: list[Recipe], profile: UserProfile
) -> None:
    filters = RecipeFilters(spirits=frozenset(), difficulty=frozenset())

    assert filter_recipes(recipes, profile, filters) == recipes


def test_disliked_recipes_never_returned(
    recipes: list[Recipe], profile: UserProfile
) -> None:
    disliking = replace(profile, disliked_recipes=frozenset({"negroni"}))

    assert "negroni" not in _ids(get_top_recommendations(recipes, disliking, limit=10))
    trending = get_trending(recipes, disliking, 10)
    assert "negroni" not in [recipe.id for recipe in trending]


@pytest.mark.parametrize(
    ("preference", "expected"),
    [
        ("zero-proof", ["virgin-mojito"]),
        ("low-abv", ["virgin-mojito", "ramos-fizz"]),
    ],
)
def test_alcohol_preference_filters_by_abv(
    recipes: list[Recipe], preference: str, expected: list[str]
) -> None:
    profile = UserProfile(alcohol_preference=preference)

    assert [recipe.id for recipe in filter_recipes(recipes, profile)] == expected


def test_invalid_filter_ranges_are_rejected() -> None:
    with pytest.raises(InvalidInputError):
        RecipeFilters(abv_range=AbvRange(min=20, max=10))
    with pytest.raises(InvalidInputError):
        RecipeFilters(max_preparation_time=-1)


def test_bar_recommendations_require_owned_spirits(
    recipes: list[Recipe], profile: UserProfile
) -> None:
    stocked = replace(profile, bar_inventory=(BarInventoryItem(type="tequila"),))

    results = get_recommendations_from_bar_inventory(recipes, stocked, limit=6)

    assert _ids(results) == ["margarita"]


def test_bar_recommendations_fall_back_when_bar_empty(
    recipes: list[Recipe], profile: UserProfile
) -> None:
    assert _ids(get_recommendations_from_bar_inventory(recipes, profile, 2)) == _ids(
        get_top_recommendations(recipes, profile, 2)
    )


def test_bar_coverage_threshold() -> None:
    recipe = Recipe(
        id="long-island",
        name="Long Island",
        spirits_used=frozenset({"gin", "vodka", "rum", "tequila"}),
    )
    three_of_four = UserProfile(
        bar_inventory=tuple(
            BarInventoryItem(type=spirit) for spirit in ("gin", "vodka", "rum")
        )
    )
    two_of_four = UserProfile(
        bar_inventory=tuple(BarInventoryItem(type=spirit) for spirit in ("gin", "rum"))
    )

    assert _ids(get_recommendations_from_bar_inventory([recipe], three_of_four, 5)) == [
        "long-island"
    ]
    assert get_recommendations_from_bar_inventory([recipe], two_of_four, 5) == []


def test_challenging_uses_next_tier(
    recipes: list[Recipe], profile: UserProfile
) -> None:
    challenging = get_challenging_recommendations(recipes, profile, 3)

    assert _ids(challenging) == ["ramos-fizz"]


def test_challenging_at_top_tier_degrades_to_top(
    recipes: list[Recipe], profile: UserProfile
) -> None:
    expert = replace(profile, skill_level="expert")

    assert _ids(get_challenging_recommendations(recipes, expert, 3)) == _ids(
        get_top_recommendations(recipes, expert, 3)
    )


def test_trending_orders_by_saves(recipes: list[Recipe], profile: UserProfile) -> None:
    assert [recipe.id for recipe in get_trending(recipes, profile, 2)] == [
        "margarita",
        "negroni",
    ]


def test_feed_without_bar_omits_bar_bucket(
    recipes: list[Recipe], profile: UserProfile
) -> None:
    feed = build_personalized_feed(recipes, profile)

    assert feed.from_your_bar is None
    assert _ids(feed.for_you)[0] == "negroni"
    assert _ids(feed.challenging) == ["ramos-fizz"]
    assert len(feed.trending) == 4


def test_service_raises_for_unknown_profile(
    recipe_catalog: InMemoryRecipeCatalog, profile_store: InMemoryProfileStore
) -> None:
    service = RecommendationService(recipe_catalog, profile_store)

    with pytest.raises(NotFoundError):
        service.get_personalized_feed("missing")


def test_service_uses_bar_ingredients(
    recipe_catalog: InMemoryRecipeCatalog,
    profile_store: InMemoryProfileStore,
    inventory_repository: InMemoryInventoryRepository,
) -> None:
    added_at = datetime(2024, 5, 1, tzinfo=UTC)
    for index, name in enumerate(["Tanqueray Gin", "Campari", "Sweet Vermouth"]):
        inventory_repository.add_ingredient(
            "user-1",
            BarIngredient(
                id=str(index), name=name, category="spirit", added_at=added_at
            ),
        )
    service = RecommendationService(
        recipe_catalog, profile_store, inventory=inventory_repository
    )

    feed = service.get_personalized_feed("user-1")
    top = service.get_top_recommendations("user-1", limit=1)

    assert feed.from_your_bar is not None
    assert _ids(feed.from_your_bar) == ["negroni", "ramos-fizz"]
    assert top[0].can_make_now is True
    assert [recipe.id for recipe in service.get_makeable_recipes("user-1")] == [
        "negroni"
    ]
