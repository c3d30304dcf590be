"""Weighted match scoring of a recipe against a user profile."""

from collections.abc import Sequence

from mixmind.domain.profiles import AbvRange, UserProfile
from mixmind.domain.recipes import Recipe, skill_index
from mixmind.domain.recommendations import MatchFactors, ScoredRecommendation
from mixmind.services.availability import check_availability

SPIRIT_CAP = 30
FLAVOR_CAP = 25
SKILL_CAP = 15
ABV_CAP = 15
TOOLS_CAP = 10
OCCASION_CAP = 5

FAVORITE_SPIRIT_POINTS = 20
PREFERRED_SPIRIT_POINTS = 15
EXTRA_SPIRIT_POINTS = 5
EXTRA_SPIRIT_CAP = 10
FLAVOR_POINTS = 8
NEUTRAL_FLAVOR = 10
NEUTRAL_ABV = 10
NEAR_ABV = 8
ABV_TOLERANCE = 5.0
OCCASION_BASELINE = 3

# Keyed by recipe level minus user level.
_SKILL_POINTS: dict[int, tuple[int, str]] = {
    0: (15, "Perfect for your skill level"),
    -1: (12, "Easy to make at your level"),
    1: (10, "A small step up in technique"),
    -2: (5, "Well within your abilities"),
    2: (5, "A real stretch for your current skills"),
    -3: (0, "Far below your skill level"),
    3: (0, "Very challenging for your current skills"),
}

_NO_TOOLS = "none"


def score_recipe(
    recipe: Recipe,
    profile: UserProfile,
    inventory: Sequence[str] | None = None,
) -> ScoredRecommendation:
    """Score a recipe for a profile and explain the result.

    Factors are evaluated in a fixed order (spirit, flavor, skill, ABV, tools,
    occasion) and reasons are appended in that order, so identical input yields
    an identical score and reason list. When an inventory is given, the
    recipe's ingredient lines are matched against it; availability is reported
    on the result but never changes the score.
    """
    reasons: list[str] = []
    spirit = _spirit_match(recipe, profile, reasons)
    flavor = _flavor_match(recipe, profile, reasons)
    skill = _skill_match(recipe, profile, reasons)
    abv = _abv_match(recipe, profile.preferred_abv_range, reasons)
    tools = _tools_match(recipe, profile, reasons)
    occasion = _occasion_match(reasons)

    factors = MatchFactors(
        spirit_match=spirit,
        flavor_match=flavor,
        skill_match=skill,
        abv_match=abv,
        tools_match=tools,
        occasion_match=occasion,
    )
    total = max(0, min(100, factors.total))

    can_make_now: bool | None = None
    missing: tuple[str, ...] = ()
    if inventory is not None:
        availability = check_availability(recipe.ingredients, inventory)
        can_make_now = availability.can_make
        missing = availability.missing

    return ScoredRecommendation(
        recipe_id=recipe.id,
        score=total,
        reasons=tuple(reasons),
        match_factors=factors,
        recipe=recipe,
        is_saved=recipe.id in profile.saved_recipes,
        is_favorite=recipe.id in profile.favorite_recipes,
        can_make_now=can_make_now,
        missing_ingredients=missing,
    )


def _spirit_match(recipe: Recipe, profile: UserProfile, reasons: list[str]) -> int:
    points = 0
    base = recipe.base_spirit
    preferences = profile.spirit_preferences
    if base and profile.favorite_spirit and base == profile.favorite_spirit:
        points += FAVORITE_SPIRIT_POINTS
        reasons.append(f"Made with your favorite spirit, {base}")
    elif base and base in preferences:
        points += PREFERRED_SPIRIT_POINTS
        reasons.append(f"Built on {base}, one of your preferred spirits")

    shared = sorted(recipe.spirits_used & preferences)
    if shared:
        points += min(EXTRA_SPIRIT_POINTS * len(shared), EXTRA_SPIRIT_CAP)
        reasons.append(f"Uses spirits you enjoy: {', '.join(shared)}")
    return min(points, SPIRIT_CAP)


def _flavor_match(recipe: Recipe, profile: UserProfile, reasons: list[str]) -> int:
    if not profile.flavor_profiles:
        return NEUTRAL_FLAVOR
    matches = sorted(recipe.flavor_profiles & profile.flavor_profiles)
    if not matches:
        return 0
    reasons.append(f"Matches your taste for {', '.join(matches)} flavors")
    return min(FLAVOR_POINTS * len(matches), FLAVOR_CAP)


def _skill_match(recipe: Recipe, profile: UserProfile, reasons: list[str]) -> int:
    gap = skill_index(recipe.difficulty) - skill_index(profile.skill_level)
    points, reason = _SKILL_POINTS[gap]
    reasons.append(reason)
    return min(points, SKILL_CAP)


def _abv_match(recipe: Recipe, abv_range: AbvRange | None, reasons: list[str]) -> int:
    if abv_range is None:
        return NEUTRAL_ABV
    if abv_range.min <= recipe.abv <= abv_range.max:
        reasons.append(f"{recipe.abv:g}% ABV is in your preferred range")
        return ABV_CAP
    if abv_range.min - ABV_TOLERANCE <= recipe.abv <= abv_range.max + ABV_TOLERANCE:
        reasons.append(f"{recipe.abv:g}% ABV is close to your preferred range")
        return NEAR_ABV
    return 0


def _tools_match(recipe: Recipe, profile: UserProfile, reasons: list[str]) -> int:
    required = recipe.tools - {_NO_TOOLS}
    owned = profile.available_tools - {_NO_TOOLS}
    if not owned:
        if not required:
            reasons.append("No special tools needed")
            return TOOLS_CAP
        return 2
    missing = sorted(required - owned)
    if not missing:
        reasons.append("You have every tool this needs")
        return TOOLS_CAP
    if len(missing) == 1:
        reasons.append(f"Only missing a {missing[0]}")
        return 5
    return 2


def _occasion_match(reasons: list[str]) -> int:
    reasons.append("Good for any occasion")
    return min(OCCASION_BASELINE, OCCASION_CAP)
