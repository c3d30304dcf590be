"""Domain models for scored recommendations and ranking filters."""

from dataclasses import dataclass, field

from mixmind.domain.errors import InvalidInputError
from mixmind.domain.profiles import AbvRange
from mixmind.domain.recipes import Recipe


@dataclass(frozen=True)
class MatchFactors:
    """Per-factor contributions to a recommendation score."""

    spirit_match: int = 0
    flavor_match: int = 0
    skill_match: int = 0
    abv_match: int = 0
    tools_match: int = 0
    occasion_match: int = 0

    @property
    def total(self) -> int:
        """Sum of all factor contributions."""
        return (
            self.spirit_match
            + self.flavor_match
            + self.skill_match
            + self.abv_match
            + self.tools_match
            + self.occasion_match
        )


@dataclass(frozen=True)
class ScoredRecommendation:
    """A recipe scored against a profile, with reasons for display."""

    recipe_id: str
    score: int
    reasons: tuple[str, ...]
    match_factors: MatchFactors
    recipe: Recipe | None = None
    is_saved: bool = False
    is_favorite: bool = False
    can_make_now: bool | None = None
    missing_ingredients: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RecipeFilters:
    """Optional hard filters; every supplied filter must hold."""

    spirits: frozenset[str] | None = None
    flavor_profiles: frozenset[str] | None = None
    difficulty: frozenset[str] | None = None
    abv_range: AbvRange | None = None
    max_preparation_time: int | None = None
    required_tools: frozenset[str] | None = None

    def __post_init__(self) -> None:
        if self.abv_range is not None:
            if self.abv_range.min < 0 or self.abv_range.max < 0:
                raise InvalidInputError("ABV range bounds must be non-negative")
            if self.abv_range.min > self.abv_range.max:
                raise InvalidInputError("ABV range min must not exceed max")
        if self.max_preparation_time is not None and self.max_preparation_time < 0:
            raise InvalidInputError("max_preparation_time must be non-negative")


@dataclass(frozen=True)
class PersonalizedFeed:
    """Named recommendation buckets for the home feed."""

    for_you: list[ScoredRecommendation]
    trending: list[Recipe]
    challenging: list[ScoredRecommendation]
    from_your_bar: list[ScoredRecommendation] | None = None
