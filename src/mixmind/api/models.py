"""Pydantic request models for the HTTP facade."""

from pydantic import BaseModel, Field

from mixmind.domain.profiles import AbvRange
from mixmind.domain.recommendations import RecipeFilters


class AbvRangeBody(BaseModel):
    """Inclusive ABV window."""

    min: float
    max: float


class RecommendationRequest(BaseModel):
    """Filters and size for a ranked recommendation request."""

    limit: int | None = None
    spirits: list[str] | None = None
    flavor_profiles: list[str] | None = None
    difficulty: list[str] | None = None
    abv_range: AbvRangeBody | None = None
    max_preparation_time: int | None = None
    required_tools: list[str] | None = None

    def to_filters(self) -> RecipeFilters:
        """Build domain filters; validation errors surface as InvalidInputError."""
        return RecipeFilters(
            spirits=_frozen(self.spirits),
            flavor_profiles=_frozen(self.flavor_profiles),
            difficulty=_frozen(self.difficulty),
            abv_range=(
                AbvRange(min=self.abv_range.min, max=self.abv_range.max)
                if self.abv_range
                else None
            ),
            max_preparation_time=self.max_preparation_time,
            required_tools=_frozen(self.required_tools),
        )


class CreateShoppingListRequest(BaseModel):
    """Recipe ingredient lines to turn into a shopping list."""

    recipe_name: str
    ingredients: list[str] = Field(default_factory=list)
    recipe_id: str | None = None


class UpdateItemRequest(BaseModel):
    """Check-state or brand change for one shopping item."""

    checked: bool | None = None
    brand: str | None = None


def _frozen(values: list[str] | None) -> frozenset[str] | None:
    return frozenset(values) if values is not None else None


class AddBarIngredientRequest(BaseModel):
    """Bottle or ingredient to add to the home bar."""

    name: str = Field(min_length=1)
    category: str
    subcategory: str | None = None
    brand: str | None = None
    abv: float | None = Field(default=None, ge=0)
    volume: float | None = Field(default=None, ge=0)
    tags: list[str] = Field(default_factory=list)
