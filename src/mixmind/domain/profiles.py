"""Domain models for user taste profiles and home bar inventory."""

from dataclasses import dataclass, field
from datetime import datetime

ALCOHOL_PREFERENCES = ("full", "low-abv", "zero-proof")

LOW_ABV_CEILING = 15.0


@dataclass(frozen=True)
class AbvRange:
    """Inclusive ABV window a user prefers."""

    min: float
    max: float


@dataclass(frozen=True)
class BarInventoryItem:
    """Spirit bottle recorded on the profile, typically from photo recognition."""

    type: str
    id: str | None = None
    name: str | None = None


@dataclass(frozen=True)
class UserProfile:
    """Taste, skill, and tool preferences for a single user."""

    user_id: str | None = None
    favorite_spirit: str | None = None
    spirit_preferences: frozenset[str] = frozenset()
    flavor_profiles: frozenset[str] = frozenset()
    skill_level: str = "beginner"
    preferred_abv_range: AbvRange | None = None
    alcohol_preference: str = "full"
    available_tools: frozenset[str] = frozenset()
    saved_recipes: frozenset[str] = frozenset()
    favorite_recipes: frozenset[str] = frozenset()
    disliked_recipes: frozenset[str] = frozenset()
    bar_inventory: tuple[BarInventoryItem, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class BarIngredient:
    """Bottle or ingredient stored in a user's home bar."""

    id: str
    name: str
    category: str
    added_at: datetime
    subcategory: str | None = None
    brand: str | None = None
    abv: float | None = None
    volume: float | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)
