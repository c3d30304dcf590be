"""Domain models for the cocktail recipe catalog."""

from dataclasses import dataclass, field

SKILL_LEVELS = ("beginner", "intermediate", "advanced", "expert")

SPIRITS = ("gin", "vodka", "whiskey", "rum", "tequila", "brandy")

FLAVORS = ("sweet", "sour", "bitter", "herbal", "fruity", "spicy", "citrusy")


def skill_index(level: str) -> int:
    """Return the position of a skill level, treating unknown levels as beginner."""
    try:
        return SKILL_LEVELS.index(level)
    except ValueError:
        return 0


@dataclass(frozen=True)
class Recipe:
    """Immutable catalog entry for a cocktail recipe."""

    id: str
    name: str
    spirits_used: frozenset[str] = frozenset()
    base_spirit: str | None = None
    flavor_profiles: frozenset[str] = frozenset()
    difficulty: str = "beginner"
    abv: float = 0.0
    tools: frozenset[str] = frozenset()
    preparation_time: int = 0
    ingredients: tuple[str, ...] = field(default_factory=tuple)
    category: str | None = None
    saves: int = 0
