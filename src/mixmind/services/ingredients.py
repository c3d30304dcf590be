"""Ingredient line parsing and rule-table categorization for shopping lists.

Each table is an ordered list of ``(pattern, value)`` pairs; the first pattern
that matches the lowercased ingredient name wins. Order therefore encodes
precedence: vermouth is listed among the spirits before the mixer rules so it
never lands in ``mixers``.
"""

import random
import re
from dataclasses import dataclass, field

from mixmind.domain.shopping import ParsedIngredient
from mixmind.services.normalizer import (
    MEASUREMENT_PATTERN,
    QUALIFIER_PATTERN,
    strip_measurement,
    title_case,
)

Rule = tuple[re.Pattern[str], str]


def _word_pattern(alternatives: str) -> re.Pattern[str]:
    return re.compile(rf"\b(?:{alternatives})(?:e?s)?\b")


def _rules(pairs: list[tuple[str, str]]) -> list[Rule]:
    return [(_word_pattern(pattern), value) for pattern, value in pairs]


CATEGORY_RULES: list[Rule] = _rules(
    [
        (
            r"vodka|gin|rum|whiskey|bourbon|rye|tequila|brandy|cognac|mezcal"
            r"|absinthe|scotch|vermouth",
            "spirits_liquors",
        ),
        (
            r"liqueur|cointreau|triple sec|grand marnier|campari|aperol|amaretto"
            r"|kahlua|chambord|chartreuse",
            "spirits_liquors",
        ),
        (r"bitters|angostura|peychaud", "bitters"),
        (r"syrup|grenadine|orgeat|falernum|honey|agave", "syrup"),
        (
            r"juice|soda|tonic|ginger beer|cola|wine|champagne|prosecco|beer",
            "mixers",
        ),
        (
            r"peel|twist|cherry|olive|lime|lemon|orange|mint|basil|cucumber"
            r"|salt|sugar",
            "garnish",
        ),
    ]
)

SUBCATEGORY_RULES: list[Rule] = _rules(
    [
        (r"vodka", "vodka"),
        (r"gin", "gin"),
        (r"rum", "rum"),
        (r"whiskey|bourbon|rye|scotch", "whiskey"),
        (r"tequila", "tequila"),
        (r"brandy|cognac", "brandy"),
        (r"mezcal", "mezcal"),
        (r"absinthe", "absinthe"),
        (r"vermouth.*dry|dry.*vermouth", "dry vermouth"),
        (r"vermouth.*sweet|sweet.*vermouth", "sweet vermouth"),
        (r"vermouth", "vermouth"),
        (r"cointreau|triple sec|grand marnier", "orange liqueur"),
        (r"kahlua|coffee liqueur", "coffee liqueur"),
        (r"amaretto", "amaretto"),
        (r"chambord", "raspberry liqueur"),
    ]
)

NOTE_RULES: list[Rule] = _rules(
    [
        (r"fresh(?:ly)?", "Get fresh - avoid bottled when possible"),
        (r"simple syrup", "Can make at home: 1:1 sugar and water"),
        (r"angostura bitters", "Small bottle lasts a long time"),
        (r"peel|twist", "Just need the fruit for peel"),
        (r"egg white", "Buy whole eggs, use whites only"),
    ]
)

WHERE_TO_FIND: dict[str, str] = {
    "spirits_liquors": "Liquor store, Wine & Spirits section",
    "mixers": "Beverage aisle, Wine & Spirits section",
    "bitters": "Liquor store, Cocktail supplies section",
    "syrup": "Coffee aisle, Cocktail supplies, Liquor store",
    "garnish": "Produce section, Condiments aisle",
    "other": "Check multiple sections",
}

CATEGORY_DISPLAY_NAMES: dict[str, str] = {
    "spirits_liquors": "Spirits & Liquors",
    "mixers": "Mixers & Beverages",
    "bitters": "Bitters & Modifiers",
    "syrup": "Syrups & Sweeteners",
    "garnish": "Garnishes & Fresh",
    "other": "Other Items",
}

VERMOUTH_PRICES: list[tuple[str, float]] = [
    ("dry vermouth", 15),
    ("sweet vermouth", 18),
    ("dolin dry", 16),
    ("dolin rouge", 18),
    ("carpano antica", 35),
    ("noilly prat", 15),
    ("martini & rossi", 12),
    ("cinzano", 14),
]
DEFAULT_VERMOUTH_PRICE = 16.0

# (pattern, low, high) in dollars; first match wins.
PRICE_RULES: list[tuple[re.Pattern[str], int, int]] = [
    (_word_pattern(pattern), low, high)
    for pattern, low, high in [
        (r"vodka|gin|rum|whiskey|bourbon|rye|tequila|brandy|cognac", 20, 80),
        (r"liqueur|cointreau|grand marnier|kahlua|bailey|amaretto", 15, 50),
        (r"juice|soda|tonic|ginger beer|club soda", 2, 8),
        (r"bitters", 8, 20),
        (r"syrup", 5, 15),
        (r"peel|cherry|olive|lime|lemon|orange|mint|salt|sugar", 1, 8),
    ]
]

BRAND_PATTERN = re.compile(
    r"\b([A-Z][\w'&.-]*(?:\s+[A-Z][\w'&.-]*)*)\s+"
    r"(?i:vodka|gin|rum|whiskey|bourbon|rye|tequila|brandy|cognac|liqueur)\b"
)

# Capitalized words that describe a style rather than name a producer.
NON_BRAND_WORDS = frozenset(
    {
        "white",
        "dark",
        "aged",
        "spiced",
        "silver",
        "gold",
        "blanco",
        "reposado",
        "anejo",
        "london",
        "dry",
        "overproof",
        "light",
        "sweet",
        "orange",
        "coffee",
        "bourbon",
        "rye",
        "scotch",
        "irish",
        "blended",
        "single",
        "malt",
        "vodka",
        "gin",
        "rum",
        "whiskey",
        "tequila",
        "brandy",
        "cognac",
        "liqueur",
        "maraschino",
        "elderflower",
        "apricot",
        "peach",
        "cherry",
        "raspberry",
        "blackberry",
        "banana",
        "coconut",
        "melon",
        "pear",
        "apple",
        "plum",
        "ginger",
        "honey",
        "cinnamon",
        "vanilla",
        "chocolate",
        "hazelnut",
        "almond",
        "herbal",
        "jamaican",
        "barbados",
        "cuban",
        "haitian",
        "demerara",
        "mexican",
        "japanese",
        "canadian",
        "american",
        "french",
        "italian",
        "spanish",
    }
)

# Liqueurs are named by flavor, so a bare "Liqueur" remainder keeps the full name.
GENERIC_REMAINDERS = frozenset({"liqueur"})

MIN_NAME_LENGTH = 3


def first_match(rules: list[Rule], text: str) -> str | None:
    """Return the value of the first rule whose pattern matches the text."""
    lowered = text.lower()
    for pattern, value in rules:
        if pattern.search(lowered):
            return value
    return None


def categorize(name: str) -> str:
    """Return the grocery category for an ingredient name."""
    return first_match(CATEGORY_RULES, name) or "other"


def subcategory_for(name: str) -> str | None:
    """Return the specific spirit or liqueur type, if recognisable."""
    return first_match(SUBCATEGORY_RULES, name)


def notes_for(raw: str) -> str | None:
    """Return a shopping hint for an ingredient line."""
    return first_match(NOTE_RULES, raw)


def where_to_find(category: str) -> str:
    """Return the store section hint for a category."""
    return WHERE_TO_FIND.get(category, WHERE_TO_FIND["other"])


def category_display_name(category: str) -> str:
    """Return the human label for a category."""
    return CATEGORY_DISPLAY_NAMES.get(category, "Uncategorized")


def vermouth_price(name: str) -> float:
    """Look up a vermouth price by style or brand."""
    lowered = name.lower()
    for key, price in VERMOUTH_PRICES:
        if key in lowered:
            return price
    return DEFAULT_VERMOUTH_PRICE


def _extract_brand(text: str) -> tuple[str | None, str]:
    match = BRAND_PATTERN.search(text)
    if not match:
        return None, text
    words = match.group(1).split()
    while words and words[-1].lower() in NON_BRAND_WORDS:
        words.pop()
    if not words or words[0].lower() in NON_BRAND_WORDS:
        return None, text
    brand = " ".join(words)
    remainder = text.replace(brand, "", 1).strip()
    if remainder.lower() in GENERIC_REMAINDERS:
        return brand, text
    return brand, remainder


def parse_ingredient(raw: str) -> ParsedIngredient:
    """Split a raw ingredient line into name, brand, size, and notes."""
    text = (raw or "").strip()
    amount = unit = None
    match = MEASUREMENT_PATTERN.match(text)
    if match:
        amount = match.group("amount")
        unit = match.group("unit")
        unit = unit.lower() if unit else None
        text = text[match.end() :].strip()

    brand, text = _extract_brand(text)
    name = re.sub(r"\s+", " ", QUALIFIER_PATTERN.sub("", text)).strip()
    if len(name) < MIN_NAME_LENGTH:
        name = strip_measurement(raw or "")

    size = f"{amount} {unit}" if amount and unit else None
    return ParsedIngredient(
        name=title_case(name) or (raw or "").strip(),
        amount=amount,
        unit=unit,
        brand=brand,
        size=size,
        notes=notes_for(raw or ""),
    )


@dataclass
class PriceEstimator:
    """Advisory price guesses; draws come from an injectable random source."""

    rng: random.Random = field(default_factory=random.Random)

    def estimate(self, name: str) -> float | None:
        """Estimate a retail price in dollars, or None when unknown."""
        lowered = name.lower()
        if "vermouth" in lowered:
            return vermouth_price(lowered)
        for pattern, low, high in PRICE_RULES:
            if pattern.search(lowered):
                return float(round(self.rng.random() * (high - low) + low))
        return None
