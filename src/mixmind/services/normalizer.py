"""Ingredient name canonicalization and synonym equivalence."""

import re
from dataclasses import dataclass

UNITS = ("oz", "ml", "cl", "tsp", "tbsp", "dash", "drop", "splash", "bottle", "can")

QUALIFIERS = ("fresh", "freshly", "squeezed", "homemade")

SYNONYM_GROUPS: tuple[tuple[str, ...], ...] = (
    ("simple syrup", "sugar syrup", "syrup"),
    ("lime juice", "fresh lime", "lime"),
    ("lemon juice", "fresh lemon", "lemon"),
    ("angostura bitters", "bitters"),
    ("dry vermouth", "white vermouth"),
    ("sweet vermouth", "red vermouth"),
)

_AMOUNT = r"\d+(?:\.\d+)?(?:/\d+)?(?:\s+\d+/\d+)?(?:\s*-\s*\d+(?:\.\d+)?)?"
_UNIT = "|".join(UNITS)

MEASUREMENT_PATTERN = re.compile(
    rf"^\s*(?P<amount>{_AMOUNT})"
    rf"(?:\s*(?P<unit>{_UNIT})(?:es|s)?\b\.?|(?=\s))\s*",
    re.IGNORECASE,
)
QUALIFIER_PATTERN = re.compile(rf"\b(?:{'|'.join(QUALIFIERS)})\b", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class NormalizedName:
    """Canonical forms of an ingredient name."""

    display: str
    key: str


def strip_measurement(raw: str) -> str:
    """Remove a leading amount and unit, if present."""
    return MEASUREMENT_PATTERN.sub("", raw, count=1).strip()


def title_case(text: str) -> str:
    """Capitalize each whitespace-separated word."""
    return " ".join(word[:1].upper() + word[1:].lower() for word in text.split())


def normalize(raw: str) -> NormalizedName:
    """Canonicalize a free-text ingredient line into comparable forms."""
    text = _WHITESPACE.sub(" ", raw or "").strip()
    if not text:
        return NormalizedName(display="", key="")
    without_measure = strip_measurement(text)
    cleaned = _WHITESPACE.sub(" ", QUALIFIER_PATTERN.sub("", without_measure)).strip()
    if not cleaned:
        cleaned = without_measure or text
    key = cleaned.lower()
    return NormalizedName(display=title_case(key), key=key)


def normalize_key(raw: str) -> str:
    """Return only the lowercase comparison key for an ingredient."""
    return normalize(raw).key


def _member_pattern(member: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(member)}\b")


_GROUP_PATTERNS: tuple[tuple[re.Pattern[str], ...], ...] = tuple(
    tuple(_member_pattern(normalize_key(member)) for member in group)
    for group in SYNONYM_GROUPS
)


def _in_group(key: str, group: tuple[re.Pattern[str], ...]) -> bool:
    return any(pattern.search(key) for pattern in group)


def are_equivalent(a: str, b: str) -> bool:
    """Return True when both names fall into the same declared synonym group.

    A name belongs to a group when one of the group's members appears in it as
    whole words, so "Monin Simple Syrup" belongs to the syrup group. Names in
    different groups are never equivalent, even when each group links to a
    common third name.
    """
    key_a = normalize_key(a)
    key_b = normalize_key(b)
    if not key_a or not key_b:
        return False
    if key_a == key_b:
        return True
    return any(
        _in_group(key_a, group) and _in_group(key_b, group) for group in _GROUP_PATTERNS
    )
