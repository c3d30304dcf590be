"""Ingredient availability matching against a home bar inventory."""

from collections.abc import Iterable
from dataclasses import dataclass

from mixmind.services.normalizer import are_equivalent, normalize_key


@dataclass(frozen=True)
class AvailabilityResult:
    """Outcome of matching required ingredients against an inventory."""

    can_make: bool
    missing: tuple[str, ...]


def is_available(required: str, available: Iterable[str]) -> bool:
    """Return True when any inventory entry satisfies the requirement."""
    required_key = normalize_key(required)
    if not required_key:
        return True
    for entry in available:
        entry_key = normalize_key(entry)
        if not entry_key:
            continue
        if entry_key in required_key or required_key in entry_key:
            return True
        if are_equivalent(required_key, entry_key):
            return True
    return False


def check_availability(
    required: Iterable[str], available: Iterable[str]
) -> AvailabilityResult:
    """Report which required ingredients the inventory cannot satisfy.

    Matching is permissive: an inventory entry satisfies a requirement when
    either normalized name contains the other, or both belong to the same
    synonym group. "Tito's Vodka" therefore satisfies "vodka".
    """
    inventory = tuple(available)
    missing = tuple(item for item in required if not is_available(item, inventory))
    return AvailabilityResult(can_make=not missing, missing=missing)
