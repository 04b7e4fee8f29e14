"""
conflicts.py

PURPOSE: Find existing conventions that already use a delimiter pair.
DEPENDENCIES: convention model, registry

ARCHITECTURE NOTES:
An exact equality scan over built-in and custom conventions. More than one
match only happens if the no-duplicate-pairs rule was broken earlier (for
example by hand-editing the store), so all matches are returned.
"""

from collections.abc import Iterable

from markup_conventions.conventions.registry import ConventionRegistry
from markup_conventions.models.convention import Convention, DelimiterPair


def find_conflicts(
    pair: DelimiterPair,
    registry: ConventionRegistry | Iterable[Convention],
) -> list[Convention]:
    """
    Find conventions whose opening AND closing equal the given pair.

    Args:
        pair: The candidate delimiter pair
        registry: A registry (custom conventions are re-read) or any
                  iterable of conventions

    Returns:
        Matching conventions, built-ins first
    """
    conventions = registry.all() if isinstance(registry, ConventionRegistry) else registry
    return [c for c in conventions if c.opening == pair.opening and c.closing == pair.closing]
