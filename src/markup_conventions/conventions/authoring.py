"""
authoring.py

PURPOSE: Create, edit, and remove custom conventions.
DEPENDENCIES: detector, conflicts, registry, store

ARCHITECTURE NOTES:
The authoring flow is:
    raw opening -> detect() -> draft Convention -> find_conflicts() -> save

A conflict is soft. The author chooses how to resolve it:
- REJECT: nothing is saved, the conflicts are returned
- EDIT_EXISTING: the save becomes an update of the conflicting custom key
- CANCEL: the candidate is discarded

Built-in conventions are never edited or removed, so a conflict with a
built-in always stays a conflict.
"""

import logging
import uuid
from dataclasses import dataclass, field
from enum import Enum, auto

from markup_conventions.conventions.conflicts import find_conflicts
from markup_conventions.conventions.detector import detect
from markup_conventions.conventions.errors import (
    BuiltinConventionError,
    InvalidPatternError,
    UnknownConventionError,
)
from markup_conventions.conventions.registry import ConventionRegistry
from markup_conventions.models.convention import (
    BUILTIN_CONVENTIONS,
    Convention,
    DelimiterPair,
    Effects,
    resolve_color_name,
)
from markup_conventions.observability import get_tracer

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)


class ConflictResolution(Enum):
    """What to do when a candidate's delimiters are already taken."""

    REJECT = auto()
    EDIT_EXISTING = auto()
    CANCEL = auto()


class SaveStatus(Enum):
    """Outcome of a save."""

    CREATED = auto()
    UPDATED = auto()
    CONFLICT = auto()
    CANCELLED = auto()


@dataclass
class SaveResult:
    """Result of saving a candidate convention."""

    status: SaveStatus
    convention: Convention | None = None
    conflicts: list[Convention] = field(default_factory=list)

    @property
    def saved(self) -> bool:
        return self.status in (SaveStatus.CREATED, SaveStatus.UPDATED)


def generate_key() -> str:
    """Generate a custom convention key that cannot collide with a built-in."""
    return f"custom_{uuid.uuid4().hex[:12]}"


def describe_effects(effects: Effects) -> str:
    return f"Custom markup with {effects.describe()} effects"


def build_convention(
    key: str,
    pair: DelimiterPair,
    color: str,
    effects: Effects,
) -> Convention:
    """Fill in the display metadata for a convention."""
    syntax = pair.syntax
    return Convention(
        key=key,
        syntax=syntax,
        opening=pair.opening,
        closing=pair.closing,
        description=describe_effects(effects),
        example=f"This is {pair.opening}custom text{pair.closing} with effects.",
        color=resolve_color_name(color),
        effects=effects,
    )


def draft_convention(
    raw_opening: str,
    color: str = "inherit",
    effects: Effects | None = None,
    key: str | None = None,
) -> Convention:
    """
    Build a candidate convention from author input.

    Args:
        raw_opening: The 1-4 character opening sequence the author typed
        color: "keyword", "inherit", a hex colour, or a palette name
        effects: Effect flags (glow only if omitted)
        key: Key to use (a new custom key if omitted)

    Returns:
        The candidate Convention (not yet saved)

    Raises:
        InvalidPatternError: If the opening sequence is empty or too long
        ValueError: If the colour is not recognised
    """
    raw_opening = raw_opening.strip()
    pair = detect(raw_opening)
    if pair is None:
        raise InvalidPatternError(raw_opening)

    return build_convention(
        key=key or generate_key(),
        pair=pair,
        color=color,
        effects=effects if effects is not None else Effects(glow=True),
    )


class ConventionAuthor:
    """
    Authoring operations over a registry's custom conventions.

    Usage:
        author = ConventionAuthor(registry)
        candidate = draft_convention("..", color="gold", effects=Effects(bold=True))
        result = author.save(candidate)
        if result.status is SaveStatus.CONFLICT:
            result = author.save(candidate, ConflictResolution.EDIT_EXISTING)
    """

    def __init__(self, registry: ConventionRegistry):
        self.registry = registry

    def check(self, candidate: Convention) -> list[Convention]:
        """Conflicting conventions for a candidate, ignoring its own key."""
        conflicts = find_conflicts(candidate.pair, self.registry.all(strict=True))
        return [c for c in conflicts if c.key != candidate.key]

    def save(
        self,
        candidate: Convention,
        resolution: ConflictResolution = ConflictResolution.REJECT,
    ) -> SaveResult:
        """
        Save a candidate convention, resolving conflicts as the author chose.

        Args:
            candidate: The convention to save
            resolution: What to do if its delimiter pair is already used

        Returns:
            SaveResult describing what happened

        Raises:
            BuiltinConventionError: If the candidate uses a built-in key
            ConventionStoreError: If the store cannot be read; nothing is written
        """
        with tracer.start_as_current_span("markup.save_convention") as span:
            span.set_attribute("markup.key", candidate.key)
            span.set_attribute("markup.resolution", resolution.name)

            if resolution is ConflictResolution.CANCEL:
                logger.debug(f"Discarded candidate {candidate.syntax}")
                return SaveResult(SaveStatus.CANCELLED)

            if candidate.builtin:
                raise BuiltinConventionError(candidate.key)

            conflicts = self.check(candidate)
            if not conflicts:
                custom = self.registry.custom(strict=True)
                status = SaveStatus.UPDATED if candidate.key in custom else SaveStatus.CREATED
                custom[candidate.key] = candidate
                self.registry.store.save(custom)
                logger.info(f"Saved convention {candidate.key} ({candidate.syntax})")
                span.set_attribute("markup.status", status.name)
                return SaveResult(status, candidate)

            editable = [c for c in conflicts if not c.builtin]
            if resolution is ConflictResolution.EDIT_EXISTING and editable:
                target = editable[0]
                updated = candidate.model_copy(update={"key": target.key})
                custom = self.registry.custom(strict=True)
                custom[target.key] = updated
                self.registry.store.save(custom)
                logger.info(f"Updated convention {target.key} ({updated.syntax})")
                span.set_attribute("markup.status", SaveStatus.UPDATED.name)
                return SaveResult(SaveStatus.UPDATED, updated, conflicts)

            span.set_attribute("markup.status", SaveStatus.CONFLICT.name)
            return SaveResult(SaveStatus.CONFLICT, None, conflicts)

    def update(
        self,
        key: str,
        raw_opening: str | None = None,
        color: str | None = None,
        effects: Effects | None = None,
    ) -> SaveResult:
        """
        Edit an existing custom convention by key.

        Fields left as None keep their current value. Changing the delimiters
        is checked for conflicts like a new save.

        Raises:
            BuiltinConventionError: If key is a built-in
            UnknownConventionError: If no custom convention has this key
            InvalidPatternError: If the new opening sequence is invalid
            ConventionStoreError: If the store cannot be read
        """
        existing = self._require_custom(key)

        if raw_opening is not None:
            pair = detect(raw_opening.strip())
            if pair is None:
                raise InvalidPatternError(raw_opening)
        else:
            pair = existing.pair

        candidate = build_convention(
            key=key,
            pair=pair,
            color=color if color is not None else existing.color,
            effects=effects if effects is not None else existing.effects,
        )
        return self.save(candidate)

    def remove(self, key: str) -> Convention:
        """
        Delete a custom convention.

        Raises:
            BuiltinConventionError: If key is a built-in
            UnknownConventionError: If no custom convention has this key
            ConventionStoreError: If the store cannot be read
        """
        removed = self._require_custom(key)
        custom = self.registry.custom(strict=True)
        del custom[key]
        self.registry.store.save(custom)
        logger.info(f"Removed convention {key}")
        return removed

    def _require_custom(self, key: str) -> Convention:
        if key in BUILTIN_CONVENTIONS:
            raise BuiltinConventionError(key)
        existing = self.registry.custom(strict=True).get(key)
        if existing is None:
            raise UnknownConventionError(key)
        return existing
