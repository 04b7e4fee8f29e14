"""
errors.py

PURPOSE: Exceptions raised while authoring and storing conventions.
DEPENDENCIES: None

ARCHITECTURE NOTES:
Parsing never raises. Every error here belongs to authoring or to the
persistence store, and is meant to be shown to the author, not to crash.
"""


class ConventionError(Exception):
    """Base class for convention authoring and storage errors."""


class InvalidPatternError(ConventionError):
    """The author's opening sequence is empty or longer than four characters."""

    def __init__(self, raw_opening: str):
        self.raw_opening = raw_opening
        super().__init__(
            f'Invalid pattern "{raw_opening}". Re-enter a 1-4 character opening sequence '
            "(e.g. . or .. or ,.)"
        )


class BuiltinConventionError(ConventionError):
    """Built-in conventions cannot be edited or removed."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f'"{key}" is a built-in convention and cannot be changed')


class UnknownConventionError(ConventionError):
    """No custom convention exists under the given key."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f'No custom convention with key "{key}"')


class ConventionStoreError(ConventionError):
    """The custom convention store could not be read or written."""
