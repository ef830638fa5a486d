from __future__ import annotations

from enum import Enum
from typing import TypedDict


class Outcome(str, Enum):
    """What a reconciliation step did to a dictionary."""

    ADDED = "added"
    NO_NEW_WORDS = "no_new_words"
    SORTED = "sorted"
    REMOVED = "removed"
    EMPTY_DICTIONARY = "empty_dictionary"
    ALREADY_PRESENT = "already_present"
    NOT_FOUND = "not_found"
    INVALID_SELECTION = "invalid_selection"
    INVALID_WORD = "invalid_word"


class ReconcileResult(TypedDict):
    """Structured result produced by the reconciliation operations."""

    outcome: Outcome
    words: list[str]
    content: str
    changed: bool


class UserInputError(ValueError):
    """Raised when a command has nothing usable to work on."""


class DictionarySetError(ValueError):
    """Raised when a change would break the dictionary set."""
