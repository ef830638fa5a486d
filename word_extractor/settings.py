from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, List, Tuple, TypedDict

from word_extractor.storage import StorageError
from word_extractor.types import DictionarySetError

LOGGER = logging.getLogger(__name__)

DEFAULT_MIN_WORD_LENGTH = 5
DEFAULT_DICTIONARY = "dictionary.md"


class SettingField(TypedDict):
    """Description of one configurable value for a settings renderer."""

    key: str
    name: str
    description: str
    kind: str


SETTINGS_FIELDS: List[SettingField] = [
    {
        "key": "minWordLength",
        "name": "Minimum word length",
        "description": "Shortest word that is extracted from a document.",
        "kind": "integer",
    },
    {
        "key": "dictionaries",
        "name": "Dictionaries",
        "description": "Word list files that can receive extracted words.",
        "kind": "path-list",
    },
    {
        "key": "activeDictionary",
        "name": "Active dictionary",
        "description": "Dictionary used by extract, sort, add and remove.",
        "kind": "choice",
    },
]


def env_path(var_name: str, default: str) -> Path:
    return Path(os.getenv(var_name, default))


@dataclass(frozen=True)
class DictionarySet:
    """Non-empty list of dictionary paths with one active member."""

    paths: Tuple[str, ...] = (DEFAULT_DICTIONARY,)
    active: str = DEFAULT_DICTIONARY

    def __post_init__(self) -> None:
        if not self.paths:
            raise DictionarySetError("At least one dictionary is required.")
        if len(set(self.paths)) != len(self.paths):
            raise DictionarySetError("Dictionary paths must be distinct.")
        if self.active not in self.paths:
            raise DictionarySetError(f"Active dictionary '{self.active}' is not configured.")

    def add(self, path: str) -> DictionarySet:
        cleaned = path.strip()
        if not cleaned:
            raise DictionarySetError("Dictionary path must not be blank.")
        if cleaned in self.paths:
            raise DictionarySetError(f"Dictionary '{cleaned}' is already configured.")
        return replace(self, paths=(*self.paths, cleaned))

    def remove(self, path: str) -> DictionarySet:
        if path not in self.paths:
            raise DictionarySetError(f"Dictionary '{path}' is not configured.")
        if len(self.paths) == 1:
            raise DictionarySetError("The last dictionary cannot be removed.")
        remaining = tuple(entry for entry in self.paths if entry != path)
        active = self.active if self.active != path else remaining[0]
        return DictionarySet(paths=remaining, active=active)

    def select(self, path: str) -> DictionarySet:
        if path not in self.paths:
            raise DictionarySetError(f"Dictionary '{path}' is not configured.")
        return replace(self, active=path)


@dataclass(frozen=True)
class Settings:
    """User settings passed explicitly into every command."""

    min_word_length: int = DEFAULT_MIN_WORD_LENGTH
    dictionaries: DictionarySet = field(default_factory=DictionarySet)

    def with_min_word_length(self, value: int) -> Settings:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValueError(f"Minimum word length must be a non-negative integer, got {value!r}.")
        return replace(self, min_word_length=value)

    def with_dictionaries(self, dictionaries: DictionarySet) -> Settings:
        return replace(self, dictionaries=dictionaries)

    def to_dict(self) -> dict[str, Any]:
        return {
            "minWordLength": self.min_word_length,
            "dictionaries": list(self.dictionaries.paths),
            "activeDictionary": self.dictionaries.active,
        }


def _coerce_min_word_length(raw: Any) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
        LOGGER.debug("Ignoring invalid minWordLength %r", raw)
        return DEFAULT_MIN_WORD_LENGTH
    return raw


def _coerce_paths(raw: Any) -> Tuple[str, ...]:
    if not isinstance(raw, list):
        LOGGER.debug("Ignoring invalid dictionaries %r", raw)
        return (DEFAULT_DICTIONARY,)
    paths: List[str] = []
    for entry in raw:
        if not isinstance(entry, str) or not entry.strip():
            LOGGER.debug("Dropping invalid dictionary entry %r", entry)
            continue
        cleaned = entry.strip()
        if cleaned not in paths:
            paths.append(cleaned)
    return tuple(paths) or (DEFAULT_DICTIONARY,)


def settings_from_dict(data: Any) -> Settings:
    """Build settings from decoded JSON, falling back per field on bad values."""

    if not isinstance(data, dict):
        LOGGER.debug("Settings data is not an object, using defaults")
        return Settings()

    paths = _coerce_paths(data.get("dictionaries"))
    active = data.get("activeDictionary")
    if not isinstance(active, str) or active.strip() not in paths:
        LOGGER.debug("Active dictionary %r is not configured, using %s", active, paths[0])
        active = paths[0]
    return Settings(
        min_word_length=_coerce_min_word_length(data.get("minWordLength")),
        dictionaries=DictionarySet(paths=paths, active=active.strip()),
    )


def load_settings(settings_path: Path) -> Settings:
    """Load settings from a JSON file; never fails on malformed content."""

    if not settings_path.exists():
        LOGGER.debug("No settings at %s, using defaults", settings_path)
        return Settings()
    try:
        with settings_path.open("r", encoding="utf-8") as infile:
            data = json.load(infile)
    except (OSError, ValueError) as exc:
        LOGGER.debug("Could not load settings from %s: %s", settings_path, exc)
        return Settings()
    return settings_from_dict(data)


def save_settings(settings: Settings, settings_path: Path) -> None:
    LOGGER.debug("Writing settings to %s", settings_path)
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        with settings_path.open("w", encoding="utf-8") as outfile:
            json.dump(settings.to_dict(), outfile, ensure_ascii=False, indent=2)
    except OSError as exc:
        raise StorageError(f"Could not write settings {settings_path}: {exc}") from exc
