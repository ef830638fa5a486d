from __future__ import annotations

import logging
import unicodedata
from typing import Iterable, List, Sequence

from word_extractor.normalizer import NormalizerOptions, first_token, normalize
from word_extractor.types import Outcome, ReconcileResult

LOGGER = logging.getLogger(__name__)

# Letters without a canonical decomposition, folded to their base letters.
BASE_LETTERS = str.maketrans(
    {
        "ø": "o",
        "Ø": "O",
        "æ": "ae",
        "Æ": "AE",
        "œ": "oe",
        "Œ": "OE",
        "đ": "d",
        "Đ": "D",
        "ł": "l",
        "Ł": "L",
        "þ": "th",
        "Þ": "TH",
    }
)


def parse_entries(content: str) -> List[str]:
    """Split dictionary content into trimmed, non-empty lines.

    Order and duplicate lines are preserved.
    """

    return [line.strip() for line in content.split("\n") if line.strip()]


def append_entries(content: str, words: Sequence[str]) -> str:
    joined = "\n".join(words)
    existing = content.rstrip()
    if not existing:
        return joined
    return f"{existing}\n{joined}"


def unique_in_order(words: Iterable[str]) -> List[str]:
    seen: set[str] = set()
    unique: List[str] = []
    for word in words:
        if word not in seen:
            seen.add(word)
            unique.append(word)
    return unique


def collation_key(word: str) -> tuple[str, str, str]:
    """Primary-strength sort key with accent and case as tie-breakers."""

    decomposed = unicodedata.normalize("NFD", word)
    base = "".join(char for char in decomposed if not unicodedata.combining(char))
    base = base.translate(BASE_LETTERS)
    return (base.casefold(), unicodedata.normalize("NFC", word).casefold(), word)


def _result(outcome: Outcome, words: List[str], content: str, original: str) -> ReconcileResult:
    return {
        "outcome": outcome,
        "words": words,
        "content": content,
        "changed": content != original,
    }


def extract_and_append(
    document: str,
    content: str,
    min_length: int,
    *,
    options: NormalizerOptions | None = None,
) -> ReconcileResult:
    """Append the long words of ``document`` that ``content`` does not hold yet."""

    candidates = unique_in_order(
        word for word in normalize(document, options) if len(word) >= min_length
    )
    existing = set(parse_entries(content))
    to_append = [word for word in candidates if word not in existing]

    if not to_append:
        LOGGER.debug("No new words among %d candidates", len(candidates))
        return _result(Outcome.NO_NEW_WORDS, [], content, content)

    LOGGER.debug("Appending %d of %d candidates", len(to_append), len(candidates))
    return _result(Outcome.ADDED, to_append, append_entries(content, to_append), content)


def sort_dictionary(content: str) -> ReconcileResult:
    """Deduplicate and sort dictionary entries case-insensitively.

    Entries that only differ in letter case collapse into the spelling that
    sorts first.
    """

    entries = parse_entries(content)
    if not entries:
        return _result(Outcome.EMPTY_DICTIONARY, [], content, content)

    sorted_entries: List[str] = []
    seen: set[str] = set()
    for word in sorted(set(entries), key=collation_key):
        folded = unicodedata.normalize("NFC", word).casefold()
        if folded in seen:
            continue
        seen.add(folded)
        sorted_entries.append(word)

    LOGGER.debug("Sorted %d entries into %d", len(entries), len(sorted_entries))
    return _result(Outcome.SORTED, sorted_entries, "\n".join(sorted_entries), content)


def append_single_word(
    selection: str,
    content: str,
    min_length: int | None = None,
    *,
    options: NormalizerOptions | None = None,
) -> ReconcileResult:
    """Append the first word of ``selection``.

    ``min_length`` is accepted for symmetry with :func:`extract_and_append`
    but a selected word is added regardless of its length.
    """

    word = first_token(selection, options)
    if word is None:
        return _result(Outcome.INVALID_SELECTION, [], content, content)
    if word in parse_entries(content):
        return _result(Outcome.ALREADY_PRESENT, [word], content, content)
    return _result(Outcome.ADDED, [word], append_entries(content, [word]), content)


def remove_word(
    word_input: str,
    content: str,
    *,
    options: NormalizerOptions | None = None,
) -> ReconcileResult:
    """Remove every line equal to the first word of ``word_input``."""

    word = first_token(word_input, options)
    if word is None:
        return _result(Outcome.INVALID_WORD, [], content, content)

    entries = parse_entries(content)
    if not entries:
        return _result(Outcome.EMPTY_DICTIONARY, [word], content, content)
    if word not in entries:
        return _result(Outcome.NOT_FOUND, [word], content, content)

    remaining = [entry for entry in entries if entry != word]
    LOGGER.debug("Removed %d lines equal to '%s'", len(entries) - len(remaining), word)
    return _result(Outcome.REMOVED, [word], "\n".join(remaining), content)
