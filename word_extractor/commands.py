"""User-facing commands that tie the normalizer and reconciler to storage.

Each command is one unit of work against the active dictionary: read the
whole file, compute the new content, write it back only if it changed.
"""

from __future__ import annotations

import logging
from typing import Callable, NoReturn, Optional

from word_extractor.normalizer import NormalizerOptions
from word_extractor.reconciler import (
    append_single_word,
    extract_and_append,
    remove_word,
    sort_dictionary,
)
from word_extractor.settings import Settings
from word_extractor.storage import DictionaryExistsError, StorageError, Vault
from word_extractor.types import Outcome, ReconcileResult, UserInputError

LOGGER = logging.getLogger(__name__)

Notifier = Callable[[str], None]
Prompt = Callable[[], Optional[str]]

MESSAGES = {
    Outcome.ADDED: "Added to {dictionary}:\n{words}",
    Outcome.NO_NEW_WORDS: "No new words to add to {dictionary}.",
    Outcome.SORTED: "Sorted {dictionary}: {count} entries.",
    Outcome.REMOVED: "Removed '{words}' from {dictionary}.",
    Outcome.EMPTY_DICTIONARY: "Dictionary {dictionary} is empty.",
    Outcome.ALREADY_PRESENT: "'{words}' is already in {dictionary}.",
    Outcome.NOT_FOUND: "'{words}' was not found in {dictionary}.",
    Outcome.INVALID_SELECTION: "The selection does not contain a valid word.",
    Outcome.INVALID_WORD: "The input does not contain a valid word.",
}


def log_notifier(message: str) -> None:
    LOGGER.info(message)


class WordExtractor:
    """Run dictionary commands against a vault with explicit settings."""

    def __init__(
        self,
        vault: Vault,
        *,
        notify: Notifier = log_notifier,
        options: NormalizerOptions | None = None,
    ) -> None:
        self.vault = vault
        self.notify = notify
        self.options = options or NormalizerOptions()

    def _read(self, dictionary: str, *, create: bool) -> Optional[str]:
        try:
            if self.vault.resolve(dictionary) is None:
                if not create:
                    return None
                self.vault.create(dictionary, "")
            return self.vault.read(dictionary)
        except StorageError as exc:
            self.notify(f"Failed to access {dictionary}: {exc}")
            raise

    def _finish(self, dictionary: str, result: ReconcileResult) -> ReconcileResult:
        if result["changed"]:
            try:
                if self.vault.resolve(dictionary) is None:
                    self.vault.create(dictionary, result["content"])
                else:
                    self.vault.write(dictionary, result["content"])
            except StorageError as exc:
                self.notify(f"Failed to write {dictionary}: {exc}")
                raise
        separator = "\n" if result["outcome"] is Outcome.ADDED else ", "
        self.notify(
            MESSAGES[result["outcome"]].format(
                dictionary=dictionary,
                words=separator.join(result["words"]),
                count=len(result["words"]),
            )
        )
        return result

    def _reject(self, message: str) -> NoReturn:
        self.notify(message)
        raise UserInputError(message)

    def extract_long_words(self, document: Optional[str], settings: Settings) -> ReconcileResult:
        """Append the long words of the active document to the active dictionary."""

        if document is None:
            self._reject("No active document.")
        dictionary = settings.dictionaries.active
        content = self._read(dictionary, create=True) or ""
        result = extract_and_append(
            document, content, settings.min_word_length, options=self.options
        )
        return self._finish(dictionary, result)

    def sort_active_dictionary(self, settings: Settings) -> ReconcileResult:
        dictionary = settings.dictionaries.active
        content = self._read(dictionary, create=False) or ""
        return self._finish(dictionary, sort_dictionary(content))

    def add_selection(self, selection: str, settings: Settings) -> ReconcileResult:
        """Add the first word of the selection to the active dictionary."""

        if not selection.strip():
            self._reject("Nothing is selected.")
        dictionary = settings.dictionaries.active
        content = self._read(dictionary, create=False) or ""
        result = append_single_word(
            selection, content, settings.min_word_length, options=self.options
        )
        if result["outcome"] is Outcome.INVALID_SELECTION:
            self._reject(MESSAGES[Outcome.INVALID_SELECTION])
        return self._finish(dictionary, result)

    def remove_prompted_word(self, prompt: Prompt, settings: Settings) -> Optional[ReconcileResult]:
        """Ask for a word and remove all of its lines from the active dictionary.

        Returns ``None`` when the prompt was cancelled.
        """

        word_input = prompt()
        if word_input is None:
            LOGGER.debug("Remove prompt cancelled")
            return None
        dictionary = settings.dictionaries.active
        content = self._read(dictionary, create=False) or ""
        result = remove_word(word_input, content, options=self.options)
        if result["outcome"] is Outcome.INVALID_WORD:
            self._reject(MESSAGES[Outcome.INVALID_WORD])
        return self._finish(dictionary, result)

    def ensure_dictionary(self, dictionary: str) -> bool:
        """Create an empty dictionary file; return False if it already existed."""

        try:
            self.vault.create(dictionary, "")
        except DictionaryExistsError:
            return False
        except StorageError as exc:
            self.notify(f"Failed to create {dictionary}: {exc}")
            raise
        return True
