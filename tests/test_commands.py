from __future__ import annotations

from pathlib import Path

import pytest
from word_extractor.commands import WordExtractor
from word_extractor.settings import DictionarySet, Settings
from word_extractor.storage import DictionaryExistsError, DictionaryNotFoundError, FileVault, StorageError
from word_extractor.types import Outcome, UserInputError
from pytest import MonkeyPatch


class Recorder:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)


def make_extractor(root: Path) -> tuple[WordExtractor, Recorder]:
    recorder = Recorder()
    return WordExtractor(FileVault(root), notify=recorder), recorder


def test_extract_creates_missing_dictionary(tmp_path: Path) -> None:
    extractor, recorder = make_extractor(tmp_path)

    result = extractor.extract_long_words("Wonderful morning sun", Settings())

    assert result["outcome"] is Outcome.ADDED
    assert (tmp_path / "dictionary.md").read_text(encoding="utf-8") == "Wonderful\nmorning"
    assert recorder.messages == ["Added to dictionary.md:\nWonderful\nmorning"]


def test_extract_uses_active_dictionary(tmp_path: Path) -> None:
    (tmp_path / "names.md").write_text("Wonderful", encoding="utf-8")
    settings = Settings(dictionaries=DictionarySet(paths=("dictionary.md", "names.md"), active="names.md"))
    extractor, recorder = make_extractor(tmp_path)

    extractor.extract_long_words("Wonderful morning", settings)
    extractor.extract_long_words("Wonderful morning", settings)

    assert (tmp_path / "names.md").read_text(encoding="utf-8") == "Wonderful\nmorning"
    assert not (tmp_path / "dictionary.md").exists()
    assert recorder.messages[-1] == "No new words to add to names.md."


def test_extract_without_document(tmp_path: Path) -> None:
    extractor, recorder = make_extractor(tmp_path)

    with pytest.raises(UserInputError):
        extractor.extract_long_words(None, Settings())

    assert recorder.messages == ["No active document."]
    assert not (tmp_path / "dictionary.md").exists()


def test_sort_active_dictionary(tmp_path: Path) -> None:
    (tmp_path / "dictionary.md").write_text("pear\nApple\napple\n\nfig", encoding="utf-8")
    extractor, recorder = make_extractor(tmp_path)

    result = extractor.sort_active_dictionary(Settings())

    assert result["outcome"] is Outcome.SORTED
    assert (tmp_path / "dictionary.md").read_text(encoding="utf-8") == "Apple\nfig\npear"
    assert recorder.messages == ["Sorted dictionary.md: 3 entries."]


def test_sort_missing_dictionary_reports_empty(tmp_path: Path) -> None:
    extractor, recorder = make_extractor(tmp_path)

    result = extractor.sort_active_dictionary(Settings())

    assert result["outcome"] is Outcome.EMPTY_DICTIONARY
    assert not (tmp_path / "dictionary.md").exists()
    assert recorder.messages == ["Dictionary dictionary.md is empty."]


def test_add_selection(tmp_path: Path) -> None:
    (tmp_path / "dictionary.md").write_text("house", encoding="utf-8")
    extractor, recorder = make_extractor(tmp_path)

    added = extractor.add_selection("cat and dog", Settings())
    repeated = extractor.add_selection("cat", Settings())

    assert added["outcome"] is Outcome.ADDED
    assert repeated["outcome"] is Outcome.ALREADY_PRESENT
    assert (tmp_path / "dictionary.md").read_text(encoding="utf-8") == "house\ncat"
    assert recorder.messages[-1] == "'cat' is already in dictionary.md."


@pytest.mark.parametrize("selection", ["", "   ", "1234 ..."])
def test_add_selection_rejects_unusable_text(tmp_path: Path, selection: str) -> None:
    (tmp_path / "dictionary.md").write_text("house", encoding="utf-8")
    extractor, recorder = make_extractor(tmp_path)

    with pytest.raises(UserInputError):
        extractor.add_selection(selection, Settings())

    assert len(recorder.messages) == 1
    assert (tmp_path / "dictionary.md").read_text(encoding="utf-8") == "house"


def test_remove_prompted_word(tmp_path: Path) -> None:
    (tmp_path / "dictionary.md").write_text("cat\ndog\ncat", encoding="utf-8")
    extractor, recorder = make_extractor(tmp_path)

    result = extractor.remove_prompted_word(lambda: "cat", Settings())

    assert result is not None
    assert result["outcome"] is Outcome.REMOVED
    assert (tmp_path / "dictionary.md").read_text(encoding="utf-8") == "dog"
    assert recorder.messages == ["Removed 'cat' from dictionary.md."]


def test_remove_cancelled_prompt_does_nothing(tmp_path: Path) -> None:
    (tmp_path / "dictionary.md").write_text("cat", encoding="utf-8")
    extractor, recorder = make_extractor(tmp_path)

    assert extractor.remove_prompted_word(lambda: None, Settings()) is None
    assert recorder.messages == []


def test_remove_policy_misses(tmp_path: Path) -> None:
    extractor, recorder = make_extractor(tmp_path)

    empty = extractor.remove_prompted_word(lambda: "cat", Settings())
    (tmp_path / "dictionary.md").write_text("dog", encoding="utf-8")
    missing = extractor.remove_prompted_word(lambda: "cat", Settings())

    assert empty is not None and empty["outcome"] is Outcome.EMPTY_DICTIONARY
    assert missing is not None and missing["outcome"] is Outcome.NOT_FOUND
    assert recorder.messages == ["Dictionary dictionary.md is empty.", "'cat' was not found in dictionary.md."]

    with pytest.raises(UserInputError):
        extractor.remove_prompted_word(lambda: "!!", Settings())


def test_storage_failure_is_reported_and_raised(tmp_path: Path, monkeypatch: MonkeyPatch) -> None:
    (tmp_path / "dictionary.md").write_text("", encoding="utf-8")
    extractor, recorder = make_extractor(tmp_path)

    def failing_write(path: str, text: str) -> None:
        raise StorageError("disk full")

    monkeypatch.setattr(extractor.vault, "write", failing_write)

    with pytest.raises(StorageError):
        extractor.extract_long_words("Wonderful morning", Settings())

    assert recorder.messages == ["Failed to write dictionary.md: disk full"]


def test_ensure_dictionary(tmp_path: Path) -> None:
    extractor, _ = make_extractor(tmp_path)

    assert extractor.ensure_dictionary("lists/names.md") is True
    assert (tmp_path / "lists" / "names.md").read_text(encoding="utf-8") == ""
    assert extractor.ensure_dictionary("lists/names.md") is False


def test_file_vault_errors(tmp_path: Path) -> None:
    vault = FileVault(tmp_path)

    assert vault.resolve("absent.md") is None
    with pytest.raises(DictionaryNotFoundError):
        vault.read("absent.md")

    vault.create("present.md", "word")
    assert vault.read("present.md") == "word"
    with pytest.raises(DictionaryExistsError):
        vault.create("present.md")


def test_rejected_selection_does_not_create_dictionary(tmp_path: Path) -> None:
    extractor, recorder = make_extractor(tmp_path)

    with pytest.raises(UserInputError):
        extractor.add_selection("1234 ...", Settings())

    assert not (tmp_path / "dictionary.md").exists()
    assert recorder.messages == ["The selection does not contain a valid word."]


def test_add_selection_creates_missing_dictionary(tmp_path: Path) -> None:
    extractor, _ = make_extractor(tmp_path)

    result = extractor.add_selection("lantern", Settings())

    assert result["outcome"] is Outcome.ADDED
    assert (tmp_path / "dictionary.md").read_text(encoding="utf-8") == "lantern"
