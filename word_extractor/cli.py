from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from . import FileVault, WordExtractor, load_settings, save_settings
from .settings import SETTINGS_FIELDS, Settings, env_path
from .storage import StorageError
from .types import UserInputError

logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Extract long words into dictionary files")
    parser.add_argument(
        "--root",
        type=Path,
        default=env_path("WORD_EXTRACTOR_ROOT", "."),
        help="Directory holding the dictionaries (default: %(default)s or WORD_EXTRACTOR_ROOT)",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=env_path("WORD_EXTRACTOR_SETTINGS", ".word-extractor.json"),
        help="Settings file (default: %(default)s or WORD_EXTRACTOR_SETTINGS)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract_parser = subparsers.add_parser(
        "extract", help="Append the long words of a document to the active dictionary"
    )
    extract_parser.add_argument(
        "document",
        type=Path,
        nargs="?",
        help="Document to read; reads standard input when omitted",
    )
    extract_parser.add_argument(
        "--min-word-length",
        type=int,
        default=int(os.environ["MIN_WORD_LENGTH"]) if os.getenv("MIN_WORD_LENGTH") else None,
        help="Override the configured minimum word length (or MIN_WORD_LENGTH)",
    )

    subparsers.add_parser("sort", help="Deduplicate and sort the active dictionary")

    add_parser = subparsers.add_parser("add", help="Add the first word of a selection")
    add_parser.add_argument("selection", nargs="*", help="Selected text")

    remove_parser = subparsers.add_parser(
        "remove", help="Remove every occurrence of a word from the active dictionary"
    )
    remove_parser.add_argument("word", nargs="?", help="Word to remove; prompts when omitted")

    dictionaries_parser = subparsers.add_parser("dictionaries", help="Manage dictionary files")
    dictionaries_actions = dictionaries_parser.add_subparsers(dest="action", required=True)
    dictionaries_actions.add_parser("list", help="List configured dictionaries")
    for action, help_text in (
        ("add", "Configure a new dictionary and create its file"),
        ("remove", "Stop using a dictionary (the file is kept)"),
        ("use", "Make a dictionary the active one"),
    ):
        action_parser = dictionaries_actions.add_parser(action, help=help_text)
        action_parser.add_argument("path", help="Dictionary path relative to --root")

    settings_parser = subparsers.add_parser("settings", help="Show or change settings")
    settings_actions = settings_parser.add_subparsers(dest="action", required=True)
    settings_actions.add_parser("show", help="Print the current settings")
    length_parser = settings_actions.add_parser("min-length", help="Set the minimum word length")
    length_parser.add_argument("value", type=int)

    return parser


def prompt_for_word() -> Optional[str]:
    try:
        return input("Word to remove: ")
    except EOFError:
        return None


def read_document(path: Path | None) -> Optional[str]:
    if path is None:
        if sys.stdin.isatty():
            return None
        return sys.stdin.read()
    if not path.is_file():
        return None
    return path.read_text(encoding="utf-8")


def show_settings(settings: Settings) -> None:
    values = settings.to_dict()
    for setting_field in SETTINGS_FIELDS:
        value = values[setting_field["key"]]
        if isinstance(value, list):
            value = ", ".join(value)
        print(f"{setting_field['name']}: {value}")


def run_dictionaries(args: argparse.Namespace, settings: Settings, extractor: WordExtractor) -> Settings:
    dictionaries = settings.dictionaries
    if args.action == "list":
        for path in dictionaries.paths:
            marker = "*" if path == dictionaries.active else " "
            print(f"{marker} {path}")
        return settings
    if args.action == "add":
        updated = dictionaries.add(args.path)
        if not extractor.ensure_dictionary(args.path.strip()):
            LOGGER.info("Using existing file for %s", args.path)
    elif args.action == "remove":
        updated = dictionaries.remove(args.path)
    else:
        updated = dictionaries.select(args.path)
    return settings.with_dictionaries(updated)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    settings = load_settings(args.settings)
    extractor = WordExtractor(FileVault(args.root))
    updated = settings

    try:
        if args.command == "extract":
            run_settings = settings
            if args.min_word_length is not None:
                run_settings = settings.with_min_word_length(args.min_word_length)
            extractor.extract_long_words(read_document(args.document), run_settings)
        elif args.command == "sort":
            extractor.sort_active_dictionary(settings)
        elif args.command == "add":
            extractor.add_selection(" ".join(args.selection), settings)
        elif args.command == "remove":
            prompt = (lambda: args.word) if args.word is not None else prompt_for_word
            extractor.remove_prompted_word(prompt, settings)
        elif args.command == "dictionaries":
            updated = run_dictionaries(args, settings, extractor)
        elif args.command == "settings":
            if args.action == "show":
                show_settings(settings)
            else:
                updated = settings.with_min_word_length(args.value)
    except UserInputError:
        return 1
    except ValueError as exc:
        LOGGER.error("%s", exc)
        return 1
    except StorageError:
        return 2

    if updated != settings:
        try:
            save_settings(updated, args.settings)
        except StorageError as exc:
            LOGGER.error("%s", exc)
            return 2
    return 0


def extract_cli() -> None:
    argv = sys.argv[1:]
    sys.exit(main(["extract", *argv]))


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
