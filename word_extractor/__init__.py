"""Extract long words from documents into deduplicated dictionary files."""

from .commands import WordExtractor
from .normalizer import NormalizerOptions, normalize
from .reconciler import append_single_word, extract_and_append, remove_word, sort_dictionary
from .settings import DictionarySet, Settings, load_settings, save_settings
from .storage import FileVault, StorageError
from .types import Outcome, ReconcileResult

__all__ = [
    "normalize",
    "NormalizerOptions",
    "extract_and_append",
    "sort_dictionary",
    "append_single_word",
    "remove_word",
    "Settings",
    "DictionarySet",
    "load_settings",
    "save_settings",
    "FileVault",
    "StorageError",
    "WordExtractor",
    "Outcome",
    "ReconcileResult",
]
