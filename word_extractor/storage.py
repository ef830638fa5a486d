from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

LOGGER = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """Raised when a dictionary file cannot be created, read or written."""


class DictionaryNotFoundError(StorageError):
    """Raised when reading a dictionary that does not exist."""


class DictionaryExistsError(StorageError):
    """Raised when creating a dictionary that already exists."""


class Vault(Protocol):
    def read(self, path: str) -> str: ...

    def write(self, path: str, text: str) -> None: ...

    def create(self, path: str, initial_text: str = "") -> Path: ...

    def resolve(self, path: str) -> Path | None: ...


class FileVault:
    """Dictionary storage rooted at a directory on disk."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def _full_path(self, path: str) -> Path:
        return self.root / path

    def resolve(self, path: str) -> Path | None:
        full_path = self._full_path(path)
        return full_path if full_path.is_file() else None

    def read(self, path: str) -> str:
        full_path = self.resolve(path)
        if full_path is None:
            raise DictionaryNotFoundError(f"Dictionary does not exist: {path}")
        try:
            return full_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Could not read dictionary {path}: {exc}") from exc

    def write(self, path: str, text: str) -> None:
        full_path = self._full_path(path)
        LOGGER.debug("Writing %d characters to %s", len(text), full_path)
        try:
            full_path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Could not write dictionary {path}: {exc}") from exc

    def create(self, path: str, initial_text: str = "") -> Path:
        full_path = self._full_path(path)
        if full_path.exists():
            raise DictionaryExistsError(f"Dictionary already exists: {path}")
        LOGGER.info("Creating dictionary %s", full_path)
        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            full_path.write_text(initial_text, encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Could not create dictionary {path}: {exc}") from exc
        return full_path
