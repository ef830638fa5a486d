from __future__ import annotations

import logging
import re
import string
from dataclasses import dataclass
from typing import Callable, List, Sequence

from nltk.tokenize import WhitespaceTokenizer

LOGGER = logging.getLogger(__name__)

ACCENTED_LETTERS = "ÀÁÂÃÄÅÆÇÈÉÊËÌÍÎÏÑÒÓÔÕÖØÙÚÛÜÝàáâãäåæçèéêëìíîïñòóôõöøùúûüýÿß"
FILE_EXTENSIONS = ("png", "jpg", "jpeg", "gif", "svg", "md", "txt", "pdf")
QUOTE_GLYPHS = "«»„“”‘’‚‹›´\""

MARKDOWN_PATTERN = re.compile(r"[*_#>`-]")
IMAGE_PATTERN = re.compile(r"!\[.*?\]\(.*?\)")
LINK_PATTERN = re.compile(r"\[.*?\]\(.*?\)")
URL_PATTERN = re.compile(r"https?://\S+")
PUNCTUATION_PATTERN = re.compile("[" + re.escape(string.punctuation + QUOTE_GLYPHS) + "]")


@dataclass(frozen=True)
class NormalizerOptions:
    """Configuration for turning document text into candidate words."""

    extra_letters: str = ACCENTED_LETTERS
    file_extensions: Sequence[str] = FILE_EXTENSIONS


def file_path_pattern(extensions: Sequence[str]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(extension) for extension in extensions)
    return re.compile(rf"/?[\w\-]+\.(?:{alternatives})\b", re.IGNORECASE)


def word_pattern(extra_letters: str) -> re.Pattern[str]:
    """Whole-token word shape: letters with optional internal hyphens."""

    letters = "A-Za-z" + re.escape(extra_letters)
    return re.compile(rf"[{letters}]+(?:-[{letters}]+)*")


def normalize_text(text: str, options: NormalizerOptions) -> str:
    """Strip markup, links, URLs, file names and punctuation from ``text``.

    The steps run in a fixed order: link and image removal rely on the
    markdown markers already being blanked, and punctuation is only replaced
    once the constructs that contain brackets and dots are gone.
    """

    cleaned = MARKDOWN_PATTERN.sub(" ", text)
    cleaned = IMAGE_PATTERN.sub("", cleaned)
    cleaned = LINK_PATTERN.sub("", cleaned)
    cleaned = URL_PATTERN.sub("", cleaned)
    cleaned = file_path_pattern(options.file_extensions).sub("", cleaned)
    return PUNCTUATION_PATTERN.sub(" ", cleaned)


def build_tokenizer(options: NormalizerOptions) -> Callable[[str], List[str]]:
    splitter = WhitespaceTokenizer()
    shape = word_pattern(options.extra_letters)

    def tokenizer(text: str) -> List[str]:
        pieces = [piece.strip() for piece in splitter.tokenize(text)]
        return [piece for piece in pieces if piece and shape.fullmatch(piece)]

    return tokenizer


def normalize(text: str, options: NormalizerOptions | None = None) -> List[str]:
    """Return candidate words from ``text`` in first-occurrence order.

    The result is not deduplicated.
    """

    normalizer_options = options or NormalizerOptions()
    tokens = build_tokenizer(normalizer_options)(normalize_text(text, normalizer_options))
    LOGGER.debug("Normalized %d characters into %d tokens", len(text), len(tokens))
    return tokens


def first_token(text: str, options: NormalizerOptions | None = None) -> str | None:
    """Return the first candidate word in ``text`` or ``None``."""

    tokens = normalize(text, options)
    if not tokens:
        return None
    if len(tokens) > 1:
        LOGGER.debug("Using '%s' and ignoring %d further words", tokens[0], len(tokens) - 1)
    return tokens[0]
