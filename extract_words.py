"""Compatibility wrapper for extracting long words from a document.

Use the packaged CLI instead:
    python -m word_extractor.cli extract
or install the package and run `extract-words`.
"""

from word_extractor.cli import extract_cli


if __name__ == "__main__":
    extract_cli()
