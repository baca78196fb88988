"""Corpus discovery: find markdown files under a root and read them once."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path
from typing import Iterable, List

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"


# ============================================================================
# Exceptions
# ============================================================================

class CorpusError(Exception):
    """Base exception for corpus access failures."""

    def __init__(self, message: str, path: Path | str | None = None):
        self.path = path
        super().__init__(message)


class ScanError(CorpusError):
    """Raised when the root or one of its subdirectories cannot be enumerated."""
    pass


class DocumentReadError(CorpusError):
    """Raised when a discovered markdown file cannot be read."""
    pass


@dataclass(frozen=True)
class SourceDocument:
    """Raw text of one markdown file."""
    path: Path
    text: str


def scan_corpus(root: Path | str, skip_dirs: Iterable[str] = ()) -> List[Path]:
    """Recursively list markdown files under `root`.

    Entries are visited in name order so repeated scans of an unchanged tree
    return the same list. Symlinked directories are not followed.

    Raises:
        ScanError: If `root` is not a readable directory, or if any
            subdirectory fails to enumerate.
    """
    root_path = Path(os.path.abspath(root))
    if not root_path.is_dir():
        raise ScanError(f"Not a directory: {root_path}", path=root_path)

    skipped = set(skip_dirs)
    results: List[Path] = []
    _walk(root_path, skipped, results)
    logger.info("Found %d markdown files under %s", len(results), root_path)
    return results


def _walk(directory: Path, skipped: set, results: List[Path]) -> None:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise ScanError(f"Cannot read directory {directory}: {e}", path=directory) from e

    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            if entry.name in skipped:
                continue
            _walk(Path(entry.path), skipped, results)
        elif entry.is_file() and entry.name.endswith(MARKDOWN_SUFFIX):
            results.append(Path(entry.path))


def read_documents(paths: Iterable[Path]) -> List[SourceDocument]:
    """Read every file as UTF-8 text.

    Raises:
        DocumentReadError: On the first file that cannot be read or decoded.
    """
    documents: List[SourceDocument] = []
    for path in paths:
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentReadError(f"Cannot read {path}: {e}", path=path) from e
        documents.append(SourceDocument(path=Path(path), text=text))
    return documents
