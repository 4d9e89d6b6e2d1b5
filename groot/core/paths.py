"""
Path helpers — string normalization and ancestor walking.

Nothing here touches the resolved root; these are the building
blocks the resolver and the accessors share.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)

_SEP_RUN = re.compile(re.escape(os.sep) + "{2,}")


def normalize(path: str | os.PathLike[str]) -> str:
    """Trim whitespace, unify separators and collapse doubled separators.

    A trailing separator is dropped unless the path is a filesystem root,
    so ``"/a/b/"`` and ``"/a/b"`` compare equal.
    """
    clean = os.fspath(path).strip()
    if os.altsep:
        clean = clean.replace(os.altsep, os.sep)
    clean = _SEP_RUN.sub(os.sep, clean)
    if len(clean) > 1 and clean.endswith(os.sep) and os.path.dirname(clean) != clean:
        clean = clean[: -len(os.sep)]
    return clean


def is_bare_filename(name: str) -> bool:
    """True when ``name`` has no separator in it."""
    if os.sep in name:
        return False
    return not (os.altsep and os.altsep in name)


def filter_filenames(names: Iterable[str]) -> set[str]:
    """Keep the unique, non-empty bare filenames from ``names``.

    Entries containing a separator are paths, not filenames, and are
    dropped.
    """
    kept: set[str] = set()
    for name in names:
        name = name.strip()
        if not name or not is_bare_filename(name):
            continue
        kept.add(name)
    return kept


def ancestors_of(path: str | os.PathLike[str]) -> list[Path]:
    """Return ``path`` followed by each of its parents up to the filesystem root.

    ``..`` segments are collapsed first, so every entry is a real
    ancestor of the previous one.  The paths are not checked for
    existence.  Absolute paths are recommended; a relative path stops at
    its first component.
    """
    current = Path(os.path.normpath(normalize(path)))
    chain: list[Path] = []
    while current.parent != current:
        chain.append(current)
        current = current.parent
    chain.append(current)
    return chain


def find_files(directory: Path, filenames: Iterable[str]) -> list[Path]:
    """Glob each filename inside ``directory`` (not recursive).

    Hits are grouped per requested name, sorted within each group.
    """
    found: list[Path] = []
    for name in sorted(filenames):
        hits = sorted(p for p in directory.glob(name) if p.is_file())
        if hits:
            logger.debug("Found %s in %s", name, directory)
        found.extend(hits)
    return found
