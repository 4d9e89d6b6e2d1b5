"""
Root accessors — queries against the resolved root.

Boolean and string queries quietly return ``False`` / ``""`` while the
root is unset.  Anything that cannot give a meaningful answer without
a root raises ``RootNotSetError``.
"""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Callable

from groot.core.context import RootContext, resolve_context
from groot.core.errors import RootNotADirectoryError, RootNotSetError
from groot.core.paths import normalize

# Visitor return values for walk_from_root
SKIP_DIR = "skip_dir"
STOP = "stop"

Visitor = Callable[[Path, bool], "str | None"]


def is_root(path: str | os.PathLike[str], ctx: RootContext | None = None) -> bool:
    """Check if ``path`` is the project root."""
    root = resolve_context(ctx).get()
    if not root:
        return False
    return normalize(path) == normalize(root)


def is_in_root(path: str | os.PathLike[str], ctx: RootContext | None = None) -> bool:
    """Check if ``path`` is the root or anything below it.

    Relative paths are never in the root.
    """
    root = resolve_context(ctx).get()
    path = normalize(path)
    if not root or not os.path.isabs(path):
        return False
    try:
        rel = os.path.relpath(path, normalize(root))
    except ValueError:
        # different drives on Windows
        return False
    return rel != os.pardir and not rel.startswith(os.pardir + os.sep)


def relative_to_root(path: str | os.PathLike[str], ctx: RootContext | None = None) -> str:
    """Return ``path`` relative to the root (``"."`` for the root itself).

    Raises:
        RootNotSetError: If the root is unset.
        ValueError: If ``path`` is not absolute, or no relative path
            exists (different drives).
    """
    root = resolve_context(ctx).get()
    if not root:
        raise RootNotSetError("root not set")
    path = normalize(path)
    if not os.path.isabs(path):
        raise ValueError(f"path is not absolute: {path!r}")
    return os.path.relpath(path, normalize(root))


def from_root(*segments: str, ctx: RootContext | None = None) -> str:
    """Join ``segments`` onto the root.

    Without a root, or when the first segment is absolute, the segments
    are joined on their own.
    """
    root = resolve_context(ctx).get()
    if not segments:
        return root
    joined = os.path.join(*segments)
    if joined:
        joined = os.path.normpath(joined)
    if not root or os.path.isabs(segments[0]):
        return joined
    return os.path.normpath(os.path.join(root, joined))


def root_parent(ctx: RootContext | None = None) -> str:
    """Return the root's parent, or ``""`` if unset or already at ``/``."""
    root = resolve_context(ctx).get()
    if not root:
        return ""
    parent = os.path.dirname(normalize(root))
    if parent == normalize(root):
        return ""
    return parent


def root_info(ctx: RootContext | None = None) -> os.stat_result:
    """Stat the root directory.

    Raises:
        RootNotSetError: If the root is unset.
        OSError: If the root cannot be accessed.
    """
    root = resolve_context(ctx).get()
    if not root:
        raise RootNotSetError("root not set")
    return os.stat(root)


def root_name(ctx: RootContext | None = None) -> str:
    """Return the root directory's name, or ``""`` if unset or unreadable."""
    try:
        root_info(ctx)
    except (RootNotSetError, OSError):
        return ""
    return Path(resolve_context(ctx).get()).name


def validate_root(ctx: RootContext | None = None) -> None:
    """Verify the root is set and is an existing directory."""
    info = root_info(ctx)
    if not stat.S_ISDIR(info.st_mode):
        raise RootNotADirectoryError(f"root is not a directory: {resolve_context(ctx).get()}")


def list_files_from_root(pattern: str, ctx: RootContext | None = None) -> list[str]:
    """Return the paths under the root matching the glob ``pattern``."""
    root = resolve_context(ctx).get()
    if not root:
        raise RootNotSetError("root not set")
    return sorted(str(p) for p in Path(root).glob(pattern))


def _walk(directory: Path, visitor: Visitor) -> bool:
    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda e: e.name)
    for entry in entries:
        is_dir = entry.is_dir(follow_symlinks=False)
        action = visitor(Path(entry.path), is_dir)
        if action == STOP:
            return False
        if is_dir and action != SKIP_DIR and not _walk(Path(entry.path), visitor):
            return False
    return True


def walk_from_root(visitor: Visitor, ctx: RootContext | None = None) -> None:
    """Walk the tree under the root, calling ``visitor(path, is_dir)`` on each entry.

    The root itself is visited first.  The visitor returns ``SKIP_DIR``
    to skip a directory's contents or ``STOP`` to end the walk.
    Exceptions from the visitor or from reading a directory propagate.
    """
    root = resolve_context(ctx).get()
    if not root:
        raise RootNotSetError("root not set")

    top = Path(root)
    if visitor(top, True) in (SKIP_DIR, STOP):
        return
    _walk(top, visitor)
