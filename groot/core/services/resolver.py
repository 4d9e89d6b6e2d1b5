"""
Root resolver — find the project root and commit it to a context.

Three strategies:

    - marker:  nearest ancestor holding a marker file (``set_root``)
    - git:     nearest ancestor holding a ``.git`` directory
    - path:    an explicit directory, relative paths taken from the
               project directory

The search always starts at the project directory reported by
``execution.get_project_dir``.  Pass ``project_dir`` to skip detection.

A failed search leaves the previous root untouched.  The marker
strategy commits the root as soon as the marker is found, before env
files are checked, so env errors still leave the new root in place.
"""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass, field
from pathlib import Path

from groot.core.context import RootContext, resolve_context
from groot.core.errors import (
    BadEnvsDefinedError,
    EmptyInputError,
    NoEnvDefinedError,
    NoGitRootFoundError,
    NoRootFoundError,
    RootNotADirectoryError,
)
from groot.core.paths import ancestors_of, filter_filenames, find_files
from groot.core.services.env_loader import ENV_SUFFIX, load_env_files
from groot.core.services.execution import ExecutionEnvironment, get_project_dir

logger = logging.getLogger(__name__)

GIT_DIR = ".git"


@dataclass
class ResolutionResult:
    """Outcome of a successful resolution."""

    root: Path
    strategy: str
    key: str
    env_files: list[Path] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "root": str(self.root),
            "strategy": self.strategy,
            "key": self.key,
            "env_files": [str(p) for p in self.env_files],
        }


def _start_dir(project_dir: str | os.PathLike[str] | None, env: ExecutionEnvironment | None) -> Path:
    if project_dir is not None:
        return Path(os.path.normpath(Path(project_dir).absolute()))
    return Path(os.path.normpath(get_project_dir(env).absolute()))


def _dedupe(paths: list[Path]) -> list[Path]:
    seen: set[Path] = set()
    unique = []
    for path in paths:
        if path not in seen:
            seen.add(path)
            unique.append(path)
    return unique


def set_root(
    entry_file: str,
    *env_files: str,
    ctx: RootContext | None = None,
    project_dir: str | os.PathLike[str] | None = None,
    env: ExecutionEnvironment | None = None,
    override: bool = False,
) -> ResolutionResult:
    """Set the root to the nearest directory containing ``entry_file``.

    Env files named in ``env_files`` are collected from every directory
    between the start and the root, nearest first, and loaded.  An
    ``entry_file`` ending in ``.env`` is loaded as well.

    Raises:
        EmptyInputError: ``entry_file`` is blank.
        BadEnvsDefinedError: ``env_files`` were given but none is a filename.
        NoRootFoundError: The marker is not in any ancestor.
        NoEnvDefinedError: No env file was requested or found.
        MissingEnvsError: A requested env file was not found.
        EnvLoadError: An env file could not be loaded.
    """
    ctx = resolve_context(ctx)
    entry_file = entry_file.strip()
    if not entry_file:
        raise EmptyInputError("entry file not defined")

    envs_requested = "".join(env_files).strip() != ""
    requested = filter_filenames(env_files)
    if envs_requested and not requested:
        raise BadEnvsDefinedError(f"bad env files defined: {list(env_files)!r}")

    start = _start_dir(project_dir, env)
    logger.debug("Searching for %s from %s", entry_file, start)

    candidates: list[Path] = []
    root: Path | None = None
    for directory in ancestors_of(start):
        candidates.extend(find_files(directory, requested))
        if (directory / entry_file).is_file():
            root = directory
            break

    if root is None:
        raise NoRootFoundError(f"no root found: {entry_file} not in any parent of {start}")

    ctx.commit(root)

    if entry_file.endswith(ENV_SUFFIX):
        candidates.append(root / entry_file)

    loaded = load_env_files(_dedupe(candidates), requested, ctx.environ, override=override)
    return ResolutionResult(root=root, strategy="marker", key=ctx.key, env_files=loaded)


def set_root_no_env(
    entry_file: str,
    ctx: RootContext | None = None,
    project_dir: str | os.PathLike[str] | None = None,
    env: ExecutionEnvironment | None = None,
) -> ResolutionResult:
    """Like ``set_root`` but without requiring any env file."""
    ctx = resolve_context(ctx)
    try:
        return set_root(entry_file, ctx=ctx, project_dir=project_dir, env=env)
    except NoEnvDefinedError:
        return ResolutionResult(root=Path(ctx.get()), strategy="marker", key=ctx.key)


def set_root_from_env(
    entry_file: str,
    ctx: RootContext | None = None,
    project_dir: str | os.PathLike[str] | None = None,
    env: ExecutionEnvironment | None = None,
) -> ResolutionResult:
    """Set the root from an env file marker, which must also load."""
    return set_root(entry_file, entry_file, ctx=ctx, project_dir=project_dir, env=env)


def find_git_root_from(start: str | os.PathLike[str]) -> Path | None:
    """Return the nearest ancestor of ``start`` holding a ``.git`` directory."""
    for directory in ancestors_of(start):
        if (directory / GIT_DIR).is_dir():
            return directory
    return None


def set_root_from_git(
    ctx: RootContext | None = None,
    project_dir: str | os.PathLike[str] | None = None,
    env: ExecutionEnvironment | None = None,
) -> ResolutionResult:
    """Set the root to the nearest enclosing git repository."""
    ctx = resolve_context(ctx)
    start = _start_dir(project_dir, env)
    root = find_git_root_from(start)
    if root is None:
        raise NoGitRootFoundError(f"no git root found above {start}")
    ctx.commit(root)
    return ResolutionResult(root=root, strategy="git", key=ctx.key)


def set_root_from_path(
    path: str | os.PathLike[str],
    ctx: RootContext | None = None,
    project_dir: str | os.PathLike[str] | None = None,
    env: ExecutionEnvironment | None = None,
) -> ResolutionResult:
    """Set the root to ``path``.

    Relative paths are resolved from the project directory.

    Raises:
        EmptyInputError: ``path`` is blank.
        OSError: ``path`` cannot be stat'ed.
        RootNotADirectoryError: ``path`` is not a directory.
    """
    ctx = resolve_context(ctx)
    raw = os.fspath(path).strip()
    if not raw:
        raise EmptyInputError("path cannot be empty")

    target = Path(raw)
    if not target.is_absolute():
        target = Path(os.path.normpath(_start_dir(project_dir, env) / target))

    if not stat.S_ISDIR(target.stat().st_mode):
        raise RootNotADirectoryError(f"path is not a directory: {target}")

    ctx.commit(target)
    return ResolutionResult(root=target, strategy="path", key=ctx.key)
