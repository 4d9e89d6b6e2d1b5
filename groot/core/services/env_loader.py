"""
Env file policy — which discovered env files get loaded, and loading them.

The resolver hands over every env file it met between the start
directory and the root.  This module checks them against what the
caller asked for, then feeds them to python-dotenv in discovery order
(nearest directory first).  Values already present in the store are
never overridden, so the nearest file wins and real environment
variables beat every file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, MutableMapping

from dotenv import dotenv_values
from dotenv.variables import parse_variables

from groot.core.errors import EnvLoadError, MissingEnvsError, NoEnvDefinedError

logger = logging.getLogger(__name__)

# Entry markers with this suffix are loaded as env files themselves
ENV_SUFFIX = ".env"


def check_requested(candidates: Iterable[Path], requested: Iterable[str]) -> None:
    """Raise ``MissingEnvsError`` unless every requested name was found."""
    found = {path.name for path in candidates}
    missing = [name for name in requested if name not in found]
    if missing:
        raise MissingEnvsError(missing)


def _expand(
    values: dict[str, str | None],
    environ: MutableMapping[str, str],
    override: bool,
) -> dict[str, str | None]:
    """Resolve ``${VAR}`` references against ``environ`` and the file itself."""
    resolved: dict[str, str | None] = {}
    for key, value in values.items():
        if value is None:
            resolved[key] = None
            continue
        if override:
            scope = {**environ, **resolved}
        else:
            scope = {**resolved, **environ}
        resolved[key] = "".join(atom.resolve(scope) for atom in parse_variables(value))
    return resolved


def load_files(
    paths: list[Path],
    environ: MutableMapping[str, str],
    override: bool = False,
) -> list[Path]:
    """Load each env file into ``environ``, in order.

    References such as ``${VAR}`` are expanded against ``environ``
    (which already holds the earlier files) and the keys defined above
    them in the same file.

    Raises:
        EnvLoadError: If a file is missing or unreadable.
    """
    loaded: list[Path] = []
    for path in paths:
        if not path.is_file():
            raise EnvLoadError(f"env file not found: {path}")
        try:
            values = dotenv_values(path, encoding="utf-8", interpolate=False)
        except (OSError, UnicodeDecodeError) as e:
            raise EnvLoadError(f"Cannot read {path}: {e}") from e

        applied = 0
        for key, value in _expand(values, environ, override).items():
            if value is None:
                continue
            if not override and key in environ:
                continue
            environ[key] = value
            applied += 1
        logger.info("Loaded %d variable(s) from %s", applied, path)
        loaded.append(path)
    return loaded


def load_env_files(
    candidates: list[Path],
    requested: set[str],
    environ: MutableMapping[str, str],
    override: bool = False,
) -> list[Path]:
    """Apply the env loading policy to the discovered candidates.

    Requested filenames are validated first: if any of them is missing
    nothing is loaded.  With nothing requested, the candidates (only the
    entry marker can put one there) are loaded, and an empty list is an
    error.

    Returns:
        The loaded files, in load order.

    Raises:
        MissingEnvsError: A requested env file was not found.
        NoEnvDefinedError: Nothing was requested and nothing was found.
        EnvLoadError: A file could not be read.
    """
    if requested:
        check_requested(candidates, requested)
    elif not candidates:
        raise NoEnvDefinedError("no env defined")

    return load_files(candidates, environ, override=override)
