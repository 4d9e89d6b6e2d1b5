"""
Root context — the single source of truth for "where is the project."

The root lives in an environment store (``os.environ`` by default)
under a configurable key, so child processes and code that only reads
environment variables see it too.  It is set by whichever entry point
starts the program:

    - Host program:  groot.set_root("app.id", "dev.env")
    - CLI:           main.py → resolver.set_root_*(...)
    - Tests:         RootContext(environ={}) + set_root_from_path(tmp_path)

Design notes:
    - A module-level default context backs the convenience functions.
      Anything that needs isolation builds its own ``RootContext``.
    - An empty value and a missing key both mean "unset".
    - No locking.  Resolution is a startup step; last writer wins.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import MutableMapping

from groot.core.errors import EmptyInputError, RootNotSetError

logger = logging.getLogger(__name__)

DEFAULT_ROOT_KEY = "GROOT"

# Environment variable that picks the default context's initial key
ROOT_KEY_ENV = "GROOT_ROOT_KEY"


class RootContext:
    """Holds the root key and the store the root is written to."""

    def __init__(
        self,
        key: str = DEFAULT_ROOT_KEY,
        environ: MutableMapping[str, str] | None = None,
    ) -> None:
        self._environ = os.environ if environ is None else environ
        self._key = DEFAULT_ROOT_KEY
        self.set_key(key)

    @property
    def key(self) -> str:
        return self._key

    @property
    def environ(self) -> MutableMapping[str, str]:
        return self._environ

    def set_key(self, key: str) -> None:
        """Change the key the root is stored under.

        The value already stored under the old key is left in place.
        """
        key = key.strip()
        if not key:
            raise EmptyInputError("root key cannot be empty")
        self._key = key

    def get(self) -> str:
        """Return the stored root, or ``""`` when unset."""
        return self._environ.get(self._key, "")

    def must_get(self) -> str:
        """Return the stored root; raise if unset."""
        root = self.get()
        if not root:
            raise RootNotSetError("root not set")
        return root

    def commit(self, root: Path) -> str:
        """Store ``root`` as the project root, replacing any previous value."""
        value = str(root.absolute())
        self._environ[self._key] = value
        logger.info("Project root set to %s (%s)", value, self._key)
        return value

    def clear(self) -> None:
        """Forget the stored root."""
        self._environ.pop(self._key, None)


def _initial_key() -> str:
    return os.environ.get(ROOT_KEY_ENV, "").strip() or DEFAULT_ROOT_KEY


_default = RootContext(key=_initial_key())


def default_context() -> RootContext:
    """Return the process-wide context used when none is passed."""
    return _default


def resolve_context(ctx: RootContext | None) -> RootContext:
    return _default if ctx is None else ctx


def set_root_key(key: str) -> None:
    """Change the environment key used to store the root path."""
    _default.set_key(key)


def get_root_key() -> str:
    return _default.key


def get_root() -> str:
    """Return the current project root, or ``""`` if not yet set."""
    return _default.get()


def must_get_root() -> str:
    """Return the current project root.

    Raises ``RootNotSetError`` when unset; meant for call sites that
    treat a missing root as a programming error.
    """
    return _default.must_get()


def clear_root() -> None:
    """Unset the project root."""
    _default.clear()
