"""
Error types — everything the root resolution layer can raise.

All errors derive from ``GrootError`` so host programs can catch the
whole family at once.  Filesystem failures (stat, glob, walk) are NOT
wrapped here; they propagate as the original ``OSError`` subclass.
"""

from __future__ import annotations


class GrootError(Exception):
    """Base class for root resolution errors."""


class EmptyInputError(GrootError, ValueError):
    """A required string argument (marker, key, path) is blank."""


class BadEnvsDefinedError(GrootError, ValueError):
    """Env filenames were given, but none of them is a bare filename."""


class NoRootFoundError(GrootError):
    """The marker file was not found anywhere in the ancestor chain."""


class NoGitRootFoundError(NoRootFoundError):
    """No ``.git`` directory was found anywhere in the ancestor chain."""


class RootNotADirectoryError(GrootError, NotADirectoryError):
    """A candidate root exists but is not a directory."""


class RootNotSetError(GrootError):
    """A root-dependent query ran before any successful resolution."""


class NoEnvDefinedError(GrootError):
    """No env files were requested and none were discovered."""


class MissingEnvsError(GrootError):
    """Some requested env files were not found between start and root."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = sorted(missing)
        super().__init__(f"missing env files: {', '.join(self.missing)}")


class EntryFileNotFoundError(GrootError):
    """The program's entry point is not a Python source file."""


class ProjectDirUnresolvableError(GrootError):
    """Neither the entry file nor the executable gives a usable directory."""


class EnvLoadError(GrootError):
    """An env file could not be read or parsed."""


class ConfigError(GrootError):
    """Raised when groot.yml is invalid."""
