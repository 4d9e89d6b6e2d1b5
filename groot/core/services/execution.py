"""
Execution context detection — which directory anchors the root search.

Two situations are told apart:

    - Interpreted / temporary:  ``python app/main.py`` or a one-file
      bundle unpacked under the temp dir.  The executable says nothing
      useful about the project, so the entry script's directory wins.
    - Standalone:  a frozen executable installed somewhere stable.  Its
      own directory is the anchor.

Every input is captured in ``ExecutionEnvironment`` so tests (and hosts
with unusual launchers) can inject them instead of relying on
``sys`` and stack introspection.
"""

from __future__ import annotations

import inspect
import logging
import sys
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from groot.core.errors import EntryFileNotFoundError, ProjectDirUnresolvableError

logger = logging.getLogger(__name__)

# Suffixes accepted for the entry point source file
SOURCE_SUFFIXES = (".py", ".pyw")

# Directory name prefix of one-file bundles unpacked at startup
TEMP_BUILD_MARKER = "_MEI"


def _stack_entry_file() -> Path:
    """Find the file of the outermost ``__main__`` frame on the call stack."""
    frame = inspect.currentframe()
    frames = []
    while frame is not None:
        frames.append(frame)
        frame = frame.f_back

    try:
        for outer in reversed(frames):
            if outer.f_globals.get("__name__") == "__main__":
                filename = outer.f_code.co_filename
                break
        else:
            filename = frames[-1].f_code.co_filename if frames else ""
    finally:
        del frames

    path = Path(filename)
    if path.suffix.lower() not in SOURCE_SUFFIXES or not path.is_file():
        raise EntryFileNotFoundError(f"main *.py file not found (got {filename!r})")
    return path.resolve()


@dataclass
class ExecutionEnvironment:
    """Inputs to project directory detection."""

    executable: str = field(default_factory=lambda: sys.executable or "")
    frozen: bool = field(default_factory=lambda: bool(getattr(sys, "frozen", False)))
    temp_dir: str = field(default_factory=tempfile.gettempdir)
    bundle_dir: str = field(default_factory=lambda: getattr(sys, "_MEIPASS", ""))
    entry_file: Path | None = None

    def get_entry_file(self) -> Path:
        if self.entry_file is not None:
            return Path(self.entry_file)
        return _stack_entry_file()


def get_entry_file(env: ExecutionEnvironment | None = None) -> Path:
    """Return the source file holding the program's entry point."""
    return (env or ExecutionEnvironment()).get_entry_file()


def get_project_dir(env: ExecutionEnvironment | None = None) -> Path:
    """Return the directory the root search starts from.

    That is the entry file's directory when running interpreted or from
    under the temp dir, and the executable's directory otherwise.

    Raises:
        EntryFileNotFoundError: If the entry point is not a source file.
        ProjectDirUnresolvableError: If the executable's directory is unusable.
    """
    env = env or ExecutionEnvironment()
    exec_dir = Path(env.executable).parent
    temp_dir = env.temp_dir

    # standalone bundles have no source entry file
    if not env.frozen or (temp_dir and temp_dir in str(exec_dir)):
        entry_file = env.get_entry_file()
        logger.debug("Temporary context, anchoring at entry file %s", entry_file)
        return entry_file.parent

    if not env.executable or not exec_dir.is_dir():
        raise ProjectDirUnresolvableError(f"unable to get project dir from {env.executable!r}")

    logger.debug("Standalone executable, anchoring at %s", exec_dir)
    return exec_dir


def is_temporary(env: ExecutionEnvironment | None = None) -> bool:
    """True when running from a one-file bundle unpacked into a build cache."""
    env = env or ExecutionEnvironment()
    return TEMP_BUILD_MARKER in env.executable or TEMP_BUILD_MARKER in env.bundle_dir
