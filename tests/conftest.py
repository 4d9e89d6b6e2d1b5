"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from groot.core.context import RootContext


@pytest.fixture
def repo_root() -> Path:
    """Return the repository root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def store() -> dict:
    """An isolated environment store, so tests never touch os.environ."""
    return {}


@pytest.fixture
def ctx(store: dict) -> RootContext:
    """A root context writing into the isolated store."""
    return RootContext(environ=store)


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """Return a resolved temp directory to build project trees in."""
    return tmp_path.resolve()


@pytest.fixture
def make_file():
    """Return a helper creating a file (and its parents) with some content."""

    def _make(path: Path, content: str = "") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _make
