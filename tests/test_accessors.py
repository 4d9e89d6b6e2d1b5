"""
Tests for root accessors — containment, relative paths, listing and walking.
"""

import os
from pathlib import Path

import pytest

from groot.core.context import RootContext
from groot.core.errors import RootNotADirectoryError, RootNotSetError
from groot.core.services.accessors import (
    SKIP_DIR,
    STOP,
    from_root,
    is_in_root,
    is_root,
    list_files_from_root,
    relative_to_root,
    root_info,
    root_name,
    root_parent,
    validate_root,
    walk_from_root,
)


@pytest.fixture
def rooted(tree: Path, ctx: RootContext, make_file) -> Path:
    """A project root with a couple of files, committed to ``ctx``."""
    root = tree / "proj"
    make_file(root / "README.md", "# proj")
    make_file(root / "config" / "app.yml", "a: 1")
    make_file(root / "config" / "extra" / "deep.yml")
    make_file(root / "src" / "main.py")
    ctx.commit(root)
    return root


class TestUnsetRoot:
    def test_queries_are_quiet(self, ctx: RootContext, tmp_path: Path):
        assert is_root(tmp_path, ctx=ctx) is False
        assert is_in_root(tmp_path, ctx=ctx) is False
        assert root_parent(ctx=ctx) == ""
        assert root_name(ctx=ctx) == ""

    def test_from_root_plain_join(self, ctx: RootContext):
        assert from_root("a", "b", ctx=ctx) == os.path.join("a", "b")

    def test_from_root_empty_segment(self, ctx: RootContext):
        assert from_root("", ctx=ctx) == ""
        assert from_root(ctx=ctx) == ""

    @pytest.mark.parametrize(
        "call",
        [
            lambda ctx: relative_to_root("/x", ctx=ctx),
            lambda ctx: root_info(ctx=ctx),
            lambda ctx: validate_root(ctx=ctx),
            lambda ctx: list_files_from_root("*", ctx=ctx),
            lambda ctx: walk_from_root(lambda p, d: None, ctx=ctx),
        ],
    )
    def test_root_required(self, ctx: RootContext, call):
        with pytest.raises(RootNotSetError):
            call(ctx)


class TestIsRoot:
    def test_exact(self, rooted: Path, ctx: RootContext):
        assert is_root(rooted, ctx=ctx)

    def test_messy_input(self, rooted: Path, ctx: RootContext):
        assert is_root(f"  {rooted}{os.sep}{os.sep} ", ctx=ctx)

    def test_other_dir(self, rooted: Path, ctx: RootContext):
        assert not is_root(rooted / "src", ctx=ctx)


class TestIsInRoot:
    def test_root_itself(self, rooted: Path, ctx: RootContext):
        assert is_in_root(rooted, ctx=ctx)

    def test_descendant(self, rooted: Path, ctx: RootContext):
        assert is_in_root(rooted / "config" / "extra" / "deep.yml", ctx=ctx)

    def test_missing_descendant(self, rooted: Path, ctx: RootContext):
        assert is_in_root(rooted / "not" / "yet", ctx=ctx)

    def test_parent(self, rooted: Path, ctx: RootContext):
        assert not is_in_root(rooted.parent, ctx=ctx)

    def test_sibling_tree(self, rooted: Path, ctx: RootContext):
        assert not is_in_root(rooted.parent / "other" / "file.txt", ctx=ctx)

    def test_sibling_with_common_prefix(self, rooted: Path, ctx: RootContext):
        assert not is_in_root(rooted.parent / "proj-2", ctx=ctx)

    def test_dotdot_named_child(self, rooted: Path, ctx: RootContext):
        assert is_in_root(rooted / "..hidden", ctx=ctx)

    @pytest.mark.parametrize("path", [".", "config", "x/y"])
    def test_relative_path_is_outside(self, rooted: Path, ctx: RootContext, monkeypatch, path: str):
        monkeypatch.chdir(rooted)
        assert not is_in_root(path, ctx=ctx)
        assert not is_root(path, ctx=ctx)


class TestRelativeToRoot:
    def test_root_is_dot(self, rooted: Path, ctx: RootContext):
        assert relative_to_root(rooted, ctx=ctx) == "."

    def test_child(self, rooted: Path, ctx: RootContext):
        assert relative_to_root(rooted / "config" / "app.yml", ctx=ctx) == os.path.join("config", "app.yml")

    def test_outside(self, rooted: Path, ctx: RootContext):
        assert relative_to_root(rooted.parent / "x", ctx=ctx) == os.path.join("..", "x")

    def test_relative_path_rejected(self, rooted: Path, ctx: RootContext, monkeypatch):
        monkeypatch.chdir(rooted)
        with pytest.raises(ValueError):
            relative_to_root("config", ctx=ctx)


class TestFromRoot:
    def test_joins_onto_root(self, rooted: Path, ctx: RootContext):
        assert from_root("config", "app.yml", ctx=ctx) == str(rooted / "config" / "app.yml")

    def test_absolute_first_segment_ignores_root(self, rooted: Path, ctx: RootContext):
        assert from_root(os.sep + "etc", "hosts", ctx=ctx) == os.path.join(os.sep + "etc", "hosts")

    def test_no_segments(self, rooted: Path, ctx: RootContext):
        assert from_root(ctx=ctx) == str(rooted)

    def test_empty_segment(self, rooted: Path, ctx: RootContext):
        assert from_root("", ctx=ctx) == str(rooted)


class TestRootDetails:
    def test_parent(self, rooted: Path, ctx: RootContext):
        assert root_parent(ctx=ctx) == str(rooted.parent)

    def test_parent_of_filesystem_root(self, store: dict):
        ctx = RootContext(environ=store)
        store["GROOT"] = os.sep
        assert root_parent(ctx=ctx) == ""

    def test_name(self, rooted: Path, ctx: RootContext):
        assert root_name(ctx=ctx) == "proj"

    def test_name_of_vanished_root(self, tree: Path, ctx: RootContext):
        store_root = tree / "gone"
        ctx.environ[ctx.key] = str(store_root)
        assert root_name(ctx=ctx) == ""

    def test_info(self, rooted: Path, ctx: RootContext):
        assert root_info(ctx=ctx).st_ino == rooted.stat().st_ino

    def test_validate_ok(self, rooted: Path, ctx: RootContext):
        validate_root(ctx=ctx)

    def test_validate_missing(self, tree: Path, ctx: RootContext):
        ctx.environ[ctx.key] = str(tree / "gone")
        with pytest.raises(FileNotFoundError):
            validate_root(ctx=ctx)

    def test_validate_file(self, rooted: Path, ctx: RootContext):
        ctx.environ[ctx.key] = str(rooted / "README.md")
        with pytest.raises(RootNotADirectoryError):
            validate_root(ctx=ctx)


class TestListFiles:
    def test_pattern(self, rooted: Path, ctx: RootContext):
        assert list_files_from_root("config/*.yml", ctx=ctx) == [str(rooted / "config" / "app.yml")]

    def test_recursive_pattern(self, rooted: Path, ctx: RootContext):
        assert list_files_from_root("**/*.yml", ctx=ctx) == [
            str(rooted / "config" / "app.yml"),
            str(rooted / "config" / "extra" / "deep.yml"),
        ]

    def test_no_match(self, rooted: Path, ctx: RootContext):
        assert list_files_from_root("*.toml", ctx=ctx) == []


class TestWalkFromRoot:
    def _rel(self, rooted: Path, seen: list) -> list:
        return [(str(p.relative_to(rooted)), d) for p, d in seen]

    def test_preorder_including_root(self, rooted: Path, ctx: RootContext):
        seen = []
        walk_from_root(lambda p, d: seen.append((p, d)), ctx=ctx)
        assert self._rel(rooted, seen) == [
            (".", True),
            ("README.md", False),
            ("config", True),
            (os.path.join("config", "app.yml"), False),
            (os.path.join("config", "extra"), True),
            (os.path.join("config", "extra", "deep.yml"), False),
            ("src", True),
            (os.path.join("src", "main.py"), False),
        ]

    def test_skip_dir(self, rooted: Path, ctx: RootContext):
        seen = []

        def visit(path: Path, is_dir: bool):
            seen.append((path, is_dir))
            if path.name == "config":
                return SKIP_DIR
            return None

        walk_from_root(visit, ctx=ctx)
        names = [p for p, _ in self._rel(rooted, seen)]
        assert "config" in names
        assert os.path.join("config", "app.yml") not in names
        assert os.path.join("src", "main.py") in names

    def test_stop(self, rooted: Path, ctx: RootContext):
        seen = []

        def visit(path: Path, is_dir: bool):
            seen.append(path)
            if path.name == "app.yml":
                return STOP
            return None

        walk_from_root(visit, ctx=ctx)
        assert seen[-1].name == "app.yml"
        assert all(p.name != "main.py" for p in seen)

    def test_visitor_error_propagates(self, rooted: Path, ctx: RootContext):
        def visit(path: Path, is_dir: bool):
            if not is_dir:
                raise RuntimeError(f"boom at {path.name}")

        with pytest.raises(RuntimeError, match="README.md"):
            walk_from_root(visit, ctx=ctx)

    def test_missing_root_propagates(self, tree: Path, ctx: RootContext):
        ctx.environ[ctx.key] = str(tree / "gone")
        with pytest.raises(FileNotFoundError):
            walk_from_root(lambda p, d: None, ctx=ctx)
