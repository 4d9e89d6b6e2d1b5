"""
Where use case — resolve the root from a profile and report the result.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from groot.core.config.loader import ResolutionProfile
from groot.core.context import RootContext
from groot.core.errors import GrootError
from groot.core.services.resolver import (
    ResolutionResult,
    set_root,
    set_root_from_git,
    set_root_from_path,
    set_root_no_env,
)


@dataclass
class WhereResult:
    """Outcome of resolving the root from a profile."""

    resolution: ResolutionResult | None = None
    start_dir: Path | None = None
    error: str | None = None
    error_type: str | None = None

    def to_dict(self) -> dict:
        result: dict = {"start_dir": str(self.start_dir) if self.start_dir else None}
        if self.error:
            result["error"] = self.error
            result["error_type"] = self.error_type
            return result
        if self.resolution:
            result.update(self.resolution.to_dict())
        return result


def resolve_profile(
    profile: ResolutionProfile,
    start_dir: Path,
    ctx: RootContext | None = None,
) -> ResolutionResult:
    """Resolve the root from ``start_dir`` the way ``profile`` describes."""
    if profile.strategy == "git":
        return set_root_from_git(ctx=ctx, project_dir=start_dir)
    if profile.strategy == "path":
        return set_root_from_path(profile.path, ctx=ctx, project_dir=start_dir)
    if profile.env_files or profile.require_env:
        return set_root(profile.marker, *profile.env_files, ctx=ctx, project_dir=start_dir)
    return set_root_no_env(profile.marker, ctx=ctx, project_dir=start_dir)


def run_where(
    profile: ResolutionProfile,
    start_dir: Path | None = None,
    ctx: RootContext | None = None,
) -> WhereResult:
    """Resolve the root, capturing errors instead of raising them."""
    result = WhereResult(start_dir=(start_dir or Path.cwd()).resolve())
    try:
        result.resolution = resolve_profile(profile, result.start_dir, ctx=ctx)
    except (GrootError, OSError) as e:
        result.error = str(e)
        result.error_type = type(e).__name__
    return result
