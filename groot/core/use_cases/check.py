"""
Check use case — validate the root currently stored in the environment.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from groot.core.context import RootContext, resolve_context
from groot.core.errors import GrootError
from groot.core.services.accessors import root_name, root_parent, validate_root


@dataclass
class RootCheckResult:
    """Result of root validation."""

    valid: bool = False
    key: str = ""
    root: str = ""
    name: str = ""
    parent: str = ""
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "key": self.key,
            "root": self.root or None,
            "name": self.name,
            "parent": self.parent,
            "errors": self.errors,
        }


def check_root(ctx: RootContext | None = None) -> RootCheckResult:
    """Validate the stored root and describe it."""
    ctx = resolve_context(ctx)
    result = RootCheckResult(key=ctx.key, root=ctx.get())

    try:
        validate_root(ctx)
    except (GrootError, OSError) as e:
        result.errors.append(str(e))
        return result

    result.name = root_name(ctx)
    result.parent = root_parent(ctx)
    result.valid = True
    return result
