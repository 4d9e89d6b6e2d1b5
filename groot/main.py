"""
groot — CLI entrypoint.

Usage:
    python -m groot.main --help
    groot where --marker app.id --env dev.env
    groot where --git --json
    groot check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from groot import __version__
from groot.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="groot")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to groot.yml (default: auto-detect).",
)
@click.option("--key", "root_key", default=None, help="Environment key holding the root.")
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
    root_key: str | None,
) -> None:
    """groot — find and inspect the project root."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None
    ctx.obj["root_key"] = root_key

    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("GROOT_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("GROOT_LOG_FILE"),
        log_file_level=os.environ.get("GROOT_LOG_FILE_LEVEL"),
    )


@cli.command()
@click.option("--marker", default=None, help="Marker filename identifying the root.")
@click.option("--env", "env_files", multiple=True, help="Env filename to load (repeatable).")
@click.option("--git", "use_git", is_flag=True, help="Use the nearest git repository.")
@click.option("--path", "explicit_path", default=None, help="Use this directory as root.")
@click.option(
    "--from",
    "start_dir",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Directory to start searching from (default: cwd).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def where(
    ctx: click.Context,
    marker: str | None,
    env_files: tuple[str, ...],
    use_git: bool,
    explicit_path: str | None,
    start_dir: str | None,
    as_json: bool,
) -> None:
    """Resolve the project root and print it."""
    from groot.core.config.loader import ResolutionProfile, load_profile
    from groot.core.context import RootContext
    from groot.core.errors import GrootError
    from groot.core.use_cases.where import run_where

    strategies = [s for s, on in (("marker", marker), ("git", use_git), ("path", explicit_path)) if on]
    if len(strategies) > 1:
        raise click.UsageError("Use only one of --marker, --git and --path.")

    try:
        if strategies:
            profile = ResolutionProfile(
                strategy=strategies[0],
                marker=marker or "",
                env_files=list(env_files),
                path=explicit_path or "",
            )
        else:
            profile = load_profile(ctx.obj.get("config_path"))
        root_ctx = RootContext(key=ctx.obj.get("root_key") or profile.root_key)
    except (GrootError, ValueError) as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    result = run_where(
        profile,
        start_dir=Path(start_dir) if start_dir else None,
        ctx=root_ctx,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    resolution = result.resolution
    if result.error or resolution is None:
        click.secho(f"❌ {result.error or 'no root resolved'}", fg="red", err=True)
        sys.exit(1)

    click.echo(str(resolution.root))
    if not ctx.obj.get("quiet"):
        for path in resolution.env_files:
            click.echo(f"   • loaded {path}", err=True)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check(ctx: click.Context, as_json: bool) -> None:
    """Validate the root stored in the environment."""
    from groot.core.context import DEFAULT_ROOT_KEY, RootContext, get_root_key
    from groot.core.use_cases.check import check_root

    key = (ctx.obj.get("root_key") or "").strip() or get_root_key() or DEFAULT_ROOT_KEY
    result = check_root(RootContext(key=key))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        click.secho(f"✅ {result.key} = {result.root}", fg="green", bold=True)
        click.echo(f"   Name:   {result.name}")
        click.echo(f"   Parent: {result.parent or '-'}")
        return

    click.secho(f"❌ {result.key} is not a usable root:", fg="red", bold=True)
    for err in result.errors:
        click.echo(f"   • {err}")
    sys.exit(1)


if __name__ == "__main__":
    cli()
