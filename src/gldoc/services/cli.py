"""gldoc CLI entry point."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable

import click

from gldoc import __version__
from gldoc.infrastructure.config import GldocConfig, load_config
from gldoc.infrastructure.repo import clone_repo
from gldoc.infrastructure.subsets import API_NAMES
from gldoc.ref.errors import GldocError
from gldoc.services.registry import Registry, function_summary, load_sources

logger = logging.getLogger(__name__)


def _setup_logging(*, verbose: bool, quiet: bool) -> None:
    from rich.console import Console
    from rich.logging import RichHandler

    level = logging.DEBUG if verbose else logging.ERROR if quiet else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False, show_time=False)],
        force=True,
    )


@click.group()
@click.version_option(version=__version__, prog_name="gldoc")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Minimal output (errors only).")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: $XDG_CONFIG_HOME/gldoc/config.yml).",
)
@click.pass_context
def main(ctx: click.Context, *, verbose: bool, quiet: bool, config_path: Path | None) -> None:
    """gldoc - simplified OpenGL documentation in JSON format."""
    _setup_logging(verbose=verbose, quiet=quiet)
    ctx.ensure_object(dict)
    ctx.obj["config"] = load_config(config_path)


def _api_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Add the shared --api and --gl-version options."""
    fn = click.option(
        "--gl-version",
        "version",
        type=float,
        default=None,
        help="Target API version, or 0 for any/latest.",
    )(fn)
    return click.option(
        "--api",
        type=click.Choice(API_NAMES),
        default=None,
        help="Target OpenGL API.",
    )(fn)


def _load(config: GldocConfig) -> Registry:
    """Fetch the corpus if needed and load it, exiting on failure."""
    try:
        clone_repo(config.cache_dir, config.repo_url)
        return load_sources(config.cache_dir, config.api, config.version)
    except (GldocError, OSError) as exc:
        click.echo(f"Error: failed to load sources: {exc}", err=True)
        sys.exit(1)


@main.command()
@click.option("--host", default=None, help="Address to serve HTTP requests on.")
@click.option("--port", default=None, type=int, help="Port to serve HTTP requests on.")
@_api_options
@click.pass_context
def serve(
    ctx: click.Context,
    *,
    host: str | None,
    port: int | None,
    api: str | None,
    version: float | None,
) -> None:
    """Load the reference pages and serve them over HTTP."""
    from gldoc.services.http_server import serve as run_server

    config: GldocConfig = ctx.obj["config"].merged(host=host, port=port, api=api, version=version)
    logger.info("Loading documentation sources...")
    registry = _load(config)
    logger.info("Awaiting requests at %s:%d (Ctrl+C to cancel)", config.host, config.port)
    run_server(registry, config.host, config.port)


@main.command()
@click.argument("name")
@click.option("--json", "as_json", is_flag=True, help="JSON output.")
@_api_options
@click.pass_context
def entry(
    ctx: click.Context,
    name: str,
    *,
    as_json: bool,
    api: str | None,
    version: float | None,
) -> None:
    """Show the reference page NAME (entry or function name)."""
    config: GldocConfig = ctx.obj["config"].merged(api=api, version=version)
    found = _load(config).find(name)
    if found is None:
        click.echo(f"Error: unknown name '{name}'", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(found.to_dict(), ensure_ascii=False, indent=2))
    else:
        from rich.console import Console

        from gldoc.services.render import render_entry

        render_entry(found, Console())


@main.command("func")
@click.argument("name")
@_api_options
@click.pass_context
def func_cmd(ctx: click.Context, name: str, *, api: str | None, version: float | None) -> None:
    """Print the JSON summary of function NAME."""
    config: GldocConfig = ctx.obj["config"].merged(api=api, version=version)
    found = _load(config).find(name)
    summary = function_summary(found, name) if found is not None else None
    if summary is None:
        click.echo(f"Error: invalid function name '{name}'", err=True)
        sys.exit(1)
    click.echo(json.dumps(summary, ensure_ascii=False, indent=2))


@main.command("list")
@click.option("--subset", default=None, help="Only list one subset (e.g. gl4).")
@_api_options
@click.pass_context
def list_cmd(
    ctx: click.Context,
    *,
    subset: str | None,
    api: str | None,
    version: float | None,
) -> None:
    """List loaded reference pages."""
    from rich.console import Console

    from gldoc.services.render import render_index

    config: GldocConfig = ctx.obj["config"].merged(api=api, version=version)
    rows = render_index(_load(config), Console(), subset=subset)
    if rows == 0:
        click.echo("No reference pages found.")


@main.command()
@click.pass_context
def fetch(ctx: click.Context) -> None:
    """Clone the reference page repository into the cache."""
    config: GldocConfig = ctx.obj["config"]
    try:
        cloned = clone_repo(config.cache_dir, config.repo_url)
    except GldocError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    if cloned:
        click.echo(f"Cloned into {config.cache_dir}")
    else:
        click.echo(f"Already cached at {config.cache_dir}")
