"""pwacheck CLI entry point."""

# pwacheck:service=cli

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from pwacheck import __version__


@click.group()
@click.version_option(version=__version__, prog_name="pwacheck")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Minimal output (errors only).")
@click.pass_context
def main(ctx: click.Context, *, verbose: bool, quiet: bool) -> None:
    """pwacheck - Web app manifest installability checks."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    level = logging.WARNING
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


# pwacheck:domain=manifest
@main.command()
@click.argument("manifest_path", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--document-url",
    default=None,
    help="URL of the page linking the manifest (start_url fallback and origin check).",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["rich", "json", "porcelain"]),
    default=None,
    help="Output format (default: rich if TTY, porcelain if piped).",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Exit 1 if the manifest is missing, unparseable, or a required check fails.",
)
@click.option(
    "--project",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project root holding config.yml (default: current directory).",
)
def check(
    *,
    manifest_path: Path,
    document_url: str | None,
    fmt: str | None,
    strict: bool,
    project: Path | None,
) -> None:
    """Evaluate the installability checks against MANIFEST_PATH.

    A missing file is reported as "no manifest fetched", not as an error.
    Exit codes: 0 = evaluated, 1 = failures with --strict,
    2 = configuration error.
    """
    from pwacheck.config import ConfigError, load_check_config
    from pwacheck.manifest.parser import load_manifest
    from pwacheck.manifest.report import (
        format_json,
        format_porcelain,
        format_rich,
        strict_failures,
    )
    from pwacheck.manifest.values import compute_manifest_values

    project_root = project or Path.cwd()

    if fmt is None:
        fmt = "rich" if sys.stdout.isatty() else "porcelain"

    try:
        config = load_check_config(project_root)
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    manifest = load_manifest(manifest_path, document_url)
    report = compute_manifest_values(manifest)

    if fmt == "rich":
        output = format_rich(report, source=str(manifest_path), config=config)
    elif fmt == "json":
        output = format_json(report, config=config)
    else:
        output = format_porcelain(report, config=config)
    if output:
        click.echo(output)

    if strict and strict_failures(report, config):
        sys.exit(1)


@main.command("checks")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["rich", "json"]),
    default="rich",
    help="Output format.",
)
def list_checks(*, fmt: str) -> None:
    """List the manifest checks in evaluation order."""
    from pwacheck.manifest.report import format_catalog_json, format_catalog_rich

    if fmt == "json":
        click.echo(format_catalog_json())
    else:
        click.echo(format_catalog_rich())
