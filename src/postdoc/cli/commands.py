"""CLI command implementations"""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from postdoc.config import Settings, load_config
from postdoc.core.pipeline import run_check, run_parse


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def check_cmd(
    path: Annotated[str, typer.Argument(help="File or directory of posts to check")],
    require: Annotated[Optional[list[str]], typer.Option("--require", "-r", help="Metadata key that must be non-empty (repeatable)")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    ):
    """Validate metadata headers and directive pairing; exit 1 if any file fails."""
    _setup_logging(verbose)
    settings = _settings(overrides={"required_keys": require or None})
    if not Path(path).exists():
        _fail(f"No such file or directory: {path}")

    reports = run_check(path, settings)
    if not reports:
        typer.echo(f"No post files found under {path}.")
        raise typer.Exit(1)

    failed = [r for r in reports if not r.ok]
    for report in failed:
        for v in report.violations:
            typer.echo(f"{report.path}: {v}")
    typer.echo(f"Checked {len(reports)} file(s) - {len(reports) - len(failed)} ok, {len(failed)} failed")
    if failed:
        raise typer.Exit(1)


def parse_cmd(
    path: Annotated[Path, typer.Argument(help="Post file or directory of posts to parse")],
    indent: Annotated[int, typer.Option("--indent", help="JSON indentation")] = 2,
    ):
    """Print parsed documents (metadata and segment tree) as JSON.

    A single file prints its document; a directory prints a list of
    {"path", "document"} entries.
    """
    settings = _settings()
    if not path.exists():
        _fail(f"No such file or directory: {path}")
    try:
        results = run_parse(str(path), settings)
    except RuntimeError as e:
        _fail("Parse failed", e)
    if not results:
        typer.echo(f"No post files found under {path}.")
        raise typer.Exit(1)

    if path.is_file():
        typer.echo(results[0][1].model_dump_json(indent=indent))
        return
    payload = [{"path": str(p), "document": doc.model_dump(mode="json")} for p, doc in results]
    typer.echo(json.dumps(payload, indent=indent))
