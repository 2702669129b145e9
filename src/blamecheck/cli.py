"""Command line interface for blamecheck."""

from __future__ import annotations

import logging
import shlex
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from blamecheck.blame.parser import BlameFormat
from blamecheck.config import WORK_TREE_ENV, ConfigError, HarnessConfig
from blamecheck.repository.files import RepositoryError
from blamecheck.runner import BlameComparisonRunner, collect_text_files
from blamecheck.utils.windowing import window


console = Console()
app = typer.Typer(help="blamecheck - compare a blame implementation against a baseline")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _build_config(**kwargs) -> HarnessConfig:
    try:
        return HarnessConfig(**kwargs)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def compare(
    baseline_executable: Path = typer.Argument(..., help="Trusted blame executable"),
    comparison_executable: Path = typer.Argument(..., help="Blame executable under test"),
    limit: int = typer.Argument(..., min=0, help="Maximum number of files to compare"),
    offset: int = typer.Argument(..., min=0, help="Number of text files to skip"),
    git_work_tree: Path = typer.Option(
        ..., "--git-work-tree", envvar=WORK_TREE_ENV, help="Working tree of the repository"
    ),
    args: Optional[str] = typer.Option(None, "--args", help="Extra arguments passed to blame"),
    baseline_format: Optional[BlameFormat] = typer.Option(
        None, help="Output format of the baseline (guessed from the name by default)"
    ),
    comparison_format: Optional[BlameFormat] = typer.Option(
        None, help="Output format of the comparison (guessed from the name by default)"
    ),
    parallel: bool = typer.Option(False, "--parallel", help="Run both executables concurrently"),
    fail_on_mismatch: bool = typer.Option(
        False, "--fail-on-mismatch", help="Exit with status 1 if any file does not match"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Compare blames of every text file in the work tree."""
    _setup_logging(verbose)
    config = _build_config(
        work_tree=git_work_tree,
        baseline_executable=baseline_executable,
        comparison_executable=comparison_executable,
        limit=limit,
        offset=offset,
        extra_args=shlex.split(args) if args else (),
        parallel=parallel,
    )

    runner = BlameComparisonRunner(
        config,
        console=console,
        baseline_format=baseline_format,
        comparison_format=comparison_format,
    )
    try:
        stats = runner.run()
    except RepositoryError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    if fail_on_mismatch and not stats.all_matched:
        raise typer.Exit(code=1)


@app.command()
def files(
    git_work_tree: Path = typer.Option(
        ..., "--git-work-tree", envvar=WORK_TREE_ENV, help="Working tree of the repository"
    ),
    limit: Optional[int] = typer.Option(None, min=0, help="Maximum number of files to list"),
    offset: int = typer.Option(0, min=0, help="Number of text files to skip"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """List the text files that would be compared."""
    _setup_logging(verbose)
    try:
        text_files = collect_text_files(git_work_tree / ".git")
    except RepositoryError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    windowed = window(text_files, offset, limit)
    if not windowed:
        console.print("[yellow]No text files found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Index")
    table.add_column("Path")
    table.add_column("Attribute")

    for index, candidate in windowed:
        table.add_row(str(index), escape(candidate.path), candidate.text_attribute.value)

    console.print(table)
