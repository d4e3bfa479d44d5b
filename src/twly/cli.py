"""Command line interface for twly."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from twly.config import AppConfig, ConfigError, load_config
from twly.detection.engine import DuplicateFinder, sort_findings
from twly.detection.scoring import compute_score
from twly.report import build_stats_table, print_findings, print_verdict
from twly.utils.files import DEFAULT_PATTERN, iter_document_paths, read_documents


console = Console()
app = typer.Typer(help="twly - find duplicated files and paragraphs in a repository")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _load(root: Path, config_path: Optional[Path], **overrides) -> AppConfig:
    try:
        return load_config(root, config_path, **overrides)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def scan(
    pattern: str = typer.Argument(DEFAULT_PATTERN, help="Glob of files to scan, relative to the root."),
    root: Path = typer.Option(Path("."), "--root", help="Directory to scan", resolve_path=True),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to a .trc config file"),
    min_lines: Optional[int] = typer.Option(None, help="Minimum lines for a paragraph to be compared"),
    min_chars: Optional[int] = typer.Option(None, help="Minimum characters for a paragraph to be compared"),
    threshold: Optional[float] = typer.Option(None, help="Failure threshold as a percentage"),
    workers: int = typer.Option(8, help="Number of concurrent file readers"),
    hidden: bool = typer.Option(False, "--hidden", help="Include dotfiles and dot-directories"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Scan files for duplicated content and score their originality."""
    _setup_logging(verbose)
    config = _load(
        root,
        config_path,
        min_lines=min_lines,
        min_chars=min_chars,
        failure_threshold=threshold,
    )

    paths = list(iter_document_paths(root, pattern, config.ignore, include_hidden=hidden))
    if not paths:
        console.print("[yellow]No files found.[/yellow]")
        return

    read = read_documents(paths, max_workers=workers, legacy_line_count=config.legacy_line_count)
    if read.failed:
        console.print(f"[yellow]Could not read {len(read.failed)} file(s).[/yellow]")

    result = DuplicateFinder(config).scan(read.documents)
    stats = result.stats.with_totals(read.total_files, read.total_lines)

    print_findings(console, sort_findings(result.findings))
    console.print(build_stats_table(stats))

    score = compute_score(stats, config.failure_threshold)
    print_verdict(console, score)
    if not score.passed:
        raise typer.Exit(code=1)


@app.command("show-config")
def show_config(
    root: Path = typer.Option(Path("."), "--root", help="Directory holding the .trc file", resolve_path=True),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to a .trc config file"),
) -> None:
    """Print the effective configuration."""
    config = _load(root, config_path)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Setting")
    table.add_column("Value")
    for name, value in config.as_dict().items():
        if isinstance(value, list):
            value = ", ".join(value) or "-"
        table.add_row(name, str(value))
    console.print(table)
