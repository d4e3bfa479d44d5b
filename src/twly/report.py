"""Console rendering of scan findings and statistics."""

from __future__ import annotations

from typing import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from twly.detection.scoring import ScoreResult
from twly.models import Finding, FindingKind, RunStatistics

SNIPPET_CHARS = 180

_KIND_STYLES = {
    FindingKind.SAME_FILE_PARAGRAPH: "magenta",
    FindingKind.CROSS_FILE_PARAGRAPH: "yellow",
    FindingKind.FULL_DOCUMENT: "red",
}


def format_snippet(text: str, limit: int = SNIPPET_CHARS) -> str:
    snippet = " ".join(text.split())
    if len(snippet) > limit:
        snippet = snippet[: limit - 3].rstrip() + "..."
    return snippet


def print_findings(console: Console, findings: Sequence[Finding]) -> None:
    for finding in findings:
        style = _KIND_STYLES[finding.kind]
        console.print(f"[{style}]{escape(finding.describe())}[/{style}]")
        if finding.snippet:
            console.print(f"  [dim]{escape(format_snippet(finding.snippet))}[/dim]")


def build_stats_table(stats: RunStatistics) -> Table:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Files Analyzed")
    table.add_column("Lines Analyzed")
    table.add_column("Duplicate Files")
    table.add_column("Duplicate Blocks")
    table.add_column("Duplicate Blocks Within Files")
    table.add_row(
        str(stats.total_files),
        str(stats.total_lines),
        str(stats.num_file_dupes),
        str(stats.num_paragraph_dupes),
        str(stats.num_paragraph_dupes_in_file),
    )
    return table


def verdict_message(result: ScoreResult) -> str:
    outcome = "passed" if result.passed else "failed"
    return (
        f"You {outcome} your threshold of {result.threshold:g}% "
        f"with a score of {result.score:.2f}%"
    )


def print_verdict(console: Console, result: ScoreResult) -> None:
    style = "black on green" if result.passed else "white on red"
    console.print(f"[{style}]{verdict_message(result)}[/{style}]")
