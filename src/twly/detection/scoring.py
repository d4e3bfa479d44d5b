"""Originality score computation."""

from __future__ import annotations

from dataclasses import dataclass

from twly.models import RunStatistics


@dataclass(slots=True, frozen=True)
class ScoreResult:
    score: float
    threshold: float
    passed: bool


def originality_score(duped_lines: int, total_lines: int) -> float:
    """Percentage of lines not involved in a duplicate, rounded to two decimals.

    A scan without any lines has nothing duplicated and scores 100.
    """
    if total_lines == 0:
        return 100.0
    return round(100 - (duped_lines / total_lines * 100), 2)


def compute_score(stats: RunStatistics, failure_threshold: float) -> ScoreResult:
    score = originality_score(stats.duped_lines, stats.total_lines)
    return ScoreResult(score=score, threshold=failure_threshold, passed=score >= failure_threshold)
