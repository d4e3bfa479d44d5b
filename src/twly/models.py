"""Core twly data models."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from pathlib import Path
from typing import List, Optional


@dataclass(slots=True, frozen=True)
class Document:
    """Text content of a single file, in the order it was handed to the engine."""

    content: str
    path: Path
    sequence_index: int


@dataclass(slots=True, frozen=True)
class ParagraphBlock:
    """Blank-line delimited block of a document, prepared for hashing."""

    raw_text: str
    normalized_text: str
    hash: str


class FindingKind(IntEnum):
    """Finding classification; the value doubles as report priority."""

    FULL_DOCUMENT = 0
    CROSS_FILE_PARAGRAPH = 1
    SAME_FILE_PARAGRAPH = 2


@dataclass(slots=True)
class Finding:
    """One duplicate relationship detected during a scan."""

    kind: FindingKind
    paths: List[Path]
    snippet: str = ""
    block_hash: Optional[str] = None

    def describe(self) -> str:
        """Return a plain English sentence for this finding."""
        joined = ", ".join(str(path) for path in self.paths)
        if self.kind is FindingKind.FULL_DOCUMENT:
            return f"The following files are exact duplicates: {joined}"
        if self.kind is FindingKind.CROSS_FILE_PARAGRAPH:
            return f"The following files share a duplicated paragraph: {joined}"
        return f"The following file contains a paragraph duplicated within itself: {joined}"


@dataclass(slots=True)
class RunStatistics:
    total_files: int = 0
    total_lines: int = 0
    duped_lines: int = 0
    num_file_dupes: int = 0
    num_paragraph_dupes: int = 0
    num_paragraph_dupes_in_file: int = 0

    def with_totals(self, total_files: int, total_lines: int) -> "RunStatistics":
        """Copy of these statistics carrying totals gathered while reading."""
        return replace(self, total_files=total_files, total_lines=total_lines)
