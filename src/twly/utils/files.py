"""Utility helpers for finding and reading files."""

from __future__ import annotations

import fnmatch
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

from twly.models import Document
from twly.utils.text import count_lines

LOGGER = logging.getLogger(__name__)

DEFAULT_PATTERN = "**/*.*"


@dataclass(slots=True)
class ReadResult:
    documents: List[Document] = field(default_factory=list)
    total_files: int = 0
    total_lines: int = 0
    failed: List[Path] = field(default_factory=list)


def _match_parts(parts: Sequence[str], pattern_parts: Sequence[str]) -> bool:
    if not pattern_parts:
        return not parts
    head, rest = pattern_parts[0], pattern_parts[1:]
    if head == "**":
        # zero or more whole segments
        return any(_match_parts(parts[i:], rest) for i in range(len(parts) + 1))
    return bool(parts) and fnmatch.fnmatchcase(parts[0], head) and _match_parts(parts[1:], rest)


def is_ignored(relative: str, ignore: Iterable[str]) -> bool:
    """Return True when a root-relative POSIX path matches an ignore entry.

    Entries are glob patterns matched segment by segment: ``*`` stays within
    one segment and ``**`` spans zero or more directories. An entry that
    matches a directory also covers everything below it.
    """
    parts = relative.split("/")
    for pattern in ignore:
        pattern = pattern.strip("/")
        if not pattern:
            continue
        pattern_parts = pattern.split("/")
        if any(_match_parts(parts[:end], pattern_parts) for end in range(1, len(parts) + 1)):
            return True
    return False


def iter_document_paths(
    root: Path,
    pattern: str = DEFAULT_PATTERN,
    ignore: Iterable[str] = (),
    *,
    include_hidden: bool = False,
) -> Iterator[Path]:
    """Yield files below ``root`` matching ``pattern`` that are not ignored.

    Dotfiles and anything inside dot-directories are skipped unless
    ``include_hidden`` is set.
    """
    ignore = list(ignore)
    for path in sorted(root.glob(pattern)):
        if not path.is_file():
            continue
        relative_parts = path.relative_to(root).parts
        if not include_hidden and any(part.startswith(".") for part in relative_parts):
            continue
        relative = "/".join(relative_parts)
        if is_ignored(relative, ignore):
            LOGGER.debug("Ignoring %s", relative)
            continue
        yield path


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


def read_documents(
    paths: Sequence[Path], *, max_workers: int = 8, legacy_line_count: bool = True
) -> ReadResult:
    """Read files concurrently and return them in canonical path order.

    Reads complete in arbitrary order; documents are sorted by path before
    sequence indices are assigned so origin attribution is reproducible.
    """
    result = ReadResult()
    contents: dict[Path, str] = {}

    with ThreadPoolExecutor(max_workers=max(max_workers, 1)) as pool:
        futures = {pool.submit(_read_text, path): path for path in paths}
        for future in as_completed(futures):
            path = futures[future]
            try:
                contents[path] = future.result()
            except OSError as exc:
                LOGGER.error("Failed to read %s: %s", path, exc)
                result.failed.append(path)

    for index, path in enumerate(sorted(contents)):
        content = contents[path]
        result.documents.append(Document(content=content, path=path, sequence_index=index))
        result.total_files += 1
        result.total_lines += count_lines(content, legacy=legacy_line_count)

    result.failed.sort()
    return result
