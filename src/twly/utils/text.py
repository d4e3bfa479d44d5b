"""Text helpers: paragraph segmentation, whitespace stripping and hashing."""

from __future__ import annotations

import hashlib
import re
from typing import Iterator, List

from twly.models import ParagraphBlock

PARAGRAPH_SEPARATOR = "\n\n"

_WHITESPACE_RE = re.compile(r"\s")


def hash_text(text: str) -> str:
    """Return a stable hex fingerprint for a text blob."""
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def minify(text: str) -> str:
    """Remove every whitespace character, newlines included."""
    return _WHITESPACE_RE.sub("", text)


def split_paragraphs(content: str) -> List[str]:
    """Split text on blank-line separators, dropping empty blocks."""
    return [block for block in content.split(PARAGRAPH_SEPARATOR) if block != ""]


def is_big_enough(raw: str, *, min_lines: int, min_chars: int) -> bool:
    """Check whether a raw block is large enough to be compared.

    A block qualifies when it holds at least ``min_lines - 1`` newline
    characters and is strictly longer than ``min_chars``.
    """
    return raw.count("\n") >= min_lines - 1 and len(raw) > min_chars


def segment(content: str, *, min_lines: int = 1, min_chars: int = 0) -> Iterator[ParagraphBlock]:
    """Yield the qualifying paragraph blocks of ``content`` in document order."""
    for raw in split_paragraphs(content):
        if not is_big_enough(raw, min_lines=min_lines, min_chars=min_chars):
            continue
        normalized = minify(raw)
        yield ParagraphBlock(raw_text=raw, normalized_text=normalized, hash=hash_text(normalized))


def count_lines(text: str, *, legacy: bool = True) -> int:
    """Count lines for statistics.

    The legacy mode counts occurrences of the letter ``n`` rather than
    newline characters, which is what historical twly scores were computed
    with. Pass ``legacy=False`` for a real line count.
    """
    if legacy:
        return text.count("n")
    if not text:
        return 0
    lines = text.count("\n")
    if not text.endswith("\n"):
        lines += 1
    return lines
