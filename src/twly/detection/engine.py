"""Exact duplicate detection over an ordered list of documents."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Set

from twly.config import AppConfig
from twly.models import Document, Finding, FindingKind, RunStatistics
from twly.utils.text import count_lines, hash_text, minify, segment

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class _SeenDocument:
    origin: Document
    finding_index: Optional[int] = None


@dataclass(slots=True)
class ScanResult:
    findings: List[Finding] = field(default_factory=list)
    stats: RunStatistics = field(default_factory=RunStatistics)


def sort_findings(findings: Sequence[Finding]) -> List[Finding]:
    """Order findings by kind priority, highest first, keeping encounter order for ties."""
    return sorted(findings, key=lambda finding: finding.kind, reverse=True)


class DuplicateFinder:
    """Finds whole-document and paragraph duplicates.

    Documents must be supplied in a deterministic order: the first document
    carrying a given hash is treated as the origin of every later copy.
    Indices live only for the duration of a single :meth:`scan` call.
    """

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def _count(self, text: str) -> int:
        return count_lines(text, legacy=self.config.legacy_line_count)

    def scan(self, documents: Sequence[Document]) -> ScanResult:
        findings: List[Finding] = []
        stats = RunStatistics()
        seen_documents: Dict[str, _SeenDocument] = {}
        # paragraph hash -> whole-document hash of its first owner
        seen_blocks: Dict[str, str] = {}
        reported_blocks: Set[str] = set()

        for document in sorted(documents, key=lambda doc: doc.sequence_index):
            doc_hash = hash_text(minify(document.content))

            seen = seen_documents.get(doc_hash)
            if seen is not None:
                if seen.finding_index is not None:
                    findings[seen.finding_index].paths.append(document.path)
                else:
                    seen.finding_index = len(findings)
                    findings.append(
                        Finding(FindingKind.FULL_DOCUMENT, [document.path, seen.origin.path])
                    )
                stats.duped_lines += 2 * self._count(document.content)
                stats.num_file_dupes += 1
                LOGGER.debug("%s duplicates %s", document.path, seen.origin.path)
                continue

            seen_documents[doc_hash] = _SeenDocument(origin=document)

            for block in segment(
                document.content,
                min_lines=self.config.min_lines,
                min_chars=self.config.min_chars,
            ):
                owner_hash = seen_blocks.get(block.hash)
                if owner_hash is None:
                    seen_blocks[block.hash] = doc_hash
                    continue

                origin_path: Path = seen_documents[owner_hash].origin.path
                stats.duped_lines += 2 * self._count(block.raw_text)
                stats.num_paragraph_dupes += 1

                if origin_path == document.path:
                    stats.num_paragraph_dupes_in_file += 1
                    findings.append(
                        Finding(
                            FindingKind.SAME_FILE_PARAGRAPH,
                            [document.path],
                            snippet=block.raw_text,
                            block_hash=block.hash,
                        )
                    )
                elif block.hash in reported_blocks:
                    LOGGER.debug("Block %s already reported, skipping %s", block.hash, document.path)
                    continue
                else:
                    findings.append(
                        Finding(
                            FindingKind.CROSS_FILE_PARAGRAPH,
                            [document.path, origin_path],
                            snippet=block.raw_text,
                            block_hash=block.hash,
                        )
                    )
                reported_blocks.add(block.hash)

        LOGGER.info(
            "Scanned %d documents: %d duplicate files, %d duplicate blocks",
            len(documents),
            stats.num_file_dupes,
            stats.num_paragraph_dupes,
        )
        return ScanResult(findings=findings, stats=stats)
