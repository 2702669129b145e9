"""Core blamecheck data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


class TextAttribute(str, Enum):
    """Text/binary classification reported by the repository."""

    TEXT = "text"
    BINARY = "binary"
    UNSPECIFIED = "unspecified"


@dataclass(frozen=True, slots=True)
class FileCandidate:
    """Tracked file that may be blamed."""

    path: str
    text_attribute: TextAttribute = TextAttribute.UNSPECIFIED

    @property
    def is_binary(self) -> bool:
        return self.text_attribute is TextAttribute.BINARY


@dataclass(frozen=True, slots=True)
class BlameRecord:
    """One parsed line of blame output."""

    commit_hash: str
    field_a: int
    field_b: int
    content: str


@dataclass(frozen=True, slots=True)
class Malformed:
    """A blame output line that did not have the expected shape."""

    raw_line: str


ParseResult = Union[BlameRecord, Malformed]


@dataclass(frozen=True, slots=True)
class LineMismatch:
    line_index: int
    baseline_hash: str
    candidate_hash: str
    content: str


@dataclass(frozen=True, slots=True)
class MalformedLine:
    line_index: int
    side: str
    raw_line: str


class FileOutcome(str, Enum):
    MATCH = "match"
    DIFFERING_LINE_COUNT = "differing_line_count"
    HASH_MISMATCH = "hash_mismatch"
    LINE_DID_NOT_MATCH_PATTERN = "line_did_not_match_pattern"
    FAILED_TO_RUN = "failed_to_run"


@dataclass(slots=True)
class FileComparisonResult:
    """Outcome of comparing the two blames of a single file.

    A length mismatch short-circuits the per-line pass, so ``mismatches`` and
    ``malformed`` stay empty whenever ``length_mismatch`` is set.
    """

    file: Optional[FileCandidate] = None
    length_mismatch: bool = False
    mismatches: List[LineMismatch] = field(default_factory=list)
    malformed: List[MalformedLine] = field(default_factory=list)

    @property
    def outcome(self) -> FileOutcome:
        if self.length_mismatch:
            return FileOutcome.DIFFERING_LINE_COUNT
        if self.mismatches:
            return FileOutcome.HASH_MISMATCH
        if self.malformed:
            return FileOutcome.LINE_DID_NOT_MATCH_PATTERN
        return FileOutcome.MATCH
