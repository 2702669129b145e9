"""Parsing of blame output lines.

Two output shapes are understood:

* ``gix`` compact lines: ``<hash> <int> <int> <content>``
* ``git`` default lines: ``^?<hash> [<file>] (<author> <date> <lineno>) <content>``

Parsing never raises on malformed input; a line without the expected shape
comes back as :class:`~blamecheck.models.Malformed`.
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Union

from blamecheck.models import BlameRecord, Malformed, ParseResult


class BlameFormat(str, Enum):
    GIX = "gix"
    GIT = "git"


# Ids are lowercase alphanumeric rather than hex so symbolic ids such as "h1" parse.
GIX_BLAME_RE = re.compile(r"([0-9a-z]+) (\d+) (\d+) (.*)")
GIT_BLAME_RE = re.compile(r"\^?([0-9a-f]+) (?:([^(^)]+)\s+)?\((.*? )?(\d+)\) (.*)")


def format_for_executable(executable: Union[str, Path]) -> BlameFormat:
    """Guess the output format from the executable's file name."""
    if Path(executable).name == "git":
        return BlameFormat.GIT
    return BlameFormat.GIX


def parse_gix_line(line: str) -> ParseResult:
    match = GIX_BLAME_RE.fullmatch(line)
    if match is None:
        return Malformed(line)
    commit_hash, field_a, field_b, content = match.groups()
    return BlameRecord(commit_hash, int(field_a), int(field_b), content)


def parse_git_line(line: str) -> ParseResult:
    match = GIT_BLAME_RE.fullmatch(line)
    if match is None:
        return Malformed(line)
    commit_hash, _filename, _annotation, line_number, content = match.groups()
    return BlameRecord(commit_hash, int(line_number), int(line_number), content)


def parse_line(line: str, blame_format: BlameFormat = BlameFormat.GIX) -> ParseResult:
    if blame_format is BlameFormat.GIT:
        return parse_git_line(line)
    return parse_gix_line(line)


def hashes_agree(baseline_hash: str, candidate_hash: str) -> bool:
    """True when the hashes are equal or one abbreviates the other."""
    return baseline_hash.startswith(candidate_hash) or candidate_hash.startswith(baseline_hash)
