"""Line-by-line comparison of two blames of the same file."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from blamecheck.blame.parser import BlameFormat, hashes_agree, parse_line
from blamecheck.models import (
    BlameRecord,
    FileCandidate,
    FileComparisonResult,
    LineMismatch,
    MalformedLine,
)

LOGGER = logging.getLogger(__name__)

BASELINE = "baseline"
CANDIDATE = "comparison"


def compare_blames(
    baseline_lines: Sequence[str],
    candidate_lines: Sequence[str],
    *,
    file: Optional[FileCandidate] = None,
    baseline_format: BlameFormat = BlameFormat.GIX,
    candidate_format: BlameFormat = BlameFormat.GIX,
) -> FileComparisonResult:
    """Compare attribution of two blame outputs index by index.

    Only commit hashes are compared. Differing line counts are reported
    without any per-line detail, and a line that fails to parse on either
    side is recorded and skipped.
    """
    result = FileComparisonResult(file=file)
    if len(baseline_lines) != len(candidate_lines):
        result.length_mismatch = True
        return result

    for index, (baseline_line, candidate_line) in enumerate(zip(baseline_lines, candidate_lines)):
        baseline = parse_line(baseline_line, baseline_format)
        candidate = parse_line(candidate_line, candidate_format)
        skip = False
        for side, raw, parsed in (
            (BASELINE, baseline_line, baseline),
            (CANDIDATE, candidate_line, candidate),
        ):
            if not isinstance(parsed, BlameRecord):
                LOGGER.warning("%s line %d does not look like a blame line: %r", side, index, raw)
                result.malformed.append(MalformedLine(index, side, raw))
                skip = True
        if skip:
            continue

        if not hashes_agree(baseline.commit_hash, candidate.commit_hash):
            result.mismatches.append(
                LineMismatch(
                    line_index=index,
                    baseline_hash=baseline.commit_hash,
                    candidate_hash=candidate.commit_hash,
                    content=candidate.content,
                )
            )

    return result
