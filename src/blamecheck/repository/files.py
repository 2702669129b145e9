"""Enumerate tracked files and their text classification."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Iterable, Iterator, List

from blamecheck.models import FileCandidate, TextAttribute

LOGGER = logging.getLogger(__name__)

LS_FILES_FORMAT = "%(path) %(eolinfo:index)"
BINARY_MARKER = "-text"


class RepositoryError(RuntimeError):
    """Raised when the repository metadata query cannot be executed."""


def classify_attribute(attr: str) -> TextAttribute:
    if not attr:
        return TextAttribute.UNSPECIFIED
    if BINARY_MARKER in attr:
        return TextAttribute.BINARY
    return TextAttribute.TEXT


def parse_ls_files_line(line: str) -> FileCandidate:
    """Split one ``path attribute`` line at its last space."""
    path, sep, attr = line.rpartition(" ")
    if not sep:
        return FileCandidate(path=line, text_attribute=TextAttribute.UNSPECIFIED)
    return FileCandidate(path=path, text_attribute=classify_attribute(attr.strip()))


def list_tracked_files(git_dir: Path, *, git_executable: str = "git") -> List[FileCandidate]:
    """Return every tracked file in index order."""
    command = [git_executable, "ls-files", "-z", "--format", LS_FILES_FORMAT]
    env = {**os.environ, "GIT_DIR": str(git_dir)}
    LOGGER.debug("Running %s with GIT_DIR=%s", " ".join(command), git_dir)
    try:
        completed = subprocess.run(command, env=env, capture_output=True, check=True)
    except OSError as exc:
        raise RepositoryError(f"failed to run {git_executable} ls-files: {exc}") from exc
    except subprocess.CalledProcessError as exc:
        stderr = exc.stderr.decode("utf-8", errors="replace").strip()
        raise RepositoryError(
            f"{git_executable} ls-files exited with status {exc.returncode}: {stderr}"
        ) from exc

    # NUL-terminated records carry paths verbatim instead of C-quoted.
    output = completed.stdout.decode("utf-8", errors="replace")
    return [parse_ls_files_line(record) for record in output.split("\0") if record]


def iter_text_files(candidates: Iterable[FileCandidate]) -> Iterator[FileCandidate]:
    """Yield candidates not classified as binary, preserving order."""
    for candidate in candidates:
        if candidate.is_binary:
            LOGGER.debug("Skipping binary file %s", candidate.path)
            continue
        yield candidate
