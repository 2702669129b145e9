"""Run a blame executable against one file and capture its output."""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Union

LOGGER = logging.getLogger(__name__)

STDERR_SNIPPET_CHARS = 500


@dataclass(slots=True)
class InvocationCompleted:
    lines: List[str] = field(default_factory=list)


@dataclass(slots=True)
class InvocationFailed:
    """The executable could not be started or exited with a non-zero status.

    ``exit_code`` is None when the process never started.
    """

    exit_code: Optional[int]
    stderr: str = ""


InvocationResult = Union[InvocationCompleted, InvocationFailed]


def split_output_lines(output: str) -> List[str]:
    """Split on newlines only, dropping line terminators."""
    lines = output.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def build_command(
    executable: Path, target_file: Path, extra_args: Sequence[str] = ()
) -> List[str]:
    return [str(executable), "blame", *extra_args, str(target_file)]


def invoke(
    executable: Path,
    git_dir: Path,
    target_file: Path,
    *,
    work_tree: Optional[Path] = None,
    extra_args: Sequence[str] = (),
) -> InvocationResult:
    """Blame ``target_file`` and return its output lines in order.

    Blocks until the process exits; no timeout is applied.
    """
    target = Path(target_file).absolute()
    command = build_command(executable, target, extra_args)
    env = {**os.environ, "GIT_DIR": str(git_dir)}
    if work_tree is not None:
        env["GIT_WORK_TREE"] = str(work_tree)

    LOGGER.debug("Running %s", " ".join(command))
    try:
        completed = subprocess.run(command, env=env, capture_output=True)
    except OSError as exc:
        LOGGER.warning("Failed to start %s: %s", executable, exc)
        return InvocationFailed(exit_code=None, stderr=str(exc))

    if completed.returncode != 0:
        stderr = completed.stderr.decode("utf-8", errors="replace")
        LOGGER.warning("%s exited with status %s for %s", executable, completed.returncode, target)
        return InvocationFailed(
            exit_code=completed.returncode,
            stderr=stderr.strip()[:STDERR_SNIPPET_CHARS],
        )

    output = completed.stdout.decode("utf-8", errors="replace")
    return InvocationCompleted(lines=split_output_lines(output))
