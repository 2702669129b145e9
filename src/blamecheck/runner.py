"""Blame comparison pipeline."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from rich.console import Console
from rich.markup import escape

from blamecheck.blame.invoker import InvocationFailed, InvocationResult, invoke
from blamecheck.blame.parser import BlameFormat, format_for_executable
from blamecheck.compare import BASELINE, CANDIDATE, compare_blames
from blamecheck.config import HarnessConfig
from blamecheck.models import FileCandidate, FileComparisonResult, FileOutcome
from blamecheck.repository.files import iter_text_files, list_tracked_files
from blamecheck.utils.windowing import window

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class RunStats:
    outcomes: Dict[FileOutcome, int] = field(default_factory=dict)
    results: List[FileComparisonResult] = field(default_factory=list)
    failed_files: List[str] = field(default_factory=list)

    def record(self, outcome: FileOutcome) -> None:
        self.outcomes[outcome] = self.outcomes.get(outcome, 0) + 1

    @property
    def matches(self) -> int:
        return self.outcomes.get(FileOutcome.MATCH, 0)

    @property
    def non_matches(self) -> int:
        return sum(self.outcomes.values()) - self.matches

    @property
    def all_matched(self) -> bool:
        return self.non_matches == 0


def collect_text_files(git_dir: Path) -> List[FileCandidate]:
    """Enumerate the tracked text files of a repository."""
    return list(iter_text_files(list_tracked_files(git_dir)))


class BlameComparisonRunner:
    """Blames every windowed file with both executables and compares them."""

    def __init__(
        self,
        config: HarnessConfig,
        *,
        console: Optional[Console] = None,
        baseline_format: Optional[BlameFormat] = None,
        comparison_format: Optional[BlameFormat] = None,
    ) -> None:
        self.config = config
        self.console = console or Console()
        self.baseline_format = baseline_format or format_for_executable(config.baseline_executable)
        self.comparison_format = comparison_format or format_for_executable(
            config.comparison_executable
        )

    def _print(self, message: str) -> None:
        # One diagnostic per output line, whatever the console width.
        self.console.print(message, soft_wrap=True)

    def run(self, files: Optional[Sequence[FileCandidate]] = None) -> RunStats:
        """Compare blames for the configured window of text files."""
        if files is None:
            all_files = list_tracked_files(self.config.git_dir)
            self._print(
                f"{len(all_files)} files to run blame for, filtering out non-text files"
            )
            files = list(iter_text_files(all_files))

        self._print(
            f"{len(files)} files to run blame for, "
            f"limit {self.config.limit if self.config.limit is not None else 'none'}, "
            f"offset {self.config.offset}"
        )
        self._print("comparing blames")

        stats = RunStats()
        for index, candidate in window(files, self.config.offset, self.config.limit):
            self._print(f"{index} {escape(candidate.path)}")
            try:
                outcome = self._compare_file(candidate, stats)
            except Exception as exc:
                LOGGER.error("Failed to compare %s: %s", candidate.path, exc)
                outcome = FileOutcome.FAILED_TO_RUN
                stats.failed_files.append(candidate.path)
            stats.record(outcome)

        self._print_summary(stats)
        return stats

    def _invoke_pair(self, target: Path) -> Tuple[InvocationResult, InvocationResult]:
        kwargs = dict(work_tree=self.config.work_tree, extra_args=self.config.extra_args)
        executables = (self.config.baseline_executable, self.config.comparison_executable)

        if not self.config.parallel:
            return tuple(invoke(exe, self.config.git_dir, target, **kwargs) for exe in executables)

        with ThreadPoolExecutor(max_workers=2) as pool:
            futures = [
                pool.submit(invoke, exe, self.config.git_dir, target, **kwargs)
                for exe in executables
            ]
            return futures[0].result(), futures[1].result()

    def _compare_file(self, candidate: FileCandidate, stats: RunStats) -> FileOutcome:
        target = (self.config.work_tree / candidate.path).absolute()
        baseline, comparison = self._invoke_pair(target)

        failed = False
        for side, invocation in ((BASELINE, baseline), (CANDIDATE, comparison)):
            if isinstance(invocation, InvocationFailed):
                exit_code = "not started" if invocation.exit_code is None else invocation.exit_code
                self._print(
                    f"[red]{side} executable failed ({exit_code}):[/red] {escape(invocation.stderr)}"
                )
                failed = True
        if failed:
            stats.failed_files.append(candidate.path)
            return FileOutcome.FAILED_TO_RUN

        result = compare_blames(
            baseline.lines,
            comparison.lines,
            file=candidate,
            baseline_format=self.baseline_format,
            candidate_format=self.comparison_format,
        )
        stats.results.append(result)
        self._report(result)
        return result.outcome

    def _report(self, result: FileComparisonResult) -> None:
        if result.length_mismatch:
            self._print("[yellow]blames have different number of lines[/yellow]")
            return

        for malformed in result.malformed:
            self._print(
                f"`{escape(malformed.raw_line)}` does not look like a blame line "
                f"({malformed.side}, line {malformed.line_index})"
            )

        for mismatch in result.mismatches:
            self._print(
                f"hashes don't match for line {mismatch.line_index}: {escape(mismatch.content)}"
            )
            self._print(
                f"baseline blamed {mismatch.baseline_hash} "
                f"while comparison blamed {mismatch.candidate_hash}\n"
            )

    def _print_summary(self, stats: RunStats) -> None:
        if stats.all_matched:
            self._print("[green]done, all blames matched[/green]")
        else:
            self._print(
                f"done, number of matches: {stats.matches}, "
                f"number of non-matches: {stats.non_matches}"
            )
