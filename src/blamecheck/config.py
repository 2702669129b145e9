"""Harness configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

WORK_TREE_ENV = "GIT_WORK_TREE"


class ConfigError(ValueError):
    """Raised when the harness cannot be configured."""


@dataclass(slots=True)
class HarnessConfig:
    work_tree: Path
    baseline_executable: Path
    comparison_executable: Path
    limit: Optional[int] = None
    offset: int = 0
    extra_args: Sequence[str] = ()
    parallel: bool = False

    def __post_init__(self) -> None:
        self.work_tree = Path(self.work_tree)
        self.baseline_executable = Path(self.baseline_executable)
        self.comparison_executable = Path(self.comparison_executable)
        self.extra_args = tuple(self.extra_args)
        if self.offset < 0:
            raise ConfigError(f"offset must be non-negative, got {self.offset}")
        if self.limit is not None and self.limit < 0:
            raise ConfigError(f"limit must be non-negative, got {self.limit}")

    @property
    def git_dir(self) -> Path:
        """Metadata store of the working tree."""
        return self.work_tree / ".git"

