"""Tests for CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from blamecheck.cli import _setup_logging, app
from blamecheck.models import FileCandidate, FileOutcome, TextAttribute
from blamecheck.repository.files import RepositoryError
from blamecheck.runner import RunStats


runner = CliRunner()


class TestSetupLogging:
    """Tests for _setup_logging helper."""

    def test_setup_logging_verbose(self) -> None:
        """Verbose mode sets DEBUG level."""
        with patch("blamecheck.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=True)
            assert mock_config.call_args[1]["level"] == logging.DEBUG

    def test_setup_logging_normal(self) -> None:
        """Normal mode sets INFO level."""
        with patch("blamecheck.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=False)
            assert mock_config.call_args[1]["level"] == logging.INFO


class TestCompareCommand:
    """Tests for the compare command."""

    def test_missing_work_tree(self) -> None:
        """Exits with usage when GIT_WORK_TREE is not set."""
        result = runner.invoke(
            app, ["compare", "git", "gix", "8", "0"], env={"GIT_WORK_TREE": None}
        )
        assert result.exit_code == 2
        assert "Usage" in result.output

    def test_wrong_argument_count(self, tmp_path: Path) -> None:
        """Exits with usage when positional arguments are missing."""
        result = runner.invoke(
            app, ["compare", "git", "gix", "8"], env={"GIT_WORK_TREE": str(tmp_path)}
        )
        assert result.exit_code == 2

    def test_negative_limit(self, tmp_path: Path) -> None:
        result = runner.invoke(
            app, ["compare", "git", "gix", "--", "-1", "0"], env={"GIT_WORK_TREE": str(tmp_path)}
        )
        assert result.exit_code == 2

    @patch("blamecheck.cli.BlameComparisonRunner")
    def test_runs_with_env(self, mock_runner_class: MagicMock, tmp_path: Path) -> None:
        """Builds the config from arguments and environment."""
        mock_runner_class.return_value.run.return_value = RunStats()

        result = runner.invoke(
            app,
            ["compare", "/usr/bin/git", "gix", "8", "2", "--args=-w --root"],
            env={"GIT_WORK_TREE": str(tmp_path)},
        )

        assert result.exit_code == 0
        config = mock_runner_class.call_args[0][0]
        assert config.work_tree == tmp_path
        assert config.git_dir == tmp_path / ".git"
        assert config.limit == 8
        assert config.offset == 2
        assert config.extra_args == ("-w", "--root")

    @patch("blamecheck.cli.BlameComparisonRunner")
    def test_fail_on_mismatch(self, mock_runner_class: MagicMock, tmp_path: Path) -> None:
        stats = RunStats()
        stats.record(FileOutcome.HASH_MISMATCH)
        mock_runner_class.return_value.run.return_value = stats

        result = runner.invoke(
            app,
            ["compare", "git", "gix", "1", "0", "--fail-on-mismatch"],
            env={"GIT_WORK_TREE": str(tmp_path)},
        )

        assert result.exit_code == 1

    @patch("blamecheck.cli.BlameComparisonRunner")
    def test_mismatch_without_flag_exits_zero(
        self, mock_runner_class: MagicMock, tmp_path: Path
    ) -> None:
        stats = RunStats()
        stats.record(FileOutcome.HASH_MISMATCH)
        mock_runner_class.return_value.run.return_value = stats

        result = runner.invoke(
            app, ["compare", "git", "gix", "1", "0"], env={"GIT_WORK_TREE": str(tmp_path)}
        )

        assert result.exit_code == 0

    @patch("blamecheck.cli.BlameComparisonRunner")
    def test_repository_error(self, mock_runner_class: MagicMock, tmp_path: Path) -> None:
        """Enumeration failure is fatal."""
        mock_runner_class.return_value.run.side_effect = RepositoryError("git ls-files failed")

        result = runner.invoke(
            app, ["compare", "git", "gix", "1", "0"], env={"GIT_WORK_TREE": str(tmp_path)}
        )

        assert result.exit_code == 1
        assert "git ls-files failed" in result.stdout


class TestFilesCommand:
    """Tests for the files command."""

    @patch("blamecheck.cli.collect_text_files")
    def test_lists_files(self, mock_collect: MagicMock, tmp_path: Path) -> None:
        mock_collect.return_value = [
            FileCandidate("a.rs", TextAttribute.TEXT),
            FileCandidate("b.md", TextAttribute.UNSPECIFIED),
        ]

        result = runner.invoke(app, ["files", "--git-work-tree", str(tmp_path)])

        assert result.exit_code == 0
        assert "a.rs" in result.stdout
        mock_collect.assert_called_once_with(tmp_path / ".git")
        assert "b.md" in result.stdout

    @patch("blamecheck.cli.collect_text_files")
    def test_no_files(self, mock_collect: MagicMock, tmp_path: Path) -> None:
        mock_collect.return_value = []

        result = runner.invoke(app, ["files", "--git-work-tree", str(tmp_path)])

        assert result.exit_code == 0
        assert "No text files found" in result.stdout
