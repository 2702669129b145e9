"""Shared fixtures for blamecheck tests."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Callable, Sequence

import pytest


@pytest.fixture
def fake_blame(tmp_path: Path) -> Callable[..., Path]:
    """Create an executable that prints fixed blame lines for any file."""
    if sys.platform == "win32":
        pytest.skip("shebang executables are POSIX only")

    def _make(name: str, lines: Sequence[str], exit_code: int = 0, stderr: str = "") -> Path:
        script = tmp_path / "bin" / name
        script.parent.mkdir(exist_ok=True)
        script.write_text(
            f"#!{sys.executable}\n"
            "import sys\n"
            f"assert sys.argv[1] == 'blame', sys.argv\n"
            f"sys.stdout.write({''.join(line + chr(10) for line in lines)!r})\n"
            f"sys.stderr.write({stderr!r})\n"
            f"sys.exit({exit_code})\n"
        )
        os.chmod(script, 0o755)
        return script

    return _make
