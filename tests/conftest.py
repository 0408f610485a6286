"""Shared fixtures: fake process-information trees under tmp_path."""

from pathlib import Path
from typing import Optional

import pytest


class ProcTree:
    """Builds ``<root>/<pid>/status`` and ``<root>/<pid>/cmdline`` files."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.root.mkdir(exist_ok=True)

    def add(self, pid: int, name: str, cmdline: Optional[bytes] = b"", extra_status: str = "") -> Path:
        """Add a process with the given status name and raw cmdline bytes."""
        proc_dir = self.root / str(pid)
        proc_dir.mkdir()
        status = f"Name:\t{name}\nUmask:\t0022\nState:\tS (sleeping)\nPid:\t{pid}\n{extra_status}"
        (proc_dir / "status").write_text(status)
        if cmdline is not None:
            (proc_dir / "cmdline").write_bytes(cmdline)
        return proc_dir

    def add_entry(self, name: str) -> None:
        """Add a non-process entry (file) to the root."""
        (self.root / name).write_text("")


@pytest.fixture
def proc_tree(tmp_path: Path) -> ProcTree:
    """Return an empty fake proc root."""
    return ProcTree(tmp_path / "proc")
