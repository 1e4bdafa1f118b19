"""Shared fixtures for procenv tests."""

from pathlib import Path

import pytest


class FakeProcRoot:
    """A synthetic procfs tree below a temporary directory."""

    def __init__(self, base: Path) -> None:
        self.path = base / "proc"
        self.path.mkdir()

    @property
    def root(self) -> str:
        return str(self.path)

    def add(self, relative: str, data: bytes = b"") -> Path:
        """Create a file below the root, including parent directories."""
        target = self.path / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        return target


@pytest.fixture
def fake_proc(tmp_path: Path) -> FakeProcRoot:
    """Empty synthetic procfs root."""
    return FakeProcRoot(tmp_path)
