"""Data models for procenv."""

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class ProcessRecord:
    """Environment and command line collected for one process."""

    pid: int
    environment: list[str] | None = None  # KEY=VALUE, kernel order
    command_line: list[str] | None = None  # argv order

    def to_dict(self) -> dict[str, Any]:
        """Return a serializable dict, omitting empty fields."""
        data: dict[str, Any] = {"pid": self.pid}
        if self.environment:
            data["env"] = list(self.environment)
        if self.command_line:
            data["cmdline"] = list(self.command_line)
        return data


Snapshot = dict[int, ProcessRecord]
