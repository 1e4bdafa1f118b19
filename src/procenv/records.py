"""Recognition of per-process record files and PID extraction."""

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath

from procenv.walker import EntryType

SELF_ALIAS = "self"
INIT_PID = 1

_PID_PATTERN = re.compile(r"[1-9][0-9]*")


class RecordKind(Enum):
    """Recognized per-process record files, valued by file name."""

    ENVIRON = "environ"
    CMDLINE = "cmdline"


RECORD_NAMES = frozenset(kind.value for kind in RecordKind)


class SkipReason(Enum):
    """Why a visited entry contributes nothing to the snapshot."""

    DIRECTORY = "directory"
    UNRECOGNIZED = "unrecognized"
    SELF_ALIAS = "self-alias"
    OWN_PROCESS = "own-process"
    INIT_PROCESS = "init-process"
    BAD_STRUCTURE = "bad-structure"
    READ_FAILED = "read-failed"


class PathStructureError(ValueError):
    """A path is not of the form ``<root>/<pid>/<name>``."""


@dataclass(slots=True, frozen=True)
class Decision:
    """Outcome of classifying one visited entry."""

    path: str
    pid: int | None = None
    kind: RecordKind | None = None
    skip: SkipReason | None = None
    detail: str = ""

    @property
    def accepted(self) -> bool:
        """True if the entry should be read and merged."""
        return self.skip is None


def _relative_parts(path: str, root: str) -> tuple[str, ...]:
    """Split ``path`` into its segments below ``root``."""
    try:
        return PurePosixPath(path).relative_to(PurePosixPath(root)).parts
    except ValueError as e:
        raise PathStructureError(f"{path!r} is not below {root!r}") from e


def extract_pid(path: str, root: str) -> int:
    """
    Return the PID encoded in ``<root>/<pid>/<name>``.

    Raises:
        PathStructureError: If the path has another shape or the PID
            segment is not a positive decimal number.
    """
    parts = _relative_parts(path, root)
    if len(parts) != 2:
        raise PathStructureError(f"{path!r} is not <root>/<pid>/<name>")
    segment = parts[0]
    if not _PID_PATTERN.fullmatch(segment):
        raise PathStructureError(f"PID segment {segment!r} of {path!r} is not a canonical positive integer")
    return int(segment)


def classify(path: str, entry_type: EntryType, root: str, own_pid: int) -> Decision:
    """
    Decide whether a visited entry is a record to collect.

    Pure function of its arguments, no filesystem access. The first failing
    check determines the skip reason.
    """
    if entry_type is EntryType.DIRECTORY:
        return Decision(path, skip=SkipReason.DIRECTORY)

    name = PurePosixPath(path).name
    if name not in RECORD_NAMES:
        return Decision(path, skip=SkipReason.UNRECOGNIZED)
    kind = RecordKind(name)

    try:
        parts = _relative_parts(path, root)
    except PathStructureError as e:
        return Decision(path, kind=kind, skip=SkipReason.BAD_STRUCTURE, detail=str(e))

    if len(parts) == 2 and parts[0] == SELF_ALIAS:
        return Decision(path, kind=kind, skip=SkipReason.SELF_ALIAS)

    try:
        pid = extract_pid(path, root)
    except PathStructureError as e:
        return Decision(path, kind=kind, skip=SkipReason.BAD_STRUCTURE, detail=str(e))

    if pid == own_pid:
        return Decision(path, pid=pid, kind=kind, skip=SkipReason.OWN_PROCESS)
    if pid == INIT_PID:
        return Decision(path, pid=pid, kind=kind, skip=SkipReason.INIT_PROCESS)
    return Decision(path, pid=pid, kind=kind)
