"""Snapshot collection: walk, filter, read, parse and merge."""

import logging
import os
from collections import Counter
from collections.abc import Callable
from pathlib import Path

from procenv.models import ProcessRecord, Snapshot
from procenv.parser import parse_record
from procenv.records import Decision, RecordKind, SkipReason, classify
from procenv.walker import PROC_ROOT, Entry, RootUnreachableError, walk

LOG = logging.getLogger(__name__)


def _read_bytes(path: str) -> bytes:
    """Read a whole record file."""
    return Path(path).read_bytes()


class SnapshotBuilder:
    """Accumulates parsed records into a snapshot, one PID at a time."""

    def __init__(self) -> None:
        self._records: Snapshot = {}

    def __len__(self) -> int:
        return len(self._records)

    def merge(self, pid: int, kind: RecordKind, fields: list[str]) -> ProcessRecord:
        """
        Store ``fields`` as the ``kind`` field of the record for ``pid``.

        The record is created on first use. Merging the same kind twice
        replaces the earlier value.
        """
        record = self._records.get(pid)
        if record is None:
            record = self._records[pid] = ProcessRecord(pid=pid)
        if kind is RecordKind.ENVIRON:
            record.environment = fields
        else:
            record.command_line = fields
        return record

    def build(self) -> Snapshot:
        """Return the accumulated snapshot."""
        return dict(self._records)


class ProcessCollector:
    """
    Collects the environment and command line of every visible process.

    The collector's own process and PID 1 are left out. Each call to
    collect() performs one full traversal and returns a fresh snapshot.
    """

    def __init__(
        self,
        root: str = PROC_ROOT,
        own_pid: int | None = None,
        read_file: Callable[[str], bytes] | None = None,
    ) -> None:
        """
        Initialize the ProcessCollector.

        Args:
            root: Mount point of the process-information filesystem.
            own_pid: PID to exclude as "ourselves". Defaults to os.getpid().
            read_file: Reads a whole record file. Defaults to Path.read_bytes.
        """
        self._root = os.path.normpath(root)
        self._own_pid = os.getpid() if own_pid is None else own_pid
        self._read_file = read_file or _read_bytes
        self._skipped: Counter[SkipReason] = Counter()

    @property
    def root(self) -> str:
        """Get the traversal root."""
        return self._root

    @property
    def own_pid(self) -> int:
        """Get the excluded PID of the collecting process."""
        return self._own_pid

    @property
    def skipped(self) -> dict[SkipReason, int]:
        """Skip counts of the last collect() run, per reason."""
        return dict(self._skipped)

    def process_entry(self, entry: Entry, builder: SnapshotBuilder) -> Decision:
        """Filter, read, parse and merge a single visited entry."""
        decision = classify(entry.path, entry.entry_type, self._root, self._own_pid)
        if not decision.accepted:
            if decision.skip is SkipReason.BAD_STRUCTURE:
                LOG.debug("Skipping %s: %s", entry.path, decision.detail)
            return decision

        try:
            data = self._read_file(entry.path)
        except OSError as e:
            LOG.debug("Reading %s failed: %s", entry.path, e)
            return Decision(
                entry.path,
                pid=decision.pid,
                kind=decision.kind,
                skip=SkipReason.READ_FAILED,
                detail=str(e),
            )

        builder.merge(decision.pid, decision.kind, parse_record(data))
        return decision

    def collect(self) -> Snapshot:
        """
        Take one snapshot.

        An unreachable root is logged and yields an empty snapshot.
        """
        builder = SnapshotBuilder()
        self._skipped = Counter()
        visited = 0
        try:
            for entry in walk(self._root):
                visited += 1
                decision = self.process_entry(entry, builder)
                if decision.skip is not None:
                    self._skipped[decision.skip] += 1
        except RootUnreachableError as e:
            LOG.error("Walking %s failed: %s", self._root, e)
            return {}

        LOG.info(
            "Collected %d processes from %s (%d entries visited, %d read failures)",
            len(builder),
            self._root,
            visited,
            self._skipped[SkipReason.READ_FAILED],
        )
        return builder.build()


def collect_snapshot(root: str = PROC_ROOT) -> Snapshot:
    """Collect a snapshot of ``root`` excluding the calling process."""
    return ProcessCollector(root).collect()
