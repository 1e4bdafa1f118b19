"""procenv - snapshot process environments and command lines from procfs."""

from procenv.collector import ProcessCollector, SnapshotBuilder, collect_snapshot
from procenv.models import ProcessRecord, Snapshot
from procenv.parser import parse_record

__all__ = [
    "ProcessCollector",
    "ProcessRecord",
    "Snapshot",
    "SnapshotBuilder",
    "collect_snapshot",
    "parse_record",
]
