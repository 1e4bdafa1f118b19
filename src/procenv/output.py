"""Serialization and textual rendering of snapshots."""

import json
import logging
from enum import Enum
from typing import Any, TextIO

from procenv.models import Snapshot

LOG = logging.getLogger(__name__)


class OutputFormat(Enum):
    """Supported snapshot output formats."""

    JSON = "json"
    TEXT = "text"


def snapshot_to_dict(snapshot: Snapshot) -> dict[str, dict[str, Any]]:
    """Return the snapshot as a JSON-ready dict keyed by PID string."""
    return {str(pid): record.to_dict() for pid, record in sorted(snapshot.items())}


def snapshot_to_json(snapshot: Snapshot, indent: int | None = None) -> str:
    """Serialize the snapshot as one JSON object."""
    return json.dumps(snapshot_to_dict(snapshot), indent=indent)


def format_snapshot_text(snapshot: Snapshot) -> str:
    """Render the snapshot as indented plain text, one process per block."""
    lines: list[str] = []
    for pid, record in sorted(snapshot.items()):
        lines.append(f"PID {pid}")
        lines.append(f"  cmdline: {' '.join(record.command_line or [])}")
        for var in record.environment or []:
            lines.append(f"  env: {var}")
    return "\n".join(lines)


def emit_snapshot(
    snapshot: Snapshot,
    stream: TextIO,
    output_format: OutputFormat = OutputFormat.JSON,
    indent: int | None = None,
) -> bool:
    """
    Write the snapshot to ``stream``.

    Serialization failures are logged rather than raised.

    Returns:
        True if the snapshot was written.
    """
    try:
        if output_format is OutputFormat.JSON:
            text = snapshot_to_json(snapshot, indent=indent)
        else:
            text = format_snapshot_text(snapshot)
        stream.write(text + "\n")
    except (TypeError, ValueError) as e:
        # UnicodeEncodeError from a strict stream is a ValueError too
        LOG.error("Writing proc data failed: %s", e)
        return False
    return True
