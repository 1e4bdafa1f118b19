"""Depth-first traversal of the process-information filesystem."""

import logging
import os
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum

LOG = logging.getLogger(__name__)

PROC_ROOT = "/proc"


class EntryType(Enum):
    """Kind of a visited filesystem entry."""

    DIRECTORY = "directory"
    FILE = "file"


@dataclass(slots=True, frozen=True)
class Entry:
    """A single visited path and its type."""

    path: str
    entry_type: EntryType


class RootUnreachableError(OSError):
    """The traversal root cannot be listed."""


ErrorHandler = Callable[[str, OSError], None]


def _log_skipped(path: str, error: OSError) -> None:
    """Log a skipped entry at DEBUG level."""
    LOG.debug("Skipping %s: %s", path, error)


def walk(root: str = PROC_ROOT, on_error: ErrorHandler | None = None) -> Iterator[Entry]:
    """
    Visit every entry below ``root``, depth-first.

    Symbolic links are reported as files and never followed, so aliases
    such as ``self`` or ``<pid>/cwd`` cannot lead the walk into cycles.

    Entries that vanish or cannot be read while walking are handed to
    ``on_error`` (default: a DEBUG log line) and skipped.

    Raises:
        RootUnreachableError: If ``root`` itself cannot be listed.
    """
    handle_error = on_error or _log_skipped

    try:
        with os.scandir(root) as it:
            top = sorted(it, key=lambda e: e.name, reverse=True)
    except OSError as e:
        raise RootUnreachableError(e.errno, f"cannot open {root}: {e.strerror or e}", root) from e

    # Stack of pending entries; reversed so the pop order is alphabetical
    stack: list[os.DirEntry] = top
    while stack:
        dir_entry = stack.pop()
        try:
            is_dir = dir_entry.is_dir(follow_symlinks=False)
        except OSError as e:
            handle_error(dir_entry.path, e)
            continue

        if not is_dir:
            yield Entry(dir_entry.path, EntryType.FILE)
            continue

        yield Entry(dir_entry.path, EntryType.DIRECTORY)
        try:
            with os.scandir(dir_entry.path) as it:
                children = sorted(it, key=lambda e: e.name, reverse=True)
        except OSError as e:
            handle_error(dir_entry.path, e)
            continue
        stack.extend(children)
